"""Admin console routes"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, require_admin
from domain.mappers import UserMapper
from domain.models import AppUser
from domain.schemas.admin_schemas import (
    AdminUserResponse,
    AppSettingsResponse,
    BetaSignupResponse,
    InviteOnlyUpdate,
    PaywallUpdate,
    PricingUpdate,
    RoleUpdate,
)
from services import settings_service
from services.admin_service import AdminService, BetaService
from services.settings_service import SettingsService

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger("mealscan.api.admin")


# ---------------------------------------------------------------- settings


@router.get("/settings", response_model=AppSettingsResponse)
def get_settings(admin: AppUser = Depends(require_admin), db: Session = Depends(get_db)):
    return SettingsService.get_settings(db, use_cache=False)


@router.put("/settings/paywall", response_model=AppSettingsResponse)
def toggle_paywall(
    data: PaywallUpdate,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return SettingsService.update_paywall(db, data.enabled, data.free_tier_limit)


@router.put("/settings/invite-only", response_model=AppSettingsResponse)
def toggle_invite_only(
    data: InviteOnlyUpdate,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return SettingsService.update_invite_only(db, data.enabled)


@router.put("/settings/pricing", response_model=AppSettingsResponse)
def update_pricing(
    data: PricingUpdate,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return SettingsService.update_pricing(db, data)


@router.post("/settings/invalidate-cache")
def invalidate_settings_cache(admin: AppUser = Depends(require_admin)):
    settings_service.invalidate_cache()
    return {"status": "ok", "message": "Settings cache invalidated"}


# ------------------------------------------------------------------- users


@router.get("/users", response_model=List[AdminUserResponse])
def list_users(admin: AppUser = Depends(require_admin), db: Session = Depends(get_db)):
    return [UserMapper.to_admin_response(u) for u in AdminService.list_users(db)]


@router.get("/users/search", response_model=AdminUserResponse)
def find_user(
    email: str = Query(..., min_length=3),
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return UserMapper.to_admin_response(AdminService.find_user_by_email(db, email))


@router.get("/users/{user_id}", response_model=AdminUserResponse)
def get_user(
    user_id: UUID, admin: AppUser = Depends(require_admin), db: Session = Depends(get_db)
):
    return UserMapper.to_admin_response(AdminService.get_user(db, user_id))


@router.post("/users/{user_id}/reset-scans", response_model=AdminUserResponse)
def reset_scans(
    user_id: UUID, admin: AppUser = Depends(require_admin), db: Session = Depends(get_db)
):
    """Set the user's scan count back to zero."""
    user = AdminService.reset_scans(db, user_id)
    logger.info(f"admin_reset_scans user_id={user_id} by={admin.user_id}")
    return UserMapper.to_admin_response(user)


@router.put("/users/{user_id}/role", response_model=AdminUserResponse)
def set_role(
    user_id: UUID,
    data: RoleUpdate,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return UserMapper.to_admin_response(AdminService.set_role(db, admin, user_id, data.role))


# ------------------------------------------------------------ beta signups


@router.get("/beta-signups", response_model=List[BetaSignupResponse])
def list_beta_signups(admin: AppUser = Depends(require_admin), db: Session = Depends(get_db)):
    return BetaService.list_signups(db)
