"""Invite code routes"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.dependencies import get_current_user, get_db, require_admin
from domain.models import AppUser
from domain.schemas.admin_schemas import (
    InviteCheckResponse,
    InviteCodeResponse,
    InviteGenerateRequest,
    InviteUseRequest,
    InviteValidateRequest,
)
from services.invite_service import InviteService, normalize_code

router = APIRouter(prefix="/invites", tags=["Invites"])


@router.post("/validate", response_model=InviteCheckResponse)
def validate_invite(data: InviteValidateRequest, db: Session = Depends(get_db)):
    code = normalize_code(data.code)
    return InviteCheckResponse(code=code, valid=InviteService.validate(db, code))


@router.post("/use", response_model=InviteCheckResponse)
def use_invite(
    data: InviteUseRequest,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Mark a code used by the signed-in user; valid=false when it cannot be used."""
    code = normalize_code(data.code)
    return InviteCheckResponse(code=code, valid=InviteService.use(db, code, user.email))


@router.post("", response_model=InviteCodeResponse, status_code=status.HTTP_201_CREATED)
def generate_invite(
    data: InviteGenerateRequest,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return InviteService.generate(db, admin, data.email, data.expires_in_days)


@router.get("", response_model=List[InviteCodeResponse])
def list_invites(admin: AppUser = Depends(require_admin), db: Session = Depends(get_db)):
    return InviteService.list_codes(db)


@router.delete("/{code}")
def delete_invite(
    code: str, admin: AppUser = Depends(require_admin), db: Session = Depends(get_db)
):
    InviteService.delete(db, code)
    return {"status": "ok", "deleted": normalize_code(code)}
