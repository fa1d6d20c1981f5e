"""Registration, login and current user routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, get_current_user
from domain.mappers import UserMapper
from domain.models import AppUser
from domain.schemas.auth_schemas import (
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("mealscan.api.auth")


@router.post(
    "/register", response_model=CurrentUserResponse, status_code=status.HTTP_201_CREATED
)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account; needs an invite code while registration is invite-only."""
    user = AuthService.register(db, data)
    return UserMapper.to_current_user(user)


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user, token, expires_in = AuthService.login(db, data.email, data.password)
    return TokenResponse(
        access_token=token, expires_in=expires_in, user_id=user.user_id, role=user.role
    )


@router.get("/me", response_model=CurrentUserResponse)
def me(user: AppUser = Depends(get_current_user)):
    """Current account with a scan/subscription summary."""
    return UserMapper.to_current_user(user)
