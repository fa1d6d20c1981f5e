"""
Accounts, password hashing and access tokens.
"""

from datetime import timedelta
from typing import Optional, Tuple
from uuid import UUID
import logging

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, InvalidHashError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import ConflictError, ForbiddenError, UnauthorizedError
from app.timeutils import utcnow
from domain.enums import UserRole
from domain.models import AppUser
from domain.schemas.auth_schemas import RegisterRequest
from repositories import SubscriptionRepository, UserRepository
from services.invite_service import InviteService
from services.settings_service import SettingsService

logger = logging.getLogger("mealscan.auth")

pwd_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return pwd_hasher.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_hasher.verify(hashed_password, plain_password)
    except (VerificationError, InvalidHashError):
        return False


def create_access_token(user: AppUser) -> Tuple[str, int]:
    """Signed token and its lifetime in seconds"""
    lifetime = timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user.user_id),
        "role": UserRole(user.role).value,
        "exp": utcnow() + lifetime,
    }
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return token, int(lifetime.total_seconds())


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expired", code="TOKEN_EXPIRED")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid token", code="INVALID_TOKEN")


class AuthService:
    """Business logic for registration and login"""

    @staticmethod
    def register(db: Session, data: RegisterRequest) -> AppUser:
        """
        Create an account together with its empty subscription record.

        While invite-only registration is on, the invite code is consumed in
        the same transaction as the signup.
        """
        user_repo = UserRepository(db)
        email = data.email.strip().lower()

        if user_repo.get_by_email(email):
            raise ConflictError(f"User with email {email} already exists")

        app_settings = SettingsService.get_settings(db)
        invite_required = app_settings.invite_only_registration
        if invite_required:
            if not data.invite_code:
                raise ForbiddenError(
                    "Registration is invite-only; an invite code is required",
                    code="INVITE_REQUIRED",
                )
            if not InviteService.mark_used(db, data.invite_code, email):
                db.rollback()
                raise ForbiddenError(
                    "Invalid or expired invite code", code="INVALID_INVITE"
                )

        try:
            user = user_repo.new_user(email, hash_password(data.password), data.full_name)
            SubscriptionRepository(db).get_or_create(user.user_id)
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(f"register_conflict email={email}")
            raise ConflictError(f"User with email {email} already exists")

        db.refresh(user)
        logger.info(
            f"user_registered user_id={user.user_id} invite_used={invite_required}"
        )
        return user

    @staticmethod
    def login(db: Session, email: str, password: str) -> Tuple[AppUser, str, int]:
        user = UserRepository(db).get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info(f"login_failed email={email.strip().lower()}")
            raise UnauthorizedError("Invalid email or password", code="INVALID_CREDENTIALS")

        if pwd_hasher.check_needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)
            db.commit()

        token, expires_in = create_access_token(user)
        logger.info(f"login_succeeded user_id={user.user_id}")
        return user, token, expires_in

    @staticmethod
    def get_user_from_token(db: Session, token: str) -> AppUser:
        payload = decode_access_token(token)
        try:
            user_id = UUID(payload.get("sub", ""))
        except (TypeError, ValueError):
            raise UnauthorizedError("Invalid token", code="INVALID_TOKEN")

        user: Optional[AppUser] = UserRepository(db).get_by_id(user_id)
        if user is None:
            raise UnauthorizedError("User no longer exists", code="USER_NOT_FOUND")
        return user
