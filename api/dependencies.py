"""
API dependencies for dependency injection
"""

from typing import Generator, Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.exceptions import ForbiddenError, UnauthorizedError
from domain.models import AppUser, get_db_session
from services.auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[AppUser]:
    """Current user, or None when no bearer token was sent"""
    if credentials is None:
        return None
    return AuthService.get_user_from_token(db, credentials.credentials)


def get_current_user(
    user: Optional[AppUser] = Depends(get_optional_user),
) -> AppUser:
    if user is None:
        raise UnauthorizedError("Missing bearer token", code="MISSING_TOKEN")
    return user


def require_admin(user: AppUser = Depends(get_current_user)) -> AppUser:
    if not user.is_admin:
        raise ForbiddenError("Admin access required", code="ADMIN_REQUIRED")
    return user
