"""
Invite codes for invite-only registration.
"""

from datetime import timedelta
from typing import List, Optional
import logging
import secrets

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ServiceValidationError
from app.timeutils import as_utc, utcnow
from domain.models import AppUser, InviteCode
from repositories import InviteCodeRepository

logger = logging.getLogger("mealscan.invites")

CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 8
MAX_GENERATE_ATTEMPTS = 20


def generate_code(length: int = CODE_LENGTH) -> str:
    """Random code without easily confused characters (0/O, 1/I)"""
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


def is_code_valid(invite: Optional[InviteCode], now=None) -> bool:
    """Exists, unused and not expired"""
    if invite is None or invite.used:
        return False
    expires = as_utc(invite.expires_at)
    return expires is None or expires > (now or utcnow())


class InviteService:
    """Business logic for invite codes"""

    @staticmethod
    def generate(
        db: Session,
        admin: AppUser,
        email: Optional[str] = None,
        expires_in_days: Optional[int] = None,
    ) -> InviteCode:
        repo = InviteCodeRepository(db)
        for _ in range(MAX_GENERATE_ATTEMPTS):
            code = generate_code()
            if not repo.code_exists(code):
                break
        else:
            raise ServiceValidationError("Could not generate a unique invite code")

        invite = InviteCode(
            code=code,
            email=email.strip().lower() if email else None,
            created_by=admin.user_id,
            used=False,
            expires_at=(
                utcnow() + timedelta(days=expires_in_days) if expires_in_days else None
            ),
        )
        invite = repo.create(invite)
        logger.info(
            f"invite_generated code={code} by={admin.user_id} "
            f"bound_email={bool(email)} expires_in_days={expires_in_days}"
        )
        return invite

    @staticmethod
    def list_codes(db: Session) -> List[InviteCode]:
        return InviteCodeRepository(db).list_newest_first()

    @staticmethod
    def delete(db: Session, code: str) -> None:
        repo = InviteCodeRepository(db)
        invite = repo.get_by_code(normalize_code(code))
        if not invite:
            raise NotFoundError(f"Invite code {code} not found")
        repo.remove(invite)
        db.commit()
        logger.info(f"invite_deleted code={invite.code}")

    @staticmethod
    def validate(db: Session, code: str) -> bool:
        invite = InviteCodeRepository(db).get_by_code(normalize_code(code))
        return is_code_valid(invite)

    @staticmethod
    def mark_used(db: Session, code: str, email: str) -> bool:
        """
        Mark the code used without committing; False when it cannot be used.

        One conditional UPDATE; concurrent callers cannot both claim a code.
        """
        if not email or not email.strip():
            return False
        return InviteCodeRepository(db).claim(
            normalize_code(code), email.strip().lower(), utcnow()
        )

    @staticmethod
    def use(db: Session, code: str, email: str) -> bool:
        used = InviteService.mark_used(db, code, email)
        if used:
            db.commit()
            logger.info(f"invite_used code={normalize_code(code)}")
        else:
            logger.info(f"invite_use_rejected code={normalize_code(code)}")
        return used
