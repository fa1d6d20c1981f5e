#!/usr/bin/env python3
"""
Initialize the MealScan database
Creates tables, seeds the app settings row and can promote a user to admin
"""

import argparse
import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("init_db")


def init_tables() -> bool:
    """Create all tables"""
    from sqlalchemy import inspect
    from sqlalchemy.exc import SQLAlchemyError
    from domain.models.database import engine, init_database

    try:
        init_database()
    except SQLAlchemyError as e:
        logger.error(f"Failed to create tables: {e}")
        return False

    tables = inspect(engine).get_table_names()
    logger.info(f"Tables ready ({len(tables)}): {', '.join(sorted(tables))}")
    return True


def seed_settings() -> None:
    """Create the effective settings row from config defaults if none exists"""
    from domain.models import SessionLocal
    from services.settings_service import SettingsService

    db = SessionLocal()
    try:
        row = SettingsService.get_settings(db, use_cache=False)
        logger.info(
            f"Settings: paywall={row.paywall_enabled} free_tier_limit={row.free_tier_limit} "
            f"invite_only={row.invite_only_registration}"
        )
    finally:
        db.close()


def promote_admin(email: str) -> bool:
    from domain.enums import UserRole
    from domain.models import SessionLocal
    from repositories import UserRepository

    db = SessionLocal()
    try:
        user = UserRepository(db).get_by_email(email)
        if user is None:
            logger.error(f"No user with email {email}; register first")
            return False
        user.role = UserRole.ADMIN
        db.commit()
        logger.info(f"Promoted {user.email} to admin")
        return True
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the MealScan database")
    parser.add_argument(
        "--promote-admin",
        metavar="EMAIL",
        help="Give an existing account the admin role",
    )
    parser.add_argument(
        "--skip-seed", action="store_true", help="Do not create the settings row"
    )
    args = parser.parse_args(argv)

    if not init_tables():
        return 1
    if not args.skip_seed:
        seed_settings()
    if args.promote_admin and not promote_admin(args.promote_admin):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
