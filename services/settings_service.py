"""
App-wide settings with an in-process read cache.
"""

from typing import Optional
import logging
import time

from sqlalchemy.orm import Session

from app.config import settings as config
from domain.models import AppSettings
from domain.schemas.admin_schemas import PricingUpdate
from repositories import AppSettingsRepository

logger = logging.getLogger("mealscan.settings")

_cache: dict = {"value": None, "loaded_at": 0.0}


def invalidate_cache() -> None:
    """Drop the cached settings so the next read hits the database"""
    _cache["value"] = None
    _cache["loaded_at"] = 0.0
    logger.info("settings_cache_invalidated")


class SettingsService:
    """Business logic for app settings"""

    @staticmethod
    def _defaults() -> AppSettings:
        return AppSettings(
            paywall_enabled=config.default_paywall_enabled,
            free_tier_limit=config.default_free_tier_limit,
            invite_only_registration=config.default_invite_only_registration,
            monthly_price=config.default_monthly_price,
            yearly_price=config.default_yearly_price,
            yearly_discount_percent=config.default_yearly_discount_percent,
        )

    @staticmethod
    def _load_or_create(db: Session) -> AppSettings:
        repo = AppSettingsRepository(db)
        row = repo.get_latest()
        if row is None:
            row = repo.create(SettingsService._defaults())
            logger.info(f"settings_created settings_id={row.settings_id}")
        return row

    @staticmethod
    def get_settings(db: Session, use_cache: bool = True) -> AppSettings:
        """Effective settings row, created from config defaults when missing"""
        cached: Optional[AppSettings] = _cache["value"]
        fresh = time.monotonic() - _cache["loaded_at"] < config.settings_cache_ttl_sec
        if use_cache and cached is not None and fresh:
            return cached

        row = SettingsService._load_or_create(db)
        db.expunge(row)
        _cache["value"] = row
        _cache["loaded_at"] = time.monotonic()
        return row

    @staticmethod
    def _update(db: Session, **changes) -> AppSettings:
        row = SettingsService._load_or_create(db)
        for key, value in changes.items():
            if value is not None:
                setattr(row, key, value)
        AppSettingsRepository(db).update(row)
        invalidate_cache()
        logger.info(
            "settings_updated "
            + " ".join(f"{k}={v}" for k, v in changes.items() if v is not None)
        )
        return row

    @staticmethod
    def update_paywall(
        db: Session, enabled: bool, free_tier_limit: Optional[int] = None
    ) -> AppSettings:
        return SettingsService._update(
            db, paywall_enabled=enabled, free_tier_limit=free_tier_limit
        )

    @staticmethod
    def update_invite_only(db: Session, enabled: bool) -> AppSettings:
        return SettingsService._update(db, invite_only_registration=enabled)

    @staticmethod
    def update_pricing(db: Session, pricing: PricingUpdate) -> AppSettings:
        return SettingsService._update(db, **pricing.model_dump())
