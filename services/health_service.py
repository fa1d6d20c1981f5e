"""
Health profile and daily targets.
"""

from typing import Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from domain.models import HealthProfile
from domain.schemas.health_schemas import HealthProfileUpdate, TargetsUpdate
from repositories import HealthProfileRepository

logger = logging.getLogger("mealscan.health")

_COMPLETE_FIELDS = (
    "height_cm",
    "weight_kg",
    "age",
    "activity_level",
    "goal",
    "calorie_target",
    "protein_target_g",
    "carbs_target_g",
    "fat_target_g",
)


def is_complete(profile: Optional[HealthProfile]) -> bool:
    """Body metrics, goal and all daily targets are set"""
    if profile is None:
        return False
    return all(getattr(profile, field) for field in _COMPLETE_FIELDS)


class HealthService:
    """Business logic for health profiles"""

    @staticmethod
    def get_profile(db: Session, user_id: UUID) -> HealthProfile:
        """Stored profile, or an unsaved empty one"""
        profile = HealthProfileRepository(db).get_by_user_id(user_id)
        return profile or HealthProfile(user_id=user_id, is_custom_plan=False)

    @staticmethod
    def upsert_profile(
        db: Session, user_id: UUID, data: HealthProfileUpdate
    ) -> HealthProfile:
        changes = data.model_dump(exclude_unset=True)
        profile = HealthProfileRepository(db).upsert(user_id, **changes)
        db.commit()
        db.refresh(profile)
        logger.info(f"health_profile_upserted user_id={user_id} fields={sorted(changes)}")
        return profile

    @staticmethod
    def save_targets(db: Session, user_id: UUID, data: TargetsUpdate) -> HealthProfile:
        profile = HealthProfileRepository(db).upsert(
            user_id,
            calorie_target=data.calories,
            protein_target_g=data.macros.protein,
            carbs_target_g=data.macros.carbs,
            fat_target_g=data.macros.fat,
            is_custom_plan=data.is_custom,
        )
        db.commit()
        db.refresh(profile)
        logger.info(
            f"health_targets_saved user_id={user_id} calories={data.calories} "
            f"custom={data.is_custom}"
        )
        return profile
