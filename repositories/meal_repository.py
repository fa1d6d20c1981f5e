"""
Meal Repository - Data access layer for the meal journal
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Meal


class MealRepository(BaseRepository[Meal]):
    """Repository for meal data access; every lookup is scoped to an owner"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def get_by_id(self, meal_id: UUID) -> Optional[Meal]:
        return self.db.query(Meal).filter(Meal.meal_id == meal_id).first()

    def get_for_user(self, meal_id: UUID, user_id: UUID) -> Optional[Meal]:
        """Get a meal only if it belongs to the user"""
        return (
            self.db.query(Meal)
            .filter(Meal.meal_id == meal_id, Meal.user_id == user_id)
            .first()
        )

    def list_for_user(self, user_id: UUID) -> List[Meal]:
        """All meals of a user, newest first"""
        return (
            self.db.query(Meal)
            .filter(Meal.user_id == user_id)
            .order_by(Meal.created_at.desc())
            .all()
        )
