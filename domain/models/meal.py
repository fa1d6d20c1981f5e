"""
Meal journal models.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    JSON,
    Text,
    TIMESTAMP,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from app.timeutils import utcnow
from domain.models.database import Base
from domain.enums import MealType, NutritionScore


class Meal(Base):
    """A logged meal with its estimated nutrition"""

    __tablename__ = "meal"

    meal_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    meal_type = Column(
        SQLEnum(
            MealType,
            name="meal_type",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=MealType.RANDOM,
    )
    food_items = Column(JSON, nullable=False, default=list)
    calories = Column(Float, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    fat = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    nutrition_score = Column(
        SQLEnum(
            NutritionScore,
            name="nutrition_score",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=NutritionScore.MODERATE,
    )
    image_url = Column(Text)
    notes = Column(Text)
    # Set in Python so the journal can order and filter before a refresh
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("AppUser", back_populates="meals")

    __table_args__ = (
        CheckConstraint(
            "calories >= 0 AND protein >= 0 AND fat >= 0 AND carbs >= 0",
            name="ck_meal_nutrition_nonneg",
        ),
    )
