"""
User-related database models.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Integer,
    Text,
    TIMESTAMP,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base
from domain.enums import UserRole, Gender, ActivityLevel, HealthGoal


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class AppUser(Base):
    """User account model"""

    __tablename__ = "app_user"

    user_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(Text, unique=True, nullable=False, index=True)
    password_hash = Column(Text, nullable=False)
    full_name = Column(Text)
    role = Column(
        SQLEnum(UserRole, name="user_role", values_callable=_enum_values),
        nullable=False,
        default=UserRole.USER,
    )
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    health_profile = relationship(
        "HealthProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    subscription = relationship(
        "UserSubscription",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    meals = relationship("Meal", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class HealthProfile(Base):
    """User body metrics and daily nutrition targets"""

    __tablename__ = "health_profile"

    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        primary_key=True,
    )
    height_cm = Column(Float)
    weight_kg = Column(Float)
    age = Column(Integer)
    gender = Column(SQLEnum(Gender, name="gender", values_callable=_enum_values))
    activity_level = Column(
        SQLEnum(ActivityLevel, name="activity_level", values_callable=_enum_values)
    )
    goal = Column(SQLEnum(HealthGoal, name="health_goal", values_callable=_enum_values))
    calorie_target = Column(Integer)
    protein_target_g = Column(Integer)
    carbs_target_g = Column(Integer)
    fat_target_g = Column(Integer)
    is_custom_plan = Column(Boolean, nullable=False, default=False)
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("AppUser", back_populates="health_profile")

    __table_args__ = (
        CheckConstraint("age IS NULL OR age > 0", name="ck_health_age_positive"),
    )
