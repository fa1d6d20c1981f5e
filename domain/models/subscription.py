"""
Subscription, settings and access-control models.
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
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from app.timeutils import utcnow
from domain.models.database import Base


class UserSubscription(Base):
    """Per-user scan counter and subscription period"""

    __tablename__ = "user_subscription"

    subscription_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    scan_count = Column(Integer, nullable=False, default=0)
    is_subscribed = Column(Boolean, nullable=False, default=False)
    subscription_start = Column(TIMESTAMP(timezone=True))
    subscription_end = Column(TIMESTAMP(timezone=True))
    stripe_customer_id = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("AppUser", back_populates="subscription")

    __table_args__ = (
        CheckConstraint("scan_count >= 0", name="ck_subscription_scan_count_nonneg"),
    )


class AppSettings(Base):
    """App-wide settings; the most recently created row is effective"""

    __tablename__ = "app_settings"

    settings_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    paywall_enabled = Column(Boolean, nullable=False, default=True)
    free_tier_limit = Column(Integer, nullable=False, default=10)
    invite_only_registration = Column(Boolean, nullable=False, default=False)
    monthly_price = Column(Float, nullable=False, default=4.99)
    yearly_price = Column(Float, nullable=False, default=49.99)
    yearly_discount_percent = Column(Integer, nullable=False, default=15)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("free_tier_limit >= 0", name="ck_settings_free_tier_nonneg"),
    )


class InviteCode(Base):
    """Registration invite token"""

    __tablename__ = "invite_code"

    invite_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(Text, unique=True, nullable=False, index=True)
    email = Column(Text)
    created_by = Column(Uuid, ForeignKey("app_user.user_id", ondelete="SET NULL"))
    used = Column(Boolean, nullable=False, default=False)
    used_at = Column(TIMESTAMP(timezone=True))
    used_by_email = Column(Text)
    expires_at = Column(TIMESTAMP(timezone=True))
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)


class BetaSignup(Base):
    """Landing page beta tester signup"""

    __tablename__ = "beta_signup"

    signup_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(Text, unique=True, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
