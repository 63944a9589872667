"""SQLAlchemy models for notification preferences and job alert filters."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    func,
)
from sqlalchemy.sql import expression

from eventlink.infrastructure.database import Base


def _enabled_flag() -> Column:
    return Column(Boolean, nullable=False, default=True, server_default=expression.true())


class NotificationPreferencesModel(Base):
    __tablename__ = "notification_preferences"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    email_messages = _enabled_flag()
    email_application_updates = _enabled_flag()
    email_job_updates = _enabled_flag()
    email_job_alerts = _enabled_flag()
    email_rating_requests = _enabled_flag()
    email_system_updates = _enabled_flag()
    digest_mode = Column(String(10), nullable=False, default="instant")
    digest_time = Column(String(5), nullable=False, default="09:00")
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


class JobAlertFilterModel(Base):
    __tablename__ = "job_alert_filters"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    skills = Column(JSON, nullable=False, default=list)
    locations = Column(JSON, nullable=False, default=list)
    keywords = Column(JSON, nullable=False, default=list)
    job_types = Column(JSON, nullable=False, default=list)
    date_from = Column(Date, nullable=True)
    date_to = Column(Date, nullable=True)
    is_active = _enabled_flag()
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


__all__ = ["JobAlertFilterModel", "NotificationPreferencesModel"]
