"""SQLAlchemy models for feedback submissions and contact form messages."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from eventlink.infrastructure.database import Base


class FeedbackModel(Base):
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    feedback_type = Column(String(30), nullable=False)
    message = Column(Text, nullable=False)
    page_url = Column(String(500), nullable=True)
    source = Column(String(50), nullable=False, default="header")
    user_email = Column(String(255), nullable=True)
    user_name = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    admin_response = Column(Text, nullable=True)
    admin_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    resolved_at = Column(DateTime, nullable=True)


class ContactMessageModel(Base):
    __tablename__ = "contact_messages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["ContactMessageModel", "FeedbackModel"]
