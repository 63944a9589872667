"""SQLAlchemy models for conversations, messages and per-user message state."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.sql import expression

from eventlink.infrastructure.database import Base


class ConversationModel(Base):
    __tablename__ = "conversations"

    id = Column(Integer, primary_key=True, index=True)
    participant_one_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    participant_two_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    participant_one_deleted = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    participant_two_deleted = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    participant_one_deleted_at = Column(DateTime, nullable=True)
    participant_two_deleted_at = Column(DateTime, nullable=True)
    last_message_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class MessageModel(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    conversation_id = Column(
        Integer,
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content = Column(Text, nullable=False)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime, nullable=False)


class MessageUserStateModel(Base):
    """Hides an individual message from one participant."""

    __tablename__ = "message_user_states"
    __table_args__ = (
        UniqueConstraint("message_id", "user_id", name="uq_message_user_states_message_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    message_id = Column(
        Integer, ForeignKey("messages.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    deleted_at = Column(DateTime, nullable=False)


__all__ = ["ConversationModel", "MessageModel", "MessageUserStateModel"]
