"""Persistence helpers for conversations and their messages."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Query, Session

from eventlink.domain.entities import Conversation, Message
from eventlink.infrastructure.models import (
    ConversationModel,
    MessageModel,
    MessageUserStateModel,
)
from eventlink.utils import now_in_app_naive_datetime


class ConversationRepository:
    """Store conversations while keeping deletion state per participant."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, conversation_id: int) -> Conversation | None:
        model = self.session.get(ConversationModel, conversation_id)
        return self._to_entity(model) if model else None

    def find_between(self, user_a: int, user_b: int) -> Conversation | None:
        model = (
            self.session.query(ConversationModel)
            .filter(
                or_(
                    and_(
                        ConversationModel.participant_one_id == user_a,
                        ConversationModel.participant_two_id == user_b,
                    ),
                    and_(
                        ConversationModel.participant_one_id == user_b,
                        ConversationModel.participant_two_id == user_a,
                    ),
                )
            )
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, participant_one_id: int, participant_two_id: int) -> Conversation:
        model = ConversationModel(
            participant_one_id=participant_one_id,
            participant_two_id=participant_two_id,
            created_at=now_in_app_naive_datetime(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_user(self, user_id: int) -> Sequence[Conversation]:
        """Return conversations visible to ``user_id``, most recent activity first."""

        query = (
            self.session.query(ConversationModel)
            .filter(
                or_(
                    and_(
                        ConversationModel.participant_one_id == user_id,
                        ConversationModel.participant_one_deleted.is_(False),
                    ),
                    and_(
                        ConversationModel.participant_two_id == user_id,
                        ConversationModel.participant_two_deleted.is_(False),
                    ),
                )
            )
            .order_by(
                func.coalesce(
                    ConversationModel.last_message_at, ConversationModel.created_at
                ).desc(),
                ConversationModel.id.desc(),
            )
        )
        return [self._to_entity(model) for model in query.all()]

    def mark_deleted_for(self, conversation_id: int, user_id: int) -> None:
        model = self._require(conversation_id)
        now = now_in_app_naive_datetime()
        if model.participant_one_id == user_id:
            model.participant_one_deleted = True
            model.participant_one_deleted_at = now
        elif model.participant_two_id == user_id:
            model.participant_two_deleted = True
            model.participant_two_deleted_at = now
        self.session.add(model)
        self.session.commit()

    def restore_for(self, conversation_id: int, user_id: int) -> bool:
        """Make the conversation visible again for ``user_id``.

        The deletion timestamp is kept so earlier messages stay hidden.
        Returns ``True`` when the conversation was previously deleted.
        """

        model = self._require(conversation_id)
        restored = False
        if model.participant_one_id == user_id and model.participant_one_deleted:
            model.participant_one_deleted = False
            restored = True
        elif model.participant_two_id == user_id and model.participant_two_deleted:
            model.participant_two_deleted = False
            restored = True
        if restored:
            self.session.add(model)
            self.session.commit()
        return restored

    def add_message(self, message: Message) -> Message:
        created_at = message.created_at or now_in_app_naive_datetime()
        model = MessageModel(
            conversation_id=message.conversation_id,
            sender_id=message.sender_id,
            content=message.content,
            is_read=message.is_read,
            created_at=created_at,
        )
        self.session.add(model)
        conversation = self._require(message.conversation_id)
        conversation.last_message_at = created_at
        self.session.add(conversation)
        self.session.commit()
        self.session.refresh(model)
        return self._message_to_entity(model)

    def get_message(self, message_id: int) -> Message | None:
        model = self.session.get(MessageModel, message_id)
        return self._message_to_entity(model) if model else None

    def list_visible_messages(
        self, conversation: Conversation, user_id: int
    ) -> Sequence[Message]:
        query = self._visible_messages_query(conversation, user_id).order_by(
            MessageModel.created_at.asc(), MessageModel.id.asc()
        )
        return [self._message_to_entity(model) for model in query.all()]

    def last_visible_message(
        self, conversation: Conversation, user_id: int
    ) -> Message | None:
        model = (
            self._visible_messages_query(conversation, user_id)
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
            .first()
        )
        return self._message_to_entity(model) if model else None

    def count_unread_visible(self, conversation: Conversation, user_id: int) -> int:
        return (
            self._visible_messages_query(conversation, user_id)
            .filter(MessageModel.sender_id != user_id)
            .filter(MessageModel.is_read.is_(False))
            .count()
        )

    def mark_messages_read(self, conversation_id: int, reader_id: int) -> int:
        """Flag every message not sent by ``reader_id`` as read."""

        updated = (
            self.session.query(MessageModel)
            .filter(MessageModel.conversation_id == conversation_id)
            .filter(MessageModel.sender_id != reader_id)
            .filter(MessageModel.is_read.is_(False))
            .update({MessageModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    def hide_message(self, message_id: int, user_id: int) -> None:
        existing = (
            self.session.query(MessageUserStateModel)
            .filter(MessageUserStateModel.message_id == message_id)
            .filter(MessageUserStateModel.user_id == user_id)
            .first()
        )
        if existing is not None:
            return
        self.session.add(
            MessageUserStateModel(
                message_id=message_id,
                user_id=user_id,
                deleted_at=now_in_app_naive_datetime(),
            )
        )
        self.session.commit()

    def _visible_messages_query(self, conversation: Conversation, user_id: int) -> Query:
        hidden = select(MessageUserStateModel.message_id).where(
            MessageUserStateModel.user_id == user_id
        )
        query = (
            self.session.query(MessageModel)
            .filter(MessageModel.conversation_id == conversation.id)
            .filter(MessageModel.id.not_in(hidden))
        )
        deleted_at: datetime | None = conversation.deleted_at_for(user_id)
        if deleted_at is not None:
            query = query.filter(MessageModel.created_at > deleted_at)
        return query

    def _require(self, conversation_id: int) -> ConversationModel:
        model = self.session.get(ConversationModel, conversation_id)
        if model is None:
            msg = f"Conversation with id {conversation_id} not found"
            raise LookupError(msg)
        return model

    @staticmethod
    def _to_entity(model: ConversationModel) -> Conversation:
        return Conversation(
            id=model.id,
            participant_one_id=model.participant_one_id,
            participant_two_id=model.participant_two_id,
            participant_one_deleted=bool(model.participant_one_deleted),
            participant_two_deleted=bool(model.participant_two_deleted),
            participant_one_deleted_at=model.participant_one_deleted_at,
            participant_two_deleted_at=model.participant_two_deleted_at,
            last_message_at=model.last_message_at,
            created_at=model.created_at,
        )

    @staticmethod
    def _message_to_entity(model: MessageModel) -> Message:
        return Message(
            id=model.id,
            conversation_id=model.conversation_id,
            sender_id=model.sender_id,
            content=model.content,
            is_read=bool(model.is_read),
            created_at=model.created_at,
        )


__all__ = ["ConversationRepository"]
