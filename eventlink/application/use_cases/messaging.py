"""Use cases for the two-party messaging inbox."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from eventlink.domain.entities import (
    NOTIFICATION_TYPE_NEW_MESSAGE,
    Conversation,
    Message,
    User,
)
from eventlink.infrastructure.notifications import LiveBroadcaster, run_side_effect
from eventlink.infrastructure.repositories import ConversationRepository, UserRepository

from .notifications import (
    EMAIL_TYPE_MESSAGE,
    Scheduler,
    create_notification,
    mark_conversation_notifications_read,
    schedule_notification_email,
)

MAX_MESSAGE_LENGTH = 5000


@dataclass
class ConversationSummary:
    conversation: Conversation
    other_user: User | None
    last_message: Message | None
    unread_count: int


def serialize_message(message: Message) -> dict:
    return {
        "id": message.id,
        "conversation_id": message.conversation_id,
        "sender_id": message.sender_id,
        "content": message.content,
        "is_read": message.is_read,
        "created_at": message.created_at.isoformat() if message.created_at else None,
    }


def serialize_sender(user: User) -> dict:
    return {
        "id": user.id,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role,
    }


def _get_participating_conversation(
    session: Session, user: User, conversation_id: int
) -> Conversation:
    conversation = ConversationRepository(session).get(conversation_id)
    if conversation is None:
        raise LookupError("Conversation not found")
    if not conversation.has_participant(user.id):
        raise PermissionError("You are not a participant in this conversation")
    return conversation


def list_conversations(session: Session, user: User) -> list[ConversationSummary]:
    repository = ConversationRepository(session)
    conversations = repository.list_for_user(user.id)
    others = UserRepository(session).get_map_by_ids(
        [conversation.other_participant(user.id) for conversation in conversations],
        include_deleted=True,
    )
    return [
        ConversationSummary(
            conversation=conversation,
            other_user=others.get(conversation.other_participant(user.id)),
            last_message=repository.last_visible_message(conversation, user.id),
            unread_count=repository.count_unread_visible(conversation, user.id),
        )
        for conversation in conversations
    ]


def count_unread_messages(session: Session, user: User) -> int:
    """Unread messages across every conversation still visible to ``user``."""

    repository = ConversationRepository(session)
    return sum(
        repository.count_unread_visible(conversation, user.id)
        for conversation in repository.list_for_user(user.id)
    )


def start_conversation(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    sender: User,
    recipient_id: int,
    initial_message: str | None = None,
    schedule: Scheduler | None = None,
) -> Conversation:
    """Return the pair's conversation, creating it when needed."""

    if recipient_id == sender.id:
        raise ValueError("You cannot start a conversation with yourself")
    if UserRepository(session).get(recipient_id) is None:
        raise LookupError("Recipient not found")

    repository = ConversationRepository(session)
    conversation = repository.find_between(sender.id, recipient_id)
    if conversation is None:
        conversation = repository.create(sender.id, recipient_id)
    elif conversation.is_deleted_for(sender.id):
        repository.restore_for(conversation.id, sender.id)
        conversation = repository.get(conversation.id)

    if initial_message and initial_message.strip():
        send_message(
            session,
            broadcaster,
            sender=sender,
            conversation_id=conversation.id,
            content=initial_message,
            schedule=schedule,
        )
        conversation = repository.get(conversation.id)
    return conversation


def send_message(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    sender: User,
    conversation_id: int,
    content: str,
    schedule: Scheduler | None = None,
) -> Message:
    """Store a message, push it to both sides and notify the recipient."""

    text = (content or "").strip()
    if not text:
        raise ValueError("Message content is required")
    if len(text) > MAX_MESSAGE_LENGTH:
        raise ValueError(f"Messages are limited to {MAX_MESSAGE_LENGTH} characters")

    conversation = _get_participating_conversation(session, sender, conversation_id)
    recipient_id = conversation.other_participant(sender.id)
    recipient = UserRepository(session).get(recipient_id)
    if recipient is None:
        raise PermissionError("This user can no longer receive messages")

    repository = ConversationRepository(session)
    # A new message brings the thread back for anyone who deleted it; older
    # messages stay hidden behind their deletion timestamp.
    repository.restore_for(conversation.id, sender.id)
    repository.restore_for(conversation.id, recipient_id)
    message = repository.add_message(
        Message(id=None, conversation_id=conversation.id, sender_id=sender.id, content=text)
    )

    run_side_effect(
        f"new_message {message.id} for user {recipient_id}",
        broadcaster.new_message,
        recipient_id,
        message=serialize_message(message),
        sender=serialize_sender(sender),
        conversation_id=conversation.id,
    )
    for participant_id in (recipient_id, sender.id):
        run_side_effect(
            f"conversation_updated {conversation.id} for user {participant_id}",
            broadcaster.conversation_updated,
            participant_id,
            conversation.id,
        )

    notification = create_notification(
        session,
        broadcaster,
        user_id=recipient_id,
        type=NOTIFICATION_TYPE_NEW_MESSAGE,
        title="New Message",
        message=f"You have a new message from {sender.full_name}",
        related_entity_type="message",
        related_entity_id=message.id,
        action_url=f"/dashboard?tab=messages&conversation={conversation.id}",
        metadata={"sender_id": sender.id, "conversation_id": conversation.id},
    )
    schedule_notification_email(schedule, notification, EMAIL_TYPE_MESSAGE, preview=text)
    return message


def mark_conversation_read(
    session: Session, broadcaster: LiveBroadcaster, *, user: User, conversation_id: int
) -> int:
    """Mark received messages and their notifications read for ``user`` only."""

    conversation = _get_participating_conversation(session, user, conversation_id)
    updated = ConversationRepository(session).mark_messages_read(conversation.id, user.id)
    mark_conversation_notifications_read(
        session, broadcaster, user_id=user.id, conversation_id=conversation.id
    )
    return updated


def get_conversation_messages(
    session: Session, broadcaster: LiveBroadcaster, *, user: User, conversation_id: int
) -> Sequence[Message]:
    """Return the messages ``user`` can see; opening a thread marks it read."""

    conversation = _get_participating_conversation(session, user, conversation_id)
    mark_conversation_read(session, broadcaster, user=user, conversation_id=conversation.id)
    return ConversationRepository(session).list_visible_messages(conversation, user.id)


def delete_message(session: Session, *, user: User, message_id: int) -> None:
    repository = ConversationRepository(session)
    message = repository.get_message(message_id)
    if message is None:
        raise LookupError("Message not found")
    _get_participating_conversation(session, user, message.conversation_id)
    repository.hide_message(message.id, user.id)


def delete_conversation(
    session: Session, broadcaster: LiveBroadcaster, *, user: User, conversation_id: int
) -> None:
    """Hide the conversation for ``user``; the other participant is untouched."""

    conversation = _get_participating_conversation(session, user, conversation_id)
    ConversationRepository(session).mark_deleted_for(conversation.id, user.id)
    mark_conversation_notifications_read(
        session, broadcaster, user_id=user.id, conversation_id=conversation.id
    )
    run_side_effect(
        f"conversation_deleted {conversation.id} for user {user.id}",
        broadcaster.conversation_deleted,
        user.id,
        conversation.id,
    )


__all__ = [
    "ConversationSummary",
    "count_unread_messages",
    "delete_conversation",
    "delete_message",
    "get_conversation_messages",
    "list_conversations",
    "mark_conversation_read",
    "send_message",
    "serialize_message",
    "serialize_sender",
    "start_conversation",
]
