"""Routes for the messaging inbox."""

from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from sqlalchemy.orm import Session

from eventlink.application.use_cases.messaging import (
    ConversationSummary,
    count_unread_messages as count_unread_messages_uc,
    delete_conversation as delete_conversation_uc,
    delete_message as delete_message_uc,
    get_conversation_messages as get_conversation_messages_uc,
    list_conversations as list_conversations_uc,
    mark_conversation_read as mark_conversation_read_uc,
    send_message as send_message_uc,
    start_conversation as start_conversation_uc,
)
from eventlink.domain.entities import User
from eventlink.infrastructure.database import get_db
from eventlink.infrastructure.notifications import LiveBroadcaster
from eventlink.interfaces.api.dependencies import get_broadcaster, get_current_user
from eventlink.interfaces.api.routes_helpers import disable_caching, http_errors
from eventlink.interfaces.api.schemas import (
    ConversationCreate,
    ConversationRead,
    MarkedCountRead,
    MessageCreate,
    MessageRead,
    UnreadCountRead,
    UserSummaryRead,
)

router = APIRouter(tags=["messages"])


def _summary_to_schema(summary: ConversationSummary) -> ConversationRead:
    conversation = summary.conversation
    return ConversationRead(
        id=conversation.id,
        other_user=UserSummaryRead.model_validate(summary.other_user) if summary.other_user else None,
        last_message=MessageRead.model_validate(summary.last_message) if summary.last_message else None,
        unread_count=summary.unread_count,
        last_message_at=conversation.last_message_at,
        created_at=conversation.created_at,
    )


@router.get("/conversations", response_model=list[ConversationRead])
def list_conversations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ConversationRead]:
    return [_summary_to_schema(summary) for summary in list_conversations_uc(db, current_user)]


@router.post("/conversations", status_code=status.HTTP_201_CREATED)
def start_conversation(
    payload: ConversationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> dict:
    """Open (or reuse) the conversation with ``recipient_id``."""

    with http_errors():
        conversation = start_conversation_uc(
            db,
            broadcaster,
            sender=current_user,
            recipient_id=payload.recipient_id,
            initial_message=payload.initial_message,
            schedule=background_tasks.add_task,
        )
    return {"id": conversation.id, "recipient_id": payload.recipient_id}


@router.get("/conversations/{conversation_id}/messages", response_model=list[MessageRead])
def list_messages(
    conversation_id: int,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> list[MessageRead]:
    """Return the visible history and mark incoming messages as read."""

    with http_errors():
        messages = get_conversation_messages_uc(
            db, broadcaster, user=current_user, conversation_id=conversation_id
        )
    return [MessageRead.model_validate(message) for message in messages]


@router.patch("/conversations/{conversation_id}/read", response_model=MarkedCountRead)
def mark_conversation_read(
    conversation_id: int,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> MarkedCountRead:
    with http_errors():
        updated = mark_conversation_read_uc(
            db, broadcaster, user=current_user, conversation_id=conversation_id
        )
    return MarkedCountRead(updated=updated)


@router.delete("/conversations/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_conversation(
    conversation_id: int,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> None:
    """Hide the conversation for the caller only."""

    with http_errors():
        delete_conversation_uc(db, broadcaster, user=current_user, conversation_id=conversation_id)


@router.post("/messages", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
def send_message(
    payload: MessageCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> MessageRead:
    with http_errors():
        message = send_message_uc(
            db,
            broadcaster,
            sender=current_user,
            conversation_id=payload.conversation_id,
            content=payload.content,
            schedule=background_tasks.add_task,
        )
    return MessageRead.model_validate(message)


@router.get("/messages/unread-count", response_model=UnreadCountRead)
def unread_message_count(
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountRead:
    disable_caching(response)
    return UnreadCountRead(count=count_unread_messages_uc(db, current_user))


@router.delete("/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_message(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    """Hide a single message from the caller's view."""

    with http_errors():
        delete_message_uc(db, user=current_user, message_id=message_id)
