"""Domain entities for the messaging inbox."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Conversation:
    """Two-party thread. Deletion state is tracked per participant."""

    id: int | None
    participant_one_id: int
    participant_two_id: int
    participant_one_deleted: bool = False
    participant_two_deleted: bool = False
    participant_one_deleted_at: datetime | None = None
    participant_two_deleted_at: datetime | None = None
    last_message_at: datetime | None = None
    created_at: datetime | None = None

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.participant_one_id, self.participant_two_id)

    def other_participant(self, user_id: int) -> int:
        """Return the id of the participant that is not ``user_id``."""

        if user_id == self.participant_one_id:
            return self.participant_two_id
        return self.participant_one_id

    def is_deleted_for(self, user_id: int) -> bool:
        if user_id == self.participant_one_id:
            return self.participant_one_deleted
        return self.participant_two_deleted

    def deleted_at_for(self, user_id: int) -> datetime | None:
        if user_id == self.participant_one_id:
            return self.participant_one_deleted_at
        return self.participant_two_deleted_at


@dataclass
class Message:
    id: int | None
    conversation_id: int
    sender_id: int
    content: str
    is_read: bool = False
    created_at: datetime | None = None


__all__ = ["Conversation", "Message"]
