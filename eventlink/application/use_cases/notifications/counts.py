"""Badge-count aggregation shared by polling endpoints and live pushes."""

from __future__ import annotations

from sqlalchemy.orm import Session

from eventlink.domain.entities import BadgeCounts
from eventlink.infrastructure.notifications import (
    LiveBroadcaster,
    SideEffectResult,
    run_side_effect,
)
from eventlink.infrastructure.repositories import NotificationRepository


def get_category_counts(session: Session, user_id: int) -> BadgeCounts:
    """Recompute the unread badge counts of ``user_id`` from notification rows."""

    rows = NotificationRepository(session).count_unread_by_type(user_id)
    return BadgeCounts.from_type_counts(rows)


def get_unread_count(session: Session, user_id: int) -> int:
    """Count every unread notification, including uncategorised ones."""

    return NotificationRepository(session).count_unread(user_id)


def push_badge_counts(
    session: Session, broadcaster: LiveBroadcaster, user_id: int
) -> SideEffectResult:
    counts = get_category_counts(session, user_id)
    return run_side_effect(
        f"badge counts for user {user_id}", broadcaster.badge_counts, user_id, counts
    )


__all__ = ["get_category_counts", "get_unread_count", "push_badge_counts"]
