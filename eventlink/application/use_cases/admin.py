"""Aggregated figures for the admin dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from eventlink.infrastructure.repositories import (
    ContactMessageRepository,
    FeedbackRepository,
    JobApplicationRepository,
    JobRepository,
    UserRepository,
)


@dataclass
class DashboardStats:
    users_by_role: dict[str, int] = field(default_factory=dict)
    jobs_by_status: dict[str, int] = field(default_factory=dict)
    total_applications: int = 0
    feedback_by_status: dict[str, int] = field(default_factory=dict)
    pending_contact_messages: int = 0

    @property
    def total_users(self) -> int:
        return sum(self.users_by_role.values())

    @property
    def total_jobs(self) -> int:
        return sum(self.jobs_by_status.values())


def get_dashboard_stats(session: Session) -> DashboardStats:
    return DashboardStats(
        users_by_role=UserRepository(session).count_by_role(),
        jobs_by_status=JobRepository(session).count_by_status(),
        total_applications=JobApplicationRepository(session).count(),
        feedback_by_status=FeedbackRepository(session).count_by_status(),
        pending_contact_messages=ContactMessageRepository(session).count_pending(),
    )


__all__ = ["DashboardStats", "get_dashboard_stats"]
