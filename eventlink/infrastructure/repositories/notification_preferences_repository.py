"""Persistence helpers for notification preferences and job alert filters."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from eventlink.domain.entities import (
    EMAIL_PREFERENCE_FIELDS,
    JobAlertFilter,
    NotificationPreferences,
)
from eventlink.infrastructure.models import (
    JobAlertFilterModel,
    NotificationPreferencesModel,
    UserModel,
)
from eventlink.utils import now_in_app_naive_datetime


class NotificationPreferencesRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_user(self, user_id: int) -> NotificationPreferences | None:
        model = self._get_model(user_id)
        return self._to_entity(model) if model else None

    def list_user_ids_by_digest_mode(self, digest_mode: str) -> list[int]:
        query = (
            self.session.query(NotificationPreferencesModel.user_id)
            .join(UserModel, UserModel.id == NotificationPreferencesModel.user_id)
            .filter(UserModel.deleted_at.is_(None))
            .filter(NotificationPreferencesModel.digest_mode == digest_mode)
            .order_by(NotificationPreferencesModel.user_id)
        )
        return [user_id for (user_id,) in query.all()]

    def save(self, preferences: NotificationPreferences) -> NotificationPreferences:
        """Insert or update the preferences row owned by ``preferences.user_id``."""

        model = self._get_model(preferences.user_id)
        if model is None:
            model = NotificationPreferencesModel(user_id=preferences.user_id)
        for field_name in EMAIL_PREFERENCE_FIELDS:
            setattr(model, field_name, bool(getattr(preferences, field_name)))
        model.digest_mode = preferences.digest_mode
        model.digest_time = preferences.digest_time
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, user_id: int) -> NotificationPreferencesModel | None:
        return (
            self.session.query(NotificationPreferencesModel)
            .filter(NotificationPreferencesModel.user_id == user_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: NotificationPreferencesModel) -> NotificationPreferences:
        return NotificationPreferences(
            id=model.id,
            user_id=model.user_id,
            email_messages=bool(model.email_messages),
            email_application_updates=bool(model.email_application_updates),
            email_job_updates=bool(model.email_job_updates),
            email_job_alerts=bool(model.email_job_alerts),
            email_rating_requests=bool(model.email_rating_requests),
            email_system_updates=bool(model.email_system_updates),
            digest_mode=model.digest_mode,
            digest_time=model.digest_time,
        )


class JobAlertFilterRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, filter_id: int) -> JobAlertFilter | None:
        model = self.session.get(JobAlertFilterModel, filter_id)
        return self._to_entity(model) if model else None

    def list_for_user(self, user_id: int) -> Sequence[JobAlertFilter]:
        query = (
            self.session.query(JobAlertFilterModel)
            .filter(JobAlertFilterModel.user_id == user_id)
            .order_by(JobAlertFilterModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_active(self) -> Sequence[JobAlertFilter]:
        query = (
            self.session.query(JobAlertFilterModel)
            .join(UserModel, UserModel.id == JobAlertFilterModel.user_id)
            .filter(UserModel.deleted_at.is_(None))
            .filter(JobAlertFilterModel.is_active.is_(True))
            .order_by(JobAlertFilterModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def save(self, alert_filter: JobAlertFilter) -> JobAlertFilter:
        model = None
        if alert_filter.id is not None:
            model = self.session.get(JobAlertFilterModel, alert_filter.id)
        if model is None:
            model = JobAlertFilterModel(user_id=alert_filter.user_id)
            model.created_at = now_in_app_naive_datetime()
        else:
            model.updated_at = now_in_app_naive_datetime()
        model.skills = list(alert_filter.skills or [])
        model.locations = list(alert_filter.locations or [])
        model.keywords = list(alert_filter.keywords or [])
        model.job_types = list(alert_filter.job_types or [])
        model.date_from = alert_filter.date_from
        model.date_to = alert_filter.date_to
        model.is_active = alert_filter.is_active
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, filter_id: int) -> None:
        model = self.session.get(JobAlertFilterModel, filter_id)
        if model is None:
            msg = f"Job alert filter with id {filter_id} not found"
            raise LookupError(msg)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: JobAlertFilterModel) -> JobAlertFilter:
        return JobAlertFilter(
            id=model.id,
            user_id=model.user_id,
            skills=list(model.skills or []),
            locations=list(model.locations or []),
            keywords=list(model.keywords or []),
            job_types=list(model.job_types or []),
            date_from=model.date_from,
            date_to=model.date_to,
            is_active=bool(model.is_active),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


__all__ = ["JobAlertFilterRepository", "NotificationPreferencesRepository"]
