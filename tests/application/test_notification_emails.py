"""Email gating by notification preferences and the digest job."""

from __future__ import annotations

import pytest

from eventlink.application.use_cases.notifications import (
    EMAIL_TYPE_SYSTEM,
    create_notification,
    email_allowed,
    send_digests,
    send_notification_email,
    update_preferences,
)
from eventlink.application.use_cases.users import register_user
from eventlink.infrastructure import email as email_module
from eventlink.infrastructure.database import SessionLocal
from eventlink.infrastructure.notifications import LiveBroadcaster


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def outbox(monkeypatch: pytest.MonkeyPatch):
    sent: list[tuple[str, str]] = []

    def fake_system_email(recipient, **kwargs):
        sent.append(("system", recipient))
        return True

    def fake_digest_email(recipient, **kwargs):
        sent.append((kwargs["period_label"], recipient))
        return True

    monkeypatch.setattr(email_module, "send_system_email", fake_system_email)
    monkeypatch.setattr(email_module, "send_digest_email", fake_digest_email)
    return sent


def _user(session, email: str):
    return register_user(
        session,
        email=email,
        password="Secret123",
        role="freelancer",
        first_name="Robin",
        last_name="Crew",
    )


def _system_notification(session, user_id: int):
    return create_notification(
        session,
        LiveBroadcaster(),
        user_id=user_id,
        type="system",
        title="Maintenance",
        message="EventLink will be briefly unavailable tonight.",
    )


def test_instant_email_is_sent_by_default(session, outbox):
    user = _user(session, "robin@eventlink.io")
    notification = _system_notification(session, user.id)

    assert send_notification_email(
        session, notification_id=notification.id, email_type=EMAIL_TYPE_SYSTEM
    )
    assert outbox == [("system", "robin@eventlink.io")]


def test_disabled_preference_suppresses_email(session, outbox):
    user = _user(session, "robin@eventlink.io")
    update_preferences(session, user.id, {"email_system_updates": False})
    notification = _system_notification(session, user.id)

    assert not send_notification_email(
        session, notification_id=notification.id, email_type=EMAIL_TYPE_SYSTEM
    )
    assert outbox == []


def test_digest_mode_replaces_instant_emails(session, outbox):
    user = _user(session, "robin@eventlink.io")
    update_preferences(session, user.id, {"digest_mode": "daily"})
    _system_notification(session, user.id)

    assert not email_allowed(session, user.id, EMAIL_TYPE_SYSTEM)
    assert send_digests(session, "daily") == 1
    assert send_digests(session, "weekly") == 0
    assert outbox == [("daily", "robin@eventlink.io")]


def test_unknown_email_type_is_rejected(session):
    user = _user(session, "robin@eventlink.io")

    with pytest.raises(ValueError):
        email_allowed(session, user.id, "carrier-pigeon")


def test_digests_only_run_for_periodic_modes(session):
    with pytest.raises(ValueError):
        send_digests(session, "instant")
