"""Transactional email delivery through SendGrid."""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any, Sequence

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from eventlink.config import get_settings

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                field = item.get("field")
                if message and field:
                    messages.append(f"{field}: {message}")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _log_sendgrid_failure(status_code: Any, body: Any, exc: Exception | None = None) -> None:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        logger.error("SendGrid request failed with status %s: %s", status_code, details)
    elif status_code:
        logger.error("SendGrid request failed with status %s", status_code)
    elif details:
        logger.error("SendGrid request failed: %s", details)
    elif exc is not None:
        logger.exception("Error sending email via SendGrid: %s", exc)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials.

    Returns ``False`` instead of raising when email is not configured or the
    provider rejects the message; callers treat email as best effort.
    """

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email to %s", recipient)
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        _log_sendgrid_failure(getattr(exc, "status_code", None), getattr(exc, "body", None), exc)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_sendgrid_failure(status_code, getattr(response, "body", None))
        return False

    return True


def _link(path: str) -> str:
    base = get_settings().frontend_url.rstrip("/")
    return f"{base}{path if path.startswith('/') else '/' + path}"


def _layout(greeting_name: str, paragraphs: Sequence[str], action_path: str, action_label: str) -> str:
    body = "".join(f"<p>{paragraph}</p>" for paragraph in paragraphs)
    return (
        f"<p>Hi {escape(greeting_name)},</p>"
        f"{body}"
        f'<p><a href="{escape(_link(action_path))}">{escape(action_label)}</a></p>'
        "<p>You can change which emails you receive from your notification settings.</p>"
        "<p>The EventLink team</p>"
    )


def send_new_message_email(
    recipient: str, *, recipient_name: str, sender_name: str, preview: str, conversation_id: int
) -> bool:
    subject = f"New message from {sender_name}"
    html_content = _layout(
        recipient_name,
        [
            f"<strong>{escape(sender_name)}</strong> sent you a message on EventLink:",
            f"<em>{escape(preview[:200])}</em>",
        ],
        f"/dashboard?tab=messages&conversation={conversation_id}",
        "Open conversation",
    )
    return send_email(subject, html_content, recipient)


def send_application_update_email(
    recipient: str, *, recipient_name: str, title: str, message: str, action_path: str
) -> bool:
    html_content = _layout(recipient_name, [escape(message)], action_path, "View application")
    return send_email(title, html_content, recipient)


def send_job_update_email(
    recipient: str, *, recipient_name: str, title: str, message: str, job_id: int
) -> bool:
    html_content = _layout(recipient_name, [escape(message)], f"/jobs/{job_id}", "View job")
    return send_email(title, html_content, recipient)


def send_job_alert_email(
    recipient: str,
    *,
    recipient_name: str,
    job_id: int,
    job_title: str,
    company: str,
    location: str,
    rate: str,
) -> bool:
    subject = f"New job match: {job_title}"
    html_content = _layout(
        recipient_name,
        [
            "A new job matching your alert was just posted.",
            (
                f"<strong>{escape(job_title)}</strong> at {escape(company)}<br>"
                f"{escape(location)} &middot; {escape(rate)}"
            ),
        ],
        f"/jobs/{job_id}",
        "View job",
    )
    return send_email(subject, html_content, recipient)


def send_rating_request_email(
    recipient: str, *, recipient_name: str, freelancer_name: str, job_title: str
) -> bool:
    subject = f"{freelancer_name} asked you for a rating"
    html_content = _layout(
        recipient_name,
        [
            f"{escape(freelancer_name)} would like a rating for their work on "
            f"<strong>{escape(job_title)}</strong>."
        ],
        "/dashboard?tab=ratings",
        "Leave a rating",
    )
    return send_email(subject, html_content, recipient)


def send_system_email(
    recipient: str, *, recipient_name: str, title: str, message: str, action_path: str = "/dashboard"
) -> bool:
    html_content = _layout(recipient_name, [escape(message)], action_path, "Open EventLink")
    return send_email(title, html_content, recipient)


def send_digest_email(
    recipient: str, *, recipient_name: str, period_label: str, items: Sequence[tuple[str, str]]
) -> bool:
    """Summarise ``(title, message)`` pairs into one email."""

    subject = f"Your {period_label} EventLink summary ({len(items)} updates)"
    entries = "".join(
        f"<li><strong>{escape(title)}</strong>: {escape(message)}</li>" for title, message in items
    )
    html_content = _layout(
        recipient_name,
        [f"Here is what happened since your last {period_label} summary:", f"<ul>{entries}</ul>"],
        "/dashboard",
        "Open your dashboard",
    )
    return send_email(subject, html_content, recipient)


__all__ = [
    "send_application_update_email",
    "send_digest_email",
    "send_email",
    "send_job_alert_email",
    "send_job_update_email",
    "send_new_message_email",
    "send_rating_request_email",
    "send_system_email",
]
