"""Integration tests for the notification endpoints and badge counts."""

from __future__ import annotations

import pytest

CATEGORIES = ("messages", "applications", "jobs", "ratings", "feedback", "contact_messages")


@pytest.fixture()
def hiring(api):
    """A recruiter with one job and a freelancer who applied to it."""

    recruiter, recruiter_id = api.register("recruiter@eventlink.io", role="recruiter")
    freelancer, freelancer_id = api.register("crew@eventlink.io", first_name="Robin")
    job = api.post_job(recruiter)
    response = api.client.post(f"/api/jobs/{job['id']}/apply", json={}, headers=freelancer)
    assert response.status_code == 201, response.text
    return {
        "recruiter": recruiter,
        "recruiter_id": recruiter_id,
        "freelancer": freelancer,
        "freelancer_id": freelancer_id,
        "job": job,
        "application": response.json(),
    }


def _assert_consistent(api, headers) -> dict:
    counts = api.counts(headers)
    assert counts["total"] == sum(counts[category] for category in CATEGORIES)
    assert counts["total"] == api.unread(headers)
    return counts


def test_new_user_has_zero_counts(api):
    headers, _ = api.register("crew@eventlink.io")

    counts = _assert_consistent(api, headers)

    assert counts["total"] == 0
    assert api.notifications(headers) == []


def test_apply_notifies_recruiter(api, hiring):
    counts = _assert_consistent(api, hiring["recruiter"])
    assert counts["applications"] == 1
    assert counts["total"] == 1

    (notification,) = api.notifications(hiring["recruiter"])
    assert notification["title"] == "New Job Application"
    assert notification["type"] == "application_update"
    assert notification["is_read"] is False
    assert notification["related_entity_id"] == hiring["application"]["id"]


def test_count_endpoints_disable_caching(api, hiring):
    for path in ("/api/notifications/unread-count", "/api/notifications/category-counts"):
        response = api.client.get(path, headers=hiring["recruiter"])
        assert "no-store" in response.headers["cache-control"]
        assert response.headers["pragma"] == "no-cache"


def test_mark_read_is_idempotent(api, hiring):
    (notification,) = api.notifications(hiring["recruiter"])
    path = f"/api/notifications/{notification['id']}/read"

    first = api.client.patch(path, headers=hiring["recruiter"])
    second = api.client.patch(path, headers=hiring["recruiter"])

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["is_read"] is True
    assert _assert_consistent(api, hiring["recruiter"])["total"] == 0


def test_mark_read_of_foreign_or_missing_notification(api, hiring):
    (notification,) = api.notifications(hiring["recruiter"])

    foreign = api.client.patch(
        f"/api/notifications/{notification['id']}/read", headers=hiring["freelancer"]
    )
    missing = api.client.patch("/api/notifications/9999/read", headers=hiring["recruiter"])

    assert foreign.status_code == 403
    assert missing.status_code == 404
    assert api.unread(hiring["recruiter"]) == 1


def test_mark_category_read_only_touches_that_category(api, hiring):
    response = api.client.post(
        "/api/conversations",
        json={"recipient_id": hiring["recruiter_id"], "initial_message": "Is parking provided?"},
        headers=hiring["freelancer"],
    )
    assert response.status_code == 201, response.text
    assert api.counts(hiring["recruiter"])["messages"] == 1

    marked = api.client.patch(
        "/api/notifications/mark-category-read/messages", headers=hiring["recruiter"]
    )

    assert marked.json() == {"updated": 1}
    counts = _assert_consistent(api, hiring["recruiter"])
    assert counts["messages"] == 0
    assert counts["applications"] == 1


def test_unknown_category_is_rejected_without_changes(api, hiring):
    response = api.client.patch(
        "/api/notifications/mark-category-read/bogus-category", headers=hiring["recruiter"]
    )

    assert response.status_code == 400
    assert api.unread(hiring["recruiter"]) == 1


def test_mark_all_read_zeroes_every_category(api, hiring):
    api.client.patch(
        f"/api/applications/{hiring['application']['id']}/status",
        json={"status": "reviewed"},
        headers=hiring["recruiter"],
    )

    response = api.client.patch("/api/notifications/mark-all-read", headers=hiring["freelancer"])

    assert response.json() == {"updated": 1}
    counts = _assert_consistent(api, hiring["freelancer"])
    assert all(counts[category] == 0 for category in CATEGORIES)
    assert all(item["is_read"] for item in api.notifications(hiring["freelancer"]))


def test_delete_notification(api, hiring):
    (notification,) = api.notifications(hiring["recruiter"])

    forbidden = api.client.delete(
        f"/api/notifications/{notification['id']}", headers=hiring["freelancer"]
    )
    deleted = api.client.delete(
        f"/api/notifications/{notification['id']}", headers=hiring["recruiter"]
    )

    assert forbidden.status_code == 403
    assert deleted.status_code == 204
    assert api.notifications(hiring["recruiter"]) == []
    assert api.counts(hiring["recruiter"])["total"] == 0


def test_admin_can_create_notifications(api):
    admin, _ = api.register("boss@eventlink.io", role="recruiter")
    freelancer, freelancer_id = api.register("crew@eventlink.io")
    payload = {
        "user_id": freelancer_id,
        "type": "job_update",
        "title": "Venue changed",
        "message": "The festival moved to Hall B.",
        "metadata": {"hall": "B"},
    }

    denied = api.client.post("/api/notifications", json=payload, headers=freelancer)
    created = api.client.post("/api/notifications", json=payload, headers=admin)

    assert denied.status_code == 403
    assert created.status_code == 201, created.text
    assert created.json()["metadata"] == '{"hall": "B"}'
    assert api.counts(freelancer)["jobs"] == 1


def test_admin_create_validates_type_and_recipient(api):
    admin, _ = api.register("boss@eventlink.io", role="recruiter")
    _, freelancer_id = api.register("crew@eventlink.io")

    bad_type = api.client.post(
        "/api/notifications",
        json={"user_id": freelancer_id, "type": "carrier_pigeon", "title": "t", "message": "m"},
        headers=admin,
    )
    missing_user = api.client.post(
        "/api/notifications",
        json={"user_id": 9999, "type": "system", "title": "t", "message": "m"},
        headers=admin,
    )

    assert bad_type.status_code == 400
    assert missing_user.status_code == 404


def test_system_notifications_count_as_unread_but_not_in_badges(api):
    admin, _ = api.register("boss@eventlink.io", role="recruiter")
    freelancer, freelancer_id = api.register("crew@eventlink.io")

    api.client.post(
        "/api/notifications",
        json={"user_id": freelancer_id, "type": "system", "title": "Hello", "message": "Welcome"},
        headers=admin,
    )

    assert api.unread(freelancer) == 1
    assert api.counts(freelancer)["total"] == 0


def test_expired_notifications_are_hidden_and_purged(api):
    admin, _ = api.register("boss@eventlink.io", role="recruiter")
    freelancer, freelancer_id = api.register("crew@eventlink.io")
    api.client.post(
        "/api/notifications",
        json={
            "user_id": freelancer_id,
            "type": "job_update",
            "title": "Old news",
            "message": "This expired long ago.",
            "expires_at": "2000-01-01T00:00:00",
        },
        headers=admin,
    )

    assert api.notifications(freelancer) == []
    assert api.counts(freelancer)["jobs"] == 0

    purged = api.client.post("/api/admin/notifications/purge-expired", headers=admin)
    assert purged.json() == {"deleted": 1}


def test_unauthenticated_requests_are_rejected(client):
    assert client.get("/api/notifications").status_code == 401
    assert client.get("/api/notifications/category-counts").status_code == 401


def test_notification_settings_round_trip(api):
    headers, _ = api.register("crew@eventlink.io")

    defaults = api.client.get("/api/notifications/settings", headers=headers).json()
    assert defaults["digest_mode"] == "instant"
    assert defaults["email_messages"] is True

    saved = api.client.post(
        "/api/notifications/settings",
        json={"email_messages": False, "digest_mode": "weekly", "digest_time": "07:30"},
        headers=headers,
    )
    assert saved.status_code == 200
    assert saved.json()["email_messages"] is False
    assert saved.json()["digest_mode"] == "weekly"

    invalid = api.client.post(
        "/api/notifications/settings", json={"digest_mode": "hourly"}, headers=headers
    )
    assert invalid.status_code == 400


def test_job_alert_filter_drives_job_match_notifications(api):
    freelancer, _ = api.register("crew@eventlink.io")
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")

    assert api.client.get("/api/notifications/job-alerts", headers=freelancer).json() is None
    saved = api.client.post(
        "/api/notifications/job-alerts",
        json={"skills": ["Lighting"], "locations": ["london"]},
        headers=freelancer,
    )
    assert saved.status_code == 200, saved.text

    api.post_job(recruiter)
    api.post_job(recruiter, title="Stage Manager", skills=["management"], location="Leeds")

    (notification,) = api.notifications(freelancer)
    assert notification["title"] == "New Job Match"
    assert api.counts(freelancer)["jobs"] == 1


def test_job_alert_filter_update_and_delete(api):
    freelancer, _ = api.register("crew@eventlink.io")
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    alert = api.client.post(
        "/api/notifications/job-alerts", json={"keywords": ["festival"]}, headers=freelancer
    ).json()

    paused = api.client.patch(
        f"/api/notifications/job-alerts/{alert['id']}", json={"is_active": False}, headers=freelancer
    )
    assert paused.json()["is_active"] is False
    api.post_job(recruiter)
    assert api.notifications(freelancer) == []

    assert api.client.get("/api/notifications/job-alerts", headers=recruiter).status_code == 403
    deleted = api.client.delete(f"/api/notifications/job-alerts/{alert['id']}", headers=freelancer)
    assert deleted.status_code == 204
    assert api.client.get("/api/notifications/job-alerts", headers=freelancer).json() is None
