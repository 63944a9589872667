"""Integration tests for ratings, feedback, contact messages and the admin surface."""

from __future__ import annotations

import pytest


@pytest.fixture()
def hired(api):
    recruiter, recruiter_id = api.register("recruiter@eventlink.io", role="recruiter")
    freelancer, freelancer_id = api.register("crew@eventlink.io", first_name="Robin")
    job = api.post_job(recruiter)
    application = api.client.post(
        f"/api/jobs/{job['id']}/apply", json={}, headers=freelancer
    ).json()
    api.client.patch(
        f"/api/applications/{application['id']}/status",
        json={"status": "hired"},
        headers=recruiter,
    )
    for headers in (recruiter, freelancer):
        api.client.patch("/api/notifications/mark-all-read", headers=headers)
    return {
        "recruiter": recruiter,
        "recruiter_id": recruiter_id,
        "freelancer": freelancer,
        "freelancer_id": freelancer_id,
        "application_id": application["id"],
    }


def test_rating_request_reaches_the_recruiter(api, hired):
    response = api.client.post(
        "/api/ratings/requests",
        json={"job_application_id": hired["application_id"]},
        headers=hired["freelancer"],
    )
    duplicate = api.client.post(
        "/api/ratings/requests",
        json={"job_application_id": hired["application_id"]},
        headers=hired["freelancer"],
    )

    assert response.status_code == 201
    assert response.json()["status"] == "pending"
    assert duplicate.status_code == 409
    assert api.counts(hired["recruiter"])["ratings"] == 1
    (notification,) = [n for n in api.notifications(hired["recruiter"]) if not n["is_read"]]
    assert notification["title"] == "Rating Request"
    pending = api.client.get("/api/ratings/requests", headers=hired["recruiter"]).json()
    assert [item["job_application_id"] for item in pending] == [hired["application_id"]]


def test_rating_notifies_freelancer_and_completes_request(api, hired):
    api.client.post(
        "/api/ratings/requests",
        json={"job_application_id": hired["application_id"]},
        headers=hired["freelancer"],
    )

    created = api.client.post(
        "/api/ratings",
        json={"job_application_id": hired["application_id"], "rating": 5},
        headers=hired["recruiter"],
    )
    again = api.client.post(
        "/api/ratings",
        json={"job_application_id": hired["application_id"], "rating": 4},
        headers=hired["recruiter"],
    )

    assert created.status_code == 201
    assert again.status_code == 409
    assert api.counts(hired["freelancer"])["ratings"] == 1
    assert api.client.get("/api/ratings/requests", headers=hired["recruiter"]).json() == []
    average = api.client.get(f"/api/ratings/freelancer/{hired['freelancer_id']}/average").json()
    assert average == {"freelancer_id": hired["freelancer_id"], "average": 5.0, "count": 1}
    listed = api.client.get(f"/api/ratings/freelancer/{hired['freelancer_id']}")
    assert listed.status_code == 200
    assert [rating["rating"] for rating in listed.json()] == [5]


@pytest.mark.parametrize("score", [0, 6])
def test_rating_out_of_range_is_rejected(api, hired, score):
    response = api.client.post(
        "/api/ratings",
        json={"job_application_id": hired["application_id"], "rating": score},
        headers=hired["recruiter"],
    )

    assert response.status_code == 400
    assert api.counts(hired["freelancer"])["ratings"] == 0


def test_only_hired_applications_can_be_rated(api):
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    freelancer, _ = api.register("crew@eventlink.io")
    job = api.post_job(recruiter)
    application = api.client.post(
        f"/api/jobs/{job['id']}/apply", json={}, headers=freelancer
    ).json()

    response = api.client.post(
        "/api/ratings",
        json={"job_application_id": application["id"], "rating": 4},
        headers=recruiter,
    )

    assert response.status_code == 400


def test_declining_a_rating_request(api, hired):
    rating_request = api.client.post(
        "/api/ratings/requests",
        json={"job_application_id": hired["application_id"]},
        headers=hired["freelancer"],
    ).json()

    response = api.client.patch(
        f"/api/ratings/requests/{rating_request['id']}/decline", headers=hired["recruiter"]
    )

    assert response.json()["status"] == "declined"
    assert api.client.get("/api/ratings/requests", headers=hired["recruiter"]).json() == []


def test_feedback_alerts_admins_and_response_reaches_author(api):
    admin, _ = api.register("boss@eventlink.io", role="recruiter")
    author, _ = api.register("crew@eventlink.io")

    submitted = api.client.post(
        "/api/feedback",
        json={"feedback_type": "suggestion", "message": "Dark mode please"},
        headers=author,
    )
    assert submitted.status_code == 201
    assert api.counts(admin)["feedback"] == 1
    assert api.counts(author)["feedback"] == 0

    responded = api.client.patch(
        f"/api/admin/feedback/{submitted.json()['id']}/respond",
        json={"response": "On the roadmap."},
        headers=admin,
    )

    assert responded.status_code == 200
    assert responded.json()["status"] == "resolved"
    assert responded.json()["resolved_at"] is not None
    titles = [item["title"] for item in api.notifications(author)]
    assert titles == ["Feedback Response"]


def test_anonymous_feedback_and_validation(api):
    admin, _ = api.register("boss@eventlink.io", role="recruiter")

    anonymous = api.client.post(
        "/api/feedback", json={"feedback_type": "malfunction", "message": "Map is blank"}
    )
    invalid = api.client.post("/api/feedback", json={"feedback_type": "rant", "message": "x"})

    assert anonymous.status_code == 201
    assert anonymous.json()["user_id"] is None
    assert invalid.status_code == 400
    listed = api.client.get("/api/admin/feedback", params={"status": "pending"}, headers=admin)
    assert len(listed.json()) == 1


def test_contact_message_alerts_admins(api):
    admin, _ = api.register("boss@eventlink.io", role="recruiter")

    response = api.client.post(
        "/api/contact",
        json={
            "name": "Jo Venue",
            "email": "jo@venue.co.uk",
            "subject": "Partnership",
            "message": "We run three venues in Bristol.",
        },
    )

    assert response.status_code == 201
    assert api.counts(admin)["contact_messages"] == 1
    messages = api.client.get("/api/admin/contact-messages", headers=admin).json()
    assert [item["subject"] for item in messages] == ["Partnership"]


def test_dashboard_stats(api):
    admin, _ = api.register("boss@eventlink.io", role="recruiter")
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    api.register("crew@eventlink.io")
    api.post_job(recruiter)

    stats = api.client.get("/api/admin/stats", headers=admin).json()

    assert stats["total_users"] == 3
    assert stats["total_jobs"] == 1
    assert stats["jobs_by_status"] == {"active": 1}
    assert stats["total_applications"] == 0


def test_admin_can_change_roles(api):
    admin, _ = api.register("boss@eventlink.io", role="recruiter")
    headers, user_id = api.register("crew@eventlink.io")

    changed = api.client.patch(
        f"/api/admin/users/{user_id}/role", json={"role": "recruiter"}, headers=admin
    )
    invalid = api.client.patch(
        f"/api/admin/users/{user_id}/role", json={"role": "owner"}, headers=admin
    )

    assert changed.json()["role"] == "recruiter"
    assert invalid.status_code == 400
    assert api.client.get("/api/users/me", headers=headers).json()["role"] == "recruiter"
