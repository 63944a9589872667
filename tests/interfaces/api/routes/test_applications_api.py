"""Integration tests for jobs and applications and the notifications they raise."""

from __future__ import annotations


def _apply(api, job_id, headers, **payload):
    return api.client.post(f"/api/jobs/{job_id}/apply", json=payload, headers=headers)


def _set_status(api, application_id, headers, status, **extra):
    return api.client.patch(
        f"/api/applications/{application_id}/status",
        json={"status": status, **extra},
        headers=headers,
    )


def test_status_change_notifies_freelancer_once(api):
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    freelancer, _ = api.register("crew@eventlink.io")
    job = api.post_job(recruiter)
    application = _apply(api, job["id"], freelancer, cover_letter="Ten years on the road.").json()

    first = _set_status(api, application["id"], recruiter, "reviewed")
    repeat = _set_status(api, application["id"], recruiter, "reviewed")

    assert first.status_code == 200
    assert repeat.json()["status"] == "reviewed"
    counts = api.counts(freelancer)
    assert counts["applications"] == 1
    assert counts["total"] == api.unread(freelancer) == 1
    (notification,) = api.notifications(freelancer)
    assert notification["title"] == "Application Update"
    assert job["title"] in notification["message"]


def test_rejection_message_is_passed_on(api):
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    freelancer, _ = api.register("crew@eventlink.io")
    job = api.post_job(recruiter)
    application = _apply(api, job["id"], freelancer).json()

    response = _set_status(
        api, application["id"], recruiter, "rejected", rejection_message="We went with a local crew."
    )

    assert response.json()["rejection_message"] == "We went with a local crew."
    (notification,) = api.notifications(freelancer)
    assert "We went with a local crew." in notification["message"]


def test_invalid_status_and_foreign_recruiter(api):
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    other, _ = api.register("other@eventlink.io", role="recruiter")
    freelancer, _ = api.register("crew@eventlink.io")
    job = api.post_job(recruiter)
    application = _apply(api, job["id"], freelancer).json()

    assert _set_status(api, application["id"], recruiter, "promoted").status_code == 400
    assert _set_status(api, application["id"], other, "reviewed").status_code == 403
    assert _set_status(api, 9999, recruiter, "reviewed").status_code == 404
    assert api.unread(freelancer) == 0


def test_duplicate_application_conflicts(api):
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    freelancer, _ = api.register("crew@eventlink.io")
    job = api.post_job(recruiter)

    assert _apply(api, job["id"], freelancer).status_code == 201
    assert _apply(api, job["id"], freelancer).status_code == 409
    assert api.counts(recruiter)["applications"] == 1


def test_only_active_jobs_accept_freelancer_applications(api):
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    freelancer, _ = api.register("crew@eventlink.io")
    paused = api.post_job(recruiter, status="paused")

    assert _apply(api, paused["id"], freelancer).status_code == 400
    assert _apply(api, paused["id"], recruiter).status_code == 403
    assert _apply(api, 9999, freelancer).status_code == 404


def test_application_lists_for_each_side(api):
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    freelancer, _ = api.register("crew@eventlink.io")
    job = api.post_job(recruiter)
    _apply(api, job["id"], freelancer)

    mine = api.client.get("/api/applications/mine", headers=freelancer).json()
    received = api.client.get("/api/applications/received", headers=recruiter).json()

    assert [item["job"]["id"] for item in mine] == [job["id"]]
    assert [item["job_id"] for item in received] == [job["id"]]
    per_job = api.client.get(f"/api/jobs/{job['id']}/applications", headers=recruiter)
    assert len(per_job.json()) == 1


def test_job_update_notifies_applicants(api):
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    freelancer, _ = api.register("crew@eventlink.io")
    job = api.post_job(recruiter)
    _apply(api, job["id"], freelancer)

    response = api.client.put(
        f"/api/jobs/{job['id']}", json={"rate": "£300/day"}, headers=recruiter
    )

    assert response.json()["rate"] == "£300/day"
    (notification,) = api.notifications(freelancer)
    assert notification["title"] == "Job Updated"
    assert api.counts(freelancer)["jobs"] == 1


def test_deleting_a_job_warns_hired_freelancers(api):
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    hired, _ = api.register("hired@eventlink.io")
    waiting, _ = api.register("waiting@eventlink.io")
    job = api.post_job(recruiter)
    application = _apply(api, job["id"], hired).json()
    _apply(api, job["id"], waiting)
    _set_status(api, application["id"], recruiter, "hired")
    api.client.patch("/api/notifications/mark-all-read", headers=hired)

    response = api.client.delete(f"/api/jobs/{job['id']}", headers=recruiter)

    assert response.status_code == 204
    assert api.client.get(f"/api/jobs/{job['id']}").status_code == 404
    cancelled = [item for item in api.notifications(hired) if not item["is_read"]]
    assert [item["title"] for item in cancelled] == ["Job Cancelled"]
    assert cancelled[0]["priority"] == "high"
    assert api.notifications(waiting) == []


def test_job_listing_filters(api):
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    api.post_job(recruiter)
    api.post_job(recruiter, title="Stage Manager", location="Leeds", status="closed")

    active = api.client.get("/api/jobs", params={"status": "active"}).json()
    leeds = api.client.get("/api/jobs", params={"location": "leeds"}).json()

    assert [job["title"] for job in active] == ["Lighting Technician"]
    assert [job["title"] for job in leeds] == ["Stage Manager"]
    assert api.client.get("/api/jobs", params={"status": "archived"}).status_code == 400
