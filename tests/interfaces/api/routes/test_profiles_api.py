"""Integration tests for freelancer and recruiter profiles."""

from __future__ import annotations


def test_profile_follows_the_callers_role(api):
    freelancer, freelancer_id = api.register("crew@eventlink.io", first_name="Robin")
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")

    empty = api.client.get("/api/profiles/me", headers=freelancer).json()
    assert empty["profile"] is None

    saved = api.client.put(
        "/api/profiles/me",
        json={"title": "Rigger", "location": "Bristol", "skills": [" rigging ", "", "pyro"]},
        headers=freelancer,
    )
    assert saved.status_code == 200
    assert saved.json()["profile"]["skills"] == ["rigging", "pyro"]
    assert saved.json()["profile"]["first_name"] == "Robin"

    company = api.client.put(
        "/api/profiles/me", json={"company_name": "Stage Co"}, headers=recruiter
    )
    assert company.json()["profile"]["company_name"] == "Stage Co"

    public = api.client.get(f"/api/profiles/{freelancer_id}", headers=recruiter).json()
    assert public["profile"]["title"] == "Rigger"
    assert api.client.get("/api/profiles/9999", headers=recruiter).status_code == 404


def test_profile_validation(api):
    freelancer, _ = api.register("crew@eventlink.io")
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")

    bad_status = api.client.put(
        "/api/profiles/me", json={"availability_status": "asleep"}, headers=freelancer
    )
    no_company = api.client.put("/api/profiles/me", json={"location": "Leeds"}, headers=recruiter)

    assert bad_status.status_code == 400
    assert no_company.status_code == 400


def test_freelancer_search(api):
    first, _ = api.register("one@eventlink.io")
    second, _ = api.register("two@eventlink.io")
    recruiter, _ = api.register("recruiter@eventlink.io", role="recruiter")
    api.client.put(
        "/api/profiles/me", json={"location": "Bristol", "skills": ["Sound"]}, headers=first
    )
    api.client.put(
        "/api/profiles/me", json={"location": "Leeds", "skills": ["Lighting"]}, headers=second
    )

    by_skill = api.client.get("/api/freelancers", params={"skill": "sound"}, headers=recruiter)
    by_location = api.client.get(
        "/api/freelancers", params={"location": "leeds"}, headers=recruiter
    )

    assert [item["location"] for item in by_skill.json()] == ["Bristol"]
    assert [item["skills"] for item in by_location.json()] == [["Lighting"]]
