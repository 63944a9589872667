"""Tests for matching new jobs against saved alert filters."""

from datetime import date

from eventlink.domain.entities import Job, JobAlertFilter


def _job(**overrides) -> Job:
    values = {
        "id": 1,
        "recruiter_id": 9,
        "title": "Sound Engineer",
        "company": "Loud Ltd",
        "location": "Manchester, UK",
        "type": "contract",
        "rate": "£300/day",
        "description": "Front of house mixing for a touring band.",
        "event_date": date(2025, 6, 14),
        "skills": ["Audio Mixing", "Pro Tools"],
    }
    values.update(overrides)
    return Job(**values)


def test_empty_filter_matches_any_job():
    assert JobAlertFilter(id=1, user_id=2).matches(_job())


def test_inactive_filter_never_matches():
    assert not JobAlertFilter(id=1, user_id=2, is_active=False).matches(_job())


def test_skills_match_by_case_insensitive_substring_in_both_directions():
    assert JobAlertFilter(id=1, user_id=2, skills=["audio"]).matches(_job())
    assert JobAlertFilter(id=1, user_id=2, skills=["pro tools certified"]).matches(
        _job(skills=["Pro Tools"])
    )
    assert not JobAlertFilter(id=1, user_id=2, skills=["lighting"]).matches(_job())


def test_locations_and_keywords_must_both_pass():
    alert = JobAlertFilter(id=1, user_id=2, locations=["manchester"], keywords=["touring"])
    assert alert.matches(_job())
    assert not alert.matches(_job(location="Leeds"))
    assert not alert.matches(_job(description="Studio session work."))


def test_job_types_require_an_exact_match():
    assert JobAlertFilter(id=1, user_id=2, job_types=["Contract"]).matches(_job())
    assert not JobAlertFilter(id=1, user_id=2, job_types=["full-time"]).matches(_job())


def test_date_range_requires_an_event_date_inside_it():
    alert = JobAlertFilter(
        id=1, user_id=2, date_from=date(2025, 6, 1), date_to=date(2025, 6, 30)
    )
    assert alert.matches(_job())
    assert not alert.matches(_job(event_date=date(2025, 7, 1)))
    assert not alert.matches(_job(event_date=None))
