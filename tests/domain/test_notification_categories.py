"""Tests for the notification type to badge category mapping."""

import pytest

from eventlink.domain.entities import (
    NOTIFICATION_CATEGORIES,
    BadgeCounts,
    category_for_type,
    types_for_category,
)


@pytest.mark.parametrize(
    ("notification_type", "expected"),
    [
        ("new_message", "messages"),
        ("application_update", "applications"),
        ("job_update", "jobs"),
        ("rating_received", "ratings"),
        ("rating_request", "ratings"),
        ("feedback", "feedback"),
        ("contact_message", "contact_messages"),
        ("profile_view", None),
        ("system", None),
    ],
)
def test_category_for_type(notification_type, expected):
    assert category_for_type(notification_type) == expected


def test_types_for_category_round_trips_every_category():
    for category in NOTIFICATION_CATEGORIES:
        assert all(category_for_type(kind) == category for kind in types_for_category(category))
    assert set(types_for_category("ratings")) == {"rating_received", "rating_request"}


def test_types_for_unknown_category_is_rejected():
    with pytest.raises(ValueError, match="Invalid category"):
        types_for_category("bogus-category")


def test_badge_counts_fold_types_and_ignore_uncategorised_rows():
    counts = BadgeCounts.from_type_counts(
        [
            ("new_message", 2),
            ("rating_received", 1),
            ("rating_request", 3),
            ("system", 5),
            ("profile_view", 1),
        ]
    )

    assert counts.messages == 2
    assert counts.ratings == 4
    assert counts.applications == 0
    assert counts.total == 6


def test_badge_counts_dict_includes_total():
    payload = BadgeCounts(messages=1, jobs=2, feedback=3).to_dict()

    assert payload == {
        "messages": 1,
        "applications": 0,
        "jobs": 2,
        "ratings": 0,
        "feedback": 3,
        "contact_messages": 0,
        "total": 6,
    }
