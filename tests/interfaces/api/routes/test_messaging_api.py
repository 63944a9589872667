"""Integration tests for conversations, messages and their notifications."""

from __future__ import annotations

import pytest


@pytest.fixture()
def pair(api):
    recruiter, recruiter_id = api.register(
        "recruiter@eventlink.io", role="recruiter", first_name="Alex", last_name="Stage"
    )
    freelancer, freelancer_id = api.register("crew@eventlink.io", first_name="Robin")
    response = api.client.post(
        "/api/conversations", json={"recipient_id": freelancer_id}, headers=recruiter
    )
    assert response.status_code == 201, response.text
    return {
        "recruiter": recruiter,
        "recruiter_id": recruiter_id,
        "freelancer": freelancer,
        "freelancer_id": freelancer_id,
        "conversation_id": response.json()["id"],
    }


def _send(api, pair, content, sender="recruiter"):
    response = api.client.post(
        "/api/messages",
        json={"conversation_id": pair["conversation_id"], "content": content},
        headers=pair[sender],
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_message_raises_recipient_badge_until_opened(api, pair):
    before = api.counts(pair["freelancer"])["messages"]

    _send(api, pair, "Can you do Saturday?")

    counts = api.counts(pair["freelancer"])
    assert counts["messages"] == before + 1
    assert api.counts(pair["recruiter"])["messages"] == 0
    (notification,) = api.notifications(pair["freelancer"])
    assert notification["title"] == "New Message"
    assert "Alex Stage" in notification["message"]

    history = api.client.get(
        f"/api/conversations/{pair['conversation_id']}/messages", headers=pair["freelancer"]
    )

    assert [item["content"] for item in history.json()] == ["Can you do Saturday?"]
    assert api.counts(pair["freelancer"])["messages"] == 0
    assert api.client.get("/api/messages/unread-count", headers=pair["freelancer"]).json() == {
        "count": 0
    }


def test_conversation_list_reports_unread_messages(api, pair):
    _send(api, pair, "First")
    _send(api, pair, "Second")

    (summary,) = api.client.get("/api/conversations", headers=pair["freelancer"]).json()

    assert summary["unread_count"] == 2
    assert summary["last_message"]["content"] == "Second"
    assert summary["other_user"]["id"] == pair["recruiter_id"]


def test_mark_conversation_read_clears_only_that_user(api, pair):
    _send(api, pair, "Ping")
    _send(api, pair, "Pong", sender="freelancer")

    response = api.client.patch(
        f"/api/conversations/{pair['conversation_id']}/read", headers=pair["freelancer"]
    )

    assert response.json() == {"updated": 1}
    assert api.counts(pair["freelancer"])["messages"] == 0
    assert api.counts(pair["recruiter"])["messages"] == 1


def test_deleting_a_conversation_is_per_user(api, pair):
    _send(api, pair, "See you at load-in")

    response = api.client.delete(
        f"/api/conversations/{pair['conversation_id']}", headers=pair["freelancer"]
    )

    assert response.status_code == 204
    assert api.client.get("/api/conversations", headers=pair["freelancer"]).json() == []
    assert len(api.client.get("/api/conversations", headers=pair["recruiter"]).json()) == 1
    assert api.counts(pair["freelancer"])["messages"] == 0


def test_new_message_restores_a_deleted_conversation_without_old_history(api, pair):
    _send(api, pair, "Old news")
    api.client.delete(f"/api/conversations/{pair['conversation_id']}", headers=pair["freelancer"])

    _send(api, pair, "Fresh start")

    (summary,) = api.client.get("/api/conversations", headers=pair["freelancer"]).json()
    assert summary["id"] == pair["conversation_id"]
    history = api.client.get(
        f"/api/conversations/{pair['conversation_id']}/messages", headers=pair["freelancer"]
    ).json()
    assert [item["content"] for item in history] == ["Fresh start"]


def test_outsiders_cannot_read_or_post(api, pair):
    outsider, _ = api.register("outsider@eventlink.io")
    path = f"/api/conversations/{pair['conversation_id']}/messages"

    assert api.client.get(path, headers=outsider).status_code == 403
    posted = api.client.post(
        "/api/messages",
        json={"conversation_id": pair["conversation_id"], "content": "hi"},
        headers=outsider,
    )
    assert posted.status_code == 403
    assert api.client.get("/api/conversations/9999/messages", headers=outsider).status_code == 404


def test_message_validation(api, pair):
    empty = api.client.post(
        "/api/messages",
        json={"conversation_id": pair["conversation_id"], "content": "   "},
        headers=pair["recruiter"],
    )
    to_self = api.client.post(
        "/api/conversations", json={"recipient_id": pair["recruiter_id"]}, headers=pair["recruiter"]
    )

    assert empty.status_code == 400
    assert to_self.status_code == 400
    assert api.unread(pair["freelancer"]) == 0


def test_deleted_message_is_hidden_for_the_caller(api, pair):
    message = _send(api, pair, "Typo")

    assert api.client.delete(f"/api/messages/{message['id']}", headers=pair["recruiter"]).status_code == 204

    path = f"/api/conversations/{pair['conversation_id']}/messages"
    assert api.client.get(path, headers=pair["recruiter"]).json() == []
    assert len(api.client.get(path, headers=pair["freelancer"]).json()) == 1
