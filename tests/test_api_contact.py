"""Tests for the contact form and inbox endpoints."""
import pytest

MESSAGE = {"name": "Maria", "email": "Maria@Example.com", "message": "Gostaria de um orçamento."}


@pytest.fixture
def inbox(client):
    for i in range(3):
        response = client.post("/api/contact", json={**MESSAGE, "message": f"Mensagem {i}"})
        assert response.status_code == 201


def test_missing_email_is_reported(client, notifier):
    response = client.post("/api/contact", json={"name": "Maria", "message": "Olá"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert [d["field"] for d in error["details"]] == ["email"]
    assert notifier.calls == []


def test_message_is_stored_and_owner_notified(client, notifier, admin_headers):
    response = client.post("/api/contact", json=MESSAGE)
    assert response.status_code == 201

    messages = client.get("/api/contact/messages", headers=admin_headers).json()["messages"]
    assert len(messages) == 1
    assert messages[0]["email"] == "maria@example.com"
    assert messages[0]["read"] is False

    assert len(notifier.calls) == 1
    assert notifier.calls[0]["recipient"] == "contato@tkprod.com.br"
    assert notifier.calls[0]["name"] == "Maria"


def test_notification_goes_to_configured_email(client, notifier, admin_headers):
    client.put("/api/config", json={"contactEmail": "studio@example.com"}, headers=admin_headers)
    client.post("/api/contact", json=MESSAGE)
    assert notifier.calls[0]["recipient"] == "studio@example.com"


def test_notifier_failure_does_not_fail_request(app, client, admin_headers):
    from app.config import settings
    from app.services.notifier import ContactNotifier, get_notifier

    class ExplodingNotifier(ContactNotifier):
        @property
        def enabled(self):
            return True

        async def _send(self, recipient, message):
            raise ConnectionRefusedError("smtp down")

    app.dependency_overrides[get_notifier] = lambda: ExplodingNotifier(settings)

    response = client.post("/api/contact", json=MESSAGE)

    assert response.status_code == 201
    total = client.get("/api/contact/messages", headers=admin_headers).json()["pagination"]["total"]
    assert total == 1


def test_inbox_requires_admin(client, editor_headers, inbox):
    assert client.get("/api/contact/messages").status_code == 401
    assert client.get("/api/contact/messages", headers=editor_headers).status_code == 403


def test_mark_read_and_filter(client, admin_headers, inbox):
    messages = client.get("/api/contact/messages", headers=admin_headers).json()["messages"]
    assert [m["message"] for m in messages] == ["Mensagem 2", "Mensagem 1", "Mensagem 0"]

    response = client.put(f"/api/contact/messages/{messages[0]['id']}", json={"read": True}, headers=admin_headers)
    assert response.status_code == 200

    read = client.get("/api/contact/messages", params={"read": "true"}, headers=admin_headers).json()
    unread = client.get("/api/contact/messages", params={"read": "false"}, headers=admin_headers).json()
    everything = client.get("/api/contact/messages", params={"read": "yes"}, headers=admin_headers).json()

    assert [m["id"] for m in read["messages"]] == [messages[0]["id"]]
    assert unread["pagination"]["total"] == 2
    assert everything["pagination"]["total"] == 3


def test_inbox_pagination(client, admin_headers, inbox):
    body = client.get("/api/contact/messages", params={"page": 2, "limit": 2}, headers=admin_headers).json()

    assert len(body["messages"]) == 1
    assert body["pagination"] == {"total": 3, "page": 2, "limit": 2, "pages": 2}


def test_delete_message(client, admin_headers, inbox):
    message_id = client.get("/api/contact/messages", headers=admin_headers).json()["messages"][0]["id"]

    assert client.delete(f"/api/contact/messages/{message_id}", headers=admin_headers).status_code == 200
    response = client.delete(f"/api/contact/messages/{message_id}", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"


def test_update_unknown_message(client, admin_headers):
    response = client.put(
        "/api/contact/messages/1b4e28ba-2fa1-11d2-883f-0016d3cca427",
        json={"read": True},
        headers=admin_headers,
    )
    assert response.status_code == 404
