"""Tests for the contact email notifier."""
import asyncio

from app.config import Settings
from app.services.notifier import ContactNotifier


def make_settings(**overrides):
    values = {"jwt_secret": "k", "database_url": "sqlite://", "environment": "production", "smtp_host": "smtp.example.com"}
    values.update(overrides)
    return Settings(**values)


class FakeFastMail:
    sent = []

    def __init__(self, config):
        self.config = config

    async def send_message(self, message):
        FakeFastMail.sent.append((self.config, message))


def notify(notifier, message="hi"):
    return asyncio.run(notifier.notify("owner@example.com", "Ana", "ana@example.com", message))


def test_disabled_outside_production():
    notifier = ContactNotifier(make_settings(environment="development"))
    assert notify(notifier) is False


def test_disabled_without_smtp_host():
    assert ContactNotifier(make_settings(smtp_host=None)).enabled is False


def test_sends_email(monkeypatch):
    FakeFastMail.sent = []
    monkeypatch.setattr("app.services.notifier.FastMail", FakeFastMail)
    notifier = ContactNotifier(make_settings(smtp_user="bot@example.com", smtp_pass="pw"))

    assert notify(notifier, "Olá\nTudo bem?") is True

    config, message = FakeFastMail.sent[0]
    assert config.MAIL_SERVER == "smtp.example.com"
    assert config.MAIL_STARTTLS is True
    assert config.MAIL_SSL_TLS is False
    assert [str(r) for r in message.recipients] == ["owner@example.com"]
    assert "Ana" in message.subject
    assert "Olá<br>Tudo bem?" in message.body


def test_ssl_connection_when_secure():
    notifier = ContactNotifier(make_settings(smtp_secure=True, smtp_port=465, smtp_user="bot@example.com"))
    config = notifier.connection_config("owner@example.com")

    assert config.MAIL_SSL_TLS is True
    assert config.MAIL_STARTTLS is False
    assert config.USE_CREDENTIALS is True


def test_failure_is_swallowed(monkeypatch):
    class RefusingFastMail(FakeFastMail):
        async def send_message(self, message):
            raise OSError("connection refused")

    monkeypatch.setattr("app.services.notifier.FastMail", RefusingFastMail)
    notifier = ContactNotifier(make_settings())

    assert notify(notifier) is False


def test_html_body_is_escaped():
    notifier = ContactNotifier(make_settings())
    message = notifier.build_message("owner@example.com", "<b>Ana</b>", "ana@example.com", "<script>x</script>")

    assert "<script>" not in message.body
    assert "&lt;b&gt;Ana&lt;/b&gt;" in message.body
