"""Best-effort email notification for new contact messages."""
import html
from typing import Optional

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from app.config import Settings, settings
from app.utils.logger import logger

SENDER_NAME = "Video Portfolio"


class ContactNotifier:
    """Sends one email per contact message; failures are logged, never raised."""

    def __init__(self, config: Settings):
        self.config = config

    @property
    def enabled(self) -> bool:
        return self.config.is_production and bool(self.config.smtp_host)

    def connection_config(self, recipient: str) -> ConnectionConfig:
        return ConnectionConfig(
            MAIL_USERNAME=self.config.smtp_user or "",
            MAIL_PASSWORD=self.config.smtp_pass or "",
            MAIL_FROM=self.config.smtp_user or recipient,
            MAIL_FROM_NAME=SENDER_NAME,
            MAIL_SERVER=self.config.smtp_host,
            MAIL_PORT=self.config.smtp_port,
            MAIL_STARTTLS=not self.config.smtp_secure,
            MAIL_SSL_TLS=self.config.smtp_secure,
            USE_CREDENTIALS=bool(self.config.smtp_user),
            VALIDATE_CERTS=True,
        )

    def build_message(self, recipient: str, name: str, email: str, message: str) -> MessageSchema:
        body = html.escape(message).replace("\n", "<br>")
        return MessageSchema(
            subject=f"New contact message from {name}",
            recipients=[recipient],
            reply_to=[email],
            body=(
                f"<p><strong>Name:</strong> {html.escape(name)}</p>"
                f"<p><strong>Email:</strong> {html.escape(email)}</p>"
                f"<p><strong>Message:</strong></p>"
                f"<p>{body}</p>"
            ),
            subtype=MessageType.html,
        )

    async def _send(self, recipient: str, message: MessageSchema) -> None:
        await FastMail(self.connection_config(recipient)).send_message(message)

    async def notify(self, recipient: str, name: str, email: str, message: str) -> bool:
        """Send the notification. Returns whether an email actually went out."""
        if not self.enabled:
            logger.debug(f"Email delivery disabled, not notifying {recipient}")
            return False
        try:
            await self._send(recipient, self.build_message(recipient, name, email, message))
        except Exception as e:
            # The message is already stored; delivery problems stay server-side
            logger.error(f"Failed to send contact notification to {recipient}: {e}", exc_info=True)
            return False
        logger.info(f"Sent contact notification to {recipient}")
        return True


_notifier: Optional[ContactNotifier] = None


def get_notifier() -> ContactNotifier:
    """FastAPI dependency; tests override it with a recording fake."""
    global _notifier
    if _notifier is None:
        _notifier = ContactNotifier(settings)
    return _notifier
