from __future__ import annotations

import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationResult:
    to_address: str
    subject: str
    success: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class MailConfig:
    host: str
    port: int
    username: str
    password: str
    sender: str
    use_tls: bool = True
    timeout: float = 10.0

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.username and self.password)


def mail_config_from_dict(raw: dict) -> MailConfig:
    return MailConfig(
        host=str(raw.get("host") or ""),
        port=int(raw.get("port") or 587),
        username=str(raw.get("username") or ""),
        password=str(raw.get("password") or ""),
        sender=str(raw.get("sender") or raw.get("username") or ""),
        use_tls=bool(raw.get("use_tls", True)),
        timeout=float(raw.get("timeout") or 10.0),
    )


class NotificationGateway(Protocol):
    def send(self, to_address: str, subject: str, body: str) -> NotificationResult:
        raise NotImplementedError


class SMTPNotificationGateway(NotificationGateway):
    """Sends HTML email through an SMTP relay (STARTTLS by default)."""

    def __init__(self, config: MailConfig):
        self._config = config

    def send(self, to_address: str, subject: str, body: str) -> NotificationResult:
        if not self._config.is_configured:
            logger.warning("Email not configured, skipping notification to %s", to_address)
            return NotificationResult(to_address, subject, success=False, error="email not configured")

        msg = MIMEMultipart()
        msg["From"] = self._config.sender
        msg["To"] = to_address
        msg["Subject"] = subject
        msg.attach(MIMEText(body, "html"))

        try:
            with smtplib.SMTP(self._config.host, self._config.port, timeout=self._config.timeout) as server:
                if self._config.use_tls:
                    server.starttls(context=ssl.create_default_context())
                server.login(self._config.username, self._config.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            return NotificationResult(to_address, subject, success=False, error=str(exc))

        logger.info("Email sent to %s", to_address)
        return NotificationResult(to_address, subject, success=True)
