"""SMTP email adapter."""

from __future__ import annotations

import smtplib
import uuid
from email.message import EmailMessage

from storefront.application.notifications import EmailPort
from storefront.domain.exceptions import DependencyFailure


class SmtpEmailAdapter(EmailPort):

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._timeout = timeout

    def send(self, to: str, subject: str, body: str) -> dict:
        message = EmailMessage()
        message_id = f"<{uuid.uuid4().hex}@{self._host}>"
        message["Message-ID"] = message_id
        message["From"] = self._sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        smtp_cls = smtplib.SMTP_SSL if self._port == 465 else smtplib.SMTP
        try:
            with smtp_cls(self._host, self._port, timeout=self._timeout) as smtp:
                if self._port == 587:
                    smtp.starttls()
                if self._username:
                    smtp.login(self._username, self._password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise DependencyFailure(f"SMTP delivery to {to} failed: {exc}") from exc

        return {"message_id": message_id, "status": "sent"}
