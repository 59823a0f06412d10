"""Email adapter that only logs; used outside production."""

from __future__ import annotations

import uuid

import structlog

from storefront.application.notifications import EmailPort

logger = structlog.get_logger(__name__)


class LogEmailAdapter(EmailPort):

    def send(self, to: str, subject: str, body: str) -> dict:
        message_id = f"log-{uuid.uuid4().hex[:12]}"
        logger.info("Email captured", to=to, subject=subject, message_id=message_id)
        return {"message_id": message_id, "status": "sent"}
