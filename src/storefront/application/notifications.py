"""Best-effort customer notifications.

The dispatcher is called strictly after a unit of work has committed.
Whatever the email channel does (raise, time out, report failure) is
logged here and never propagated: the committed order is the source of
truth, the email is a courtesy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import structlog

from storefront.domain.model.order import Order
from storefront.domain.model.user import User

logger = structlog.get_logger(__name__)


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters."""

    @abstractmethod
    def send(self, to: str, subject: str, body: str) -> dict:
        """Send an email message.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


class OrderConfirmationTemplate:

    @staticmethod
    def render(user: User, order: Order) -> dict:
        lines = "\n".join(
            f"  {item.quantity.value} x {item.product_name} @ {item.unit_price}"
            for item in order.items
        )
        return {
            "subject": f"Order #{order.id} Confirmed",
            "body": (
                f"Hi {user.name},\n\n"
                f"Your order #{order.id} has been placed.\n\n"
                f"{lines}\n\n"
                f"Order Total: {order.total}\n\n"
                "We'll notify you once your order ships.\n"
            ),
        }


class WelcomeTemplate:

    @staticmethod
    def render(user: User) -> dict:
        return {
            "subject": f"Welcome, {user.name}!",
            "body": (
                f"Hi {user.name},\n\n"
                "Thank you for joining us! Start exploring the catalog.\n\n"
                "Happy shopping!\n"
            ),
        }


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class NotificationDispatcher:

    def __init__(self, email: EmailPort) -> None:
        self._email = email

    def order_confirmed(self, user: User, order: Order) -> bool:
        return self._deliver(
            "order_confirmation",
            user.email,
            OrderConfirmationTemplate.render(user, order),
            order_id=order.id,
        )

    def welcome(self, user: User) -> bool:
        return self._deliver("welcome", user.email, WelcomeTemplate.render(user))

    def _deliver(self, kind: str, to: str, message: dict, **context) -> bool:
        """Send one message; return False instead of raising on any failure."""
        try:
            result = self._email.send(
                to=to, subject=message["subject"], body=message["body"]
            )
        except Exception as exc:  # noqa: BLE001 - delivery is best-effort
            logger.error(
                "Notification dispatch failed",
                kind=kind,
                to=to,
                error=str(exc),
                exc_info=True,
                **context,
            )
            return False

        if result.get("status") != "sent":
            logger.error(
                "Notification dispatch failed",
                kind=kind,
                to=to,
                error=result.get("error"),
                **context,
            )
            return False

        logger.info(
            "Notification sent",
            kind=kind,
            to=to,
            message_id=result.get("message_id"),
            **context,
        )
        return True
