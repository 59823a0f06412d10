"""Application service: Register User use case.

The welcome email is sent after the user is committed and may fail
without affecting the registration.
"""

from __future__ import annotations

from storefront.application.notifications import NotificationDispatcher
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.user import Role, User
from storefront.domain.repository.unit_of_work import UnitOfWork


class RegisterUserHandler:

    def __init__(self, uow: UnitOfWork, notifications: NotificationDispatcher) -> None:
        self._uow = uow
        self._notifications = notifications

    def handle(self, name: str, email: str, admin: bool = False) -> User:
        with self._uow as uow:
            if uow.users.get_by_email(email) is not None:
                raise ValidationError(f"User with email '{email}' already exists")

            user = User(
                id=uow.users.next_id(),
                name=name.strip() if name else name,
                email=email.strip().lower(),
                role=Role.ADMIN if admin else Role.CUSTOMER,
            )
            uow.users.save(user)
            uow.commit()

        self._notifications.welcome(user)
        return user
