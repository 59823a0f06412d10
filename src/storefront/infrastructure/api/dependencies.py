"""Request-scoped dependencies: unit of work, notifications, acting user."""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request

from storefront.application.authorization import require_admin
from storefront.application.notifications import NotificationDispatcher
from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork


def get_uow(request: Request) -> UnitOfWork:
    # Fresh unit of work per call; never shared across requests
    return request.app.state.uow_factory()


def get_notifications(request: Request) -> NotificationDispatcher:
    return request.app.state.notifications


def current_user(
    request: Request,
    x_user_id: str | None = Header(default=None),
) -> User:
    """Resolve the acting user from the gateway-supplied ``X-User-Id`` header."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    with request.app.state.uow_factory() as uow:
        user = uow.users.get_by_id(x_user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user


def current_admin(request: Request, user: User = Depends(current_user)) -> User:
    with request.app.state.uow_factory() as uow:
        return require_admin(uow.users, user.id)
