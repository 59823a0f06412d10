"""Helpers shared by use cases that act on behalf of a user."""

from __future__ import annotations

from storefront.domain.exceptions import AuthorizationError, EntityNotFoundError
from storefront.domain.model.user import User
from storefront.domain.repository.user_repository import UserRepository


def require_user(user_repo: UserRepository, user_id: str) -> User:
    user = user_repo.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundError(f"User '{user_id}' not found")
    return user


def require_admin(user_repo: UserRepository, user_id: str) -> User:
    user = require_user(user_repo, user_id)
    if not user.is_admin:
        raise AuthorizationError("Administrator access required")
    return user
