"""SQLAlchemy-backed implementation of UserRepository."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.domain.model.user import Role, User
from storefront.domain.repository.user_repository import UserRepository
from storefront.infrastructure.persistence.orm import UserRecord


class SqlUserRepository(UserRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, user_id: str) -> User | None:
        record = self._session.get(UserRecord, user_id)
        return self._to_domain(record) if record is not None else None

    def get_by_email(self, email: str) -> User | None:
        record = self._session.scalars(
            select(UserRecord).where(UserRecord.email == email.strip().lower())
        ).first()
        return self._to_domain(record) if record is not None else None

    def save(self, user: User) -> None:
        record = self._session.get(UserRecord, user.id)
        if record is None:
            record = UserRecord(id=user.id)
            self._session.add(record)
        record.name = user.name
        record.email = user.email.strip().lower()
        record.role = user.role.value
        self._session.flush()

    @staticmethod
    def _to_domain(record: UserRecord) -> User:
        return User(
            id=record.id,
            name=record.name,
            email=record.email,
            role=Role(record.role),
        )
