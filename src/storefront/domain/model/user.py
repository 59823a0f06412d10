"""User entity: the acting buyer or administrator.

Identity is established by an external auth collaborator; the core only
needs enough of the user to check ownership and address notifications.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import ValidationError


class Role(Enum):
    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"


@dataclass
class User:
    id: str
    name: str
    email: str
    role: Role = Role.CUSTOMER

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("User name is required")
        if not self.email or "@" not in self.email:
            raise ValidationError(f"Invalid email address: {self.email!r}")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
