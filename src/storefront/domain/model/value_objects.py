"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from storefront.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0.00"), currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot buy zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Rating:
    """A review score: an integer from 1 to 5 stars."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Rating must be an integer, got {type(self.value).__name__}"
            )
        if not MIN_RATING <= self.value <= MAX_RATING:
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {self.value}"
            )

    @staticmethod
    def of(raw: str | int) -> Rating:
        try:
            return Rating(int(raw))
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid rating: {raw!r}") from exc


_TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class RatingSummary:
    """Mean rating and review count derived from a full set of reviews."""

    average: Decimal
    count: int

    @staticmethod
    def from_ratings(ratings: Iterable[int]) -> RatingSummary:
        """Summarise every current rating of a product.

        The mean is rounded half-up to two decimal places; a product
        with no reviews has an average of 0.
        """
        values = list(ratings)
        if not values:
            return RatingSummary(average=Decimal("0.00"), count=0)
        mean = Decimal(sum(values)) / Decimal(len(values))
        return RatingSummary(
            average=mean.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP),
            count=len(values),
        )


@dataclass(frozen=True)
class PageRequest:
    """1-based page of a listing.  ``limit=None`` means everything."""

    page: int = 1
    limit: int | None = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be 1 or greater")
        if self.limit is not None and self.limit < 1:
            raise ValidationError("Limit must be 1 or greater")

    @property
    def offset(self) -> int:
        return (self.page - 1) * (self.limit or 0)
