"""
Offer quality (price-like ratio) aligned with XRPL book_offers semantics.

Alignment notes:
- An offer's `quality` is TakerPays / TakerGets: what the taker pays per
  unit received. Lower is better; book_offers returns the best first.
- The taker's exchange *rate* is the reciprocal, TakerGets / TakerPays
  (higher is better). Aggregation works on rates.
- Computed qualities use ledger units (drops for XRP) so they sort
  consistently with the `quality` field rippled reports for the same book.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from functools import total_ordering

from .exc import AmountDomainError


@total_ordering
@dataclass(frozen=True)
class Quality:
    """Pay-per-unit-received ratio (lower is better).

    Ordering follows the raw value, so an ascending sort puts the best offer
    first.
    """

    value: Decimal

    def __post_init__(self):
        if self.value.is_nan() or self.value < 0:
            raise AmountDomainError(f"quality must be a non-negative Decimal: {self.value!r}")

    @classmethod
    def from_amounts(cls, pays: Decimal, gets: Decimal) -> "Quality":
        """Build quality as pays / gets. Raises on a non-positive `gets` leg."""
        if gets <= 0:
            raise AmountDomainError("quality undefined for non-positive TakerGets")
        if pays < 0:
            raise AmountDomainError("quality undefined for negative TakerPays")
        return cls(pays / gets)

    @classmethod
    def parse(cls, raw) -> "Quality":
        """Parse the `quality` field of a book_offers row (a Decimal string)."""
        try:
            return cls(Decimal(str(raw)))
        except ArithmeticError:
            raise AmountDomainError(f"invalid quality: {raw!r}") from None

    @property
    def rate(self) -> Decimal:
        """Taker exchange rate (received per unit paid); zero quality maps to zero."""
        if self.value == 0:
            return Decimal(0)
        return Decimal(1) / self.value

    def __lt__(self, other: "Quality") -> bool:
        if not isinstance(other, Quality):
            return NotImplemented
        return self.value < other.value


__all__ = [
    "Quality",
]
