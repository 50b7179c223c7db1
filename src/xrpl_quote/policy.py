"""
User-facing guards around a quote: price-impact levels, slippage bounds,
and whether a swap may be submitted from the current quote state.

Alignment notes:
- Thresholds are caller configuration (`QuoteSettings`), never derived.
- The submission reasons keep "no market" and "unable to fetch" apart:
  a structural absence is final for these inputs, a fetch failure is not.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from .config import QuoteSettings
from .core import NoRoute, QuoteFailed, QuoteState, Quoted, Token
from .core.exc import ConfigurationError

DecimalLike = Union[Decimal, int, str]

#: Native balance kept back by the "max" helper so the swap can pay its fee.
XRP_FEE_RESERVE = Decimal("1")

REASON_NO_QUOTE = "no quote"
REASON_NO_MARKET = "no market available"
REASON_FETCH_FAILED = "temporarily unable to fetch"
REASON_IMPACT_TOO_HIGH = "price impact too high"
REASON_INSUFFICIENT_BALANCE = "insufficient balance"


def to_decimal(x: DecimalLike) -> Decimal:
    return x if isinstance(x, Decimal) else Decimal(str(x))


# ---------------------------------------------------------------------------
# Price impact
# ---------------------------------------------------------------------------

class PriceImpactLevel(str, Enum):
    OK = "ok"
    WARNING = "warning"
    HIGH = "high"
    BLOCKED = "blocked"


def classify_price_impact(impact: DecimalLike, settings: QuoteSettings) -> PriceImpactLevel:
    """Bucket a price-impact fraction against the configured thresholds."""
    x = to_decimal(impact)
    if x >= settings.price_impact_block_threshold:
        return PriceImpactLevel.BLOCKED
    if x >= settings.price_impact_high_threshold:
        return PriceImpactLevel.HIGH
    if x >= settings.price_impact_warning_threshold:
        return PriceImpactLevel.WARNING
    return PriceImpactLevel.OK


# ---------------------------------------------------------------------------
# Slippage
# ---------------------------------------------------------------------------

def validate_slippage(slippage: DecimalLike, settings: QuoteSettings) -> Decimal:
    """Return `slippage` as Decimal, or raise ConfigurationError when out of bounds."""
    x = to_decimal(slippage)
    if x.is_nan() or not (settings.min_slippage <= x <= settings.max_slippage):
        raise ConfigurationError(
            f"slippage {x} outside [{settings.min_slippage}, {settings.max_slippage}]")
    return x


def is_high_slippage(slippage: DecimalLike, settings: QuoteSettings) -> bool:
    return to_decimal(slippage) > settings.high_slippage_warning_threshold


# ---------------------------------------------------------------------------
# Submission guard
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SubmissionCheck:
    allowed: bool
    reason: Optional[str] = None


def check_submission(
    state: QuoteState,
    settings: QuoteSettings,
    balance: Optional[DecimalLike] = None,
) -> SubmissionCheck:
    """Decide whether the swap described by `state` may be submitted.

    `balance` is the spendable amount of the source token; when given, a
    quote that needs more than that is refused.
    """
    if isinstance(state, QuoteFailed):
        return SubmissionCheck(False, REASON_FETCH_FAILED)
    if isinstance(state, NoRoute):
        # one side absent and the other failed: the market may still exist
        if state.errors:
            return SubmissionCheck(False, REASON_FETCH_FAILED)
        return SubmissionCheck(False, REASON_NO_MARKET)
    if not isinstance(state, Quoted):
        return SubmissionCheck(False, REASON_NO_QUOTE)

    quote = state.quote
    if classify_price_impact(quote.price_impact, settings) is PriceImpactLevel.BLOCKED:
        return SubmissionCheck(False, REASON_IMPACT_TOO_HIGH)
    if balance is not None and to_decimal(balance) < quote.source_amount:
        return SubmissionCheck(False, REASON_INSUFFICIENT_BALANCE)
    return SubmissionCheck(True)


def max_spendable(token: Token, balance: DecimalLike) -> Decimal:
    """Largest amount of `token` the "max" helper offers from `balance`."""
    b = to_decimal(balance)
    if token.is_xrp:
        b -= XRP_FEE_RESERVE
    return b if b > 0 else Decimal(0)


__all__ = [
    "XRP_FEE_RESERVE",
    "REASON_NO_QUOTE",
    "REASON_NO_MARKET",
    "REASON_FETCH_FAILED",
    "REASON_IMPACT_TOO_HIGH",
    "REASON_INSUFFICIENT_BALANCE",
    "PriceImpactLevel",
    "classify_price_impact",
    "validate_slippage",
    "is_high_slippage",
    "SubmissionCheck",
    "check_submission",
    "max_spendable",
]
