"""
Core datatypes for quoting and route selection, aligned with XRPL semantics.

These datatypes are immutable so that a quote cycle can be recomputed from
scratch and compared by value.

Notes:
- All numeric fields are Decimal; XRP values are in whole XRP, not drops.
- `QuoteRequest` is the identity of a quote: any change to tokens, amount or
  slippage is a different request, and results for an old request are stale.
- Quote state is a tagged variant (`QuoteIdle`, `QuoteFetching`, `Quoted`,
  `NoRoute`, `QuoteFailed`); consumers dispatch on the class.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple, Union

from .amounts import Amount, Token, XRPAmount
from .exc import InvariantViolation
from .quality import Quality


# ---------------------------------------------------------------------------
# Route
# ---------------------------------------------------------------------------

class Route(str, Enum):
    """Execution venue for a swap."""

    AMM = "AMM"
    DEX = "DEX"


# ---------------------------------------------------------------------------
# AMM partial quote
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AuctionSlot:
    """Holder of the pool's discounted-fee auction slot (display only)."""

    account: str
    discounted_fee: int
    expiration: Optional[str] = None
    price: Optional[Amount] = None


@dataclass(frozen=True)
class VoteSlot:
    """One liquidity provider's trading-fee vote (display only)."""

    account: str
    trading_fee: int
    vote_weight: int


@dataclass(frozen=True)
class AMMQuote:
    """Partial quote from the constant-product pool.

    Fields:
    - pool_exists: False is a valid terminal state (no pool for the pair).
    - pool_reserve_in / pool_reserve_out: reserves mapped to the trade direction.
    - trading_fee_bps: pool fee in 1/100,000 units (500 = 0.5%).
    - expected_output: output for the requested input, fee taken on input.
    - price_impact: in [0, 1), relative to the pre-trade marginal rate.
    """

    pool_exists: bool
    pool_reserve_in: Decimal = Decimal(0)
    pool_reserve_out: Decimal = Decimal(0)
    trading_fee_bps: int = 0
    expected_output: Decimal = Decimal(0)
    price_impact: Decimal = Decimal(0)
    auction_slot: Optional[AuctionSlot] = None
    vote_slots: Tuple[VoteSlot, ...] = ()

    @staticmethod
    def absent() -> "AMMQuote":
        return AMMQuote(pool_exists=False)


# ---------------------------------------------------------------------------
# Order-book partial quote
# ---------------------------------------------------------------------------

def _ledger_units(a: Amount) -> Decimal:
    return Decimal(a.drops) if isinstance(a, XRPAmount) else a.to_decimal()


@dataclass(frozen=True)
class BookOffer:
    """A single resting offer as seen by the taker.

    `taker_pays` is what the taker pays (our input); `taker_gets` is what the
    taker receives (our output). Missing funded fields mean the offer is
    assumed fully backed by the maker's balance.
    """

    taker_pays: Amount
    taker_gets: Amount
    quality: Optional[Quality] = None
    taker_pays_funded: Optional[Amount] = None
    taker_gets_funded: Optional[Amount] = None
    owner_funds: Optional[Decimal] = None
    offer_id: Optional[str] = None

    def funded_pays(self) -> Decimal:
        src = self.taker_pays_funded if self.taker_pays_funded is not None else self.taker_pays
        return src.to_decimal()

    def funded_gets(self) -> Decimal:
        src = self.taker_gets_funded if self.taker_gets_funded is not None else self.taker_gets
        return src.to_decimal()

    def effective_quality(self) -> Quality:
        """Supplied quality if present, else TakerPays / TakerGets.

        Computed in ledger units (drops for XRP) so it sorts consistently with
        the `quality` field rippled reports.
        """
        if self.quality is not None:
            return self.quality
        return Quality.from_amounts(_ledger_units(self.taker_pays), _ledger_units(self.taker_gets))


@dataclass(frozen=True)
class DEXQuote:
    """Partial quote from walking the order book.

    fill_percentage < 1 means the visible book cannot absorb the full input:
    a partial-fill condition, not a failure.
    """

    offers_available: bool
    expected_output: Decimal = Decimal(0)
    fill_percentage: Decimal = Decimal(0)
    price_impact: Decimal = Decimal(0)
    total_input_used: Decimal = Decimal(0)
    offers_consumed: int = 0

    @staticmethod
    def absent() -> "DEXQuote":
        return DEXQuote(offers_available=False)


# ---------------------------------------------------------------------------
# Final quote
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SwapFee:
    """Protocol fee, always denominated in the destination token."""

    amount: Decimal
    token: Token


@dataclass(frozen=True)
class SwapQuote:
    """The externally consumed quote.

    Invariant: 0 <= minimum_received <= output_after_fee <= destination_amount.
    `rate` is destination/source at computation time and never adjusted.
    """

    source_amount: Decimal
    destination_amount: Decimal
    rate: Decimal
    price_impact: Decimal
    route: Route
    fee: SwapFee
    minimum_received: Decimal
    amm_quote: Optional[AMMQuote] = None
    dex_quote: Optional[DEXQuote] = None
    partial: bool = False

    def __post_init__(self):
        if not (Decimal(0) <= self.minimum_received <= self.output_after_fee <= self.destination_amount):
            raise InvariantViolation(
                f"quote ordering broken: min={self.minimum_received}, "
                f"after_fee={self.output_after_fee}, expected={self.destination_amount}")

    @property
    def output_after_fee(self) -> Decimal:
        return self.destination_amount - self.fee.amount


# ---------------------------------------------------------------------------
# Request identity and quote state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class QuoteRequest:
    """The exact input tuple a quote belongs to."""

    from_token: Optional[Token]
    to_token: Optional[Token]
    amount: Decimal
    slippage: Decimal

    def is_quotable(self) -> bool:
        if self.from_token is None or self.to_token is None:
            return False
        if self.from_token == self.to_token:
            return False
        return self.amount > 0


@dataclass(frozen=True)
class QuoteIdle:
    """No quote: inputs incomplete, tokens identical, or amount not positive."""

    request: Optional[QuoteRequest] = None


@dataclass(frozen=True)
class QuoteFetching:
    """A pipeline run for `request` is in flight; nothing current to show."""

    request: QuoteRequest


@dataclass(frozen=True)
class Quoted:
    """A usable quote; `quote.partial` flags a partial order-book fill."""

    request: QuoteRequest
    quote: SwapQuote


@dataclass(frozen=True)
class NoRoute:
    """Both sources are structurally absent or below threshold: no market.

    `errors` holds the failure of one source when the other was absent.
    """

    request: QuoteRequest
    amm_quote: Optional[AMMQuote] = None
    dex_quote: Optional[DEXQuote] = None
    errors: Tuple[BaseException, ...] = ()


@dataclass(frozen=True)
class QuoteFailed:
    """Both sources failed to fetch this cycle: temporarily unable to quote."""

    request: QuoteRequest
    errors: Tuple[BaseException, ...] = ()


QuoteState = Union[QuoteIdle, QuoteFetching, Quoted, NoRoute, QuoteFailed]


__all__ = [
    "Route",
    "AuctionSlot",
    "VoteSlot",
    "AMMQuote",
    "BookOffer",
    "DEXQuote",
    "SwapFee",
    "SwapQuote",
    "QuoteRequest",
    "QuoteIdle",
    "QuoteFetching",
    "Quoted",
    "NoRoute",
    "QuoteFailed",
    "QuoteState",
]
