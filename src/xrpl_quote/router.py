"""
Route selection between the AMM pool and the order book, and quote composition.

Selection rules:
- AMM candidate: its expected output, only if the pool exists.
- DEX candidate: its expected output, only if fill >= fill threshold (0.99):
  a near-complete fill is required to trust the figure as executable.
- Both candidates absent: fall back to a partial DEX fill (fill > 0),
  flagged `partial`; otherwise there is no viable route.
- Otherwise the strictly larger output wins; ties go to AMM so repeated runs
  with unchanged inputs never flap.

Either partial quote may be None when its source failed to fetch; selection
degrades to the other source.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .core import AMMQuote, DEXQuote, QuoteRequest, Route, SwapQuote
from .fees import apply_fee_and_slippage

# Debug printing control
DEBUG_ROUTER = False

def _dbg(msg: str) -> None:
    if DEBUG_ROUTER:
        print(f"[ROUTER] {msg}")


DEFAULT_FILL_THRESHOLD = Decimal("0.99")


@dataclass(frozen=True)
class RouteChoice:
    """Winning venue with the output and impact forwarded to fee/slippage."""

    route: Route
    expected_output: Decimal
    price_impact: Decimal
    partial: bool = False


def _amm_candidate(amm_quote: Optional[AMMQuote]) -> Decimal:
    if amm_quote is None or not amm_quote.pool_exists:
        return Decimal(0)
    return amm_quote.expected_output


def _dex_candidate(dex_quote: Optional[DEXQuote], fill_threshold: Decimal) -> Decimal:
    if dex_quote is None or not dex_quote.offers_available:
        return Decimal(0)
    if dex_quote.fill_percentage < fill_threshold:
        return Decimal(0)
    return dex_quote.expected_output


def select_route(
    amm_quote: Optional[AMMQuote],
    dex_quote: Optional[DEXQuote],
    *,
    fill_threshold: Decimal = DEFAULT_FILL_THRESHOLD,
) -> Optional[RouteChoice]:
    """Pick AMM or DEX by expected output; None means no viable route."""
    amm_out = _amm_candidate(amm_quote)
    dex_out = _dex_candidate(dex_quote, fill_threshold)
    _dbg(f"candidates: amm={amm_out} dex={dex_out}")

    if amm_out <= 0 and dex_out <= 0:
        if (dex_quote is not None and dex_quote.offers_available
                and dex_quote.fill_percentage > 0 and dex_quote.expected_output > 0):
            _dbg(f"partial DEX fallback: fill={dex_quote.fill_percentage}")
            return RouteChoice(Route.DEX, dex_quote.expected_output, dex_quote.price_impact, partial=True)
        return None

    if amm_out >= dex_out:
        return RouteChoice(Route.AMM, amm_out, amm_quote.price_impact)
    return RouteChoice(Route.DEX, dex_out, dex_quote.price_impact)


def compose_quote(
    request: QuoteRequest,
    amm_quote: Optional[AMMQuote],
    dex_quote: Optional[DEXQuote],
    *,
    fee_rate: Decimal,
    fill_threshold: Decimal = DEFAULT_FILL_THRESHOLD,
) -> Optional[SwapQuote]:
    """Select a route and derive fee, minimum received and rate for `request`."""
    choice = select_route(amm_quote, dex_quote, fill_threshold=fill_threshold)
    if choice is None:
        return None
    fee, _after_fee, minimum = apply_fee_and_slippage(
        choice.expected_output, request.to_token, fee_rate, request.slippage)
    return SwapQuote(
        source_amount=request.amount,
        destination_amount=choice.expected_output,
        rate=choice.expected_output / request.amount,
        price_impact=choice.price_impact,
        route=choice.route,
        fee=fee,
        minimum_received=minimum,
        amm_quote=amm_quote,
        dex_quote=dex_quote,
        partial=choice.partial,
    )


__all__ = [
    "DEFAULT_FILL_THRESHOLD",
    "RouteChoice",
    "select_route",
    "compose_quote",
]
