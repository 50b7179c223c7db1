# Top-level API for xrpl_quote.
"""
Top-level API for xrpl_quote.

Quote and route a swap between two XRPL tokens against the AMM pool and the
order book for the pair:
  - run_quote_pipeline: one concurrent AMM/DEX cycle -> QuoteState
  - QuotePoller: keeps the quote fresh for the current inputs, discarding stale replies
  - compose_quote / select_route: pure routing over already-fetched partial quotes
  - build_swap_transaction: xrpl-py payload for the selected route (unsigned)

All quote arithmetic is Decimal; XRP crosses the wire in integer drops.
"""

# NOTE:
#   Ledger access goes through any object with an async `request()`; xrpl-py's
#   AsyncJsonRpcClient is the default (see `ledger.make_client`).

from __future__ import annotations

from .config import QuoteSettings, get_settings
from .amm import AMMPool, calculate_amm_output, calculate_price_impact
from .book_offers import BookAggregate, aggregate_book_offers
from .fees import apply_fee_and_slippage
from .router import RouteChoice, select_route, compose_quote
from .ledger import LedgerClient, make_client, fetch_amm_pool, fetch_amm_quote, fetch_dex_quote
from .pipeline import run_quote_pipeline
from .poller import QuotePoller
from .policy import PriceImpactLevel, SubmissionCheck, check_submission, classify_price_impact
from .transactions import BatchUnavailable, build_swap_transaction, build_batch_swap_transaction

from .core import (
    Token,
    Route,
    AMMQuote,
    DEXQuote,
    SwapFee,
    SwapQuote,
    QuoteRequest,
    QuoteIdle,
    QuoteFetching,
    Quoted,
    NoRoute,
    QuoteFailed,
    QuoteState,
)

__all__ = [
    # configuration
    "QuoteSettings",
    "get_settings",
    # calculators
    "AMMPool",
    "calculate_amm_output",
    "calculate_price_impact",
    "BookAggregate",
    "aggregate_book_offers",
    "apply_fee_and_slippage",
    "RouteChoice",
    "select_route",
    "compose_quote",
    # ledger + orchestration
    "LedgerClient",
    "make_client",
    "fetch_amm_pool",
    "fetch_amm_quote",
    "fetch_dex_quote",
    "run_quote_pipeline",
    "QuotePoller",
    # guards
    "PriceImpactLevel",
    "SubmissionCheck",
    "check_submission",
    "classify_price_impact",
    # transactions
    "BatchUnavailable",
    "build_swap_transaction",
    "build_batch_swap_transaction",
    # datatypes
    "Token",
    "Route",
    "AMMQuote",
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
