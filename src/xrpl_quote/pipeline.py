"""
One quote cycle: fetch both sources concurrently, select, compose.

    request -> (fetch_amm_quote || fetch_dex_quote) -> compose_quote -> QuoteState

The two fetchers share no state and neither waits on the other; their
results meet only in route selection. A failed source contributes None and
the cycle degrades to the other source; only when both fail is the outcome
`QuoteFailed`. A request that is not quotable short-circuits to `QuoteIdle`
without issuing any query.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from loguru import logger

from .config import QuoteSettings
from .core import (
    AMMQuote,
    DEXQuote,
    NoRoute,
    QuoteFailed,
    QuoteIdle,
    QuoteRequest,
    QuoteState,
    Quoted,
)
from .core.exc import QuoteFetchError
from .ledger import LedgerClient, fetch_amm_quote, fetch_dex_quote
from .router import compose_quote


async def run_quote_pipeline(
    client: LedgerClient,
    request: QuoteRequest,
    settings: QuoteSettings,
) -> QuoteState:
    """Run the full AMM/DEX quote pipeline for `request`."""
    if not request.is_quotable():
        return QuoteIdle(request)

    amount = request.amount
    results = await asyncio.gather(
        fetch_amm_quote(client, request.from_token, request.to_token, amount,
                        timeout=settings.request_timeout),
        fetch_dex_quote(client, request.from_token, request.to_token, amount,
                        limit=settings.book_offers_limit, timeout=settings.request_timeout),
        return_exceptions=True,
    )

    errors: List[BaseException] = []
    amm_quote: Optional[AMMQuote] = None
    dex_quote: Optional[DEXQuote] = None
    amm_res, dex_res = results
    if isinstance(amm_res, QuoteFetchError):
        errors.append(amm_res)
    elif isinstance(amm_res, BaseException):
        raise amm_res
    else:
        amm_quote = amm_res
    if isinstance(dex_res, QuoteFetchError):
        errors.append(dex_res)
    elif isinstance(dex_res, BaseException):
        raise dex_res
    else:
        dex_quote = dex_res

    if amm_quote is None and dex_quote is None:
        logger.warning("both quote sources failed for {}->{}", request.from_token, request.to_token)
        return QuoteFailed(request, tuple(errors))

    quote = compose_quote(
        request, amm_quote, dex_quote,
        fee_rate=settings.protocol_fee_rate,
        fill_threshold=settings.dex_fill_threshold,
    )
    if quote is None:
        logger.info("no viable route for {}->{} amount={}", request.from_token, request.to_token, amount)
        return NoRoute(request, amm_quote, dex_quote, tuple(errors))
    logger.info("quoted {} {}->{} via {}: out={} min={} impact={}",
                amount, request.from_token, request.to_token, quote.route.value,
                quote.destination_amount, quote.minimum_received, quote.price_impact)
    return Quoted(request, quote)


__all__ = [
    "run_quote_pipeline",
]
