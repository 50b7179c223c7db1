"""
Ledger query adapters: `amm_info` and `book_offers` over xrpl-py.

The engine only needs an object with an async `request(req)` returning a
response exposing `.result` and `.is_successful()`; `AsyncJsonRpcClient`
satisfies it, and tests pass fakes.

Error folding:
- `amm_info` not-found codes -> AMMQuote.absent() (no pool is not an error).
- `book_offers` empty list or `badMarket` -> DEXQuote.absent().
- anything else (error status, transport failure, timeout, malformed
  payload) -> QuoteFetchError for that source only.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Any, List, Optional, Protocol

from loguru import logger
from xrpl.asyncio.clients import AsyncJsonRpcClient
from xrpl.models.currencies import XRP, Currency, IssuedCurrency
from xrpl.models.requests import AMMInfo, BookOffers, Request

from .amm import AMMPool
from .book_offers import dex_quote_from_offers, parse_book_offers
from .config import QuoteSettings
from .core import AMMQuote, BookOffer, DEXQuote, Route, Token
from .core.constants import BAD_MARKET_ERROR_CODE
from .core.exc import LedgerQueryError, QuoteFetchError


class LedgerClient(Protocol):
    async def request(self, request: Request) -> Any: ...


def make_client(settings: QuoteSettings) -> AsyncJsonRpcClient:
    """JSON-RPC client for `settings.rpc_url`."""
    return AsyncJsonRpcClient(settings.rpc_url)


def currency_model(token: Token) -> Currency:
    """xrpl-py currency model for a token."""
    if token.is_xrp:
        return XRP()
    return IssuedCurrency(currency=token.currency, issuer=token.issuer)


async def request_result(client: LedgerClient, req: Request, *, timeout: Optional[float] = None) -> dict:
    """Send `req` and return its result, raising LedgerQueryError on an error status."""
    command = getattr(req, "method", None)
    command = getattr(command, "value", command) or type(req).__name__
    if timeout is not None:
        response = await asyncio.wait_for(client.request(req), timeout=timeout)
    else:
        response = await client.request(req)
    result = response.result or {}
    if not response.is_successful():
        raise LedgerQueryError(command, result.get("error"), result.get("error_message"))
    return result


# ---------------------------------------------------------------------------
# AMM
# ---------------------------------------------------------------------------

async def fetch_amm_pool(
    client: LedgerClient,
    token_in: Token,
    token_out: Token,
    *,
    timeout: Optional[float] = None,
) -> Optional[AMMPool]:
    """Look up the pool for the unordered pair; None when no pool exists."""
    req = AMMInfo(asset=currency_model(token_in), asset2=currency_model(token_out))
    logger.debug("amm_info {}/{}", token_in, token_out)
    try:
        result = await request_result(client, req, timeout=timeout)
    except LedgerQueryError as e:
        if e.is_not_found:
            logger.debug("no AMM pool for {}/{} ({})", token_in, token_out, e.error_code)
            return None
        raise
    return AMMPool.from_amm_info(result, token_in, token_out)


async def fetch_amm_quote(
    client: LedgerClient,
    from_token: Token,
    to_token: Token,
    amount: Decimal,
    *,
    timeout: Optional[float] = None,
) -> AMMQuote:
    """AMM side of a quote cycle. Raises QuoteFetchError on any non-not-found failure."""
    try:
        pool = await fetch_amm_pool(client, from_token, to_token, timeout=timeout)
        if pool is None:
            return AMMQuote.absent()
        quote = pool.quote(amount)
    except Exception as e:
        logger.warning("AMM quote fetch failed for {}->{}: {}", from_token, to_token, e)
        raise QuoteFetchError(Route.AMM.value, e) from e
    logger.debug("AMM quote {}->{}: out={} impact={}", from_token, to_token,
                 quote.expected_output, quote.price_impact)
    return quote


# ---------------------------------------------------------------------------
# Order book
# ---------------------------------------------------------------------------

async def fetch_book_offers(
    client: LedgerClient,
    pays: Token,
    gets: Token,
    *,
    limit: int = 200,
    timeout: Optional[float] = None,
) -> List[BookOffer]:
    """Resting offers where makers sell `gets` for `pays` (taker view)."""
    req = BookOffers(taker_pays=currency_model(pays), taker_gets=currency_model(gets), limit=limit)
    logger.debug("book_offers pays={} gets={} limit={}", pays, gets, limit)
    try:
        result = await request_result(client, req, timeout=timeout)
    except LedgerQueryError as e:
        if e.error_code == BAD_MARKET_ERROR_CODE:
            logger.debug("no market for {}/{}", pays, gets)
            return []
        raise
    return parse_book_offers(result.get("offers") or [])


async def fetch_dex_quote(
    client: LedgerClient,
    from_token: Token,
    to_token: Token,
    amount: Decimal,
    *,
    limit: int = 200,
    timeout: Optional[float] = None,
) -> DEXQuote:
    """Order-book side of a quote cycle. Raises QuoteFetchError on failure."""
    try:
        offers = await fetch_book_offers(client, from_token, to_token, limit=limit, timeout=timeout)
        quote = dex_quote_from_offers(offers, amount)
    except Exception as e:
        logger.warning("DEX quote fetch failed for {}->{}: {}", from_token, to_token, e)
        raise QuoteFetchError(Route.DEX.value, e) from e
    logger.debug("DEX quote {}->{}: out={} fill={} impact={}", from_token, to_token,
                 quote.expected_output, quote.fill_percentage, quote.price_impact)
    return quote


__all__ = [
    "LedgerClient",
    "make_client",
    "currency_model",
    "request_result",
    "fetch_amm_pool",
    "fetch_amm_quote",
    "fetch_book_offers",
    "fetch_dex_quote",
]
