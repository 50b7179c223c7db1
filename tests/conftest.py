from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Union

import pytest

from xrpl_quote.config import QuoteSettings
from xrpl_quote.core import QuoteRequest, Token


# -----------------------------
# Tokens used across the suite
# -----------------------------

GATEHUB = "rhub8VRN55s94qWKDv6jmDy1pUykJzF3wq"
BITSTAMP = "rvYAfWj5gh67oV6fW32ZzP3Aw4Eubs59B"
ACCOUNT = "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh"

XRP = Token.xrp()
USD = Token("USD", GATEHUB)
EUR = Token("EUR", GATEHUB)


# -----------------------------
# Ledger response builders
# -----------------------------


class FakeResponse:
    """Shape of an xrpl-py Response as far as the engine looks at it."""

    def __init__(self, result: Dict[str, Any], ok: bool = True) -> None:
        self.result = result
        self._ok = ok

    def is_successful(self) -> bool:
        return self._ok


def ok(result: Dict[str, Any]) -> FakeResponse:
    return FakeResponse(result, ok=True)


def err(code: str, message: Optional[str] = None) -> FakeResponse:
    result = {"error": code, "status": "error"}
    if message:
        result["error_message"] = message
    return FakeResponse(result, ok=False)


def iou(token: Token, value: str) -> Dict[str, str]:
    return {"currency": token.currency, "issuer": token.issuer, "value": value}


def drops(xrp: str) -> str:
    return str(int(Decimal(xrp) * 1_000_000))


def amm_info_result(amount: Any, amount2: Any, trading_fee: int = 500, **extra: Any) -> Dict[str, Any]:
    amm = {"amount": amount, "amount2": amount2, "trading_fee": trading_fee, "account": "rAMMPoolAccount"}
    amm.update(extra)
    return {"amm": amm, "validated": True}


def offer_row(pays: Any, gets: Any, **extra: Any) -> Dict[str, Any]:
    row = {"TakerPays": pays, "TakerGets": gets}
    row.update(extra)
    return row


# -----------------------------
# Fake ledger client
# -----------------------------

Handler = Union[FakeResponse, BaseException, Callable[[Any], Any]]


class FakeLedgerClient:
    """Routes requests by command name to canned responses.

    A handler is a FakeResponse, an exception to raise, or a callable taking
    the request (sync or async) and returning a FakeResponse. `gates` maps a
    command to an asyncio.Event the request waits on before answering.
    """

    def __init__(self, handlers: Optional[Dict[str, Handler]] = None) -> None:
        self.handlers: Dict[str, Handler] = dict(handlers or {})
        self.gates: Dict[str, asyncio.Event] = {}
        self.calls: List[Any] = []

    def commands(self) -> List[str]:
        return [r.method.value for r in self.calls]

    async def request(self, req: Any) -> FakeResponse:
        self.calls.append(req)
        command = req.method.value
        gate = self.gates.get(command)
        if gate is not None:
            await gate.wait()
        handler = self.handlers.get(command)
        if handler is None:
            raise AssertionError(f"unexpected request {command}")
        if isinstance(handler, BaseException):
            raise handler
        if callable(handler):
            res = handler(req)
            if asyncio.iscoroutine(res):
                res = await res
            return res
        return handler


# -----------------------------
# Pytest fixtures
# -----------------------------


@pytest.fixture()
def settings() -> QuoteSettings:
    # explicit values so a developer's .env never leaks into tests
    return QuoteSettings(_env_file=None, quote_refresh_interval=0.05, request_timeout=1.0)


@pytest.fixture()
def xrp_usd_request() -> QuoteRequest:
    return QuoteRequest(from_token=XRP, to_token=USD, amount=Decimal("1000"), slippage=Decimal("0.005"))


@pytest.fixture()
def fake_client() -> FakeLedgerClient:
    return FakeLedgerClient()
