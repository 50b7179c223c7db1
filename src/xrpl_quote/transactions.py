"""
Execution-transaction builders for a selected quote.

Payloads are xrpl-py transaction models; nothing here signs, autofills or
submits. Amounts cross to the wire through `amount_for`:

- OUT side (what the account receives: Amount, DeliverMin, TakerPays) is
  floored onto the asset grid so the ledger is never asked for more than
  the quote promised.
- IN side (what the account pays: SendMax, TakerGets) is ceiled.

Route mapping:
    AMM -> Payment to self, SendMax + DeliverMin, tfPartialPayment
    DEX -> OfferCreate, tfImmediateOrCancel

The combined swap + fee batch is gated by configuration; while disabled the
builder returns `BatchUnavailable` instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Union

from loguru import logger
from xrpl.models.amounts import IssuedCurrencyAmount
from xrpl.models.transactions import OfferCreate, Payment, Transaction

from .core import Route, SwapFee, SwapQuote, Token, amount_for
from .core.constants import (
    TF_ALL_OR_NOTHING,
    TF_IMMEDIATE_OR_CANCEL,
    TF_INNER_BATCH_TXN,
    TF_PARTIAL_PAYMENT,
)
from .core.exc import AmountDomainError

WireAmount = Union[str, IssuedCurrencyAmount]


@dataclass(frozen=True)
class BatchUnavailable:
    """Returned by the batch builder while batch submission is switched off."""
    reason: str = "batch transactions are disabled"


def wire_amount(token: Token, value: Decimal, *, round_up: bool = False) -> WireAmount:
    """xrpl-py amount for `value` of `token`: drops string or IssuedCurrencyAmount."""
    a = amount_for(token, value, round_up=round_up)
    if token.is_xrp:
        return a.to_xrpl()
    return IssuedCurrencyAmount(currency=a.currency, issuer=a.issuer, value=a.to_xrpl()["value"])


def _check_route(quote: SwapQuote, expected: Route) -> None:
    if quote.route is not expected:
        raise ValueError(f"quote routed via {quote.route.value}, expected {expected.value}")


def build_amm_swap_transaction(account: str, quote: SwapQuote, from_token: Token, to_token: Token) -> Payment:
    """Self-payment that crosses the pool: deliver up to the quote, at least the minimum."""
    _check_route(quote, Route.AMM)
    amount = wire_amount(to_token, quote.destination_amount)
    deliver_min = wire_amount(to_token, quote.minimum_received)
    if to_token.is_xrp and deliver_min == "0":
        raise AmountDomainError("minimum received rounds to zero drops")
    return Payment(
        account=account,
        destination=account,
        amount=amount,
        send_max=wire_amount(from_token, quote.source_amount, round_up=True),
        deliver_min=deliver_min,
        flags=TF_PARTIAL_PAYMENT,
    )


def build_dex_swap_transaction(account: str, quote: SwapQuote, from_token: Token, to_token: Token) -> OfferCreate:
    """Immediate-or-cancel offer buying the quoted output.

    The offer creator receives TakerPays and gives TakerGets, so TakerPays is
    the output (floored) and TakerGets the input (ceiled).
    """
    _check_route(quote, Route.DEX)
    return OfferCreate(
        account=account,
        taker_pays=wire_amount(to_token, quote.destination_amount),
        taker_gets=wire_amount(from_token, quote.source_amount, round_up=True),
        flags=TF_IMMEDIATE_OR_CANCEL,
    )


def build_swap_transaction(account: str, quote: SwapQuote, from_token: Token, to_token: Token) -> Transaction:
    if quote.route is Route.AMM:
        return build_amm_swap_transaction(account, quote, from_token, to_token)
    return build_dex_swap_transaction(account, quote, from_token, to_token)


def build_fee_payment(account: str, fee: SwapFee, recipient: str) -> Payment:
    """Plain payment of the protocol fee to `recipient`."""
    return Payment(
        account=account,
        destination=recipient,
        amount=wire_amount(fee.token, fee.amount),
    )


def _inner(tx: Transaction) -> Dict[str, Any]:
    raw = tx.to_xrpl()
    raw["Flags"] = int(raw.get("Flags", 0)) | TF_INNER_BATCH_TXN
    raw["Fee"] = "0"
    raw["SigningPubKey"] = ""
    return raw


def build_batch_swap_transaction(
    swap_tx: Transaction,
    fee_tx: Transaction,
    *,
    enabled: bool = False,
) -> Union[Dict[str, Any], BatchUnavailable]:
    """All-or-nothing batch of the swap and its fee payment (wire dict)."""
    if not enabled:
        logger.debug("batch builder called while disabled")
        return BatchUnavailable()
    return {
        "TransactionType": "Batch",
        "Account": swap_tx.account,
        "RawTransactions": [
            {"RawTransaction": _inner(swap_tx)},
            {"RawTransaction": _inner(fee_tx)},
        ],
        "Flags": TF_ALL_OR_NOTHING,
    }


__all__ = [
    "BatchUnavailable",
    "wire_amount",
    "build_amm_swap_transaction",
    "build_dex_swap_transaction",
    "build_swap_transaction",
    "build_fee_payment",
    "build_batch_swap_transaction",
]
