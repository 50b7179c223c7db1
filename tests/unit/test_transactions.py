import pytest
from decimal import Decimal

from xrpl.models.amounts import IssuedCurrencyAmount
from xrpl.models.transactions import OfferCreate, Payment

from xrpl_quote.core import Route, SwapFee, SwapQuote
from xrpl_quote.core.constants import (
    TF_ALL_OR_NOTHING,
    TF_IMMEDIATE_OR_CANCEL,
    TF_INNER_BATCH_TXN,
    TF_PARTIAL_PAYMENT,
)
from xrpl_quote.transactions import (
    BatchUnavailable,
    build_amm_swap_transaction,
    build_batch_swap_transaction,
    build_dex_swap_transaction,
    build_fee_payment,
    build_swap_transaction,
    wire_amount,
)

from conftest import ACCOUNT, BITSTAMP, GATEHUB, USD, XRP


def _quote(route: Route, out: str = "497.0054816", minimum: str = "494.02") -> SwapQuote:
    out_d = Decimal(out)
    return SwapQuote(
        source_amount=Decimal("1000.0000001"),
        destination_amount=out_d,
        rate=out_d / Decimal("1000.0000001"),
        price_impact=Decimal("0.006"),
        route=route,
        fee=SwapFee(out_d * Decimal("0.001"), USD),
        minimum_received=Decimal(minimum),
    )


def test_wire_amount_shapes():
    assert wire_amount(XRP, Decimal("1.5")) == "1500000"
    assert wire_amount(XRP, Decimal("0.0000015"), round_up=True) == "2"
    iou = wire_amount(USD, Decimal("2.50"))
    assert isinstance(iou, IssuedCurrencyAmount)
    assert (iou.currency, iou.issuer, iou.value) == ("USD", GATEHUB, "2.5")


def test_amm_swap_is_partial_self_payment():
    print("\n===== TX_AMM_SWAP =====")
    tx = build_amm_swap_transaction(ACCOUNT, _quote(Route.AMM), XRP, USD)
    print(f"    {tx.to_xrpl()}")
    assert isinstance(tx, Payment)
    assert tx.account == tx.destination == ACCOUNT
    assert tx.amount == IssuedCurrencyAmount(currency="USD", issuer=GATEHUB, value="497.0054816")
    assert tx.deliver_min == IssuedCurrencyAmount(currency="USD", issuer=GATEHUB, value="494.02")
    # source side is ceiled onto the drops grid
    assert tx.send_max == "1000000001"
    assert tx.flags == TF_PARTIAL_PAYMENT


def test_amm_swap_floors_xrp_output():
    usd_to_xrp = SwapQuote(
        source_amount=Decimal("10"),
        destination_amount=Decimal("19.9999999"),
        rate=Decimal("1.99999999"),
        price_impact=Decimal("0"),
        route=Route.AMM,
        fee=SwapFee(Decimal("0.0199999999"), XRP),
        minimum_received=Decimal("19.88"),
    )
    tx = build_amm_swap_transaction(ACCOUNT, usd_to_xrp, USD, XRP)
    assert tx.amount == "19999999"
    assert tx.deliver_min == "19880000"
    assert tx.send_max == IssuedCurrencyAmount(currency="USD", issuer=GATEHUB, value="10")


def test_dex_swap_offer_buys_the_output():
    tx = build_dex_swap_transaction(ACCOUNT, _quote(Route.DEX), XRP, USD)
    print(f"[tx-dex] {tx.to_xrpl()}")
    assert isinstance(tx, OfferCreate)
    # creator receives TakerPays (output, floored) and gives TakerGets (input, ceiled)
    assert tx.taker_pays == IssuedCurrencyAmount(currency="USD", issuer=GATEHUB, value="497.0054816")
    assert tx.taker_gets == "1000000001"
    assert tx.flags == TF_IMMEDIATE_OR_CANCEL


def test_dispatch_and_route_mismatch():
    assert isinstance(build_swap_transaction(ACCOUNT, _quote(Route.AMM), XRP, USD), Payment)
    assert isinstance(build_swap_transaction(ACCOUNT, _quote(Route.DEX), XRP, USD), OfferCreate)
    with pytest.raises(ValueError):
        build_amm_swap_transaction(ACCOUNT, _quote(Route.DEX), XRP, USD)


def test_fee_payment():
    tx = build_fee_payment(ACCOUNT, SwapFee(Decimal("0.497"), USD), BITSTAMP)
    assert tx.destination == BITSTAMP
    assert tx.amount == IssuedCurrencyAmount(currency="USD", issuer=GATEHUB, value="0.497")
    assert not tx.flags


def test_batch_disabled_returns_sentinel():
    swap = build_amm_swap_transaction(ACCOUNT, _quote(Route.AMM), XRP, USD)
    fee = build_fee_payment(ACCOUNT, SwapFee(Decimal("0.497"), USD), BITSTAMP)
    res = build_batch_swap_transaction(swap, fee)
    print(f"[batch-disabled] {res}")
    assert isinstance(res, BatchUnavailable)


def test_batch_enabled_marks_inner_transactions():
    print("\n===== TX_BATCH =====")
    swap = build_amm_swap_transaction(ACCOUNT, _quote(Route.AMM), XRP, USD)
    fee = build_fee_payment(ACCOUNT, SwapFee(Decimal("0.497"), USD), BITSTAMP)
    batch = build_batch_swap_transaction(swap, fee, enabled=True)
    print(f"    {batch}")
    assert batch["TransactionType"] == "Batch"
    assert batch["Flags"] == TF_ALL_OR_NOTHING
    inner_swap, inner_fee = (r["RawTransaction"] for r in batch["RawTransactions"])
    assert inner_swap["TransactionType"] == "Payment"
    assert inner_swap["Flags"] == TF_PARTIAL_PAYMENT | TF_INNER_BATCH_TXN
    assert inner_fee["Flags"] == TF_INNER_BATCH_TXN
    for inner in (inner_swap, inner_fee):
        assert inner["Fee"] == "0"
        assert inner["SigningPubKey"] == ""


def test_dex_swap_floors_xrp_output_and_ceils_iou_input():
    usd_to_xrp = SwapQuote(
        source_amount=Decimal("475"),
        destination_amount=Decimal("999.9999999"),
        rate=Decimal("999.9999999") / Decimal("475"),
        price_impact=Decimal("0.05"),
        route=Route.DEX,
        fee=SwapFee(Decimal("0.9999999999"), XRP),
        minimum_received=Decimal("994"),
    )
    tx = build_dex_swap_transaction(ACCOUNT, usd_to_xrp, USD, XRP)
    assert tx.taker_pays == "999999999"
    assert tx.taker_gets == IssuedCurrencyAmount(currency="USD", issuer=GATEHUB, value="475")
