import pytest
from decimal import Decimal

from xrpl_quote.core import (
    AMMQuote,
    DEXQuote,
    NoRoute,
    QuoteFailed,
    QuoteFetching,
    QuoteIdle,
    QuoteRequest,
    Quoted,
    Route,
    SwapFee,
    SwapQuote,
)
from xrpl_quote.core.exc import ConfigurationError, QuoteFetchError
from xrpl_quote.policy import (
    PriceImpactLevel,
    check_submission,
    classify_price_impact,
    is_high_slippage,
    max_spendable,
    validate_slippage,
)

from conftest import USD, XRP

REQ = QuoteRequest(XRP, USD, Decimal("100"), Decimal("0.005"))


def _quoted(impact: str) -> Quoted:
    quote = SwapQuote(
        source_amount=Decimal("100"),
        destination_amount=Decimal("50"),
        rate=Decimal("0.5"),
        price_impact=Decimal(impact),
        route=Route.AMM,
        fee=SwapFee(Decimal("0.05"), USD),
        minimum_received=Decimal("49.7"),
    )
    return Quoted(REQ, quote)


@pytest.mark.parametrize(
    "impact,level",
    [
        ("0", PriceImpactLevel.OK),
        ("0.0299", PriceImpactLevel.OK),
        ("0.03", PriceImpactLevel.WARNING),
        ("0.049", PriceImpactLevel.WARNING),
        ("0.05", PriceImpactLevel.HIGH),
        ("0.1499", PriceImpactLevel.HIGH),
        ("0.15", PriceImpactLevel.BLOCKED),
        ("0.9", PriceImpactLevel.BLOCKED),
    ],
)
def test_classify_price_impact(settings, impact, level):
    assert classify_price_impact(Decimal(impact), settings) is level


def test_slippage_bounds(settings):
    assert validate_slippage("0.01", settings) == Decimal("0.01")
    assert validate_slippage(Decimal("0.5"), settings) == Decimal("0.5")
    with pytest.raises(ConfigurationError):
        validate_slippage("0.51", settings)
    with pytest.raises(ConfigurationError):
        validate_slippage("-0.001", settings)
    assert is_high_slippage("0.031", settings)
    assert not is_high_slippage("0.03", settings)


def test_submission_allowed_for_normal_quote(settings):
    check = check_submission(_quoted("0.01"), settings, balance=Decimal("1000"))
    print(f"[submit] {check}")
    assert check.allowed and check.reason is None


def test_submission_reasons_are_distinct(settings):
    fetch_err = QuoteFetchError("AMM", RuntimeError("timeout"))
    cases = [
        (QuoteIdle(), "no quote"),
        (QuoteFetching(REQ), "no quote"),
        (NoRoute(REQ, AMMQuote.absent(), DEXQuote.absent()), "no market available"),
        (NoRoute(REQ, None, DEXQuote.absent(), (fetch_err,)), "temporarily unable to fetch"),
        (QuoteFailed(REQ, (fetch_err, fetch_err)), "temporarily unable to fetch"),
        (_quoted("0.2"), "price impact too high"),
    ]
    for state, reason in cases:
        check = check_submission(state, settings)
        print(f"[submit] {type(state).__name__} -> {check.reason}")
        assert not check.allowed
        assert check.reason == reason


def test_submission_checks_balance(settings):
    check = check_submission(_quoted("0.01"), settings, balance="99.99")
    assert not check.allowed
    assert check.reason == "insufficient balance"


def test_max_spendable_keeps_xrp_back():
    assert max_spendable(XRP, Decimal("25")) == Decimal("24")
    assert max_spendable(XRP, Decimal("0.5")) == 0
    assert max_spendable(USD, Decimal("25")) == Decimal("25")
