import pytest
from decimal import Decimal

from xrpl_quote.core import AMMQuote, DEXQuote, QuoteRequest, Route
from xrpl_quote.router import compose_quote, select_route

from conftest import USD, XRP


def _amm(out: str, impact: str = "0.01") -> AMMQuote:
    return AMMQuote(pool_exists=True, pool_reserve_in=Decimal("1000000"), pool_reserve_out=Decimal("500000"),
                    trading_fee_bps=500, expected_output=Decimal(out), price_impact=Decimal(impact))


def _dex(out: str, fill: str = "1", impact: str = "0.02") -> DEXQuote:
    return DEXQuote(offers_available=True, expected_output=Decimal(out), fill_percentage=Decimal(fill),
                    price_impact=Decimal(impact), total_input_used=Decimal("1000"), offers_consumed=3)


def _request(amount: str = "1000") -> QuoteRequest:
    return QuoteRequest(XRP, USD, Decimal(amount), Decimal("0.005"))


@pytest.mark.parametrize(
    "amm,dex,route,out",
    [
        (_amm("497"), _dex("495"), Route.AMM, "497"),
        (_amm("497"), _dex("498"), Route.DEX, "498"),
        (_amm("497"), _dex("497"), Route.AMM, "497"),                 # tie goes to AMM
        (_amm("497"), _dex("900", fill="0.98"), Route.AMM, "497"),    # DEX below fill threshold
        (AMMQuote.absent(), _dex("495"), Route.DEX, "495"),
        (_amm("497"), DEXQuote.absent(), Route.AMM, "497"),
        (None, _dex("495"), Route.DEX, "495"),                        # AMM fetch failed
        (_amm("497"), None, Route.AMM, "497"),                        # DEX fetch failed
    ],
)
def test_select_route(amm, dex, route, out):
    choice = select_route(amm, dex)
    print(f"[route] amm={amm and amm.expected_output} dex={dex and dex.expected_output} -> {choice}")
    assert choice.route is route
    assert choice.expected_output == Decimal(out)
    assert not choice.partial


def test_exact_threshold_counts_as_full():
    choice = select_route(AMMQuote.absent(), _dex("495", fill="0.99"))
    assert choice.route is Route.DEX and not choice.partial


def test_partial_dex_fallback_when_nothing_else():
    print("\n===== ROUTE_PARTIAL_FALLBACK =====")
    choice = select_route(AMMQuote.absent(), _dex("120", fill="0.25", impact="0.04"))
    print(f"    {choice}")
    assert choice.route is Route.DEX
    assert choice.partial
    assert choice.expected_output == Decimal("120")
    assert choice.price_impact == Decimal("0.04")


@pytest.mark.parametrize(
    "amm,dex",
    [
        (AMMQuote.absent(), DEXQuote.absent()),
        (AMMQuote.absent(), _dex("0", fill="0")),
        (None, DEXQuote.absent()),
        (AMMQuote.absent(), None),
    ],
)
def test_no_viable_route(amm, dex):
    assert select_route(amm, dex) is None


def test_custom_fill_threshold():
    assert select_route(AMMQuote.absent(), _dex("495", fill="0.9"), fill_threshold=Decimal("0.8")).partial is False


def test_compose_quote_applies_fee_and_slippage():
    print("\n===== COMPOSE_QUOTE =====")
    q = compose_quote(_request(), _amm("500"), _dex("400"), fee_rate=Decimal("0.001"))
    print(f"    route={q.route} out={q.destination_amount} fee={q.fee.amount} min={q.minimum_received}")
    assert q.route is Route.AMM
    assert q.destination_amount == Decimal("500")
    assert q.rate == Decimal("0.5")
    assert q.fee.amount == Decimal("0.5")
    assert q.fee.token == USD
    assert q.output_after_fee == Decimal("499.5")
    assert q.minimum_received == Decimal("499.5") * Decimal("0.995")
    assert q.price_impact == Decimal("0.01")
    # both partial quotes are carried for display
    assert q.amm_quote.expected_output == Decimal("500")
    assert q.dex_quote.expected_output == Decimal("400")


def test_compose_quote_none_without_route():
    assert compose_quote(_request(), AMMQuote.absent(), DEXQuote.absent(), fee_rate=Decimal("0.001")) is None


def test_compose_quote_marks_partial():
    q = compose_quote(_request(), AMMQuote.absent(), _dex("100", fill="0.5"), fee_rate=Decimal("0.001"))
    assert q.partial
    assert q.route is Route.DEX
