import pytest
from decimal import Decimal

from pydantic import ValidationError

from xrpl_quote.config import QuoteSettings


def test_defaults():
    s = QuoteSettings(_env_file=None)
    print(f"[settings] {s.model_dump()}")
    assert s.protocol_fee_rate == Decimal("0.001")
    assert s.default_slippage == Decimal("0.005")
    assert s.max_slippage == Decimal("0.5")
    assert s.slippage_options == [Decimal("0.001"), Decimal("0.005"), Decimal("0.01"), Decimal("0.03")]
    assert s.quote_refresh_interval == 15.0
    assert (s.price_impact_warning_threshold, s.price_impact_high_threshold, s.price_impact_block_threshold) == (
        Decimal("0.03"), Decimal("0.05"), Decimal("0.15"))
    assert s.dex_fill_threshold == Decimal("0.99")
    assert s.book_offers_limit == 200
    assert s.use_batch_transactions is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("XRPL_QUOTE_PROTOCOL_FEE_RATE", "0.002")
    monkeypatch.setenv("XRPL_QUOTE_NETWORK", "Testnet")
    monkeypatch.setenv("XRPL_QUOTE_QUOTE_REFRESH_INTERVAL", "5")
    s = QuoteSettings(_env_file=None)
    assert s.protocol_fee_rate == Decimal("0.002")
    assert s.network == "Testnet"
    assert s.quote_refresh_interval == 5.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"price_impact_warning_threshold": Decimal("0.1"), "price_impact_high_threshold": Decimal("0.05")},
        {"default_slippage": Decimal("0.6")},
        {"slippage_options": [Decimal("0.7")]},
        {"protocol_fee_rate": Decimal("1.5")},
        {"quote_refresh_interval": 0},
        {"network": "Localnet"},
    ],
)
def test_invalid_settings_rejected(kwargs):
    print(f"[settings-invalid] {kwargs}")
    with pytest.raises(ValidationError):
        QuoteSettings(_env_file=None, **kwargs)
