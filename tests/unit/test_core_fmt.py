from decimal import Decimal, getcontext

from xrpl_quote.core.fmt import DEFAULT_DECIMAL_PRECISION, fmt_dec, format_percent, format_swap_amount


def test_global_precision_set_on_import():
    assert getcontext().prec == DEFAULT_DECIMAL_PRECISION == 28


def test_fmt_dec_scientific():
    assert fmt_dec(Decimal("1"), places=3) == "1.000E+0"
    assert fmt_dec(Decimal("123456"), places=2) == "1.23E+5"


def test_format_swap_amount_adaptive_precision():
    cases = [
        (Decimal("12345.6789"), "12345.68"),
        (Decimal("1000"), "1000.00"),
        (Decimal("496.27123"), "496.2712"),
        (Decimal("1"), "1.0000"),
        (Decimal("0.123456789"), "0.123457"),
        ("0.5", "0.500000"),
        (7, "7.0000"),
    ]
    for value, expected in cases:
        got = format_swap_amount(value)
        print(f"[format_swap_amount] {value!r} -> {got}")
        assert got == expected
    assert format_swap_amount(Decimal("0.123456789"), decimals=3) == "0.123"


def test_format_swap_amount_invalid_is_zero():
    assert format_swap_amount("abc") == "0"
    assert format_swap_amount(Decimal("NaN")) == "0"
    assert format_swap_amount(Decimal("Infinity")) == "0"


def test_format_percent():
    assert format_percent(Decimal("0.0075")) == "0.75%"
    assert format_percent(Decimal("0.15"), places=0) == "15%"
