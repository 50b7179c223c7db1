"""
Protocol fee and slippage maths.

    fee              = expected_output * fee_rate       (destination token)
    output_after_fee = expected_output - fee
    minimum_received = output_after_fee * (1 - slippage)

Guarantee: 0 <= minimum_received <= output_after_fee <= expected_output for
every fee rate and slippage in [0, 1].
"""

from __future__ import annotations

from decimal import Decimal
from typing import Tuple

from .core import SwapFee, Token
from .core.exc import AmountDomainError, InvariantViolation

# Debug printing control
DEBUG_FEES = False

def _dbg(msg: str) -> None:
    if DEBUG_FEES:
        print(f"[FEES] {msg}")


def _check_fraction(x: Decimal, what: str) -> None:
    if x.is_nan() or x < 0 or x > 1:
        raise AmountDomainError(f"{what} must be in [0, 1]: {x}")


def calculate_swap_fee(expected_output: Decimal, token: Token, fee_rate: Decimal) -> SwapFee:
    """Protocol fee on the output leg, denominated in the destination token."""
    if expected_output < 0:
        raise AmountDomainError("expected_output must be >= 0")
    _check_fraction(fee_rate, "fee_rate")
    return SwapFee(amount=expected_output * fee_rate, token=token)


def calculate_output_after_fee(expected_output: Decimal, fee_rate: Decimal) -> Decimal:
    _check_fraction(fee_rate, "fee_rate")
    return expected_output - expected_output * fee_rate


def calculate_minimum_received(output_after_fee: Decimal, slippage: Decimal) -> Decimal:
    """Slippage-protected floor on what the user receives."""
    if output_after_fee < 0:
        raise AmountDomainError("output_after_fee must be >= 0")
    _check_fraction(slippage, "slippage")
    return output_after_fee * (Decimal(1) - slippage)


def apply_fee_and_slippage(
    expected_output: Decimal,
    token: Token,
    fee_rate: Decimal,
    slippage: Decimal,
) -> Tuple[SwapFee, Decimal, Decimal]:
    """Return (fee, output_after_fee, minimum_received) for a winning route."""
    fee = calculate_swap_fee(expected_output, token, fee_rate)
    after_fee = calculate_output_after_fee(expected_output, fee_rate)
    minimum = calculate_minimum_received(after_fee, slippage)
    _dbg(f"expected={expected_output} fee={fee.amount} after_fee={after_fee} min={minimum}")
    if not (Decimal(0) <= minimum <= after_fee <= expected_output):
        raise InvariantViolation(
            f"fee/slippage ordering broken: min={minimum}, after_fee={after_fee}, expected={expected_output}")
    return fee, after_fee, minimum


__all__ = [
    "calculate_swap_fee",
    "calculate_output_after_fee",
    "calculate_minimum_received",
    "apply_fee_and_slippage",
]
