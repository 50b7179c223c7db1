"""
Token and amount primitives: Token, XRPAmount (integer drops) and IOUAmount
(issued-currency Decimal value).

- Token: currency code plus optional issuer; XRP never carries an issuer.
- XRPAmount: integers in drops at the IO boundary; Decimal XRP for maths.
- IOUAmount: Decimal value tagged with its currency/issuer.
- Non-negative domain: all amounts are >= 0; negative values are rejected at input.
- Rounding semantics: OUT rounds down, IN rounds up, on the asset's own grid.

Every calculator works on the single projection `Amount.to_decimal()`; the
branch on native vs issued shape happens only here.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_UP
from typing import Any, Optional, Union

from .constants import IOU_QUANTUM, XRP_CURRENCY, XRP_QUANTUM
from .exc import AmountDomainError

# Debug printing control
DEBUG_AMOUNTS = False

def _dbg(msg: str) -> None:
    if DEBUG_AMOUNTS:
        print(msg)


#: Issued-currency values carry at most 15 significant digits on the wire.
IOU_SIGNIFICANT_DIGITS: int = 15


def _to_decimal(x: Any, what: str) -> Decimal:
    if isinstance(x, Decimal):
        d = x
    else:
        try:
            d = Decimal(str(x))
        except InvalidOperation:
            raise AmountDomainError(f"{what}: not a number: {x!r}") from None
    if d.is_nan() or d.is_infinite():
        raise AmountDomainError(f"{what}: invalid Decimal {x!r}")
    return d


def plain_decimal(x: Decimal) -> str:
    """Render a Decimal without exponent notation and without trailing zeros."""
    if x == 0:
        return "0"
    return format(x.normalize(), "f")


# ----------------------------
# Token
# ----------------------------

@dataclass(frozen=True)
class Token:
    """Fungible asset identity: (currency, issuer). Equal iff both match."""
    currency: str
    issuer: Optional[str] = None

    def __post_init__(self):
        if not self.currency:
            raise AmountDomainError("Token currency must be non-empty")
        if self.currency == XRP_CURRENCY:
            if self.issuer:
                raise AmountDomainError("XRP token cannot carry an issuer")
        elif not self.issuer:
            raise AmountDomainError(f"issued currency {self.currency} requires an issuer")

    @staticmethod
    def xrp() -> "Token":
        return Token(XRP_CURRENCY)

    @property
    def is_xrp(self) -> bool:
        return self.currency == XRP_CURRENCY

    def key(self) -> str:
        return self.currency if self.is_xrp else f"{self.currency}.{self.issuer}"

    def to_xrpl(self) -> dict:
        """Wire currency object as used by amm_info / book_offers."""
        if self.is_xrp:
            return {"currency": XRP_CURRENCY}
        return {"currency": self.currency, "issuer": self.issuer}

    def __str__(self) -> str:
        return self.key()


# ----------------------------
# XRP primitive (integer drops)
# ----------------------------

@dataclass(frozen=True)
class XRPAmount:
    """Native XRP amount in integer drops (non-negative domain)."""
    drops: int

    def __post_init__(self):
        if not isinstance(self.drops, int) or isinstance(self.drops, bool):
            raise AmountDomainError("XRPAmount drops must be int")
        if self.drops < 0:
            raise AmountDomainError("XRPAmount must be >= 0 drops")

    @property
    def token(self) -> Token:
        return Token.xrp()

    def is_zero(self) -> bool:
        return self.drops == 0

    def to_decimal(self) -> Decimal:
        return xrp_from_drops(self.drops)

    def to_xrpl(self) -> str:
        return str(self.drops)


# ----------------------------
# Issued currency (Decimal value)
# ----------------------------

@dataclass(frozen=True)
class IOUAmount:
    """Issued-currency amount: Decimal value of (currency, issuer)."""
    currency: str
    issuer: str
    value: Decimal

    def __post_init__(self):
        v = _to_decimal(self.value, "IOUAmount")
        if v < 0:
            raise AmountDomainError("IOUAmount must be >= 0")
        object.__setattr__(self, "value", v)

    @property
    def token(self) -> Token:
        return Token(self.currency, self.issuer)

    def is_zero(self) -> bool:
        return self.value == 0

    def to_decimal(self) -> Decimal:
        return self.value

    def to_xrpl(self) -> dict:
        return {"currency": self.currency, "issuer": self.issuer, "value": plain_decimal(self.value)}


# Unified amount type alias for signatures
Amount = Union[XRPAmount, IOUAmount]


# ----------------------------
# Payload bridges
# ----------------------------

def parse_amount(payload: Any) -> Amount:
    """Parse a ledger amount payload: bare drops string or {currency, issuer, value}."""
    if isinstance(payload, (XRPAmount, IOUAmount)):
        return payload
    if isinstance(payload, str):
        if not payload.isdigit():
            raise AmountDomainError(f"XRP amount must be a non-negative integer drops string: {payload!r}")
        return XRPAmount(int(payload))
    if isinstance(payload, dict):
        currency = payload.get("currency")
        issuer = payload.get("issuer")
        if not currency or not issuer or "value" not in payload:
            raise AmountDomainError(f"issued amount missing currency/issuer/value: {payload!r}")
        _dbg(f"parse_amount: {currency}.{issuer}={payload['value']}")
        return IOUAmount(str(currency), str(issuer), _to_decimal(payload["value"], "IOUAmount"))
    raise AmountDomainError(f"Unsupported amount payload: {payload!r}")


def amount_to_decimal(payload: Any) -> Decimal:
    """Decimal projection of a payload or Amount (XRP in whole XRP, not drops)."""
    return parse_amount(payload).to_decimal()


def quantize_significant(x: Decimal, digits: int, *, round_up: bool) -> Decimal:
    """Cut `x` to `digits` significant digits, rounding away from or toward zero."""
    if x < 0:
        raise AmountDomainError("negative input not allowed for quantize_significant")
    if x == 0:
        return Decimal("0")
    quantum = Decimal(1).scaleb(x.adjusted() - digits + 1)
    return x.quantize(quantum, rounding=ROUND_UP if round_up else ROUND_DOWN)


def amount_for(token: Token, value: Decimal, *, round_up: bool = False) -> Amount:
    """Build a wire-ready Amount for `token` from a Decimal.

    OUT-side amounts (what we receive, floors) round down; IN-side amounts
    (what we pay, ceilings) pass round_up=True.
    """
    v = _to_decimal(value, "amount_for")
    if v < 0:
        raise AmountDomainError("amount_for: negative not allowed")
    if token.is_xrp:
        drops = drops_from_xrp_in(v) if round_up else drops_from_xrp_out(v)
        return XRPAmount(drops)
    v = quantize_significant(v, IOU_SIGNIFICANT_DIGITS, round_up=round_up)
    if v != 0 and v < IOU_QUANTUM:
        v = IOU_QUANTUM if round_up else Decimal("0")
    return IOUAmount(token.currency, token.issuer, v)


# ----------------------------
# XRP Decimal bridges
# ----------------------------

def xrp_from_drops(d: int) -> Decimal:
    """Return Decimal XRP from integer drops."""
    if not isinstance(d, int):
        raise AmountDomainError("xrp_from_drops: drops must be int")
    if d < 0:
        raise AmountDomainError("xrp_from_drops: drops must be >= 0")
    return Decimal(d) * XRP_QUANTUM


def drops_from_xrp_out(x: Decimal) -> int:
    """OUT-path: floor XRP Decimal to whole drops (won't promise more OUT)."""
    if x.is_nan() or x.is_infinite():
        raise AmountDomainError("drops_from_xrp_out: invalid Decimal")
    if x < 0:
        raise AmountDomainError("drops_from_xrp_out: negative not allowed")
    q = (x / XRP_QUANTUM).to_integral_value(rounding=ROUND_DOWN)
    return int(q)


def drops_from_xrp_in(x: Decimal) -> int:
    """IN-path: ceil XRP Decimal to whole drops (won't pay less IN)."""
    if x.is_nan() or x.is_infinite():
        raise AmountDomainError("drops_from_xrp_in: invalid Decimal")
    if x < 0:
        raise AmountDomainError("drops_from_xrp_in: negative not allowed")
    q = (x / XRP_QUANTUM).to_integral_value(rounding=ROUND_UP)
    return int(q)


__all__ = [
    "IOU_SIGNIFICANT_DIGITS",
    "Token",
    "XRPAmount",
    "IOUAmount",
    "Amount",
    "parse_amount",
    "amount_to_decimal",
    "amount_for",
    "plain_decimal",
    "quantize_significant",
    "xrp_from_drops",
    "drops_from_xrp_out",
    "drops_from_xrp_in",
]
