"""
AMM quotes (constant product, fee on input): **pool math only**.

This module turns an `amm_info` result into an oriented pool and prices a
swap against it. Network access lives in `xrpl_quote.ledger`.

Pool fee is expressed in 1/100,000 units and deducted on the *input* side:

    fee_fraction    = trading_fee / 100000
    input_after_fee = amount_in * (1 - fee_fraction)
    amount_out      = reserve_out * input_after_fee / (reserve_in + input_after_fee)

Price impact is measured against the pre-trade marginal rate
reserve_out / reserve_in and floored at zero.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Tuple

from .core import AMMQuote, AuctionSlot, Token, VoteSlot, parse_amount, plain_decimal
from .core.constants import AMM_FEE_DENOMINATOR, AMM_MAX_TRADING_FEE
from .core.exc import AmountDomainError

# --- Debug utilities (toggleable) ---
DEBUG_AMM = False

def _dbg(msg: str) -> None:
    if DEBUG_AMM:
        print(f"[AMM] {msg}")

# Local helpers for Decimal use
DecimalLike = Decimal | int | str

def to_decimal(x: DecimalLike) -> Decimal:
    """Local bridge: normalise numeric-like to Decimal (I/O boundary only)."""
    return x if isinstance(x, Decimal) else Decimal(str(x))


# ---------------------------------------------------------------------------
# Pool maths
# ---------------------------------------------------------------------------

def calculate_amm_output(amount_in: DecimalLike,
                         reserve_in: DecimalLike,
                         reserve_out: DecimalLike,
                         trading_fee_bps: int) -> Decimal:
    """Constant-product output for `amount_in`, fee taken on the input leg.

    Always strictly below `reserve_out` for a finite input: the formula cannot
    drain the pool.
    """
    dx = to_decimal(amount_in)
    x = to_decimal(reserve_in)
    y = to_decimal(reserve_out)
    if dx < 0:
        raise AmountDomainError("amount_in must be >= 0")
    if x <= 0 or y <= 0:
        raise AmountDomainError("pool reserves must be > 0")
    if trading_fee_bps < 0 or trading_fee_bps >= AMM_FEE_DENOMINATOR:
        raise AmountDomainError(f"trading fee out of range: {trading_fee_bps}")
    if dx == 0:
        return Decimal(0)
    fee_fraction = Decimal(trading_fee_bps) / Decimal(AMM_FEE_DENOMINATOR)
    dx_eff = dx * (Decimal(1) - fee_fraction)
    dy = (y * dx_eff) / (x + dx_eff)
    _dbg(f"output: dx={dx} dx_eff={dx_eff} x={x} y={y} -> dy={dy}")
    return dy


def calculate_price_impact(amount_in: DecimalLike,
                           amount_out: DecimalLike,
                           reserve_in: DecimalLike,
                           reserve_out: DecimalLike) -> Decimal:
    """1 - (amount_out/amount_in) / (reserve_out/reserve_in), floored at 0."""
    dx = to_decimal(amount_in)
    dy = to_decimal(amount_out)
    x = to_decimal(reserve_in)
    y = to_decimal(reserve_out)
    if dx <= 0 or x <= 0 or y <= 0:
        return Decimal(0)
    market_rate = y / x
    actual_rate = dy / dx
    impact = Decimal(1) - actual_rate / market_rate
    return max(Decimal(0), impact)


# ---------------------------------------------------------------------------
# Oriented pool
# ---------------------------------------------------------------------------

def _parse_auction_slot(raw: Any) -> Optional[AuctionSlot]:
    if not raw:
        return None
    price = raw.get("price")
    return AuctionSlot(
        account=str(raw.get("account", "")),
        discounted_fee=int(raw.get("discounted_fee", 0)),
        expiration=raw.get("expiration"),
        price=parse_amount(price) if price is not None else None,
    )


def _parse_vote_slots(raw: Any) -> Tuple[VoteSlot, ...]:
    slots = []
    for entry in raw or ():
        # rippled nests each slot under "vote_entry"
        v = entry.get("vote_entry", entry)
        slots.append(VoteSlot(
            account=str(v.get("account", "")),
            trading_fee=int(v.get("trading_fee", 0)),
            vote_weight=int(v.get("vote_weight", 0)),
        ))
    return tuple(slots)


@dataclass(frozen=True)
class AMMPool:
    """AMM(IN, OUT) oriented to the trade direction.

    Orientation: `reserve_in` holds `token_in`, `reserve_out` holds `token_out`,
    regardless of the order the ledger stored the two assets in.
    """

    token_in: Token
    token_out: Token
    reserve_in: Decimal
    reserve_out: Decimal
    trading_fee_bps: int
    auction_slot: Optional[AuctionSlot] = None
    vote_slots: Tuple[VoteSlot, ...] = ()

    @classmethod
    def from_amm_info(cls, result: dict, token_in: Token, token_out: Token) -> "AMMPool":
        """Build an oriented pool from an `amm_info` result.

        Reserves are matched to tokens by asset identity: `amm.amount` is not
        assumed to be the requested `asset`.
        """
        amm = result.get("amm") if isinstance(result, dict) else None
        if not amm:
            raise AmountDomainError("amm_info result has no 'amm' object")
        a1 = parse_amount(amm.get("amount"))
        a2 = parse_amount(amm.get("amount2"))
        if a1.token == token_in and a2.token == token_out:
            r_in, r_out = a1.to_decimal(), a2.to_decimal()
        elif a2.token == token_in and a1.token == token_out:
            r_in, r_out = a2.to_decimal(), a1.to_decimal()
        else:
            raise AmountDomainError(
                f"amm_info pool {a1.token}/{a2.token} does not match pair {token_in}/{token_out}")
        fee = int(amm.get("trading_fee", 0))
        if not 0 <= fee <= AMM_MAX_TRADING_FEE:
            raise AmountDomainError(f"amm_info trading_fee out of range: {fee}")
        _dbg(f"pool {token_in}->{token_out}: r_in={r_in} r_out={r_out} fee={amm.get('trading_fee')}")
        return cls(
            token_in=token_in,
            token_out=token_out,
            reserve_in=r_in,
            reserve_out=r_out,
            trading_fee_bps=fee,
            auction_slot=_parse_auction_slot(amm.get("auction_slot")),
            vote_slots=_parse_vote_slots(amm.get("vote_slots")),
        )

    def spot_rate(self) -> Decimal:
        """Pre-trade marginal rate (OUT per IN), fee excluded."""
        return self.reserve_out / self.reserve_in

    def swap_out_given_in(self, amount_in: DecimalLike) -> Decimal:
        return calculate_amm_output(amount_in, self.reserve_in, self.reserve_out, self.trading_fee_bps)

    def quote(self, amount_in: DecimalLike) -> AMMQuote:
        """Price `amount_in` against this pool."""
        dx = to_decimal(amount_in)
        dy = self.swap_out_given_in(dx)
        impact = calculate_price_impact(dx, dy, self.reserve_in, self.reserve_out)
        return AMMQuote(
            pool_exists=True,
            pool_reserve_in=self.reserve_in,
            pool_reserve_out=self.reserve_out,
            trading_fee_bps=self.trading_fee_bps,
            expected_output=dy,
            price_impact=impact,
            auction_slot=self.auction_slot,
            vote_slots=self.vote_slots,
        )

    def describe(self) -> dict:
        """Display view: reserves as '<value> <currency>' and fee as a percentage."""
        fee_pct = Decimal(self.trading_fee_bps) * 100 / Decimal(AMM_FEE_DENOMINATOR)
        return {
            "reserve_in": f"{plain_decimal(self.reserve_in)} {self.token_in.currency}",
            "reserve_out": f"{plain_decimal(self.reserve_out)} {self.token_out.currency}",
            "trading_fee": f"{plain_decimal(fee_pct)}%",
            "auction_slot": self.auction_slot.account if self.auction_slot else None,
            "vote_slots": len(self.vote_slots),
        }


__all__ = [
    "calculate_amm_output",
    "calculate_price_impact",
    "AMMPool",
]
