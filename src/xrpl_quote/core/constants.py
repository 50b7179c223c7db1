"""
XRPL Quote Core Constants
=========================

Ledger-aligned constants used by the quote engine: the XRP drops bridge,
Decimal quanta for wire quantisation, the AMM trading-fee denominator, and
the transaction flag values the builders set.
"""

# NOTE: Flag values mirror rippled's TxFlags.h; they are plain ints so the
# builders can OR them without importing xrpl-py enums into core.

from decimal import Decimal

# ---------------------------------------------------------------------------
# Native asset
# ---------------------------------------------------------------------------

#: Currency code of the native asset (never carries an issuer).
XRP_CURRENCY: str = "XRP"

#: Integer bridge: number of drops per 1 XRP.
DROPS_PER_XRP: int = 1_000_000


# ---------------------------------------------------------------------------
# Decimal quanta for wire quantisation
# ---------------------------------------------------------------------------

# Minimum quantisation step for XRP values (1 drop = 1e-6 XRP).
XRP_QUANTUM: Decimal = Decimal("1e-6")

# Minimum quantisation step for issued-currency values.
IOU_QUANTUM: Decimal = Decimal("1e-15")


# ---------------------------------------------------------------------------
# AMM
# ---------------------------------------------------------------------------

#: amm_info reports trading_fee in units of 1/100,000 (500 = 0.5%).
AMM_FEE_DENOMINATOR: int = 100_000

#: Maximum trading fee accepted by the ledger (1%).
AMM_MAX_TRADING_FEE: int = 1_000

#: Error codes that mean "no such pool" rather than a fetch failure.
NOT_FOUND_ERROR_CODES: frozenset = frozenset(
    {"actNotFound", "entryNotFound", "ammNotFound", "objectNotFound"}
)

#: book_offers error code for a pair that has never had a market.
BAD_MARKET_ERROR_CODE: str = "badMarket"


# ---------------------------------------------------------------------------
# Transaction flags
# ---------------------------------------------------------------------------

TF_PARTIAL_PAYMENT: int = 0x00020000

TF_PASSIVE: int = 0x00010000
TF_IMMEDIATE_OR_CANCEL: int = 0x00020000
TF_FILL_OR_KILL: int = 0x00040000
TF_SELL: int = 0x00080000

TF_ALL_OR_NOTHING: int = 0x00010000
TF_ONLY_ONE: int = 0x00020000
TF_UNTIL_FAILURE: int = 0x00040000
TF_INDEPENDENT: int = 0x00080000

#: Set on every inner transaction of a Batch.
TF_INNER_BATCH_TXN: int = 0x40000000


__all__ = [
    "XRP_CURRENCY",
    "DROPS_PER_XRP",
    "XRP_QUANTUM",
    "IOU_QUANTUM",
    "AMM_FEE_DENOMINATOR",
    "AMM_MAX_TRADING_FEE",
    "NOT_FOUND_ERROR_CODES",
    "BAD_MARKET_ERROR_CODE",
    "TF_PARTIAL_PAYMENT",
    "TF_PASSIVE",
    "TF_IMMEDIATE_OR_CANCEL",
    "TF_FILL_OR_KILL",
    "TF_SELL",
    "TF_ALL_OR_NOTHING",
    "TF_ONLY_ONE",
    "TF_UNTIL_FAILURE",
    "TF_INDEPENDENT",
    "TF_INNER_BATCH_TXN",
]
