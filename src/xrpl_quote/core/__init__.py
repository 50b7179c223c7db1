"""
XRPL Quote Core
===============

Unified exports for the quote engine's primitives: tokens and amounts,
offer quality, ordering, datatypes and exceptions.
All quote arithmetic is Decimal under the precision fixed in `fmt`; XRP
crosses the wire as integer drops via the floor/ceil bridges in `amounts`.
"""

# NOTE:
#   The `core` package is dependency-free (stdlib only). Ledger I/O and
#   transaction models live in the top-level modules.

# Ledger-aligned constants
from .constants import (
    XRP_CURRENCY,
    DROPS_PER_XRP,
    XRP_QUANTUM,
    IOU_QUANTUM,
    AMM_FEE_DENOMINATOR,
)

# Decimal formatting helpers
from .fmt import (
    DEFAULT_DECIMAL_PRECISION,
    fmt_dec,
    format_swap_amount,
    format_percent,
)

# Tokens, amounts and bridges
from .amounts import (
    Token,
    Amount,
    XRPAmount,
    IOUAmount,
    parse_amount,
    amount_to_decimal,
    amount_for,
    plain_decimal,
    drops_from_xrp_in,
    drops_from_xrp_out,
    xrp_from_drops,
)

# Quality (pay-per-unit-received)
from .quality import (
    Quality,
)

# Ordering utilities
from .ordering import (
    apply_quality_ceiling,
    stable_sort_by_quality,
    prepare_and_order,
)

# Quote datatypes and state variants
from .datatypes import (
    Route,
    AuctionSlot,
    VoteSlot,
    AMMQuote,
    BookOffer,
    DEXQuote,
    SwapFee,
    SwapQuote,
    QuoteRequest,
    QuoteIdle,
    QuoteFetching,
    Quoted,
    NoRoute,
    QuoteFailed,
    QuoteState,
)

# Core exceptions
from .exc import (
    AmountDomainError,
    InvariantViolation,
    ConfigurationError,
    LedgerQueryError,
    QuoteFetchError,
)

__all__ = [
    # constants
    "XRP_CURRENCY",
    "DROPS_PER_XRP",
    "XRP_QUANTUM",
    "IOU_QUANTUM",
    "AMM_FEE_DENOMINATOR",
    # fmt
    "DEFAULT_DECIMAL_PRECISION",
    "fmt_dec",
    "format_swap_amount",
    "format_percent",
    # amounts
    "Token",
    "Amount",
    "XRPAmount",
    "IOUAmount",
    "parse_amount",
    "amount_to_decimal",
    "amount_for",
    "plain_decimal",
    "drops_from_xrp_in",
    "drops_from_xrp_out",
    "xrp_from_drops",
    # quality
    "Quality",
    # ordering
    "apply_quality_ceiling",
    "stable_sort_by_quality",
    "prepare_and_order",
    # datatypes
    "Route",
    "AuctionSlot",
    "VoteSlot",
    "AMMQuote",
    "BookOffer",
    "DEXQuote",
    "SwapFee",
    "SwapQuote",
    "QuoteRequest",
    "QuoteIdle",
    "QuoteFetching",
    "Quoted",
    "NoRoute",
    "QuoteFailed",
    "QuoteState",
    # exceptions
    "AmountDomainError",
    "InvariantViolation",
    "ConfigurationError",
    "LedgerQueryError",
    "QuoteFetchError",
]
