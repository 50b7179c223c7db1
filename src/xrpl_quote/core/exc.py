"""
Core exception types for xrpl_quote.

These are dependency-free and may be imported by all modules.

Structural absences (no pool, no offers, no viable route) are never raised;
they are typed values. Only malformed inputs, broken invariants and transient
fetch failures surface as exceptions.
"""

__all__ = [
    "AmountDomainError",
    "InvariantViolation",
    "ConfigurationError",
    "LedgerQueryError",
    "QuoteFetchError",
]

from .constants import NOT_FOUND_ERROR_CODES


class AmountDomainError(Exception):
    """Raised when inputs violate the non-negative domain or a payload shape is unsupported."""
    pass


class InvariantViolation(Exception):
    """Raised when a computed quote would break fee/slippage ordering guarantees."""
    pass


class ConfigurationError(Exception):
    """Raised when caller-supplied settings (slippage, fee rate, thresholds) are out of range."""
    pass


class LedgerQueryError(Exception):
    """Raised when a ledger request returns an error status.

    Attributes
    ----------
    command : str
        The request command (``amm_info``, ``book_offers``).
    error_code : str | None
        The ledger error token, e.g. ``actNotFound``.
    """

    def __init__(self, command, error_code, message=None):
        super().__init__(f"{command} failed: {error_code or 'unknown'}" + (f" ({message})" if message else ""))
        self.command = command
        self.error_code = error_code
        self.error_message = message

    @property
    def is_not_found(self) -> bool:
        return self.error_code in NOT_FOUND_ERROR_CODES


class QuoteFetchError(Exception):
    """Raised when one quote source (AMM or DEX) could not be fetched this cycle.

    Attributes
    ----------
    source : str
        ``"AMM"`` or ``"DEX"``.
    cause : BaseException
        The underlying transport or ledger error.
    """

    def __init__(self, source, cause):
        super().__init__(f"{source} quote unavailable: {cause}")
        self.source = source
        self.cause = cause
