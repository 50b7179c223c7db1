"""
Settings for the quote engine (pydantic-settings).

Every value is caller-supplied configuration, never derived: protocol fee
rate, slippage bounds, refresh interval and price-impact thresholds. Values
load from `XRPL_QUOTE_*` environment variables or a `.env` file.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import List, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class QuoteSettings(BaseSettings):
    """Quote engine configuration."""

    model_config = SettingsConfigDict(
        env_prefix="XRPL_QUOTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Ledger endpoint ---
    rpc_url: str = Field(default="https://s1.ripple.com:51234/")
    network: Literal["Mainnet", "Testnet", "Devnet"] = Field(default="Mainnet")
    request_timeout: float = Field(default=10.0, gt=0, le=120)
    book_offers_limit: int = Field(default=200, ge=1, le=400)

    # --- Fee ---
    protocol_fee_rate: Decimal = Field(default=Decimal("0.001"), ge=0, le=1)

    # --- Slippage (fractions, 0.005 = 0.5%) ---
    default_slippage: Decimal = Field(default=Decimal("0.005"), ge=0, le=1)
    min_slippage: Decimal = Field(default=Decimal("0"), ge=0, le=1)
    max_slippage: Decimal = Field(default=Decimal("0.5"), ge=0, le=1)
    slippage_options: List[Decimal] = Field(
        default_factory=lambda: [Decimal("0.001"), Decimal("0.005"), Decimal("0.01"), Decimal("0.03")])
    high_slippage_warning_threshold: Decimal = Field(default=Decimal("0.03"), ge=0, le=1)

    # --- Refresh ---
    quote_refresh_interval: float = Field(default=15.0, gt=0)

    # --- Price impact thresholds ---
    price_impact_warning_threshold: Decimal = Field(default=Decimal("0.03"), ge=0, le=1)
    price_impact_high_threshold: Decimal = Field(default=Decimal("0.05"), ge=0, le=1)
    price_impact_block_threshold: Decimal = Field(default=Decimal("0.15"), ge=0, le=1)

    # --- Routing ---
    dex_fill_threshold: Decimal = Field(default=Decimal("0.99"), gt=0, le=1)

    # --- Batch (combined swap + fee payment) ---
    use_batch_transactions: bool = Field(default=False)

    @model_validator(mode="after")
    def _check_ordering(self) -> "QuoteSettings":
        if not (self.min_slippage <= self.default_slippage <= self.max_slippage):
            raise ValueError("default_slippage must lie within [min_slippage, max_slippage]")
        if not (self.price_impact_warning_threshold
                <= self.price_impact_high_threshold
                <= self.price_impact_block_threshold):
            raise ValueError("price impact thresholds must satisfy warning <= high <= block")
        for opt in self.slippage_options:
            if not (self.min_slippage <= opt <= self.max_slippage):
                raise ValueError(f"slippage option {opt} outside [min_slippage, max_slippage]")
        return self


@lru_cache(maxsize=1)
def get_settings() -> QuoteSettings:
    """Process-wide settings instance (read once from the environment)."""
    return QuoteSettings()


__all__ = [
    "QuoteSettings",
    "get_settings",
]
