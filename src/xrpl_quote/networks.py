"""
Per-network token lists and fee recipients.

The popular-token lists seed the token pickers; the fee addresses are
placeholders until real collection accounts are configured.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .core import Token


@dataclass(frozen=True)
class KnownToken:
    token: Token
    name: str


_XRP = KnownToken(Token.xrp(), "XRP")

POPULAR_TOKENS_MAINNET: Tuple[KnownToken, ...] = (
    _XRP,
    KnownToken(Token("USD", "rhub8VRN55s94qWKDv6jmDy1pUykJzF3wq"), "Gatehub USD"),
    KnownToken(Token("EUR", "rhub8VRN55s94qWKDv6jmDy1pUykJzF3wq"), "Gatehub EUR"),
    KnownToken(Token("BTC", "rchGBxcD1A1C2tdxF6papQYZ8kjRKMYcL"), "Gatehub BTC"),
    KnownToken(Token("ETH", "rcA8X3TVMST1n3CJeAdGk1RdRCHii7N2h"), "Gatehub ETH"),
    KnownToken(Token("USD", "rvYAfWj5gh67oV6fW32ZzP3Aw4Eubs59B"), "Bitstamp USD"),
    KnownToken(Token("BTC", "rvYAfWj5gh67oV6fW32ZzP3Aw4Eubs59B"), "Bitstamp BTC"),
    KnownToken(Token("SOLO", "rsoLo2S1kiGeCcn6hCUXVrCpGMWLrRrLZz"), "Sologenic"),
    KnownToken(Token("CSC", "rCSCManTZ8ME9EoLrSHHYKW8PPwWMgkwr"), "CasinoCoin"),
    KnownToken(Token("XRdoge", "rLqUC2eCPohYvJCEBJ77eCCqVL2uEiczjA"), "XRdoge"),
)

# Testnet and Devnet share one list
POPULAR_TOKENS_TESTNET: Tuple[KnownToken, ...] = (
    _XRP,
    KnownToken(Token("USD", "rD9W7ULveavz8qBGM1R5jMgK2QKsEDPQVi"), "Test USD"),
    KnownToken(Token("EUR", "rD9W7ULveavz8qBGM1R5jMgK2QKsEDPQVi"), "Test EUR"),
)

# TODO: replace with the real fee collection accounts before enabling fee payments
SWAP_FEE_ADDRESSES: Dict[str, str] = {
    "Mainnet": "rGemWaLLetXXXXXXXXXXXXXXXXXXXXXXX",
    "Testnet": "rGemWaLLetXXXXXXXXXXXXXXXXXXXXXXX",
    "Devnet": "rGemWaLLetXXXXXXXXXXXXXXXXXXXXXXX",
}


def get_popular_tokens(network: str) -> List[KnownToken]:
    if network == "Mainnet":
        return list(POPULAR_TOKENS_MAINNET)
    if network in ("Testnet", "Devnet"):
        return list(POPULAR_TOKENS_TESTNET)
    return [_XRP]


def get_fee_address(network: str) -> Optional[str]:
    return SWAP_FEE_ADDRESSES.get(network)


def find_token(network: str, symbol: str) -> Optional[Token]:
    """First popular token on `network` whose currency or display name matches `symbol`."""
    s = symbol.strip().lower()
    for kt in get_popular_tokens(network):
        if kt.token.currency.lower() == s or kt.name.lower() == s:
            return kt.token
    return None


__all__ = [
    "KnownToken",
    "POPULAR_TOKENS_MAINNET",
    "POPULAR_TOKENS_TESTNET",
    "SWAP_FEE_ADDRESSES",
    "get_popular_tokens",
    "get_fee_address",
    "find_token",
]
