#!/usr/bin/env python3
"""
Quote a swap against a live XRPL node and print the result.

Tokens are given as `XRP`, `CUR.rIssuer`, or a popular-token name for the
selected network (e.g. "Gatehub USD"). With `--watch` the quote refreshes on
the configured interval until interrupted; with `--account` the unsigned swap
transaction for the selected route is printed as well.

Printing policy:
1) Request (pair, amount, slippage).
2) Per-source partial quotes (AMM pool, order book).
3) Selected route, rate, fee, minimum received, impact level.
4) Submission check and, optionally, the transaction payload.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from decimal import Decimal
from typing import Optional

from loguru import logger

from xrpl_quote import (
    NoRoute,
    QuoteFailed,
    QuotePoller,
    QuoteRequest,
    QuoteSettings,
    QuoteState,
    Quoted,
    Token,
    build_swap_transaction,
    check_submission,
    classify_price_impact,
    make_client,
    run_quote_pipeline,
)
from xrpl_quote.core import fmt_dec, format_percent, format_swap_amount
from xrpl_quote.core.exc import ConfigurationError
from xrpl_quote.networks import find_token
from xrpl_quote.policy import is_high_slippage, validate_slippage


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Quote an XRPL swap via AMM or order book.")
    p.add_argument("--from", dest="from_token", required=True, help="Source token (XRP, CUR.rIssuer or name)")
    p.add_argument("--to", dest="to_token", required=True, help="Destination token")
    p.add_argument("--amount", required=True, help="Source amount (decimal)")
    p.add_argument("--slippage", default=None, help="Slippage fraction, e.g. 0.005")
    p.add_argument("--network", default=None, choices=["Mainnet", "Testnet", "Devnet"])
    p.add_argument("--rpc-url", default=None, help="JSON-RPC endpoint (overrides XRPL_QUOTE_RPC_URL)")
    p.add_argument("--account", default=None, help="Print the unsigned swap transaction for this account")
    p.add_argument("--watch", action="store_true", help="Keep refreshing until Ctrl-C")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def parse_token(raw: str, network: str) -> Token:
    if raw.upper() == "XRP":
        return Token.xrp()
    if "." in raw:
        currency, issuer = raw.split(".", 1)
        return Token(currency, issuer)
    tok = find_token(network, raw)
    if tok is None:
        raise SystemExit(f"unknown token {raw!r} on {network}; use CUR.rIssuer")
    return tok


def print_state(state: QuoteState, settings: QuoteSettings, account: Optional[str]) -> None:
    req = state.request
    print("\n" + "=" * 72)
    if req is not None:
        print(f"Request: {req.amount} {req.from_token} -> {req.to_token}  slippage={format_percent(req.slippage)}")

    if isinstance(state, QuoteFailed):
        print("Quote failed (both sources):")
        for e in state.errors:
            print(f"  - {e}")
    elif isinstance(state, NoRoute):
        print("No route: no AMM pool and no usable order book for this pair.")
        for e in state.errors:
            print(f"  - {e}")
    elif isinstance(state, Quoted):
        q = state.quote
        amm, dex = q.amm_quote, q.dex_quote
        print("Sources")
        if amm is None:
            print("- AMM : (fetch failed)")
        elif not amm.pool_exists:
            print("- AMM : (no pool)")
        else:
            print(f"- AMM : reserves in={fmt_dec(amm.pool_reserve_in)} out={fmt_dec(amm.pool_reserve_out)} "
                  f"fee={amm.trading_fee_bps} out={format_swap_amount(amm.expected_output)}")
        if dex is None:
            print("- DEX : (fetch failed)")
        elif not dex.offers_available:
            print("- DEX : (no offers)")
        else:
            print(f"- DEX : out={format_swap_amount(dex.expected_output)} fill={format_percent(dex.fill_percentage)} "
                  f"offers={dex.offers_consumed}")
        level = classify_price_impact(q.price_impact, settings)
        print("Quote")
        print(f"- route      : {q.route.value}" + ("  (partial fill)" if q.partial else ""))
        print(f"- receive    : {format_swap_amount(q.destination_amount)} {req.to_token}")
        print(f"- rate       : {format_swap_amount(q.rate)}")
        print(f"- fee        : {format_swap_amount(q.fee.amount)} {q.fee.token}")
        print(f"- minimum    : {format_swap_amount(q.minimum_received)}")
        print(f"- impact     : {format_percent(q.price_impact)} ({level.value})")
        if account:
            tx = build_swap_transaction(account, q, req.from_token, req.to_token)
            print("Transaction")
            print(json.dumps(tx.to_xrpl(), indent=2))
    else:
        print(f"State: {type(state).__name__}")
        return

    check = check_submission(state, settings)
    print(f"Submit: {'allowed' if check.allowed else 'blocked'}" + (f" ({check.reason})" if check.reason else ""))


async def _watch(settings: QuoteSettings, request: QuoteRequest, account: Optional[str]) -> None:
    client = make_client(settings)
    async with QuotePoller(client, settings, on_update=lambda s: print_state(s, settings, account)) as poller:
        poller.set_inputs(request)
        while True:
            await asyncio.sleep(3600)


async def _once(settings: QuoteSettings, request: QuoteRequest, account: Optional[str]) -> int:
    client = make_client(settings)
    state = await run_quote_pipeline(client, request, settings)
    print_state(state, settings, account)
    return 0 if isinstance(state, Quoted) else 1


def main(argv=None) -> int:
    args = parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    overrides = {}
    if args.network:
        overrides["network"] = args.network
    if args.rpc_url:
        overrides["rpc_url"] = args.rpc_url
    settings = QuoteSettings(**overrides)

    try:
        slippage = validate_slippage(args.slippage if args.slippage is not None else settings.default_slippage,
                                     settings)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if is_high_slippage(slippage, settings):
        print(f"warning: slippage {format_percent(slippage)} is unusually high", file=sys.stderr)

    request = QuoteRequest(
        from_token=parse_token(args.from_token, settings.network),
        to_token=parse_token(args.to_token, settings.network),
        amount=Decimal(args.amount),
        slippage=slippage,
    )

    if args.watch:
        try:
            asyncio.run(_watch(settings, request, args.account))
        except KeyboardInterrupt:
            pass
        return 0
    return asyncio.run(_once(settings, request, args.account))


if __name__ == "__main__":
    raise SystemExit(main())
