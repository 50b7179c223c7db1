"""Aggregate XRPL book offers into an order-book quote.

Offers come from `book_offers` for the directed pair (taker pays = our input,
taker gets = our output). The walk consumes offers best quality first:

- funded sizes (`taker_pays_funded` / `taker_gets_funded`) override nominal
  sizes, so an offer is never credited beyond what the maker can honour;
- an offer whose funded input covers the remaining input is consumed
  partially at its rate and the walk stops;
- otherwise the offer is consumed whole and the walk continues.

Price impact is the blended rate's shortfall versus the best offer's rate.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from .core import BookOffer, DEXQuote, Quality, parse_amount
from .core.exc import AmountDomainError
from .core.ordering import prepare_and_order

# Debug printing control
DEBUG_BOOK = False

def _dbg(msg: str) -> None:
    if DEBUG_BOOK:
        print(f"[BOOK] {msg}")


def _book_offer_id(o: dict[str, Any]) -> Optional[str]:
    if o.get("index"):
        return str(o.get("index"))
    if o.get("Account") is not None and o.get("Sequence") is not None:
        return f"{o.get('Account')}:{o.get('Sequence')}"
    return None


def parse_book_offer(o: dict[str, Any]) -> BookOffer:
    """Convert one `book_offers` row into a BookOffer."""
    if "TakerPays" not in o or "TakerGets" not in o:
        raise AmountDomainError(f"book offer missing TakerPays/TakerGets: {o!r}")
    quality = Quality.parse(o["quality"]) if o.get("quality") is not None else None
    pays_funded = parse_amount(o["taker_pays_funded"]) if o.get("taker_pays_funded") is not None else None
    gets_funded = parse_amount(o["taker_gets_funded"]) if o.get("taker_gets_funded") is not None else None
    owner_funds = Decimal(str(o["owner_funds"])) if o.get("owner_funds") is not None else None
    return BookOffer(
        taker_pays=parse_amount(o["TakerPays"]),
        taker_gets=parse_amount(o["TakerGets"]),
        quality=quality,
        taker_pays_funded=pays_funded,
        taker_gets_funded=gets_funded,
        owner_funds=owner_funds,
        offer_id=_book_offer_id(o),
    )


def parse_book_offers(rows: Iterable[dict[str, Any]]) -> List[BookOffer]:
    return [parse_book_offer(o) for o in rows]


def offer_quality(offer: BookOffer) -> Quality:
    """Supplied quality, or TakerPays / TakerGets when absent."""
    return offer.effective_quality()


def _is_usable(offer: BookOffer) -> bool:
    if offer.owner_funds is not None and offer.owner_funds <= 0:
        return False
    return offer.funded_pays() > 0 and offer.funded_gets() > 0


@dataclass(frozen=True)
class BookAggregate:
    """Result of walking the book for a given input."""

    total_output: Decimal
    total_input_used: Decimal
    fill_percentage: Decimal
    price_impact: Decimal
    offers_consumed: int


def aggregate_book_offers(
    offers: Iterable[BookOffer],
    amount_in: Decimal,
    *,
    max_quality: Optional[Quality] = None,
) -> BookAggregate:
    """Walk offers best-first and consume up to `amount_in`.

    `max_quality` optionally drops offers priced worse than a limit.
    An empty book (or non-positive input) yields all zeros.
    """
    if amount_in < 0:
        raise AmountDomainError("amount_in must be >= 0")
    ordered = prepare_and_order(
        (o for o in offers if _is_usable(o)),
        qmax=max_quality,
        get_quality=offer_quality,
    )
    remaining = amount_in
    total_out = Decimal(0)
    total_in = Decimal(0)
    consumed = 0
    best_rate: Optional[Decimal] = None

    for offer in ordered:
        if remaining <= 0:
            break
        funded_in = offer.funded_pays()
        funded_out = offer.funded_gets()
        rate = funded_out / funded_in
        if best_rate is None:
            best_rate = rate
        consumed += 1
        if funded_in >= remaining:
            total_out += remaining * rate
            total_in += remaining
            _dbg(f"partial take: in={remaining} rate={rate} id={offer.offer_id}")
            remaining = Decimal(0)
            break
        total_out += funded_out
        total_in += funded_in
        remaining -= funded_in
        _dbg(f"full take: in={funded_in} out={funded_out} id={offer.offer_id}")

    fill = (total_in / amount_in) if amount_in > 0 else Decimal(0)
    fill = min(fill, Decimal(1))
    impact = Decimal(0)
    if best_rate is not None and total_in > 0:
        impact = max(Decimal(0), Decimal(1) - (total_out / total_in) / best_rate)
    return BookAggregate(
        total_output=total_out,
        total_input_used=total_in,
        fill_percentage=fill,
        price_impact=impact,
        offers_consumed=consumed,
    )


def dex_quote_from_offers(offers: List[BookOffer], amount_in: Decimal) -> DEXQuote:
    """Wrap an aggregation as a DEXQuote; a book with no usable offer is `offers_available=False`."""
    if not any(_is_usable(o) for o in offers):
        return DEXQuote.absent()
    agg = aggregate_book_offers(offers, amount_in)
    return DEXQuote(
        offers_available=True,
        expected_output=agg.total_output,
        fill_percentage=agg.fill_percentage,
        price_impact=agg.price_impact,
        total_input_used=agg.total_input_used,
        offers_consumed=agg.offers_consumed,
    )


__all__ = [
    "parse_book_offer",
    "parse_book_offers",
    "offer_quality",
    "BookAggregate",
    "aggregate_book_offers",
    "dex_quote_from_offers",
]
