"""
Ordering utilities for book offers (quality-based ranking).

Key behaviours:
- Sort by quality ascending (lower pay-per-unit-received is better), with
  stable tie-breaking so equal-quality rows keep their ledger order.
- Optional quality ceiling: drop offers strictly worse than a given limit.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, TypeVar

from .quality import Quality

T = TypeVar("T")


def apply_quality_ceiling(
    items: Iterable[T],
    *,
    qmax: Optional[Quality],
    get_quality: Callable[[T], Quality],
) -> List[T]:
    """Filter out items strictly worse (higher quality value) than `qmax`.

    If `qmax` is None, return all items as list.
    """
    if qmax is None:
        return list(items)
    return [x for x in items if get_quality(x) <= qmax]


def stable_sort_by_quality(
    items: Iterable[T],
    *,
    get_quality: Callable[[T], Quality],
) -> List[T]:
    """Stable sort by quality (ascending, best first).

    Python's built-in sort is stable, so items with equal quality retain their
    original insertion order.
    """
    return sorted(items, key=get_quality)


def prepare_and_order(
    items: Iterable[T],
    *,
    qmax: Optional[Quality],
    get_quality: Callable[[T], Quality],
) -> List[T]:
    """Apply the quality ceiling, then stable sort best-first."""
    kept = apply_quality_ceiling(items, qmax=qmax, get_quality=get_quality)
    return stable_sort_by_quality(kept, get_quality=get_quality)


__all__ = [
    "apply_quality_ceiling",
    "stable_sort_by_quality",
    "prepare_and_order",
]
