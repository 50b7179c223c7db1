"""
Quote refresh loop keyed to the exact input tuple.

`QuotePoller` keeps the displayed quote fresh while the user decides:

- `set_inputs(request)` invalidates the current state synchronously, cancels
  the running timer and, for a quotable request, starts a new loop that runs
  the pipeline immediately and then every `quote_refresh_interval` seconds.
- Every run is tagged with the generation and request current at dispatch.
  A completion is applied only if both still match; otherwise it is dropped,
  so a slow reply for old inputs can never overwrite a newer quote.
- `close()` cancels everything; after it no update is ever applied.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Set

from loguru import logger

from .config import QuoteSettings
from .core import QuoteFailed, QuoteFetching, QuoteIdle, QuoteRequest, QuoteState
from .ledger import LedgerClient
from .pipeline import run_quote_pipeline

StateCallback = Callable[[QuoteState], None]


class QuotePoller:
    """Owns the current quote state for one consuming view."""

    def __init__(
        self,
        client: LedgerClient,
        settings: QuoteSettings,
        *,
        on_update: Optional[StateCallback] = None,
    ) -> None:
        self._client = client
        self._settings = settings
        self._on_update = on_update
        self._request: Optional[QuoteRequest] = None
        self._generation = 0
        self._state: QuoteState = QuoteIdle()
        self._timer: Optional[asyncio.Task] = None
        self._refreshes: Set[asyncio.Task] = set()
        self._closed = False

    # --- read side ---

    @property
    def state(self) -> QuoteState:
        return self._state

    @property
    def request(self) -> Optional[QuoteRequest]:
        return self._request

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_polling(self) -> bool:
        return self._timer is not None and not self._timer.done()

    # --- inputs ---

    def set_inputs(self, request: QuoteRequest) -> None:
        """Switch to `request`; the previous quote is invalid from this call on."""
        if self._closed:
            raise RuntimeError("QuotePoller is closed")
        if request == self._request:
            return
        self._cancel_timer()
        self._generation += 1
        self._request = request
        if not request.is_quotable():
            self._apply(QuoteIdle(request))
            return
        self._apply(QuoteFetching(request))
        self._timer = asyncio.get_running_loop().create_task(
            self._loop(self._generation, request), name=f"quote-poller-{self._generation}")

    def refresh(self) -> Optional[asyncio.Task]:
        """Run one extra cycle for the current inputs (explicit user refresh)."""
        if self._closed or self._request is None or not self._request.is_quotable():
            return None
        task = asyncio.get_running_loop().create_task(self._run_once(self._generation, self._request))
        self._refreshes.add(task)
        task.add_done_callback(self._refreshes.discard)
        return task

    async def close(self) -> None:
        """Cancel the timer and any in-flight refresh; no further updates."""
        self._closed = True
        tasks = [t for t in (self._timer, *self._refreshes) if t is not None]
        self._timer = None
        for t in tasks:
            t.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self) -> "QuotePoller":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    # --- internals ---

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def _loop(self, generation: int, request: QuoteRequest) -> None:
        while True:
            await self._run_once(generation, request)
            await asyncio.sleep(self._settings.quote_refresh_interval)

    async def _run_once(self, generation: int, request: QuoteRequest) -> bool:
        try:
            state = await run_quote_pipeline(self._client, request, self._settings)
        except Exception as e:
            logger.exception("quote pipeline crashed for {}", request)
            state = QuoteFailed(request, (e,))
        return self._deliver(generation, request, state)

    def _deliver(self, generation: int, request: QuoteRequest, state: QuoteState) -> bool:
        if self._closed or generation != self._generation or request != self._request:
            logger.debug("discarding stale quote result (gen {} != {})", generation, self._generation)
            return False
        self._apply(state)
        return True

    def _apply(self, state: QuoteState) -> None:
        self._state = state
        if self._on_update is None:
            return
        try:
            self._on_update(state)
        except Exception:
            logger.exception("on_update callback failed for {}", type(state).__name__)


__all__ = [
    "QuotePoller",
]
