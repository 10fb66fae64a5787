"""Quote-of-the-day view model: fetch, cache fallback, and selection."""

from __future__ import annotations

import logging
import random
import sqlite3
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from ..observable import Observable
from ..quotes import ErrorKind, Quote, QuoteRepository, QuoteStoreError

if TYPE_CHECKING:
    from ..logging import JSONLLogger

logger = logging.getLogger(__name__)

OFFLINE_MESSAGE = "Showing offline quote"
RANDOM_OFFLINE_MESSAGE = "Showing random quote (offline)"
NO_QUOTES_MESSAGE = "No quotes available"

# Store failures are reported like a remote failure, message unchanged.
_STORE_ERRORS = (sqlite3.Error, QuoteStoreError)


class QuoteState(Enum):
    """Terminal state of a view model operation."""

    DISPLAYED = "displayed"
    FAILED = "failed"


@dataclass
class QuoteResult:
    """Result from a view model operation.

    ``message`` is an advisory when the state is DISPLAYED and the error
    text when it is FAILED.
    """

    state: QuoteState
    quote: Quote | None = None
    message: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def displayed(self) -> bool:
        return self.state is QuoteState.DISPLAYED


class QuoteViewModel:
    """Decides which quote to show and publishes it to observers.

    Exposes three observables for the presentation layer: ``current_quote``,
    ``loading`` and ``message``. Operations run to completion one at a time
    per caller; overlapping calls are not serialized here, and the last one
    to finish wins ``current_quote``.
    """

    def __init__(
        self,
        repository: QuoteRepository,
        event_logger: JSONLLogger | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.repository = repository
        self.event_logger = event_logger
        self._rng = rng or random.Random()
        self.current_quote: Observable[Quote | None] = Observable(None)
        self.loading: Observable[bool] = Observable(False)
        self.message: Observable[str | None] = Observable(None)

    async def load(self) -> QuoteResult:
        """Show today's quote, falling back to the latest cached one.

        Order: remote fetch, then the latest stored quote (with an offline
        advisory), then the default quotes on first run.
        """
        return await self._run("load", self._load)

    async def refresh(self) -> QuoteResult:
        """Fetch again on user demand; offline, show a different stored quote."""
        return await self._run("refresh", self._refresh)

    async def show_random(self) -> QuoteResult:
        """Show a stored quote other than the current one."""
        return await self._run("show_random", self._show_random)

    async def toggle_favorite(self, quote: Quote) -> QuoteResult:
        """Flip the favorite flag, persist it, and publish the new snapshot."""
        updated = replace(quote, is_favorite=not quote.is_favorite)
        try:
            self.repository.update_quote(updated)
        except _STORE_ERRORS as e:
            logger.error("Failed to update favorite for quote %s: %s", quote.id, e)
            return self._fail("toggle_favorite", ErrorKind.REMOTE_UNAVAILABLE, str(e))

        self.current_quote.set(updated)
        self._log("favorite_toggled", quote=updated, is_favorite=updated.is_favorite)
        return QuoteResult(QuoteState.DISPLAYED, quote=updated)

    async def delete(self, quote: Quote) -> bool:
        """Delete a quote. List observers update through the store."""
        try:
            deleted = self.repository.delete_quote(quote)
        except _STORE_ERRORS as e:
            logger.error("Failed to delete quote %s: %s", quote.id, e)
            self.message.set(str(e))
            return False

        if deleted:
            self._log("quote_deleted", quote=quote)
        return deleted

    def clear_message(self) -> None:
        self.message.set(None)

    # --- state machine ---

    async def _run(self, operation: str, step) -> QuoteResult:
        self.loading.set(True)
        self.message.set(None)
        try:
            return await step()
        except _STORE_ERRORS as e:
            logger.error("%s failed on store access: %s", operation, e)
            return self._fail(operation, ErrorKind.REMOTE_UNAVAILABLE, str(e))
        finally:
            self.loading.set(False)

    async def _load(self) -> QuoteResult:
        resource = await self.repository.fetch_today_quote()
        if resource.quote is not None:
            self._log_fetch(True, quote=resource.quote)
            return self._display("load", resource.quote)
        self._log_fetch(False, error=resource.error)

        latest = self.repository.get_latest_quote()
        if latest is not None:
            logger.info("Remote unavailable, showing latest cached quote")
            return self._display("load", latest, OFFLINE_MESSAGE)

        self._seed()
        latest = self.repository.get_latest_quote()
        if latest is not None:
            return self._display("load", latest)
        return self._fail("load", ErrorKind.EMPTY_STORE, resource.error)

    async def _refresh(self) -> QuoteResult:
        resource = await self.repository.fetch_today_quote()
        if resource.quote is not None:
            self._log_fetch(True, quote=resource.quote)
            return self._display("refresh", resource.quote)
        self._log_fetch(False, error=resource.error)
        return self._select("refresh", RANDOM_OFFLINE_MESSAGE)

    async def _show_random(self) -> QuoteResult:
        return self._select("show_random")

    def _select(self, operation: str, advisory: str | None = None) -> QuoteResult:
        """Pick a stored quote whose text differs from the current one.

        The comparison is by text, not id. When there is a current quote
        and no other text is stored, this fails instead of re-showing it.
        """
        count = self.repository.get_quote_count()
        if count == 0:
            self._seed()
            count = self.repository.get_quote_count()
        if count == 0:
            return self._fail(operation, ErrorKind.EMPTY_STORE, NO_QUOTES_MESSAGE)

        quotes = self.repository.get_all_quotes_list()
        current = self.current_quote.value
        if current is not None:
            quotes = [q for q in quotes if q.text != current.text]

        if not quotes:
            return self._fail(operation, ErrorKind.NO_ALTERNATIVE, NO_QUOTES_MESSAGE)
        return self._display(operation, self._rng.choice(quotes), advisory)

    def _seed(self) -> None:
        inserted = self.repository.seed_defaults()
        if inserted:
            self._log("seeded", count=inserted)

    # --- transitions ---

    def _display(self, operation: str, quote: Quote, advisory: str | None = None) -> QuoteResult:
        self.current_quote.set(quote)
        if advisory:
            self.message.set(advisory)
        if self.event_logger:
            self.event_logger.log_displayed(operation, quote, advisory)
        return QuoteResult(QuoteState.DISPLAYED, quote=quote, message=advisory)

    def _fail(self, operation: str, kind: ErrorKind, message: str | None) -> QuoteResult:
        self.message.set(message)
        if self.event_logger:
            self.event_logger.log_failed(operation, kind.value, message)
        return QuoteResult(QuoteState.FAILED, message=message, error_kind=kind)

    def _log_fetch(self, success: bool, **kwargs) -> None:
        if self.event_logger:
            self.event_logger.log_fetch(success, **kwargs)

    def _log(self, event: str, **kwargs) -> None:
        if self.event_logger:
            self.event_logger.log(event, **kwargs)
