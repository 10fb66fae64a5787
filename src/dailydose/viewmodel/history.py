"""History view model: all quotes, favorites filter, and mutations."""

import logging
import sqlite3
from dataclasses import replace

from ..observable import Observable
from ..quotes import Quote, QuoteRepository, QuoteStoreError

logger = logging.getLogger(__name__)


class HistoryViewModel:
    """Exposes the stored quotes for a history screen.

    Both lists are ordered most recently fetched first and refresh
    themselves from store notifications after any mutation. A failed
    mutation leaves the lists untouched and publishes its error on
    ``message``.
    """

    def __init__(self, repository: QuoteRepository) -> None:
        self.repository = repository
        self.all_quotes = repository.get_all_quotes()
        self.favorite_quotes = repository.get_favorite_quotes()
        self.show_favorites_only: Observable[bool] = Observable(False)
        self.message: Observable[str | None] = Observable(None)

    def toggle_favorite_filter(self) -> bool:
        """Switch between all quotes and favorites only. Returns the new mode."""
        self.show_favorites_only.set(not self.show_favorites_only.value)
        return self.show_favorites_only.value

    def visible_quotes(self) -> list[Quote]:
        """The list selected by the current filter."""
        if self.show_favorites_only.value:
            return self.favorite_quotes.value
        return self.all_quotes.value

    async def toggle_favorite_status(self, quote: Quote) -> Quote:
        """Persist a copy of the quote with its favorite flag flipped.

        Returns:
            The updated snapshot, or ``quote`` unchanged if the store
            rejected the update.
        """
        updated = replace(quote, is_favorite=not quote.is_favorite)
        try:
            self.repository.update_quote(updated)
        except (sqlite3.Error, QuoteStoreError) as e:
            logger.warning("Favorite toggle failed for quote %s: %s", quote.id, e)
            self.message.set(str(e))
            return quote
        logger.debug("Quote %s favorite=%s", quote.id, updated.is_favorite)
        return updated

    async def delete_quote(self, quote: Quote) -> bool:
        try:
            return self.repository.delete_quote(quote)
        except (sqlite3.Error, QuoteStoreError) as e:
            logger.warning("Delete failed for quote %s: %s", quote.id, e)
            self.message.set(str(e))
            return False

    def clear_message(self) -> None:
        self.message.set(None)
