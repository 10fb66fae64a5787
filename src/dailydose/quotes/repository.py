"""Quote repository combining the remote source and the local store."""

import logging
import sqlite3
from dataclasses import dataclass

from ..observable import Observable
from .errors import QuoteStoreError
from .models import Quote, today_str
from .seeds import seed_defaults
from .source import QuoteSource
from .store import QuoteStore

logger = logging.getLogger(__name__)

NO_CANDIDATE_MESSAGE = "API temporarily unavailable"


@dataclass
class Resource:
    """Outcome of a repository fetch: a stored quote or an error message."""

    quote: Quote | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.quote is not None


class QuoteRepository:
    """Single access point for quotes.

    Fetches from the source, normalizes and persists the first candidate,
    and exposes the store operations the view models need.
    """

    def __init__(self, store: QuoteStore, source: QuoteSource) -> None:
        """Initialize the repository.

        Args:
            store: The QuoteStore for persistence.
            source: The remote QuoteSource.
        """
        self.store = store
        self.source = source

    async def fetch_today_quote(self) -> Resource:
        """Fetch today's quote and persist it.

        Only the first candidate of the response is used. The quote is read
        back from the store after insertion so the result carries its id and
        stored state, which may be an earlier record with the same text.

        Returns:
            Resource with the stored quote, or an error message when the
            fetch failed, returned nothing usable, or the store failed.
        """
        result = await self.source.fetch_daily()
        candidate = result.first
        if candidate is None:
            if result.success:
                logger.warning("Quote source returned no candidates")
                return Resource(error=NO_CANDIDATE_MESSAGE)
            return Resource(error=result.error or NO_CANDIDATE_MESSAGE)

        quote = candidate.to_quote(today_str())
        if not quote.text or not quote.author:
            logger.warning("Discarding candidate with empty text or author")
            return Resource(error=NO_CANDIDATE_MESSAGE)

        try:
            self.store.insert_if_absent(quote)
            stored = self.store.find_by_text(quote.text)
        except (sqlite3.Error, QuoteStoreError) as e:
            logger.error("Failed to persist fetched quote: %s", e)
            return Resource(error=str(e))

        if stored is None:
            return Resource(error=NO_CANDIDATE_MESSAGE)
        return Resource(quote=stored)

    def get_all_quotes(self) -> Observable[list[Quote]]:
        return self.store.all_ordered()

    def get_favorite_quotes(self) -> Observable[list[Quote]]:
        return self.store.favorites_ordered()

    def get_latest_quote(self) -> Quote | None:
        return self.store.latest()

    def get_random_quote(self) -> Quote | None:
        return self.store.random_one()

    def get_quote_count(self) -> int:
        return self.store.count()

    def get_all_quotes_list(self) -> list[Quote]:
        return self.store.list_all()

    def update_quote(self, quote: Quote) -> None:
        self.store.update(quote)

    def set_favorite_status(self, quote_id: int, is_favorite: bool) -> None:
        self.store.set_favorite(quote_id, is_favorite)

    def delete_quote(self, quote: Quote) -> bool:
        return self.store.delete(quote)

    def delete_all_quotes(self) -> int:
        return self.store.delete_all()

    def seed_defaults(self) -> int:
        """Insert the default quotes if the store is empty."""
        return seed_defaults(self.store)
