"""SQLite storage for quotes."""

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Callable

from ..observable import Observable
from .errors import QuoteNotFoundError, QuoteStoreError
from .models import Quote

logger = logging.getLogger(__name__)

QuotePredicate = Callable[[Quote], bool]

_COLUMNS = "id, quote_text, author, date_fetched, is_favorite"
_ORDER = "ORDER BY date_fetched DESC, id DESC"


class QuoteStore:
    """Persistent storage for quotes using SQLite.

    Quotes are unique by text: inserts go through a single
    ``INSERT ... ON CONFLICT DO NOTHING`` statement so concurrent callers
    can never create two rows with the same text. Text and author are
    trimmed before they are written.

    All operations share one reentrant lock. Every committed write
    re-evaluates the subscriptions and pushes fresh snapshots, ordered most
    recently fetched first, before releasing it. Listeners run on the
    writing thread and may read the store.
    """

    def __init__(self, db_path: Path | str) -> None:
        """Initialize the store with a database path.

        Args:
            db_path: Path to the SQLite database file, or ":memory:".
        """
        self.db_path = db_path if db_path == ":memory:" else Path(db_path)
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()
        self._feeds: list[tuple[QuotePredicate, Observable[list[Quote]]]] = []
        self._all_feed: Observable[list[Quote]] | None = None
        self._favorites_feed: Observable[list[Quote]] | None = None

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._conn is None:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def init_db(self) -> None:
        """Create the quotes table if it doesn't exist."""
        with self._lock:
            conn = self._get_connection()
            conn.execute("""
                CREATE TABLE IF NOT EXISTS quotes (
                    id            INTEGER PRIMARY KEY AUTOINCREMENT,
                    quote_text    TEXT NOT NULL UNIQUE,
                    author        TEXT NOT NULL,
                    date_fetched  TEXT NOT NULL,
                    is_favorite   INTEGER NOT NULL DEFAULT 0
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_quotes_date ON quotes(date_fetched)"
            )
            conn.commit()

    # --- writes ---

    def insert_if_absent(self, quote: Quote) -> bool:
        """Insert a quote unless one with identical text already exists.

        Args:
            quote: The quote to insert. Its id is ignored.

        Returns:
            True if a row was inserted, False if the text already existed.

        Raises:
            ValueError: If text or author is empty after trimming.
        """
        text, author = self._normalize(quote)
        with self._lock:
            conn = self._get_connection()
            cursor = conn.execute(
                """
                INSERT INTO quotes (quote_text, author, date_fetched, is_favorite)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(quote_text) DO NOTHING
                """,
                (text, author, quote.date_fetched, int(quote.is_favorite)),
            )
            conn.commit()
            inserted = cursor.rowcount > 0
            if inserted:
                self._notify()
        return inserted

    def update(self, quote: Quote) -> None:
        """Replace the stored fields of the quote with the same id.

        Raises:
            QuoteNotFoundError: If no row has ``quote.id``.
            QuoteStoreError: If the new text collides with another quote.
        """
        text, author = self._normalize(quote)
        with self._lock:
            conn = self._get_connection()
            try:
                cursor = conn.execute(
                    """
                    UPDATE quotes
                    SET quote_text = ?, author = ?, date_fetched = ?, is_favorite = ?
                    WHERE id = ?
                    """,
                    (text, author, quote.date_fetched, int(quote.is_favorite), quote.id),
                )
            except sqlite3.IntegrityError as e:
                conn.rollback()
                raise QuoteStoreError(f"Duplicate quote text: {e}") from e
            conn.commit()
            if cursor.rowcount == 0:
                raise QuoteNotFoundError(quote.id)
            self._notify()

    def set_favorite(self, quote_id: int, value: bool) -> None:
        """Set the favorite flag of a quote by id."""
        with self._lock:
            conn = self._get_connection()
            cursor = conn.execute(
                "UPDATE quotes SET is_favorite = ? WHERE id = ?",
                (int(value), quote_id),
            )
            conn.commit()
            if cursor.rowcount > 0:
                self._notify()

    def delete(self, quote: Quote) -> bool:
        """Delete a quote by its id.

        Returns:
            True if a quote was deleted, False otherwise.
        """
        with self._lock:
            conn = self._get_connection()
            cursor = conn.execute("DELETE FROM quotes WHERE id = ?", (quote.id,))
            conn.commit()
            deleted = cursor.rowcount > 0
            if deleted:
                self._notify()
        return deleted

    def delete_all(self) -> int:
        """Delete every quote.

        Returns:
            Number of quotes deleted.
        """
        with self._lock:
            conn = self._get_connection()
            cursor = conn.execute("DELETE FROM quotes")
            conn.commit()
            deleted = cursor.rowcount
            self._notify()
        return deleted

    # --- reads ---

    def count(self) -> int:
        """Number of stored quotes."""
        with self._lock:
            row = self._get_connection().execute("SELECT COUNT(*) FROM quotes").fetchone()
        return int(row[0])

    def list_all(self) -> list[Quote]:
        """All stored quotes, in no particular order."""
        return self._query(f"SELECT {_COLUMNS} FROM quotes")

    def latest(self) -> Quote | None:
        """The most recently fetched quote, or None if the store is empty."""
        return self._query_one(f"SELECT {_COLUMNS} FROM quotes {_ORDER} LIMIT 1")

    def random_one(self) -> Quote | None:
        """A uniformly chosen quote, or None if the store is empty."""
        return self._query_one(f"SELECT {_COLUMNS} FROM quotes ORDER BY RANDOM() LIMIT 1")

    def find_by_text(self, text: str) -> Quote | None:
        """The quote with exactly this text, if any."""
        return self._query_one(
            f"SELECT {_COLUMNS} FROM quotes WHERE quote_text = ? LIMIT 1", (text,)
        )

    def get(self, quote_id: int) -> Quote | None:
        """The quote with this id, if any."""
        return self._query_one(f"SELECT {_COLUMNS} FROM quotes WHERE id = ?", (quote_id,))

    def ordered(self) -> list[Quote]:
        """All quotes, most recently fetched first."""
        return self._query(f"SELECT {_COLUMNS} FROM quotes {_ORDER}")

    # --- subscriptions ---

    def subscribe(self, predicate: QuotePredicate) -> Observable[list[Quote]]:
        """Observe the quotes matching a predicate.

        Args:
            predicate: Filter applied to every stored quote.

        Returns:
            An observable list, most recently fetched first, refreshed after
            every write to the store.
        """
        with self._lock:
            feed: Observable[list[Quote]] = Observable(
                [q for q in self.ordered() if predicate(q)]
            )
            self._feeds.append((predicate, feed))
        return feed

    def unsubscribe(self, feed: Observable[list[Quote]]) -> bool:
        """Stop refreshing a feed returned by subscribe.

        Returns:
            True if the feed was registered, False otherwise.
        """
        with self._lock:
            for i, (_, registered) in enumerate(self._feeds):
                if registered is feed:
                    del self._feeds[i]
                    if feed is self._all_feed:
                        self._all_feed = None
                    if feed is self._favorites_feed:
                        self._favorites_feed = None
                    return True
        return False

    def all_ordered(self) -> Observable[list[Quote]]:
        """Observe all quotes, most recently fetched first."""
        with self._lock:
            if self._all_feed is None:
                self._all_feed = self.subscribe(lambda q: True)
            return self._all_feed

    def favorites_ordered(self) -> Observable[list[Quote]]:
        """Observe favorite quotes, most recently fetched first."""
        with self._lock:
            if self._favorites_feed is None:
                self._favorites_feed = self.subscribe(lambda q: q.is_favorite)
            return self._favorites_feed

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    # --- helpers ---

    def _notify(self) -> None:
        """Push fresh snapshots to every subscription.

        Called with the lock held, right after a commit, so each write
        publishes its own snapshot and listeners see them in commit order.
        """
        with self._lock:
            if not self._feeds:
                return
            quotes = self.ordered()
            for predicate, feed in list(self._feeds):
                feed.set([q for q in quotes if predicate(q)])

    def _query(self, sql: str, params: tuple = ()) -> list[Quote]:
        with self._lock:
            rows = self._get_connection().execute(sql, params).fetchall()
        return [self._row_to_quote(row) for row in rows]

    def _query_one(self, sql: str, params: tuple = ()) -> Quote | None:
        with self._lock:
            row = self._get_connection().execute(sql, params).fetchone()
        return self._row_to_quote(row) if row is not None else None

    @staticmethod
    def _normalize(quote: Quote) -> tuple[str, str]:
        text = quote.text.strip()
        author = quote.author.strip()
        if not text:
            raise ValueError("Quote text cannot be empty")
        if not author:
            raise ValueError("Quote author cannot be empty")
        return text, author

    def _row_to_quote(self, row: sqlite3.Row) -> Quote:
        """Convert a database row to a Quote."""
        return Quote(
            id=row["id"],
            text=row["quote_text"],
            author=row["author"],
            date_fetched=row["date_fetched"],
            is_favorite=bool(row["is_favorite"]),
        )
