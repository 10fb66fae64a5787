"""Data models for quotes."""

from dataclasses import dataclass
from datetime import date
from typing import Any

DATE_FORMAT = "%Y-%m-%d"


def today_str() -> str:
    """Return the local calendar date as YYYY-MM-DD."""
    return date.today().strftime(DATE_FORMAT)


@dataclass(frozen=True)
class Quote:
    """A stored quote.

    Attributes:
        text: The quote text, trimmed.
        author: The quote author, trimmed.
        date_fetched: Local date the quote was stored (YYYY-MM-DD).
        is_favorite: Whether the user marked it as favorite.
        id: Database ID, None for quotes not yet inserted.
    """

    text: str
    author: str
    date_fetched: str
    is_favorite: bool = False
    id: int | None = None


@dataclass(frozen=True)
class QuoteCandidate:
    """A quote as returned by the remote source, before normalization."""

    text: str
    author: str
    image: str | None = None
    length: str | None = None
    html: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuoteCandidate":
        """Create from a response object with short keys (q, a, i, c, h)."""
        return cls(
            text=str(data.get("q") or ""),
            author=str(data.get("a") or ""),
            image=data.get("i"),
            length=data.get("c"),
            html=data.get("h"),
        )

    def to_quote(self, date_fetched: str | None = None) -> Quote:
        """Trim text and author and build an unsaved Quote."""
        return Quote(
            text=self.text.strip(),
            author=self.author.strip(),
            date_fetched=date_fetched or today_str(),
        )
