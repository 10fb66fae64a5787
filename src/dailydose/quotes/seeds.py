"""Default quotes used to populate an empty store."""

import logging

from .models import Quote, today_str
from .store import QuoteStore

logger = logging.getLogger(__name__)

DEFAULT_QUOTES: tuple[tuple[str, str], ...] = (
    ("The only way to do great work is to love what you do.", "Steve Jobs"),
    ("Life is what happens to you while you're busy making other plans.", "John Lennon"),
    ("The future belongs to those who believe in the beauty of their dreams.", "Eleanor Roosevelt"),
    (
        "In the end, we will remember not the words of our enemies, "
        "but the silence of our friends.",
        "Martin Luther King Jr.",
    ),
    (
        "Success is not final, failure is not fatal: "
        "it is the courage to continue that counts.",
        "Winston Churchill",
    ),
    ("The way to get started is to quit talking and begin doing.", "Walt Disney"),
    ("Innovation distinguishes between a leader and a follower.", "Steve Jobs"),
    ("Your time is limited, don't waste it living someone else's life.", "Steve Jobs"),
    ("It is during our darkest moments that we must focus to see the light.", "Aristotle"),
    ("Believe you can and you're halfway there.", "Theodore Roosevelt"),
)


def default_quotes(date_fetched: str | None = None) -> list[Quote]:
    """Build the default quotes, all stamped with the same date."""
    stamp = date_fetched or today_str()
    return [Quote(text=text, author=author, date_fetched=stamp) for text, author in DEFAULT_QUOTES]


def seed_defaults(store: QuoteStore) -> int:
    """Insert the default quotes if the store is empty.

    A race between the count check and the inserts is harmless because
    every insert is insert-if-absent.

    Returns:
        Number of quotes inserted.
    """
    if store.count() > 0:
        return 0

    inserted = sum(1 for quote in default_quotes() if store.insert_if_absent(quote))
    logger.info("Seeded %d default quotes", inserted)
    return inserted
