"""View models consumed by the presentation layer."""

from .history import HistoryViewModel
from .quote import (
    NO_QUOTES_MESSAGE,
    OFFLINE_MESSAGE,
    RANDOM_OFFLINE_MESSAGE,
    QuoteResult,
    QuoteState,
    QuoteViewModel,
)

__all__ = [
    "HistoryViewModel",
    "NO_QUOTES_MESSAGE",
    "OFFLINE_MESSAGE",
    "QuoteResult",
    "QuoteState",
    "QuoteViewModel",
    "RANDOM_OFFLINE_MESSAGE",
]
