"""Quote storage, remote source, and repository."""

from .errors import ErrorKind, QuoteNotFoundError, QuoteStoreError
from .models import Quote, QuoteCandidate
from .repository import QuoteRepository, Resource
from .seeds import DEFAULT_QUOTES, seed_defaults
from .source import FetchResult, QuoteSource, ZenQuotesSource
from .store import QuoteStore

__all__ = [
    "DEFAULT_QUOTES",
    "ErrorKind",
    "FetchResult",
    "Quote",
    "QuoteCandidate",
    "QuoteNotFoundError",
    "QuoteRepository",
    "QuoteSource",
    "QuoteStore",
    "QuoteStoreError",
    "Resource",
    "ZenQuotesSource",
    "seed_defaults",
]
