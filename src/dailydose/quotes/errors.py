"""Error types for the quote system."""

from enum import Enum


class ErrorKind(Enum):
    """Classification of recoverable failures surfaced to observers."""

    REMOTE_UNAVAILABLE = "remote_unavailable"
    EMPTY_STORE = "empty_store"
    NO_ALTERNATIVE = "no_alternative"


class QuoteStoreError(Exception):
    """Base exception for quote store failures."""


class QuoteNotFoundError(QuoteStoreError):
    """Raised when updating a quote whose id does not exist."""

    def __init__(self, quote_id: int | None) -> None:
        super().__init__(f"Quote not found: {quote_id}")
        self.quote_id = quote_id
