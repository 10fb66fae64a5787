"""Remote quote-of-the-day source."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import httpx

from .models import QuoteCandidate

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://zenquotes.io/api/"
TODAY_PATH = "today"


@dataclass
class FetchResult:
    """Result from a remote fetch.

    A successful result may carry zero candidates; callers treat that the
    same as a failure.
    """

    success: bool
    candidates: list[QuoteCandidate] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def ok(cls, candidates: list[QuoteCandidate]) -> "FetchResult":
        return cls(success=True, candidates=candidates)

    @classmethod
    def failure(cls, reason: str) -> "FetchResult":
        return cls(success=False, error=reason)

    @property
    def first(self) -> QuoteCandidate | None:
        """The first candidate of a successful fetch. The rest are ignored."""
        if self.success and self.candidates:
            return self.candidates[0]
        return None


class QuoteSource(ABC):
    """Base interface for remote quote sources."""

    @abstractmethod
    async def fetch_daily(self) -> FetchResult:
        """Fetch today's candidates. Must not raise for network problems."""
        ...


class ZenQuotesSource(QuoteSource):
    """Fetches the daily quote with a single GET against ``{base_url}today``."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url.endswith("/"):
            base_url += "/"
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        """Full URL of the daily endpoint."""
        return self._base_url + TODAY_PATH

    async def fetch_daily(self) -> FetchResult:
        """Fetch today's quote list."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(self.url)
        except httpx.TimeoutException:
            logger.warning("Quote fetch timed out after %ss", self._timeout)
            return FetchResult.failure(
                f"Network error: Request timed out after {self._timeout}s"
            )
        except httpx.RequestError as e:
            logger.warning("Quote fetch failed: %s", e)
            return FetchResult.failure(f"Network error: {str(e) or 'Unknown error'}")

        if not response.is_success:
            logger.warning("Quote fetch returned HTTP %s", response.status_code)
            return FetchResult.failure(
                f"Failed to fetch quote: HTTP {response.status_code} {response.reason_phrase}"
            )

        return self._parse(response)

    def _parse(self, response: httpx.Response) -> FetchResult:
        """Parse a JSON array of ``{q, a, i, c, h}`` objects."""
        try:
            data = response.json()
        except ValueError as e:
            # JSONDecodeError, or UnicodeDecodeError for a non-UTF-8 body
            return FetchResult.failure(f"Network error: Invalid JSON response: {e}")

        if not isinstance(data, list):
            return FetchResult.failure("Network error: Unexpected response shape")

        candidates = [
            QuoteCandidate.from_dict(item) for item in data if isinstance(item, dict)
        ]
        return FetchResult.ok(candidates)
