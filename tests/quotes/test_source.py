"""Tests for the remote quote source."""

import httpx
import pytest

from dailydose.quotes import FetchResult, QuoteCandidate, ZenQuotesSource


def source_for(handler) -> ZenQuotesSource:
    return ZenQuotesSource(
        base_url="https://quotes.test/api/",
        transport=httpx.MockTransport(handler),
    )


class TestFetchResult:
    def test_first_of_success(self):
        result = FetchResult.ok([QuoteCandidate("a", "x"), QuoteCandidate("b", "y")])
        assert result.first.text == "a"

    def test_first_of_empty_success(self):
        assert FetchResult.ok([]).first is None

    def test_first_of_failure(self):
        result = FetchResult.failure("boom")
        assert result.first is None
        assert result.error == "boom"


class TestZenQuotesSourceUrl:
    def test_default_url(self):
        assert ZenQuotesSource().url == "https://zenquotes.io/api/today"

    def test_base_url_without_slash(self):
        assert ZenQuotesSource(base_url="https://q.test/api").url == "https://q.test/api/today"


@pytest.mark.asyncio
class TestFetchDaily:
    async def test_success(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json=[{"q": "Hi", "a": "Bob", "i": "", "c": "2", "h": "<blockquote>Hi</blockquote>"}],
            )

        result = await source_for(handler).fetch_daily()

        assert result.success is True
        assert result.first == QuoteCandidate(
            text="Hi", author="Bob", image="", length="2", html="<blockquote>Hi</blockquote>"
        )
        assert requests[0].method == "GET"
        assert str(requests[0].url) == "https://quotes.test/api/today"
        assert requests[0].url.query == b""

    async def test_candidates_are_raw(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"q": "  Hi  ", "a": " Bob "}])

        result = await source_for(handler).fetch_daily()
        assert result.first.text == "  Hi  "

    async def test_empty_array_is_empty_success(self):
        result = await source_for(lambda r: httpx.Response(200, json=[])).fetch_daily()
        assert result.success is True
        assert result.candidates == []

    async def test_http_error_status(self):
        result = await source_for(lambda r: httpx.Response(503)).fetch_daily()
        assert result.success is False
        assert "503" in result.error

    async def test_invalid_json(self):
        result = await source_for(lambda r: httpx.Response(200, text="not json")).fetch_daily()
        assert result.success is False
        assert result.error.startswith("Network error")

    async def test_non_utf8_body(self):
        """A body that is not valid UTF-8 is a failure, not an exception."""
        result = await source_for(
            lambda r: httpx.Response(200, content=b"\xff\xff\xff\xff")
        ).fetch_daily()
        assert result.success is False
        assert result.error.startswith("Network error")

    async def test_unexpected_shape(self):
        result = await source_for(lambda r: httpx.Response(200, json={"q": "Hi"})).fetch_daily()
        assert result.success is False

    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = await source_for(handler).fetch_daily()
        assert result.success is False
        assert result.error == "Network error: connection refused"

    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        result = await source_for(handler).fetch_daily()
        assert result.success is False
        assert "timed out" in result.error
