"""
Tests unitaires pour le mecanisme de retry avec backoff exponentiel.

Ces tests verifient:
- RateLimitError capture le header Retry-After
- with_retry relance sur RateLimitError uniquement
- request_with_retry detecte les 429 et relance automatiquement
"""

import httpx
import pytest
import respx

from nfoorg.adapters.api.retry import RateLimitError, request_with_retry, with_retry


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_stores_retry_after(self) -> None:
        error = RateLimitError(retry_after=60)
        assert error.retry_after == 60
        assert "60" in str(error)

    def test_without_retry_after(self) -> None:
        assert RateLimitError().retry_after is None


class TestWithRetryDecorator:
    """Tests pour le decorateur with_retry."""

    def test_retries_on_rate_limit_error(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        def flaky() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 2:
                raise RateLimitError(retry_after=1)
            return "success"

        assert flaky() == "success"
        assert call_count == 2

    def test_stops_after_max_attempts(self) -> None:
        call_count = 0

        @with_retry(max_attempts=2, max_wait=1)
        def always_fails() -> str:
            nonlocal call_count
            call_count += 1
            raise RateLimitError()

        with pytest.raises(RateLimitError):
            always_fails()
        assert call_count == 2

    def test_does_not_retry_other_exceptions(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        def raises_value_error() -> str:
            nonlocal call_count
            call_count += 1
            raise ValueError("pas une limite de debit")

        with pytest.raises(ValueError):
            raises_value_error()
        assert call_count == 1


class TestRequestWithRetry:
    """Tests pour request_with_retry."""

    @respx.mock
    def test_retries_429_then_succeeds(self) -> None:
        route = respx.get("https://api.example.com/data").mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "1"}),
                httpx.Response(200, json={"ok": True}),
            ]
        )

        with httpx.Client() as client:
            response = request_with_retry(
                client, "GET", "https://api.example.com/data", max_attempts=3, max_wait=1
            )

        assert response.json() == {"ok": True}
        assert route.call_count == 2

    @respx.mock
    def test_other_errors_are_not_retried(self) -> None:
        route = respx.get("https://api.example.com/data").mock(
            return_value=httpx.Response(404)
        )

        with httpx.Client() as client:
            with pytest.raises(httpx.HTTPStatusError):
                request_with_retry(client, "GET", "https://api.example.com/data")

        assert route.call_count == 1

    @respx.mock
    def test_persistent_429_raises_rate_limit_error(self) -> None:
        respx.get("https://api.example.com/data").mock(
            return_value=httpx.Response(429, headers={"Retry-After": "soon"})
        )

        with httpx.Client() as client:
            with pytest.raises(RateLimitError) as exc_info:
                request_with_retry(
                    client, "GET", "https://api.example.com/data", max_attempts=2, max_wait=1
                )

        assert exc_info.value.retry_after is None
