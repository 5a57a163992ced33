"""Client for the remote description service.

The service receives ``{"code": <normalized code>}`` as JSON and answers with
the description, either as a plain text body, a JSON string, or a JSON object
carrying a ``description`` (or ``summary``) field.
"""
import asyncio
from typing import Any, Optional

import httpx
import sentry_sdk
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from code_summarizer.constants import DescriptionServiceDefaults
from code_summarizer.core.exceptions import (
    DescriptionServiceError,
    MalformedDescriptionError,
    UnconfiguredEndpointError,
)
from code_summarizer.core.logging import get_logger

logger = get_logger(__name__)


def is_transient_error(exception: BaseException) -> bool:
    """Whether a failed request is worth retrying.

    Timeouts, connection failures and HTTP 429/5xx are transient; every other
    HTTP status fails fast.
    """
    if isinstance(exception, httpx.HTTPStatusError):
        return exception.response.status_code in DescriptionServiceDefaults.TRANSIENT_STATUS_CODES
    return isinstance(exception, httpx.TransportError)


def parse_description(payload: Any, endpoint: str = "") -> str:
    """Extract the description from a decoded response body.

    Raises:
        MalformedDescriptionError: If the payload holds no non-empty description
    """
    description: Optional[str] = None
    if isinstance(payload, str):
        description = payload
    elif isinstance(payload, dict):
        for key in DescriptionServiceDefaults.RESPONSE_KEYS:
            value = payload.get(key)
            if isinstance(value, str):
                description = value
                break

    if description is None:
        raise MalformedDescriptionError(
            f"Description service returned an unusable payload of type {type(payload).__name__}",
            endpoint=endpoint,
        )
    if not description.strip():
        raise MalformedDescriptionError("Description service returned an empty description", endpoint=endpoint)
    return description


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class DescriptionClient:
    """Posts normalized code to the description service.

    Each request is bounded by ``timeout_seconds``; transient failures are
    retried with exponential backoff and jitter up to ``max_attempts`` total
    attempts. The whole call, backoff included, is bounded by
    ``deadline_seconds``.
    """

    def __init__(
        self,
        endpoint: str,
        timeout_seconds: float = DescriptionServiceDefaults.TIMEOUT_SECONDS,
        max_attempts: int = DescriptionServiceDefaults.MAX_ATTEMPTS,
        backoff_initial: float = DescriptionServiceDefaults.BACKOFF_INITIAL_SECONDS,
        backoff_max: float = DescriptionServiceDefaults.BACKOFF_MAX_SECONDS,
    ) -> None:
        if not endpoint or not endpoint.strip():
            raise UnconfiguredEndpointError()
        if timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {timeout_seconds}")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

        self.endpoint = endpoint.strip()
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max_attempts
        self.backoff_initial = backoff_initial
        self.backoff_max = backoff_max

    @property
    def deadline_seconds(self) -> float:
        return self.timeout_seconds * self.max_attempts + self.backoff_max * (self.max_attempts - 1) + self.backoff_initial

    def _log_retry(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        wait_time = retry_state.next_action.sleep if retry_state.next_action else 0
        logger.warning(
            "description_request_retry",
            endpoint=self.endpoint,
            attempt=retry_state.attempt_number,
            wait_seconds=round(wait_time, 2),
            error=str(exc) if exc else None,
            error_type=type(exc).__name__ if exc else None,
        )

    async def _post(self, code: str) -> httpx.Response:
        with sentry_sdk.start_span(op="http.client", name="Request code description") as span:
            span.set_data("url", self.endpoint)
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(
                    self.endpoint,
                    json={"code": code},
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
            span.set_data("status_code", response.status_code)
        return response

    async def _describe_with_retry(self, code: str) -> str:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(
                initial=self.backoff_initial,
                max=self.backoff_max,
                jitter=self.backoff_initial,
            ),
            retry=retry_if_exception(is_transient_error),
            before_sleep=self._log_retry,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    response = await self._post(code)
        except httpx.HTTPStatusError as e:
            attempts = retrying.statistics.get("attempt_number", 1)
            raise DescriptionServiceError(
                f"Description service returned HTTP {e.response.status_code}",
                endpoint=self.endpoint,
                status_code=e.response.status_code,
                attempts=attempts,
            ) from e
        except httpx.HTTPError as e:
            attempts = retrying.statistics.get("attempt_number", 1)
            raise DescriptionServiceError(
                f"Description request failed after {attempts} attempt(s): {e}",
                endpoint=self.endpoint,
                attempts=attempts,
            ) from e

        return parse_description(_decode_body(response), endpoint=self.endpoint)

    async def describe(self, code: str) -> str:
        """Fetch the description for normalized code.

        Args:
            code: Normalized code fragment

        Returns:
            Description text, verbatim

        Raises:
            DescriptionServiceError: On failure after retries or when the deadline passes
            MalformedDescriptionError: If the response holds no usable description
        """
        logger.info("description_requested", endpoint=self.endpoint, code_length=len(code))
        try:
            description = await asyncio.wait_for(self._describe_with_retry(code), timeout=self.deadline_seconds)
        except asyncio.TimeoutError as e:
            raise DescriptionServiceError(
                f"Description service did not answer within {self.deadline_seconds:.1f}s",
                endpoint=self.endpoint,
            ) from e

        logger.info("description_received", endpoint=self.endpoint, description_length=len(description))
        return description
