import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

import openai
from openai import AsyncOpenAI
from relay_server.config import Settings
from relay_server.errors import NetworkError, UpstreamError, UpstreamTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_client(settings: Settings) -> AsyncOpenAI:
    # Retries are handled by call_upstream, not by the SDK.
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        max_retries=0,
    )


def backoff_delay(attempt: int, backoff_seconds: float) -> float:
    """Delay before the retry that follows the given (1-based) failed attempt."""
    return backoff_seconds * 2 ** (attempt - 1)


def _provider_message(error: openai.APIStatusError) -> str:
    body = error.body
    if isinstance(body, dict):
        if isinstance(body.get("error"), dict):
            body = body["error"]
        if body.get("message"):
            return str(body["message"])
    return error.message


async def call_upstream(
    operation: str,
    call: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    backoff_seconds: float = 1.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Run one provider call with the relay retry policy.

    Only connection failures and timeouts are retried, with exponential
    backoff, until `max_attempts` calls have been made. Provider status
    errors are never retried and surface as UpstreamError carrying the
    provider's status code.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            return await call()
        except openai.APIStatusError as e:
            message = _provider_message(e)
            logger.warning(
                "%s rejected by provider (status %s): %s", operation, e.status_code, message
            )
            raise UpstreamError(message, status_code=e.status_code) from e
        except openai.APIConnectionError as e:
            timed_out = isinstance(e, openai.APITimeoutError)
            if attempt >= max_attempts:
                logger.error(
                    "%s failed after %d attempts: %s", operation, attempt, e
                )
                if timed_out:
                    raise UpstreamTimeoutError(
                        "Upstream request timed out.", details=str(e)
                    ) from e
                raise NetworkError(
                    "Could not reach the upstream provider.", details=str(e)
                ) from e

            delay = backoff_delay(attempt, backoff_seconds)
            logger.warning(
                "%s attempt %d/%d failed (%s), retrying in %.2fs",
                operation,
                attempt,
                max_attempts,
                "timeout" if timed_out else "connection error",
                delay,
            )
            await sleep(delay)


async def check_upstream_connection(client: AsyncOpenAI) -> bool:
    """Best-effort startup probe; never raises."""
    try:
        await client.models.list(timeout=10.0)
    except openai.OpenAIError as e:
        logger.error("Could not connect to the OpenAI API: %s", e)
        return False

    logger.info("Connected to the OpenAI API")
    return True
