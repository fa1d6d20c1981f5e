"""OpenAI adapter for meal analysis chat completions.
"""

from typing import Any, Dict, List, Optional
import logging
import time

from openai import OpenAI, APIError, APITimeoutError, RateLimitError

from app.config import settings
from app.exceptions import ExternalServiceError

logger = logging.getLogger("mealscan.openai")

_client: Optional[OpenAI] = None


# ------------------ Connection ------------------
def connect(api_key: Optional[str], timeout: float = 60.0) -> bool:
    """Create the shared client. Returns False when no key is configured."""
    global _client
    if not api_key:
        _client = None
        logger.warning("OPENAI_API_KEY not set; meal analysis is disabled")
        return False
    _client = OpenAI(api_key=api_key, timeout=timeout)
    logger.info("OpenAI client initialized")
    return True


def close():
    """Close the OpenAI client."""
    global _client
    try:
        if _client is not None:
            _client.close()
            logger.info("OpenAI client closed")
    except Exception:
        logger.exception("Error closing OpenAI client")
    finally:
        _client = None


def _get_client() -> OpenAI:
    """Lazy init client from settings."""
    if _client is None and not connect(
        settings.openai_api_key, settings.openai_timeout_sec
    ):
        raise ExternalServiceError("OpenAI API key not configured")
    return _client


# ------------------ Completions ------------------
def complete(
    messages: List[Dict[str, Any]],
    model: Optional[str] = None,
    max_tokens: Optional[int] = None,
) -> str:
    """Run one chat completion and return the raw message content.

    Raises:
        ExternalServiceError: 503 when unconfigured, 502 when the API call fails
    """
    client = _get_client()
    model = model or settings.openai_model
    start = time.perf_counter()
    try:
        resp = client.chat.completions.create(
            model=model,
            messages=messages,
            max_tokens=max_tokens or settings.openai_max_tokens,
        )
    except APITimeoutError as exc:
        logger.error(f"openai_timeout model={model} error={exc}")
        raise ExternalServiceError(
            "Meal analysis timed out", code="OPENAI_TIMEOUT", http_status=502
        ) from exc
    except RateLimitError as exc:
        logger.error(f"openai_rate_limited model={model} error={exc}")
        raise ExternalServiceError(
            "Meal analysis is rate limited", code="OPENAI_RATE_LIMITED", http_status=502
        ) from exc
    except APIError as exc:
        logger.error(f"openai_api_error model={model} error={exc}")
        raise ExternalServiceError(
            f"OpenAI API error: {exc}", code="OPENAI_API_ERROR", http_status=502
        ) from exc

    elapsed = time.perf_counter() - start
    content = resp.choices[0].message.content if resp.choices else None
    logger.info(f"openai_completion model={model} elapsed={elapsed:.2f}s")
    if not content:
        raise ExternalServiceError(
            "Empty response from OpenAI", code="OPENAI_EMPTY", http_status=502
        )
    return content
