"""
Completion-service client for symbol suggestions.

Talks to the Anthropic Messages API over plain HTTP so the picker sees the
raw status code and error body. Every failure is raised as an APIError
subclass; deciding what to do about it (fallback, flagging the key) is the
suggestion service's job.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from pydantic import ValidationError

from sfbuddy.api_keys import ApiKeysManager
from sfbuddy.config_loader import CompletionServiceConfig
from sfbuddy.models import ClaudeErrorResponse, ClaudeModel, ClaudeResponse
from sfbuddy.prompts import build_suggestion_prompt

logger = logging.getLogger(__name__)

# Error types the service uses for a bad or unauthorized key.
AUTH_ERROR_TYPES = frozenset({"authentication_error", "invalid_request_error"})
AUTH_STATUS_CODES = frozenset({401, 403})


# =============================================================================
# ERRORS
# =============================================================================

class APIError(Exception):
    """Base class for completion-service failures."""


class InvalidURLError(APIError):
    pass


class RequestFailedError(APIError):
    def __init__(self, reason: str, status_code: Optional[int] = None, error_type: Optional[str] = None):
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code
        self.error_type = error_type

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code in AUTH_STATUS_CODES or self.error_type in AUTH_ERROR_TYPES


class DecodingFailedError(APIError):
    pass


class NoSuggestionsError(APIError):
    pass


# =============================================================================
# PARSING
# =============================================================================

def parse_symbol_names(text: str) -> list[str]:
    """Split a comma-separated completion into trimmed, non-empty names."""
    return [piece.strip() for piece in text.split(",") if piece.strip()]


def extract_symbol_names(body: bytes) -> list[str]:
    """Pull candidate names out of a successful Messages API response body.

    Raises:
        DecodingFailedError: body is not a Messages response, or its first
            content block is not text.
        NoSuggestionsError: the text held no names.
    """
    try:
        result = ClaudeResponse.model_validate_json(body)
    except ValidationError as e:
        raise DecodingFailedError(f"Could not decode response: {e}") from e

    first = result.content[0] if result.content else None
    if first is None or first.type != "text" or first.text is None:
        raise DecodingFailedError("No text content found")

    logger.info(f"Completion text: {first.text}")
    names = parse_symbol_names(first.text)
    if not names:
        raise NoSuggestionsError("Completion returned no symbol names")
    return names


def _error_from_response(response: httpx.Response) -> RequestFailedError:
    status = response.status_code
    body = response.text or "No response body"
    try:
        detail = ClaudeErrorResponse.model_validate_json(response.content).error
    except ValidationError:
        detail = None

    if detail is not None:
        if detail.type in AUTH_ERROR_TYPES:
            logger.error(f"Completion API error ({detail.type}): {detail.message}")
            return RequestFailedError(
                f"{detail.type}: {detail.message}", status_code=status, error_type=detail.type,
            )
        body = f"Claude Error: {detail.type} - {detail.message}"

    logger.error(f"Completion API HTTP error: {status}. Body: {body}")
    return RequestFailedError(
        f"HTTP Error: {status}. Body: {body}",
        status_code=status,
        error_type=detail.type if detail else None,
    )


# =============================================================================
# PROVIDERS
# =============================================================================

class SuggestionProvider(ABC):
    name: str
    label: str

    @abstractmethod
    async def suggest_symbol_names(self, text: str, model: ClaudeModel, symbol_count: int) -> list[str]:
        """Ask the service for `symbol_count` names for `text`, most relevant first."""
        ...

    @abstractmethod
    def is_configured(self) -> bool:
        ...


class AnthropicProvider(SuggestionProvider):
    name = "anthropic"
    label = "Claude"

    def __init__(
        self,
        api_keys: ApiKeysManager,
        config: Optional[CompletionServiceConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_keys = api_keys
        self.config = config or CompletionServiceConfig()
        self._http_client = http_client

    def is_configured(self) -> bool:
        return self.api_keys.is_configured()

    def build_request_body(self, text: str, model: ClaudeModel, symbol_count: int) -> dict:
        return {
            "model": ClaudeModel(model).value,
            "max_tokens": self.config.max_tokens,
            "messages": [
                {"role": "user", "content": build_suggestion_prompt(text, symbol_count)},
            ],
        }

    def _headers(self, api_key: str) -> dict:
        return {
            "content-type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": self.config.anthropic_version,
        }

    async def _post(self, url: httpx.URL, headers: dict, body: dict) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(url, headers=headers, json=body, timeout=self.config.timeout_s)
        async with httpx.AsyncClient(timeout=self.config.timeout_s) as client:
            return await client.post(url, headers=headers, json=body)

    async def suggest_symbol_names(self, text: str, model: ClaudeModel, symbol_count: int) -> list[str]:
        api_key = self.api_keys.get_key()
        if not api_key:
            logger.warning("API key is missing internally.")
            raise RequestFailedError("API Key not provided")

        try:
            url = httpx.URL(self.config.api_url)
        except (httpx.InvalidURL, TypeError) as e:
            raise InvalidURLError(f"Invalid completion API URL: {self.config.api_url}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidURLError(f"Invalid completion API URL: {self.config.api_url}")

        body = self.build_request_body(text, model, symbol_count)
        logger.info(f"Completion request being sent with model: {ClaudeModel(model).display_name} (key omitted)")
        t0 = time.time()

        try:
            response = await self._post(url, self._headers(api_key), body)
        except httpx.HTTPError as e:
            logger.error(f"Completion API transport error: {e}")
            raise RequestFailedError(f"Request failed: {e}") from e

        logger.info(f"Completion API responded {response.status_code} in {round(time.time() - t0, 2)}s")
        if response.status_code != 200:
            raise _error_from_response(response)

        return extract_symbol_names(response.content)
