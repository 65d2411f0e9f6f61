"""Symbol Suggestion Service.

Turns free-form text into a batch of SF Symbol suggestions:

    [key check] → [completion request] → [parse names] → [catalog check] → commit

Failure handling:
    - No key configured: empty batch, key flag set, no request made.
    - Any request or parse failure: the fixed mock list stands in for the
      live answer. Auth failures (401/403, authentication_error,
      invalid_request_error) also set the key flag.
    - Names that are not in the catalog are reported in `invalid_names`,
      never dropped silently.

Every call takes a generation number. A finished call only replaces the
latest batch if no newer call has committed already, so a slow response
cannot overwrite the result of a query the user made after it.
"""

import logging
import threading
from typing import Optional

from sfbuddy.action_tracker import SymbolActionTracker
from sfbuddy.api_keys import ApiKeysManager
from sfbuddy.catalog import SymbolCatalog
from sfbuddy.clipboard import Clipboard, MemoryClipboard
from sfbuddy.config_loader import PickerConfig
from sfbuddy.llm_providers import AnthropicProvider, APIError, RequestFailedError, SuggestionProvider
from sfbuddy.models import (
    SuggestionBatch,
    SuggestionSource,
    SymbolAction,
    SymbolActionRecord,
    SymbolSuggestion,
)

logger = logging.getLogger(__name__)

MOCK_SUGGESTIONS = [
    "house.fill",
    "gearshape.fill",
    "person.circle.fill",
    "trash.fill",
    "doc.text.fill",
    "mic.fill",
    "video.fill",
    "bookmark.fill",
]

# Appended to the mock list when the query mentions "invalid", so the
# invalid-name warning can be exercised without a live key.
MOCK_INVALID_SUGGESTIONS = ["non.existent.symbol.test.1", "another.fake.one"]


def get_mock_suggestions(text: str) -> list[str]:
    logger.info(f"Using mock suggestions for '{text}'.")
    names = list(MOCK_SUGGESTIONS)
    if "invalid" in text.lower():
        names.extend(MOCK_INVALID_SUGGESTIONS)
    return names


class SymbolSuggestionService:

    def __init__(
        self,
        catalog: SymbolCatalog,
        api_keys: ApiKeysManager,
        config: Optional[PickerConfig] = None,
        provider: Optional[SuggestionProvider] = None,
        clipboard: Optional[Clipboard] = None,
        tracker: Optional[SymbolActionTracker] = None,
    ):
        self.catalog = catalog
        self.api_keys = api_keys
        self.config = config or PickerConfig()
        self.provider = provider or AnthropicProvider(api_keys, self.config.completion)
        self.clipboard = clipboard or MemoryClipboard()
        self.tracker = tracker or SymbolActionTracker()

        self._lock = threading.Lock()
        self._next_generation = 0
        self._committed_generation = 0
        self._in_flight = 0
        self._latest = SuggestionBatch()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def latest(self) -> SuggestionBatch:
        with self._lock:
            return self._latest

    @property
    def is_processing(self) -> bool:
        with self._lock:
            return self._in_flight > 0

    @property
    def api_key_missing_or_invalid(self) -> bool:
        return self.api_keys.missing_or_invalid

    def _start(self) -> int:
        with self._lock:
            self._next_generation += 1
            return self._next_generation

    def _commit(self, batch: SuggestionBatch, key: Optional[str]) -> SuggestionBatch:
        """Publish `batch` unless a newer generation already has.

        `key` is the credential the batch was produced with. The key flag is
        left alone when the credential was replaced while the call ran.
        """
        with self._lock:
            if batch.generation < self._committed_generation:
                logger.warning(
                    f"Discarding stale suggestions for '{batch.query}' "
                    f"(generation {batch.generation} < {self._committed_generation})"
                )
                return batch.model_copy(update={"superseded": True})
            self._committed_generation = batch.generation
            self._latest = batch
            if self.api_keys.get_key() != key:
                logger.info("API key changed during the request. Key flag left unchanged.")
            elif batch.api_key_missing_or_invalid:
                self.api_keys.mark_invalid()
            else:
                self.api_keys.mark_valid()
        return batch

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    async def process_text(self, text: str) -> SuggestionBatch:
        """Run the full suggestion pipeline for `text`."""
        text = (text or "").strip()
        if not text:
            logger.info("Text is empty. Keeping current suggestions.")
            return self.latest

        logger.info(f"process_text started for: '{text}'")
        generation = self._start()
        key = self.api_keys.get_key()

        if key is None:
            logger.warning("API key is missing. Aborting.")
            return self._commit(SuggestionBatch(
                query=text,
                api_key_missing_or_invalid=True,
                source=SuggestionSource.NONE,
                generation=generation,
            ), key)

        with self._lock:
            self._in_flight += 1
        try:
            raw_names, source, key_invalid = await self._fetch_raw_names(text)
        finally:
            with self._lock:
                self._in_flight -= 1

        valid, invalid = self.validate_names(raw_names)
        batch = self._commit(SuggestionBatch(
            query=text,
            suggestions=valid,
            invalid_names=invalid,
            api_key_missing_or_invalid=key_invalid,
            source=source,
            generation=generation,
        ), key)
        logger.info(
            f"process_text finished. Suggested symbols count: {len(valid)}, "
            f"Invalid names: {len(invalid)}"
        )
        return batch

    async def search_symbols(self, text: str) -> SuggestionBatch:
        return await self.process_text(text)

    async def _fetch_raw_names(self, text: str) -> tuple[list[str], SuggestionSource, bool]:
        """Live names from the provider, or the mock list on any failure.

        Returns (names, source, key_invalid).
        """
        try:
            names = await self.provider.suggest_symbol_names(
                text, self.config.selected_model, self.config.symbol_count,
            )
            logger.info(f"Completion success. Raw symbols: {names}")
            return names, SuggestionSource.LIVE, False
        except RequestFailedError as e:
            key_invalid = e.is_auth_failure
            if key_invalid:
                logger.warning(f"API key/config seems invalid or unauthorized. Reason: {e.reason}")
            else:
                logger.warning(f"Completion request failed: {e.reason}. Falling back to mock suggestions.")
        except APIError as e:
            key_invalid = False
            logger.warning(f"Completion API error: {e!r}. Falling back to mock suggestions.")
        except Exception as e:
            key_invalid = False
            logger.exception(f"Unexpected error during completion call: {e}. Falling back to mock suggestions.")

        return get_mock_suggestions(text), SuggestionSource.MOCK, key_invalid

    def validate_names(self, raw_names: list[str]) -> tuple[list[SymbolSuggestion], list[str]]:
        """Split raw names into catalog-verified suggestions and rejected names.

        Both outputs keep the input order. Blank names are skipped and only
        the first occurrence of a repeated name is kept.
        """
        valid: list[SymbolSuggestion] = []
        invalid: list[str] = []
        seen: set[str] = set()
        for name in raw_names:
            name = name.strip()
            if not name or name in seen:
                continue
            seen.add(name)
            if self.catalog.exists(name):
                valid.append(SymbolSuggestion(name=name))
            else:
                logger.warning(f"Invalid or non-existent symbol suggested: {name}")
                invalid.append(name)
        return valid, invalid

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def track_symbol_action(self, symbol_name: str, action: SymbolAction, search_term: str = "") -> SymbolActionRecord:
        return self.tracker.track(symbol_name, action, search_term)

    def copy_symbol(self, symbol_name: str, search_term: str = "") -> SymbolActionRecord:
        """Put the symbol name on the clipboard and record the copy."""
        symbol_name = symbol_name.strip()
        if not symbol_name:
            raise ValueError("symbol_name must not be empty")
        logger.info(f"Copying to clipboard: {symbol_name}")
        self.clipboard.set_text(symbol_name)
        return self.track_symbol_action(symbol_name, SymbolAction.COPIED, search_term)
