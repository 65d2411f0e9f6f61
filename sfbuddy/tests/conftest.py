"""Shared fixtures for the SF Buddy test suite.

The completion service is never called for real: provider tests route
httpx through a MockTransport, service tests use a scripted provider.
"""

import sys
import json
from pathlib import Path

import httpx
import pytest

# Ensure the package is importable without installation
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sfbuddy.api_keys import ApiKeysManager
from sfbuddy.catalog import InMemorySymbolCatalog
from sfbuddy.clipboard import MemoryClipboard
from sfbuddy.config_loader import PickerConfig
from sfbuddy.llm_providers import SuggestionProvider
from sfbuddy.suggestion_service import SymbolSuggestionService


TEST_KEY = "sk-ant-test-key-0123456789"

CATALOG_NAMES = [
    "house.fill",
    "gearshape.fill",
    "person.circle.fill",
    "trash.fill",
    "doc.text.fill",
    "mic.fill",
    "video.fill",
    "bookmark.fill",
    "car.fill",
    "creditcard.fill",
    "a.circle",
    "3.circle.fill",
    "a.square",
    "figure.run",
    "cloud.sun",
    "magnifyingglass",
]


# =============================================================================
# CATALOG & CREDENTIAL FIXTURES
# =============================================================================

@pytest.fixture
def catalog():
    return InMemorySymbolCatalog(CATALOG_NAMES)


@pytest.fixture
def api_keys():
    return ApiKeysManager(api_key=TEST_KEY)


@pytest.fixture
def missing_keys():
    return ApiKeysManager(api_key="")


@pytest.fixture
def config():
    return PickerConfig()


@pytest.fixture
def clipboard():
    return MemoryClipboard()


# =============================================================================
# COMPLETION SERVICE FAKES
# =============================================================================

class ScriptedProvider(SuggestionProvider):
    """Provider that returns fixed names or raises a fixed error."""
    name = "scripted"
    label = "Scripted"

    def __init__(self, names=None, error=None):
        self.names = names or []
        self.error = error
        self.calls = []

    def is_configured(self) -> bool:
        return True

    async def suggest_symbol_names(self, text, model, symbol_count):
        self.calls.append((text, model, symbol_count))
        if self.error is not None:
            raise self.error
        return list(self.names)


@pytest.fixture
def scripted_provider():
    return ScriptedProvider(names=["house.fill", "gearshape.fill"])


@pytest.fixture
def service(catalog, api_keys, config, scripted_provider, clipboard):
    return SymbolSuggestionService(
        catalog=catalog,
        api_keys=api_keys,
        config=config,
        provider=scripted_provider,
        clipboard=clipboard,
    )


def messages_response(text: str, status_code: int = 200) -> httpx.Response:
    """A Messages API success body with one text block."""
    return httpx.Response(status_code, json={
        "content": [{"type": "text", "text": text}],
        "model": "claude-3-5-sonnet-20240620",
        "role": "assistant",
        "stop_reason": "end_turn",
    })


def error_response(status_code: int, error_type: str, message: str = "error") -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps({
        "type": "error",
        "error": {"type": error_type, "message": message},
    }).encode())


def mock_http_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
