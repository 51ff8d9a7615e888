from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from medroute.config import Settings
from medroute.conversation.sessions import SessionStore
from medroute.llm.client import GeminiClient
from medroute.main import app, init_state

TEST_SETTINGS = Settings(
    gemini_api_key="test_key",
    gemini_model="test-model",
    gemini_base_url="http://gemini.test/v1beta",
    serp_api_key="serp_test_key",
    log_json=False,
    log_file="",
)


def make_gemini_payload(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def make_response(status_code: int = 200, json_data: dict | None = None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.json.return_value = json_data if json_data is not None else {}
    return resp


@pytest.fixture
def settings() -> Settings:
    return TEST_SETTINGS


@pytest.fixture
def session_store() -> SessionStore:
    return SessionStore(history_capacity=10, idle_timeout=1800, max_sessions=100)


@pytest.fixture
def session(session_store):
    return session_store.get("test-session")


@pytest.fixture
def llm_client() -> MagicMock:
    """Generative backend stub: ``generate`` returns a canned reply."""
    client = MagicMock(spec=GeminiClient)
    client.generate = AsyncMock(return_value="Mock reply")
    client.is_available = AsyncMock(return_value=True)
    return client


@pytest.fixture
def news_client() -> MagicMock:
    client = MagicMock()
    client.search = AsyncMock(return_value=[])
    client.provider = "serpapi"
    return client


@pytest.fixture
def client(settings: Settings) -> TestClient:
    mock_http = AsyncMock()
    mock_http.post = AsyncMock(return_value=make_response(json_data=make_gemini_payload("Mock reply")))
    mock_http.get = AsyncMock(return_value=make_response(json_data={"news_results": []}))

    init_state(app, settings, mock_http)

    yield TestClient(app, raise_server_exceptions=False)
