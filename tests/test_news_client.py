import time
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from medroute.news.client import NewsClient, parse_ddg_results, parse_serpapi_results
from tests.conftest import make_response


def _serp_item(i: int) -> dict:
    return {
        "title": f"Story {i}",
        "link": f"http://news.example.com/{i}",
        "source": {"name": "HealthNews"},
        "date": "2026-10-01",
        "snippet": "Something happened.",
        "thumbnail": "http://img.example.com/t.jpg",
    }


def test_parse_serpapi_caps_at_five():
    articles = parse_serpapi_results({"news_results": [_serp_item(i) for i in range(8)]})
    assert len(articles) == 5
    assert articles[0].title == "Story 0"
    assert articles[0].source == "HealthNews"
    assert articles[0].thumbnail == "http://img.example.com/t.jpg"


def test_parse_serpapi_defaults():
    [article] = parse_serpapi_results({"news_results": [{"source": "Wire"}]})
    assert article.title == "Untitled"
    assert article.link == ""
    assert article.source == "Wire"
    assert article.snippet == "No description available"
    assert article.thumbnail is None
    assert len(article.date) == 10


def test_parse_serpapi_missing_results():
    assert parse_serpapi_results({"error": "bad key"}) == []


def test_parse_ddg_results():
    [article] = parse_ddg_results(
        [{"title": "AI", "url": "http://x", "body": "b", "source": "S", "date": "2026-02-15"}]
    )
    assert article.link == "http://x"
    assert article.snippet == "b"


async def test_search_serpapi():
    mock_http = AsyncMock()
    mock_http.get = AsyncMock(
        return_value=make_response(json_data={"news_results": [_serp_item(1)]})
    )
    client = NewsClient(http_client=mock_http, serp_api_key="key", timeout=10.0)

    articles = await client.search("diabetes health news")

    assert [a.title for a in articles] == ["Story 1"]
    call = mock_http.get.call_args
    assert call.kwargs["params"] == {
        "engine": "google_news",
        "q": "diabetes health news",
        "api_key": "key",
    }
    assert call.kwargs["timeout"] == 10.0


async def test_search_serpapi_bad_status_returns_empty():
    mock_http = AsyncMock()
    mock_http.get = AsyncMock(return_value=make_response(status_code=401))
    client = NewsClient(http_client=mock_http, serp_api_key="key")
    assert await client.search("flu health news") == []


async def test_search_serpapi_timeout_returns_empty():
    mock_http = AsyncMock()
    mock_http.get = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
    client = NewsClient(http_client=mock_http, serp_api_key="key")
    assert await client.search("flu health news") == []


async def test_search_duckduckgo_without_key():
    client = NewsClient(http_client=AsyncMock(), serp_api_key="")
    assert client.provider == "duckduckgo"

    mock_results = [
        {
            "title": "Flu season",
            "url": "http://news.example.com/flu",
            "body": "Cases rising.",
            "source": "WireCo",
            "date": "2026-10-10",
            "image": None,
        }
    ]
    with patch("medroute.news.client.DDGS") as MockDDGS:
        MockDDGS.return_value.news.return_value = mock_results
        articles = await client.search("flu health news")

    assert [a.title for a in articles] == ["Flu season"]
    MockDDGS.return_value.news.assert_called_once_with(keywords="flu health news", max_results=5)


async def test_search_duckduckgo_failure_returns_empty():
    client = NewsClient(http_client=AsyncMock(), serp_api_key="")
    with patch("medroute.news.client.DDGS") as MockDDGS:
        MockDDGS.return_value.news.side_effect = RuntimeError("rate limited")
        assert await client.search("flu health news") == []


async def test_search_duckduckgo_timeout_returns_empty():
    def slow_search(query):
        time.sleep(0.2)
        return []

    client = NewsClient(http_client=AsyncMock(), serp_api_key="", timeout=0.01)
    with patch("medroute.news.client._search_ddg_news", slow_search):
        assert await client.search("flu health news") == []
