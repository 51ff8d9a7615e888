from __future__ import annotations

import asyncio
import datetime
import logging
from functools import partial

import httpx
from duckduckgo_search import DDGS

from medroute.models import NewsArticle

logger = logging.getLogger(__name__)

MAX_RESULTS = 5
SERPAPI_URL = "https://serpapi.com/search"


def _today() -> str:
    return datetime.date.today().isoformat()


def _search_ddg_news(query: str) -> list[dict]:
    """Search DuckDuckGo News. Returns dicts with: date, title, body, url, source, image."""
    return DDGS().news(keywords=query, max_results=MAX_RESULTS)


def parse_serpapi_results(data: dict) -> list[NewsArticle]:
    """Map a SerpAPI google_news payload onto NewsArticle, at most MAX_RESULTS."""
    articles: list[NewsArticle] = []
    results = data.get("news_results")
    if not isinstance(results, list):
        return articles

    for item in results[:MAX_RESULTS]:
        source = item.get("source")
        if isinstance(source, dict):
            source = source.get("name")
        articles.append(
            NewsArticle(
                title=item.get("title") or "Untitled",
                link=item.get("link") or "",
                source=source or "Unknown Source",
                date=item.get("date") or _today(),
                snippet=item.get("snippet") or "No description available",
                thumbnail=item.get("thumbnail") or None,
            )
        )
    return articles


def parse_ddg_results(results: list[dict]) -> list[NewsArticle]:
    return [
        NewsArticle(
            title=r.get("title") or "Untitled",
            link=r.get("url") or "",
            source=r.get("source") or "Unknown Source",
            date=r.get("date") or _today(),
            snippet=r.get("body") or "No description available",
            thumbnail=r.get("image") or None,
        )
        for r in (results or [])[:MAX_RESULTS]
    ]


class NewsClient:
    """News search: SerpAPI Google News when a key is set, DuckDuckGo News otherwise.

    ``search`` never raises; every failure is logged and yields an empty list.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        serp_api_key: str = "",
        timeout: float = 10.0,
    ):
        self._http = http_client
        self._serp_api_key = serp_api_key
        self._timeout = timeout

    @property
    def provider(self) -> str:
        return "serpapi" if self._serp_api_key else "duckduckgo"

    async def search(self, query: str, timeout: float | None = None) -> list[NewsArticle]:
        timeout = timeout or self._timeout
        logger.info("Searching news: %s (provider=%s)", query, self.provider)
        try:
            if self._serp_api_key:
                articles = await self._search_serpapi(query, timeout)
            else:
                articles = await self._search_duckduckgo(query, timeout)
        except Exception:
            logger.exception("News search failed for query '%s'", query)
            return []

        logger.info("Found %d news results for: %s", len(articles), query)
        return articles

    async def _search_serpapi(self, query: str, timeout: float) -> list[NewsArticle]:
        params = {"engine": "google_news", "q": query, "api_key": self._serp_api_key}
        resp = await self._http.get(SERPAPI_URL, params=params, timeout=timeout)
        if resp.status_code != 200:
            logger.warning("SerpAPI error: %s, returning empty news", resp.status_code)
            return []
        return parse_serpapi_results(resp.json())

    async def _search_duckduckgo(self, query: str, timeout: float) -> list[NewsArticle]:
        loop = asyncio.get_running_loop()
        results = await asyncio.wait_for(
            loop.run_in_executor(None, partial(_search_ddg_news, query)),
            timeout=timeout,
        )
        return parse_ddg_results(results)
