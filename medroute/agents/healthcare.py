from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from medroute.models import HealthcareResult, NewsArticle

if TYPE_CHECKING:
    from medroute.llm.client import GeminiClient
    from medroute.news.client import NewsClient

logger = logging.getLogger(__name__)

AGENT_NAME = "Healthcare Specialist"
EMPTY_RESPONSE = "I apologize, but I couldn't generate a response."
DEFAULT_NEWS_QUERY = "health medical news"

# First match wins, so more specific topics come before broader ones.
NEWS_TOPICS: list[str] = [
    "covid",
    "coronavirus",
    "vaccine",
    "cancer",
    "diabetes",
    "heart disease",
    "mental health",
    "alzheimer",
    "obesity",
    "flu",
    "influenza",
    "hiv",
    "aids",
    "tuberculosis",
    "malaria",
    "dengue",
    "healthcare",
    "medical research",
    "clinical trial",
    "drug approval",
    "fda",
    "who",
    "cdc",
    "blood",
]

TOPIC_CATEGORIES: dict[str, list[str]] = {
    "infectious_diseases": [
        "covid",
        "coronavirus",
        "flu",
        "virus",
        "bacteria",
        "infection",
        "pandemic",
        "epidemic",
    ],
    "chronic_diseases": [
        "diabetes",
        "cancer",
        "heart disease",
        "hypertension",
        "arthritis",
        "asthma",
        "blood",
    ],
    "mental_health": ["mental health", "depression", "anxiety", "stress", "ptsd", "therapy"],
    "preventive_care": [
        "vaccine",
        "vaccination",
        "prevention",
        "screening",
        "check-up",
        "wellness",
    ],
    "nutrition_fitness": ["nutrition", "diet", "exercise", "fitness", "weight", "obesity"],
    "pharmaceuticals": ["drug", "medication", "prescription", "pharmaceutical", "fda"],
    "public_health": ["public health", "healthcare policy", "who", "cdc", "healthcare system"],
}

_PROMPT_TEMPLATE = """You are a Healthcare Specialist AI assistant.

The user is asking a healthcare-related question. Please:
1. Provide accurate, evidence-based medical information
2. Include appropriate medical disclaimers when necessary
3. Cite latest news articles if available
4. Recommend consulting healthcare professionals for medical advice
5. Be empathetic and supportive in your tone

{news_context}

User message: "{query}"

IMPORTANT DISCLAIMERS:
- This is for informational purposes only and not a substitute for professional medical advice
- Always recommend consulting with qualified healthcare providers for medical decisions
- Be clear about limitations and when professional help is needed

Provide a comprehensive yet accessible response."""


def extract_health_topic(message: str) -> str:
    """Derive the news search query from the first known topic in the message."""
    lowered = message.lower()
    for topic in NEWS_TOPICS:
        if topic in lowered:
            return f"{topic} health news"
    return DEFAULT_NEWS_QUERY


def categorize_health_topic(message: str) -> list[str]:
    lowered = message.lower()
    categories = [
        category for category, keywords in TOPIC_CATEGORIES.items()
        if any(keyword in lowered for keyword in keywords)
    ]
    return categories or ["general_health"]


def format_news_context(articles: list[NewsArticle]) -> str:
    if not articles:
        return ""
    lines = ["", "", "RELEVANT HEALTH NEWS & ARTICLES:"]
    for i, article in enumerate(articles, 1):
        lines.append("")
        lines.append(f"[{i}] {article.title}")
        lines.append(f"Source: {article.source} | Date: {article.date}")
        lines.append(f"Summary: {article.snippet}")
        lines.append(f"URL: {article.link}")
    lines.append("")
    lines.append("")
    lines.append(
        "You may reference these articles in your response if relevant, "
        "using citations like [1], [2], etc."
    )
    return "\n".join(lines)


def build_health_prompt(query: str, articles: list[NewsArticle]) -> str:
    return _PROMPT_TEMPLATE.format(news_context=format_news_context(articles), query=query)


class HealthcareAgent:
    def __init__(self, llm_client: GeminiClient, news_client: NewsClient):
        self._llm = llm_client
        self._news = news_client

    async def fetch_health_news(self, query: str) -> list[NewsArticle]:
        """Search news for the topic found in ``query``. Never raises."""
        return await self._news.search(extract_health_topic(query))

    async def process_health_query(self, query: str, fetch_news: bool = True) -> HealthcareResult:
        """Answer a health question, grounding it in recent news when available.

        Backend errors propagate to the caller (the router turns them into a
        degraded reply).
        """
        articles: list[NewsArticle] = []
        if fetch_news:
            logger.info("Fetching news for health query: %s", query[:80])
            articles = await self.fetch_health_news(query)

        text = await self._llm.generate(build_health_prompt(query, articles))

        return HealthcareResult(
            message=text or EMPTY_RESPONSE,
            news_articles=articles,
            topic_categories=categorize_health_topic(query),
        )
