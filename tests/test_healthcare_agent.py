from unittest.mock import AsyncMock

import pytest

from medroute.agents.healthcare import (
    HealthcareAgent,
    build_health_prompt,
    categorize_health_topic,
    extract_health_topic,
)
from medroute.models import NewsArticle


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Any news about the covid vaccine?", "covid health news"),
        ("Latest on heart disease", "heart disease health news"),
        ("How do I sleep better?", "health medical news"),
    ],
)
def test_extract_health_topic(message, expected):
    assert extract_health_topic(message) == expected


def test_categorize_multiple_categories():
    categories = categorize_health_topic("Does diet help with anxiety and diabetes?")
    assert categories == ["chronic_diseases", "mental_health", "nutrition_fitness"]


def test_categorize_defaults_to_general_health():
    assert categorize_health_topic("How do I sleep better?") == ["general_health"]


def test_prompt_includes_numbered_news():
    articles = [
        NewsArticle(title="A", link="http://a", source="S1", date="2026-01-01", snippet="one"),
        NewsArticle(title="B", link="http://b", source="S2", date="2026-01-02", snippet="two"),
    ]
    prompt = build_health_prompt("What is flu?", articles)
    assert "RELEVANT HEALTH NEWS & ARTICLES:" in prompt
    assert "[1] A" in prompt
    assert "[2] B" in prompt
    assert "Source: S2 | Date: 2026-01-02" in prompt
    assert 'User message: "What is flu?"' in prompt


def test_prompt_without_news():
    prompt = build_health_prompt("What is flu?", [])
    assert "RELEVANT HEALTH NEWS" not in prompt
    assert "IMPORTANT DISCLAIMERS" in prompt


async def test_process_health_query(llm_client, news_client):
    agent = HealthcareAgent(llm_client, news_client)
    result = await agent.process_health_query("Is the flu vaccine safe?")

    news_client.search.assert_awaited_once_with("vaccine health news")
    assert result.message == "Mock reply"
    assert result.medical_disclaimer is True
    assert result.confidence == 0.88
    assert "infectious_diseases" in result.topic_categories
    assert "preventive_care" in result.topic_categories


async def test_process_health_query_without_news(llm_client, news_client):
    agent = HealthcareAgent(llm_client, news_client)
    result = await agent.process_health_query("What is asthma?", fetch_news=False)
    news_client.search.assert_not_awaited()
    assert result.news_articles == []


async def test_empty_generation_uses_fallback(llm_client, news_client):
    llm_client.generate = AsyncMock(return_value="")
    agent = HealthcareAgent(llm_client, news_client)
    result = await agent.process_health_query("What is asthma?")
    assert result.message == "I apologize, but I couldn't generate a response."
