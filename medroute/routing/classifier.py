"""Keyword/regex confidence scoring, one scorer per domain.

Scores are heuristic floats in [0, 1], not calibrated probabilities.
Every scorer is a pure function of the message text.

Keywords are substring hits ("virus" hits "antivirus"); short ones such as
"er" or "who" must match a whole word so "qwer" does not count.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from medroute.routing import tables


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    if len(keyword) <= tables.SHORT_KEYWORD_MAX_LEN:
        return re.compile(r"\b" + re.escape(keyword) + r"\b")
    return re.compile(re.escape(keyword))


def _compile(keywords: list[str]) -> list[re.Pattern[str]]:
    return [_keyword_pattern(k) for k in keywords]


_HEALTHCARE = _compile(tables.HEALTHCARE_KEYWORDS)
_HEALTHCARE_OVERLAP = _compile(tables.HEALTHCARE_OVERLAP_KEYWORDS)
_CONVERSATIONAL = _compile(tables.CONVERSATIONAL_KEYWORDS)
_CONTEXT = _compile(tables.CONTEXT_KEYWORDS)


def _clamp(value: float) -> float:
    return max(0.0, min(value, 1.0))


def _count_hits(text: str, patterns: list[re.Pattern[str]]) -> int:
    return sum(1 for p in patterns if p.search(text))


def _contains_any(text: str, patterns: list[re.Pattern[str]]) -> bool:
    return any(p.search(text) for p in patterns)


def healthcare_confidence(message: str) -> float:
    text = message.lower()
    hits = _count_hits(text, _HEALTHCARE)
    confidence = min(hits / tables.KEYWORD_DIVISOR, tables.KEYWORD_SCORE_CAP)
    if tables.HEALTH_QUESTION_PATTERN.search(text):
        confidence += tables.HEALTH_QUESTION_BONUS
    if tables.SCREENING_INTENT_PATTERN.search(text):
        confidence += tables.SCREENING_INTENT_BONUS
    if tables.NEWS_INTENT_PATTERN.search(text):
        confidence += tables.NEWS_INTENT_BONUS

    return _clamp(confidence)


def personal_confidence(message: str) -> float:
    text = message.lower()

    if _contains_any(text, _HEALTHCARE_OVERLAP):
        return tables.PERSONAL_HEALTH_OVERLAP_SCORE

    conversational = _contains_any(text, _CONVERSATIONAL)
    has_context = _contains_any(text, _CONTEXT)

    if conversational and has_context:
        return tables.PERSONAL_BOTH_SCORE
    if conversational:
        return tables.PERSONAL_CONVERSATIONAL_SCORE
    if has_context:
        return tables.PERSONAL_CONTEXT_SCORE
    return tables.PERSONAL_DEFAULT_SCORE


SCORERS: dict[str, Callable[[str], float]] = {
    "healthcare": healthcare_confidence,
    "personal": personal_confidence,
}


def score(domain: str, message: str) -> float:
    """Score ``message`` for one domain. Raises KeyError for unknown domains."""
    return SCORERS[domain](message)
