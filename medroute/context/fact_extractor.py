"""Deterministic extraction of user facts from chat messages.

No LLM calls, just regex-based extraction of known fact types.
Used by the router before classification and by the personal agent.
"""

from __future__ import annotations

import re

# Values stop at the first whitespace run, comma, period or end of text.
_STOP = r"(?:\s|,|\.|$)"

# Each entry: (fact_key, compiled_pattern)
# The pattern must have exactly one capture group for the fact value.
_FACT_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    # "my name is Alice": letters only, so any trailing punctuation ends it
    ("name", re.compile(r"my name is ([a-zA-Z\s]+?)(?=[^a-zA-Z]|$)", re.IGNORECASE)),
    # "I am 34 years old": kept as a display string, not validated
    ("age", re.compile(r"i am (\d+) years old", re.IGNORECASE)),
    # "I live in Boston"
    ("location", re.compile(r"i live in ([^.!?]+?)" + _STOP, re.IGNORECASE)),
    # "I am interested in cycling"
    ("interests", re.compile(r"i am interested in ([^.!?]+?)" + _STOP, re.IGNORECASE)),
    # "I am a nurse", "I am an engineer", "I work as teacher"
    (
        "profession",
        re.compile(r"i (?:am a|work as|am an) ([^.!?]+?)" + _STOP, re.IGNORECASE),
    ),
]

# Facts that accumulate across turns instead of being replaced
_LIST_FACTS: set[str] = {"interests"}

# Presence of any of these means the message may carry personal facts
PERSONAL_INFO_TRIGGERS: list[str] = [
    "name",
    "age",
    "live",
    "from",
    "interested",
    "like",
    "enjoy",
    "favorite",
    "favourite",
    "work",
    "job",
    "profession",
    "hobby",
    "i am",
    "i'm",
    "my",
    "call me",
]


def has_personal_info(text: str) -> bool:
    """Cheap pre-check run before extraction on every inbound message."""
    lowered = text.lower()
    return any(trigger in lowered for trigger in PERSONAL_INFO_TRIGGERS)


def extract_personal_info(text: str) -> dict:
    """Extract personal facts from a single message.

    Returns a partial context dict: only the facts that matched are present.
    ``interests`` is a one-element list so repeated extractions accumulate
    when merged.

    Example:
        extract_personal_info("Hi, my name is Sam and I live in Boston")
        # -> {"name": "Sam", "location": "Boston"}
    """
    facts: dict = {}

    for fact_key, pattern in _FACT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        value = match.group(1).strip()
        if not value:
            continue
        if fact_key in _LIST_FACTS:
            facts[fact_key] = [value]
        else:
            facts[fact_key] = value

    return facts
