from __future__ import annotations

from medroute.models import UserContext

MAX_FOLLOW_UPS = 2

# Checked in order; the order decides which questions surface first.
_FOLLOW_UP_QUESTIONS: list[tuple[str, str]] = [
    ("name", "What's your name?"),
    ("age", "How old are you?"),
    ("location", "Where are you from?"),
    ("interests", "What are you interested in?"),
]


def generate_follow_ups(context: UserContext, limit: int = MAX_FOLLOW_UPS) -> list[str]:
    """Return up to ``limit`` clarifying questions for fields still unknown."""
    questions = [
        question for field_name, question in _FOLLOW_UP_QUESTIONS
        if not getattr(context, field_name)
    ]
    return questions[:limit]
