from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from medroute.context.fact_extractor import extract_personal_info
from medroute.context.store import merge_context
from medroute.conversation.followups import generate_follow_ups
from medroute.conversation.history import PROMPT_WINDOW
from medroute.models import PersonalResult, UserContext

if TYPE_CHECKING:
    from medroute.conversation.sessions import Session
    from medroute.llm.client import GeminiClient

logger = logging.getLogger(__name__)

AGENT_NAME = "Personal Assistant"
EMPTY_RESPONSE = "I apologize, but I couldn't generate a response."

_TASK_INSTRUCTIONS = """The user is engaging in personal conversation or sharing personal information. Please:
1. Respond in a warm, friendly, and engaging manner
2. Show interest in their personal information
3. Ask follow-up questions to learn more about them
4. Remember and reference their context appropriately
5. Build rapport and maintain a conversational tone"""


def build_context_summary(context: UserContext) -> str:
    """Render what is known about the user as prose for the prompt."""
    if context.is_empty():
        return ""
    parts = ["Here's what I know about the user:"]
    if context.name:
        parts.append(f"Their name is {context.name}.")
    if context.age:
        parts.append(f"They are {context.age} years old.")
    if context.location:
        parts.append(f"They live in {context.location}.")
    if context.profession:
        parts.append(f"They work as {context.profession}.")
    if context.interests:
        parts.append(f"They are interested in: {', '.join(context.interests)}.")
    if context.favorites:
        favorites = ", ".join(f"{k}: {v}" for k, v in context.favorites.items())
        parts.append(f"Their favorites include: {favorites}.")
    return " ".join(parts)


def build_personal_prompt(session: Session, message: str) -> str:
    lines = ["You are a helpful Personal Assistant chatbot."]

    summary = build_context_summary(session.context)
    if summary:
        lines.append(summary)

    recent = session.history.recent(PROMPT_WINDOW)
    if recent:
        lines.append("Recent conversation history:")
        for turn in recent:
            lines.append(f"User: {turn.user}")
            lines.append(f"Assistant: {turn.assistant}")

    lines.append("")
    lines.append(_TASK_INSTRUCTIONS)
    lines.append("")
    lines.append(f'User message: "{message}"')
    lines.append("")
    lines.append("Be personable and show genuine interest in getting to know them better.")
    return "\n".join(lines)


class PersonalAgent:
    def __init__(self, llm_client: GeminiClient):
        self._llm = llm_client

    async def process_message(
        self,
        session: Session,
        message: str,
        initial_context: UserContext | dict | None = None,
    ) -> PersonalResult:
        """Reply to small talk, learning facts about the user along the way.

        The turn is appended to the session history only after the backend
        answered; a failed call raises and leaves history untouched.
        """
        if initial_context:
            merge_context(session.context, initial_context)

        extracted = extract_personal_info(message)
        if extracted:
            merge_context(session.context, extracted)

        prompt = build_personal_prompt(session, message)
        text = await self._llm.generate(prompt)
        reply = text or EMPTY_RESPONSE

        session.history.record(message, reply)

        return PersonalResult(
            message=reply,
            context_extracted=extracted,
            suggested_follow_ups=generate_follow_ups(session.context),
        )
