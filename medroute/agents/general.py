from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from medroute.llm.client import GeminiClient

AGENT_NAME = "General Assistant"
EMPTY_RESPONSE = "I'm here to help! Could you tell me more about what you'd like assistance with?"
FALLBACK_REASON = "No specialized agent confident enough"
# Reported confidence for the fallback; not a computed score.
GENERAL_CONFIDENCE = 0.5

_PROMPT_TEMPLATE = (
    "You are a helpful AI assistant. The user has sent a message that doesn't clearly fit "
    "into any specific category. Please provide a helpful, general response and ask "
    "clarifying questions to better understand what they need help with.\n\n"
    'User message: "{message}"\n\n'
    "Please respond in a friendly, helpful manner and ask what specific type of "
    "assistance they need."
)


class GeneralAgent:
    def __init__(self, llm_client: GeminiClient):
        self._llm = llm_client

    async def respond(self, message: str) -> str:
        text = await self._llm.generate(_PROMPT_TEMPLATE.format(message=message))
        return text or EMPTY_RESPONSE
