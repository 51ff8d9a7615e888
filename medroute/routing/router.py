from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from medroute.agents import general, healthcare, personal
from medroute.context.fact_extractor import extract_personal_info, has_personal_info
from medroute.context.store import merge_context
from medroute.exceptions import BackendError
from medroute.models import (
    ChatMetadata,
    ChatResult,
    Domain,
    DomainScore,
    RoutingDecision,
)
from medroute.routing.classifier import healthcare_confidence, personal_confidence
from medroute.routing.tables import ROUTING_THRESHOLD

if TYPE_CHECKING:
    from medroute.agents.general import GeneralAgent
    from medroute.agents.healthcare import HealthcareAgent
    from medroute.agents.personal import PersonalAgent
    from medroute.conversation.sessions import Session

logger = logging.getLogger(__name__)

APOLOGY_MESSAGE = (
    "I'm sorry, I'm having trouble responding right now. Please try again in a moment."
)

AGENT_NAMES: dict[str, str] = {
    "healthcare": healthcare.AGENT_NAME,
    "personal": personal.AGENT_NAME,
    "general": general.AGENT_NAME,
}

AGENT_DESCRIPTIONS: list[dict] = [
    {
        "name": healthcare.AGENT_NAME,
        "description": "Expert in medical information, health advice, and latest healthcare news",
        "capabilities": [
            "Medical information and health advice",
            "Disease symptoms and prevention",
            "Healthcare news and latest research",
            "Wellness and nutrition guidance",
            "Mental health support",
            "Pharmaceutical information",
            "Healthcare policy and public health",
        ],
    },
    {
        "name": personal.AGENT_NAME,
        "description": "Handles personal conversations, context management, and user preferences",
        "capabilities": [
            "Personal conversation and small talk",
            "Context extraction and management",
            "User preference learning",
            "Memory management",
            "Relationship building",
        ],
    },
]


def select_domain(
    healthcare_score: float,
    personal_score: float,
    threshold: float = ROUTING_THRESHOLD,
) -> Domain:
    """Pick the winning domain.

    A domain wins only when it reaches ``threshold`` and is strictly above
    the other one. Exact ties and scores below the bar fall to "general".
    """
    if healthcare_score >= threshold and healthcare_score > personal_score:
        return "healthcare"
    if personal_score >= threshold and personal_score > healthcare_score:
        return "personal"
    return "general"


def classify(message: str) -> RoutingDecision:
    healthcare_score = healthcare_confidence(message)
    personal_score = personal_confidence(message)
    selected = select_domain(healthcare_score, personal_score)

    all_scores = [
        DomainScore(domain="healthcare", confidence=healthcare_score),
        DomainScore(domain="personal", confidence=personal_score),
    ]
    if selected == "healthcare":
        return RoutingDecision(
            selected_domain=selected, confidence=healthcare_score, all_scores=all_scores
        )
    if selected == "personal":
        return RoutingDecision(
            selected_domain=selected, confidence=personal_score, all_scores=all_scores
        )
    return RoutingDecision(
        selected_domain="general",
        confidence=general.GENERAL_CONFIDENCE,
        all_scores=all_scores,
        reason=general.FALLBACK_REASON,
    )


def extract_and_merge(session: Session, message: str) -> dict:
    """Enrich the session context before classification.

    Runs even when the message is later routed away from the personal agent.
    Returns the facts extracted from this message.
    """
    if not has_personal_info(message):
        return {}
    extracted = extract_personal_info(message)
    if extracted:
        merge_context(session.context, extracted)
        logger.info("Context updated for session %s: %s", session.session_id, sorted(extracted))
    return extracted


class AgentRouter:
    """Routes each message to the healthcare, personal or general agent."""

    def __init__(
        self,
        healthcare_agent: HealthcareAgent,
        personal_agent: PersonalAgent,
        general_agent: GeneralAgent,
    ):
        self._healthcare = healthcare_agent
        self._personal = personal_agent
        self._general = general_agent

    async def chat(self, session: Session, message: str) -> ChatResult:
        async with session.lock:
            return await self._chat(session, message)

    async def _chat(self, session: Session, message: str) -> ChatResult:
        started = time.monotonic()

        extracted = extract_and_merge(session, message)
        decision = classify(message)
        domain = decision.selected_domain
        logger.info(
            "Routing [%s] -> %s (healthcare=%.2f, personal=%.2f)",
            session.session_id,
            domain,
            decision.all_scores[0].confidence,
            decision.all_scores[1].confidence,
        )

        metadata = ChatMetadata(
            agent=AGENT_NAMES[domain],
            type=domain,
            confidence=decision.confidence,
            routing=decision,
        )
        result = ChatResult(response="", context=session.context, metadata=metadata)

        try:
            if domain == "healthcare":
                health = await self._healthcare.process_health_query(message)
                result.response = health.message
                result.news_articles = health.news_articles
                metadata.news_articles_found = len(health.news_articles)
                metadata.has_latest_news = bool(health.news_articles)
                metadata.medical_disclaimer = health.medical_disclaimer
                metadata.topic_categories = health.topic_categories
            elif domain == "personal":
                reply = await self._personal.process_message(session, message)
                result.response = reply.message
                metadata.context_extracted = reply.context_extracted
                metadata.suggested_follow_ups = reply.suggested_follow_ups
            else:
                result.response = await self._general.respond(message)
        except BackendError as e:
            logger.warning("Agent %s failed for session %s: %s", domain, session.session_id, e)
            result.response = APOLOGY_MESSAGE
            metadata.degraded = True
            if domain == "healthcare":
                metadata.news_articles_found = 0
                metadata.has_latest_news = False
            elif domain == "personal":
                metadata.context_extracted = extracted

        metadata.processing_time_ms = int((time.monotonic() - started) * 1000)
        return result

    def system_info(self, session: Session) -> dict:
        return {
            "agents": AGENT_DESCRIPTIONS,
            "user_context": session.context.model_dump(),
            "conversation_history": [turn.model_dump() for turn in session.history],
        }
