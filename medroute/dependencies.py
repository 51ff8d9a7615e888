from __future__ import annotations

from fastapi import Request

from medroute.agents.healthcare import HealthcareAgent
from medroute.agents.personal import PersonalAgent
from medroute.conversation.sessions import SessionStore
from medroute.llm.client import GeminiClient
from medroute.routing.router import AgentRouter


def get_llm_client(request: Request) -> GeminiClient:
    return request.app.state.llm_client


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_agent_router(request: Request) -> AgentRouter:
    return request.app.state.agent_router


def get_healthcare_agent(request: Request) -> HealthcareAgent:
    return request.app.state.healthcare_agent


def get_personal_agent(request: Request) -> PersonalAgent:
    return request.app.state.personal_agent
