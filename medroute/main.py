import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from pydantic import ValidationError

from medroute.agents.general import GeneralAgent
from medroute.agents.healthcare import HealthcareAgent
from medroute.agents.personal import PersonalAgent
from medroute.api.router import router as api_router
from medroute.config import Settings
from medroute.conversation.sessions import SessionStore
from medroute.exceptions import ConfigurationMissing
from medroute.health.router import router as health_router
from medroute.llm.client import GeminiClient
from medroute.logging_config import configure_logging
from medroute.news.client import NewsClient
from medroute.routing.router import AgentRouter

logger = logging.getLogger(__name__)


def load_settings() -> Settings:
    """Read settings from the environment, failing fast on missing credentials."""
    try:
        settings = Settings()
    except ValidationError as e:
        missing = [str(err["loc"][0]) for err in e.errors() if err["type"] == "missing"]
        if "gemini_api_key" in missing:
            raise ConfigurationMissing("GEMINI_API_KEY") from e
        raise
    if not settings.gemini_api_key.strip():
        raise ConfigurationMissing("GEMINI_API_KEY")
    return settings


def init_state(app: FastAPI, settings: Settings, http_client: httpx.AsyncClient) -> None:
    llm_client = GeminiClient(
        http_client=http_client,
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.generation_timeout,
    )
    news_client = NewsClient(
        http_client=http_client,
        serp_api_key=settings.serp_api_key,
        timeout=settings.news_timeout,
    )
    healthcare_agent = HealthcareAgent(llm_client, news_client)
    personal_agent = PersonalAgent(llm_client)

    app.state.settings = settings
    app.state.http_client = http_client
    app.state.llm_client = llm_client
    app.state.news_client = news_client
    app.state.healthcare_agent = healthcare_agent
    app.state.personal_agent = personal_agent
    app.state.session_store = SessionStore(
        history_capacity=settings.history_capacity,
        idle_timeout=settings.session_idle_timeout,
        max_sessions=settings.max_sessions,
    )
    app.state.agent_router = AgentRouter(
        healthcare_agent=healthcare_agent,
        personal_agent=personal_agent,
        general_agent=GeneralAgent(llm_client),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = load_settings()

    configure_logging(
        level=settings.log_level, json_format=settings.log_json, log_file=settings.log_file
    )

    http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.generation_timeout, connect=10.0))
    init_state(app, settings, http_client)
    logger.info(
        "medroute started (model=%s, news=%s)",
        settings.gemini_model,
        app.state.news_client.provider,
    )

    yield

    await http_client.aclose()


app = FastAPI(title="medroute", lifespan=lifespan)
app.include_router(health_router)
app.include_router(api_router)
