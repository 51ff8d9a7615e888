from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from medroute.agents.healthcare import categorize_health_topic
from medroute.context.fact_extractor import extract_personal_info
from medroute.conversation.followups import generate_follow_ups
from medroute.conversation.sessions import DEFAULT_SESSION_ID
from medroute.dependencies import (
    get_agent_router,
    get_healthcare_agent,
    get_personal_agent,
    get_session_store,
)
from medroute.exceptions import BackendError
from medroute.models import (
    ChatRequest,
    ClearRequest,
    ConsultRequest,
    HealthcareResult,
    PersonalChatRequest,
    PersonalResult,
)
from medroute.routing.router import AGENT_DESCRIPTIONS, APOLOGY_MESSAGE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _internal_error(e: Exception, **extra: object) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error", "message": str(e), **extra},
    )


@router.post("/chat")
async def chat(request: Request, body: ChatRequest) -> JSONResponse:
    if not body.prompt.strip():
        return JSONResponse(
            status_code=400,
            content={
                "error": "prompt is required",
                "prompt": "",
                "answer": "",
                "papers_used": [],
                "context": {},
                "is_new_chat": False,
            },
        )

    sessions = get_session_store(request)
    try:
        if body.is_new_chat:
            await sessions.clear(body.session_id)
        session = sessions.get(body.session_id)
        result = await get_agent_router(request).chat(session, body.prompt)
    except Exception as e:
        logger.exception("Chat failed for session %s", body.session_id)
        return _internal_error(
            e, prompt=body.prompt, answer="", papers_used=[], context={}, is_new_chat=False
        )

    return JSONResponse(
        content={
            "prompt": body.prompt,
            "answer": result.response,
            "papers_used": [],
            "context": result.context.model_dump(),
            "news_articles": [a.model_dump() for a in result.news_articles],
            "metadata": result.metadata.model_dump(),
            "is_new_chat": body.is_new_chat,
            "session_id": body.session_id,
        }
    )


@router.post("/health/consult")
async def healthcare_consult(request: Request, body: ConsultRequest) -> JSONResponse:
    if not body.query.strip():
        return JSONResponse(status_code=400, content={"success": False, "error": "query is required"})

    try:
        result = await get_healthcare_agent(request).process_health_query(
            body.query, fetch_news=body.fetch_news
        )
    except BackendError as e:
        logger.warning("Healthcare consult degraded: %s", e)
        result = HealthcareResult(
            message=APOLOGY_MESSAGE,
            topic_categories=categorize_health_topic(body.query),
            degraded=True,
        )
    except Exception as e:
        logger.exception("Healthcare consult failed")
        return _internal_error(e)
    return JSONResponse(content={"success": True, "data": result.model_dump()})


@router.get("/health/news")
async def health_news(request: Request, topic: str = Query(default="health medical news")) -> JSONResponse:
    articles = await get_healthcare_agent(request).fetch_health_news(topic)
    return JSONResponse(
        content={
            "success": True,
            "data": {
                "topic": topic,
                "articles": [a.model_dump() for a in articles],
                "count": len(articles),
            },
        }
    )


@router.post("/personal/chat")
async def personal_chat(request: Request, body: PersonalChatRequest) -> JSONResponse:
    if not body.message.strip():
        return JSONResponse(status_code=400, content={"success": False, "error": "message is required"})

    session = get_session_store(request).get(body.session_id)
    initial = body.context.model_dump(exclude_none=True)
    try:
        async with session.lock:
            try:
                result = await get_personal_agent(request).process_message(
                    session, body.message, initial_context=initial
                )
            except BackendError as e:
                logger.warning("Personal chat degraded for session %s: %s", body.session_id, e)
                result = PersonalResult(
                    message=APOLOGY_MESSAGE,
                    context_extracted=extract_personal_info(body.message),
                    suggested_follow_ups=generate_follow_ups(session.context),
                    degraded=True,
                )
    except Exception as e:
        logger.exception("Personal chat failed for session %s", body.session_id)
        return _internal_error(e)
    return JSONResponse(content={"success": True, "data": result.model_dump()})


@router.get("/personal/context")
async def user_context(
    request: Request, session_id: str = Query(default=DEFAULT_SESSION_ID)
) -> JSONResponse:
    session = get_session_store(request).peek(session_id)
    data = session.context.model_dump() if session else {}
    return JSONResponse(content={"success": True, "data": data})


@router.post("/clear")
async def clear_history(request: Request, body: ClearRequest | None = None) -> JSONResponse:
    session_id = body.session_id if body else DEFAULT_SESSION_ID
    await get_session_store(request).clear(session_id)
    return JSONResponse(content={"success": True, "message": "Conversation history cleared"})


@router.get("/system")
async def system_info(
    request: Request, session_id: str = Query(default=DEFAULT_SESSION_ID)
) -> JSONResponse:
    session = get_session_store(request).peek(session_id)
    if session is None:
        info = {"agents": AGENT_DESCRIPTIONS, "user_context": {}, "conversation_history": []}
    else:
        info = get_agent_router(request).system_info(session)
    return JSONResponse(content={"success": True, "data": info})
