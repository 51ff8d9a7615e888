import datetime

from fastapi import APIRouter, Request

from medroute.agents import healthcare, personal
from medroute.dependencies import get_llm_client
from medroute.models import BackendCheck, HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    llm_ok = await get_llm_client(request).is_available()
    return HealthResponse(
        status="ok" if llm_ok else "degraded",
        timestamp=datetime.datetime.now(datetime.timezone.utc).isoformat(),
        agents=[healthcare.AGENT_NAME, personal.AGENT_NAME],
        checks=BackendCheck(available=llm_ok),
    )
