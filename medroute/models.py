from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Domain = Literal["healthcare", "personal", "general"]


class UserContext(BaseModel):
    name: str | None = None
    age: str | None = None
    location: str | None = None
    profession: str | None = None
    interests: list[str] = Field(default_factory=list)
    favorites: dict[str, str] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (
            self.name
            or self.age
            or self.location
            or self.profession
            or self.interests
            or self.favorites
        )


class ConversationTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: str
    assistant: str
    timestamp: str  # ISO-8601, UTC


class DomainScore(BaseModel):
    domain: Domain
    confidence: float


class RoutingDecision(BaseModel):
    selected_domain: Domain
    confidence: float
    all_scores: list[DomainScore]
    reason: str | None = None


class NewsArticle(BaseModel):
    title: str
    link: str
    source: str
    date: str
    snippet: str
    thumbnail: str | None = None


class HealthcareResult(BaseModel):
    message: str
    news_articles: list[NewsArticle] = Field(default_factory=list)
    confidence: float = 0.88
    topic_categories: list[str] = Field(default_factory=list)
    medical_disclaimer: bool = True
    degraded: bool = False


class PersonalResult(BaseModel):
    message: str
    context_extracted: dict = Field(default_factory=dict)
    suggested_follow_ups: list[str] = Field(default_factory=list)
    confidence: float = 0.8
    degraded: bool = False


class ChatMetadata(BaseModel):
    agent: str
    type: Domain
    confidence: float
    routing: RoutingDecision
    news_articles_found: int | None = None
    has_latest_news: bool | None = None
    medical_disclaimer: bool | None = None
    topic_categories: list[str] | None = None
    context_extracted: dict | None = None
    suggested_follow_ups: list[str] | None = None
    degraded: bool = False
    processing_time_ms: int = 0


class ChatResult(BaseModel):
    response: str
    context: UserContext
    news_articles: list[NewsArticle] = Field(default_factory=list)
    metadata: ChatMetadata


# --- HTTP request/response bodies ---


class ChatRequest(BaseModel):
    prompt: str = ""
    session_id: str = "default"
    is_new_chat: bool = False


class ConsultRequest(BaseModel):
    query: str = ""
    fetch_news: bool = True


class PersonalChatRequest(BaseModel):
    message: str = ""
    context: UserContext = Field(default_factory=UserContext)
    session_id: str = "default"


class ClearRequest(BaseModel):
    session_id: str = "default"


class BackendCheck(BaseModel):
    available: bool


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    agents: list[str]
    checks: BackendCheck
