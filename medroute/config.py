from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Gemini (generative backend)
    gemini_api_key: str
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    generation_timeout: float = 30.0

    # News search (SerpAPI Google News, DuckDuckGo when no key is set)
    serp_api_key: str = ""
    news_timeout: float = 10.0

    @field_validator("generation_timeout", "news_timeout", mode="before")
    @classmethod
    def parse_timeout(cls, v: object) -> object:
        # Accept millisecond values like API_TIMEOUT=10000
        if isinstance(v, str) and v.strip().isdigit():
            v = int(v)
        if isinstance(v, int) and v >= 1000:
            return v / 1000
        return v

    # Conversation state
    history_capacity: int = 10
    session_idle_timeout: int = 1800
    max_sessions: int = 1000

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_file: str = "data/medroute.log"

    model_config = {"env_file": ".env", "extra": "ignore"}
