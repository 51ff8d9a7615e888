from __future__ import annotations

import logging

import httpx

from medroute.exceptions import BackendError, BackendTimeout

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiClient:
    """Minimal Gemini ``generateContent`` client over a shared httpx client."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ):
        self._http = http_client
        self._api_key = api_key
        self._model = _normalize_model_name(model)
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def model(self) -> str:
        return self._model

    @property
    def _headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self._api_key, "Content-Type": "application/json"}

    async def generate(self, prompt: str, timeout: float | None = None) -> str:
        """Generate text for a single prompt.

        Raises BackendTimeout on timeouts or transport errors and
        BackendError on non-2xx responses or malformed bodies. An empty
        candidate list yields an empty string.
        """
        url = f"{self._base_url}/models/{self._model}:generateContent"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"thinkingConfig": {"thinkingBudget": 0}},
        }
        try:
            resp = await self._http.post(
                url,
                json=payload,
                headers=self._headers,
                timeout=timeout or self._timeout,
            )
        except httpx.TimeoutException as e:
            raise BackendTimeout("gemini", f"timed out: {e}") from e
        except httpx.HTTPError as e:
            raise BackendTimeout("gemini", f"transport error: {e}") from e

        if resp.status_code in (401, 403):
            logger.error(
                "Gemini API auth failed (%s): GEMINI_API_KEY is invalid or lacks access",
                resp.status_code,
            )
        elif resp.status_code == 404:
            logger.error("Gemini model '%s' not found", self._model)
        if resp.status_code >= 400:
            raise BackendError("gemini", resp.text[:200], status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise BackendError("gemini", "invalid JSON response") from e

        text = _extract_text(data)
        logger.debug("LLM raw response: %s", text[:500])
        return text

    async def is_available(self) -> bool:
        try:
            resp = await self._http.get(
                f"{self._base_url}/models/{self._model}",
                headers=self._headers,
                timeout=5.0,
            )
            return resp.status_code == 200
        except httpx.HTTPError:
            return False


def _normalize_model_name(name: str | None) -> str:
    """Strip a "models/" prefix and whitespace."""
    if not name:
        return ""
    cleaned = name.strip()
    if cleaned.startswith("models/"):
        return cleaned.split("/", 1)[1]
    return cleaned


def _extract_text(data: dict) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()
