"""
Gemini generateContent over plain HTTPS. The API key travels as the ?key= query parameter.
"""
import httpx
from loguru import logger

from config import Settings
from .base import LLMProvider, ProviderResponse

UNKNOWN_UPSTREAM_ERROR = "Error desconocido de Gemini."


def _extract_text(data: dict) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict))


def _extract_error(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return UNKNOWN_UPSTREAM_ERROR
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return UNKNOWN_UPSTREAM_ERROR


class GeminiProvider(LLMProvider):
    provider_id = "gemini"

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self._settings = settings
        self._transport = transport

    async def generate(self, contents: list[dict], tools: list[dict] | None = None) -> ProviderResponse:
        payload: dict = {"contents": contents}
        if tools:
            payload["tools"] = tools
        async with httpx.AsyncClient(timeout=self._settings.timeout, transport=self._transport) as client:
            r = await client.post(
                self._settings.endpoint,
                params={"key": self._settings.api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
            )
        if r.is_success:
            return ProviderResponse(content=_extract_text(r.json()), status_code=r.status_code)
        message = _extract_error(r)
        logger.warning(
            "made.upstream.error provider={} status={} message={}", self.provider_id, r.status_code, message
        )
        return ProviderResponse(content="", error=message, status_code=r.status_code)
