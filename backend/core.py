"""
Request handling for MADE: validate the envelope, route by request kind,
make exactly one Gemini call and shape its result.
"""
from typing import Any

from loguru import logger
from pydantic import BaseModel, ValidationError

from adapter import build_contents, build_rating_contents, parse_rating
from config import Settings
from errors import InternalError, InvalidInput, UpstreamError
from providers import LLMProvider, ProviderResponse, Turn

PERFORMANCE_CALC = "PERFORMANCE_CALC"
MADE_CONSULTATION = "MADE_CONSULTATION"
REQUEST_TYPES = (PERFORMANCE_CALC, MADE_CONSULTATION)

GOOGLE_SEARCH_TOOL = {"google_search": {}}


class TurnIn(BaseModel):
    role: str
    text: str


class ChatRequest(BaseModel):
    conversation_history: list[TurnIn] | None = None
    user_prompt: str | None = None

    def turns(self) -> list[Turn]:
        """A non-empty conversation_history wins; user_prompt is only used when there is no history."""
        if self.conversation_history:
            return [Turn(role=t.role, text=t.text) for t in self.conversation_history]
        if self.user_prompt and self.user_prompt.strip():
            return [Turn(role="user", text=self.user_prompt)]
        return []


class RoutedRequest(ChatRequest):
    request_type: str | None = None
    components: dict[str, str] | None = None


def _validate(model: type[BaseModel], payload: Any):
    if not isinstance(payload, dict):
        raise InvalidInput("El cuerpo de la solicitud debe ser un objeto JSON.")
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.info("made.request.invalid errors={}", e.error_count())
        raise InvalidInput("Formato de solicitud inválido.") from e


def _raise_for_upstream(response: ProviderResponse) -> None:
    if response.error is not None:
        raise UpstreamError(response.error, status_code=response.status_code)


async def _converse(
    turns: list[Turn],
    settings: Settings,
    provider: LLMProvider,
    context: dict[str, str] | None = None,
    tools: list[dict] | None = None,
) -> dict:
    contents = build_contents(turns, context, settings.prompts)
    if not contents:
        raise InvalidInput("Falta el historial de la conversación.")
    response = await provider.generate(contents, tools=tools)
    _raise_for_upstream(response)
    if not response.content:
        raise InternalError("La respuesta de Gemini no contiene texto.")
    return {"text": response.content}


async def rate_performance(components: dict[str, str], settings: Settings, provider: LLMProvider) -> dict:
    contents = build_rating_contents(components, settings.prompts)
    response = await provider.generate(contents)
    _raise_for_upstream(response)
    return {"text": parse_rating(response.content, settings.prompts)}


async def handle_chat(payload: Any, settings: Settings, provider: LLMProvider) -> dict:
    """Chat endpoint: conversation_history, or a single user_prompt treated as a one-turn history."""
    req = _validate(ChatRequest, payload)
    turns = req.turns()
    logger.info("made.request kind=chat turns={}", len(turns))
    return await _converse(turns, settings, provider)


async def handle_routed(payload: Any, settings: Settings, provider: LLMProvider) -> dict:
    """Router endpoint: dispatch on request_type."""
    req = _validate(RoutedRequest, payload)
    if req.request_type not in REQUEST_TYPES:
        raise InvalidInput("Tipo de solicitud no reconocido o ausente.")
    logger.info("made.request kind={} components={}", req.request_type, len(req.components or {}))
    if req.request_type == PERFORMANCE_CALC:
        return await rate_performance(req.components or {}, settings, provider)
    tools = [GOOGLE_SEARCH_TOOL] if settings.enable_search else None
    return await _converse(req.turns(), settings, provider, context=req.components, tools=tools)
