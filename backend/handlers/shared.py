"""Shared request/response handling for Lambda/Netlify, GCP and the dev server."""
import json
from typing import Any, Awaitable, Callable

from loguru import logger

from config import Settings
from errors import InternalError, MadeError, MethodNotAllowed, MissingCredential
from logging_utils import configure_logging
from providers import GeminiProvider, LLMProvider

configure_logging()

Route = Callable[[Any, Settings, LLMProvider], Awaitable[dict]]
HttpResult = tuple[int, dict, str]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
}


def cors_headers(content_type: str = "application/json") -> dict:
    return {**CORS_HEADERS, "Content-Type": content_type}


def json_response(status: int, payload: dict) -> HttpResult:
    return status, cors_headers(), json.dumps(payload, ensure_ascii=False)


def parse_body(body: str | bytes | dict | None) -> Any:
    if isinstance(body, dict):
        return body
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    try:
        return json.loads(body or "{}")
    except ValueError as e:
        raise InternalError() from e


async def handle_request(
    method: str | None,
    body: str | bytes | dict | None,
    route: Route,
    settings: Settings | None = None,
    provider: LLMProvider | None = None,
) -> HttpResult:
    """Method gate, credential check, body decoding and error mapping around one route call."""
    method = (method or "").upper()
    if method == "OPTIONS":
        return 204, cors_headers(), ""
    try:
        if method != "POST":
            raise MethodNotAllowed()
        settings = settings or Settings.from_env()
        if not settings.api_key:
            raise MissingCredential()
        payload = parse_body(body)
        provider = provider or GeminiProvider(settings)
        return json_response(200, await route(payload, settings, provider))
    except MethodNotAllowed as e:
        return e.status_code, cors_headers("text/plain; charset=utf-8"), e.message
    except MadeError as e:
        if e.status_code >= 500:
            logger.error("made.request.error status={} message={}", e.status_code, e.message)
        return json_response(e.status_code, {"error": e.message})
    except Exception:
        logger.exception("made.request.error")
        return json_response(500, {"error": InternalError.default_message})
