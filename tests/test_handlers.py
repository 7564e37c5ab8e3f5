"""Tests for the HTTP boundary and the Lambda/Netlify and GCP entrypoints."""

from __future__ import annotations

import base64
import io
import json
from types import SimpleNamespace

import httpx
import pytest

from config import Settings
from core import handle_chat
from handlers import aws_lambda, gcp_function, shared
from handlers.shared import handle_request
from logging_utils import configure_logging
from providers import GeminiProvider, ProviderResponse

CORS = {"Access-Control-Allow-Origin": "*", "Access-Control-Allow-Headers": "Content-Type"}


def _assert_cors(headers: dict) -> None:
    for key, value in CORS.items():
        assert headers[key] == value


@pytest.mark.asyncio
async def test_options_is_preflight(settings, provider) -> None:
    status, headers, body = await handle_request("OPTIONS", None, handle_chat, settings, provider)

    assert status == 204
    assert body == ""
    _assert_cors(headers)
    assert provider.calls == []


@pytest.mark.asyncio
async def test_options_does_not_need_credential(provider) -> None:
    status, _, _ = await handle_request("OPTIONS", None, handle_chat, provider=provider)

    assert status == 204


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", None])
async def test_other_methods_are_rejected_as_plain_text(settings, provider, method) -> None:
    status, headers, body = await handle_request(method, "{}", handle_chat, settings, provider)

    assert status == 405
    assert body == "Método no permitido. Usa POST."
    assert headers["Content-Type"].startswith("text/plain")
    _assert_cors(headers)
    assert provider.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ['{"user_prompt": "hola"}', "{}", "not json"])
async def test_missing_credential_is_500_regardless_of_body(provider, body) -> None:
    status, headers, raw = await handle_request("POST", body, handle_chat, provider=provider)

    assert status == 500
    assert json.loads(raw) == {"error": "Clave de API no configurada en el servidor."}
    _assert_cors(headers)
    assert provider.calls == []


@pytest.mark.asyncio
async def test_credential_is_read_from_environment(monkeypatch, provider) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")

    status, _, raw = await handle_request("POST", '{"user_prompt": "hola"}', handle_chat, provider=provider)

    assert status == 200
    assert json.loads(raw) == {"text": "respuesta"}


@pytest.mark.asyncio
async def test_empty_history_is_400_without_upstream_call(settings, provider) -> None:
    status, headers, raw = await handle_request("post", '{"conversation_history": []}', handle_chat, settings, provider)

    assert status == 400
    assert json.loads(raw) == {"error": "Falta el historial de la conversación."}
    _assert_cors(headers)
    assert provider.calls == []


@pytest.mark.asyncio
async def test_malformed_json_is_internal_error(settings, provider) -> None:
    status, _, raw = await handle_request("POST", "{not json", handle_chat, settings, provider)

    assert status == 500
    assert json.loads(raw) == {"error": "Error interno del servidor (Proxy)."}
    assert provider.calls == []


@pytest.mark.asyncio
async def test_upstream_status_is_mirrored(settings, provider) -> None:
    provider.response = ProviderResponse(content="", error="API key not valid.", status_code=400)

    status, headers, raw = await handle_request("POST", b'{"user_prompt": "hola"}', handle_chat, settings, provider)

    assert status == 400
    assert json.loads(raw) == {"error": "API key not valid."}
    _assert_cors(headers)


@pytest.mark.asyncio
async def test_unexpected_exception_is_internal_error(settings, provider) -> None:
    async def broken_route(payload, settings, provider):
        raise RuntimeError("boom with secret")

    status, _, raw = await handle_request("POST", "{}", broken_route, settings, provider)

    assert status == 500
    assert json.loads(raw) == {"error": "Error interno del servidor (Proxy)."}


@pytest.mark.asyncio
async def test_success_body_keeps_non_ascii(settings, provider) -> None:
    provider.response = ProviderResponse(content="¿Cuál es tu presupuesto? 💸")

    status, headers, raw = await handle_request("POST", '{"user_prompt": "hola"}', handle_chat, settings, provider)

    assert status == 200
    assert headers["Content-Type"] == "application/json"
    assert "¿Cuál es tu presupuesto? 💸" in raw


@pytest.fixture
def patched_provider(monkeypatch, provider):
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    monkeypatch.setattr(shared, "GeminiProvider", lambda settings: provider)
    return provider


def test_lambda_handler_chat(patched_provider) -> None:
    event = {"httpMethod": "POST", "body": json.dumps({"conversation_history": [{"role": "user", "text": "hola"}]})}

    result = aws_lambda.handler(event, None)

    assert result["statusCode"] == 200
    assert json.loads(result["body"]) == {"text": "respuesta"}
    _assert_cors(result["headers"])
    assert len(patched_provider.calls) == 1


def test_lambda_handler_decodes_base64_body(patched_provider) -> None:
    raw = json.dumps({"user_prompt": "hola"}).encode("utf-8")
    event = {"httpMethod": "POST", "body": base64.b64encode(raw).decode("ascii"), "isBase64Encoded": True}

    result = aws_lambda.handler(event, None)

    assert result["statusCode"] == 200


def test_lambda_handler_preflight(patched_provider) -> None:
    result = aws_lambda.handler({"httpMethod": "OPTIONS"}, None)

    assert result["statusCode"] == 204
    assert result["body"] == ""
    _assert_cors(result["headers"])
    assert patched_provider.calls == []


def test_lambda_router_handler_http_api_event(patched_provider) -> None:
    patched_provider.response = ProviderResponse(content="MEDIO")
    event = {
        "requestContext": {"http": {"method": "POST"}},
        "body": json.dumps({"request_type": "PERFORMANCE_CALC", "components": {"CPU": "i5"}}),
    }

    result = aws_lambda.router_handler(event, None)

    assert result["statusCode"] == 200
    assert json.loads(result["body"]) == {"text": "MEDIO"}


def test_gcp_handlers(patched_provider) -> None:
    def request(method: str, payload: dict) -> SimpleNamespace:
        data = json.dumps(payload)
        return SimpleNamespace(method=method, get_data=lambda as_text=False: data)

    body, status, headers = gcp_function.made_http(request("POST", {"user_prompt": "hola"}))
    assert status == 200
    assert json.loads(body) == {"text": "respuesta"}
    _assert_cors(headers)

    body, status, _ = gcp_function.made_router_http(request("POST", {"request_type": "X"}))
    assert status == 400

    body, status, _ = gcp_function.made_http(request("GET", {}))
    assert status == 405


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [httpx.ConnectError, httpx.ReadTimeout])
async def test_transport_failure_is_500_and_key_stays_out_of_logs(error) -> None:
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise error("upstream unreachable", request=request)

    settings = Settings(api_key="SUPER-SECRET-KEY")
    provider = GeminiProvider(settings, transport=httpx.MockTransport(unreachable))
    logs = io.StringIO()
    configure_logging(logs)
    try:
        status, headers, raw = await handle_request("POST", '{"user_prompt": "hola"}', handle_chat, settings, provider)
    finally:
        configure_logging()

    assert status == 500
    assert json.loads(raw) == {"error": "Error interno del servidor (Proxy)."}
    _assert_cors(headers)
    assert "made.request.error" in logs.getvalue()
    assert "SUPER-SECRET-KEY" not in logs.getvalue()
