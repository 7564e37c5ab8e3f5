"""
AWS Lambda / Netlify Functions handlers for MADE. Both platforms deliver the same
event shape (httpMethod, body, isBase64Encoded).
Set handler to handlers.aws_lambda.handler (chat) or handlers.aws_lambda.router_handler,
and GEMINI_API_KEY in the function environment.
"""
import asyncio
import base64
import sys
from pathlib import Path

# Ensure backend root is on path when running from Lambda (working dir is often the deployment package root)
_backend_root = Path(__file__).resolve().parent.parent
if str(_backend_root) not in sys.path:
    sys.path.insert(0, str(_backend_root))

from core import handle_chat, handle_routed
from handlers.shared import Route, handle_request


def _event_body(event: dict):
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        body = base64.b64decode(body)
    return body


def _method(event: dict) -> str | None:
    method = event.get("httpMethod")
    if method is None:
        # API Gateway HTTP API (payload v2)
        method = (event.get("requestContext") or {}).get("http", {}).get("method")
    return method


def _dispatch(event: dict, route: Route) -> dict:
    status, headers, body = asyncio.run(handle_request(_method(event), _event_body(event), route))
    return {"statusCode": status, "headers": headers, "body": body}


def handler(event, context):
    return _dispatch(event, handle_chat)


def router_handler(event, context):
    return _dispatch(event, handle_routed)
