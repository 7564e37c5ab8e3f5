"""
Google Cloud Function (2nd gen) HTTP handlers for MADE.
Deploy with: gcloud functions deploy made --gen2 --runtime python311 --trigger-http --entry-point made_http
Set GEMINI_API_KEY in the function config.
"""
import asyncio
import sys
from pathlib import Path

_backend_root = Path(__file__).resolve().parent.parent
if str(_backend_root) not in sys.path:
    sys.path.insert(0, str(_backend_root))

from core import handle_chat, handle_routed
from handlers.shared import Route, handle_request


def _dispatch(request, route: Route):
    body = request.get_data(as_text=True) if hasattr(request, "get_data") else (request.data or b"")
    status, headers, content = asyncio.run(handle_request(request.method, body, route))
    return content, status, headers


def made_http(request):
    """Chat entrypoint. Expects POST with {"conversation_history": [{"role": "user", "text": "..."}]}."""
    return _dispatch(request, handle_chat)


def made_router_http(request):
    """Router entrypoint. Expects POST with {"request_type": "PERFORMANCE_CALC" | "MADE_CONSULTATION", ...}."""
    return _dispatch(request, handle_routed)
