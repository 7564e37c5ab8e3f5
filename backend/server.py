"""
Local dev server: POST /made with JSON {"conversation_history": [{"role": "user", "text": "..."}]}
and POST /made/router with {"request_type": ..., "components": {...}, ...}.
Run from backend dir: python server.py  or  uvicorn server:app --reload --port 8080
"""
from pathlib import Path

from dotenv import load_dotenv

# Load .env: project root first, then backend. Only set if not already set so root keys win when backend/.env is empty.
_backend_dir = Path(__file__).resolve().parent
_root_dir = _backend_dir.parent
load_dotenv(_root_dir / ".env")
load_dotenv(_backend_dir / ".env", override=False)
load_dotenv(override=False)  # cwd .env if server run from another directory

import uvicorn
from fastapi import FastAPI, Request, Response

from core import handle_chat, handle_routed
from handlers.shared import Route, handle_request

app = FastAPI(title="MADE Proxy API")

METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def _proxy(request: Request, route: Route) -> Response:
    body = await request.body()
    status, headers, content = await handle_request(request.method, body, route)
    return Response(content=content, status_code=status, headers=headers)


@app.get("/")
async def root():
    """Health check; confirms backend is up."""
    return {"ok": True, "service": "made-proxy"}


@app.api_route("/made", methods=METHODS)
async def made(request: Request):
    return await _proxy(request, handle_chat)


@app.api_route("/made/router", methods=METHODS)
async def made_router(request: Request):
    return await _proxy(request, handle_routed)


if __name__ == "__main__":
    uvicorn.run("server:app", host="0.0.0.0", port=8080, reload=True)
