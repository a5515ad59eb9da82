"""
Local dev server for the chat console backend.
  POST /api/chat               {"messages": [...], "provider": "openai", "apiKey": "...", ...}
  GET  /api/health             whether a server-side OpenAI key is configured
  GET  /api/providers          the provider registry, for the settings screen
  POST /api/fine-tune/upload   {"jsonl": "...", "filename": "...", "apiKey": "..."}
  POST /api/fine-tune/create   {"trainingFileId": "...", "model": "...", "apiKey": "..."}
Run from backend dir: python server.py  or  uvicorn server:app --reload --port 8080
"""
import logging
from pathlib import Path

from dotenv import load_dotenv

# Load .env: project root first, then backend. Only set if not already set so root keys win when backend/.env is empty.
_backend_dir = Path(__file__).resolve().parent
_root_dir = _backend_dir.parent
load_dotenv(_root_dir / ".env")
load_dotenv(_backend_dir / ".env", override=False)
load_dotenv(override=False)  # cwd .env if server run from another directory

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings
from core import Dispatcher
from finetune import FineTuneService
from handlers.shared import to_http
from providers import list_providers

logger = logging.getLogger(__name__)


def _respond(outcome) -> JSONResponse:
    status, payload = to_http(outcome)
    return JSONResponse(status_code=status, content=payload)


def create_app(settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    dispatcher = Dispatcher(settings, transport=transport)
    finetune = FineTuneService(settings, transport=transport)

    app = FastAPI(title="Chat Console API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health():
        """Health check; reports whether BYOK is optional."""
        return {"ok": True, "hasServerKey": settings.has_server_key}

    @app.get("/api/providers")
    async def providers():
        return {"providers": [p.to_dict() for p in list_providers()]}

    @app.post("/api/chat")
    async def chat(request: Request):
        # Raw body: an unparseable payload is reported as a chat error, not a framework 422.
        return _respond(await dispatcher.dispatch(await request.body()))

    @app.post("/api/fine-tune/upload")
    async def fine_tune_upload(request: Request):
        return _respond(await finetune.upload(await request.body()))

    @app.post("/api/fine-tune/create")
    async def fine_tune_create(request: Request):
        return _respond(await finetune.create_job(await request.body()))

    return app


_settings = Settings.from_env()
logging.basicConfig(
    level=getattr(logging, _settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
app = create_app(_settings)


if __name__ == "__main__":
    uvicorn.run("server:app", host="0.0.0.0", port=8080, reload=True)
