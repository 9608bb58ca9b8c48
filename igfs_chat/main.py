from __future__ import annotations

import logging
import sys
from typing import Dict, List, Optional, Protocol, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictStr

from .config import ConfigError, Settings
from .gemini_client import GeminiClient
from .prompt import EMPTY_REPLY, FALLBACK_MESSAGE, SERVICE_NAME, build_first_message
from .store import SessionStore, Turn

DEFAULT_SESSION_ID = "default"
CHAT_PATH = "/api/chat"

logger = logging.getLogger("igfs_chat")


class ChatProvider(Protocol):
  async def generate(self, history: Sequence[Turn], message: str) -> str: ...


class ChatRequest(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  message: StrictStr = Field(..., min_length=1)
  session_id: Optional[StrictStr] = Field(default=None, alias="sessionId")


class ClearRequest(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  session_id: Optional[StrictStr] = Field(default=None, alias="sessionId")


class ChatResponse(BaseModel):
  reply: str


def resolve_session_id(session_id: Optional[str]) -> str:
  return session_id if session_id is not None else DEFAULT_SESSION_ID


def validation_details(path: str, exc: RequestValidationError) -> str:
  fields = {str(err["loc"][-1]) for err in exc.errors() if len(err.get("loc", ())) > 1}
  if "message" in fields:
    return "Message is required"
  if "sessionId" in fields:
    return "sessionId must be a string"
  if path == CHAT_PATH:
    return "Message is required"
  return "Request body must be a JSON object"


def create_app(
  client: ChatProvider,
  store: Optional[SessionStore] = None,
  allowed_origins: Optional[List[str]] = None,
) -> FastAPI:
  store = store if store is not None else SessionStore()
  origins = allowed_origins if allowed_origins is not None else ["https://igsofficial25.com"]

  app = FastAPI(title=SERVICE_NAME)
  app.state.store = store
  app.state.client = client

  app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
  )

  @app.exception_handler(RequestValidationError)
  async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
      {"error": "Invalid request", "details": validation_details(request.url.path, exc)},
      status_code=400,
    )

  @app.get("/")
  async def health() -> Dict[str, str]:
    return {"status": "ok", "service": SERVICE_NAME}

  @app.post(CHAT_PATH, response_model=ChatResponse)
  async def chat(payload: ChatRequest) -> JSONResponse:
    session_id = resolve_session_id(payload.session_id)
    message = payload.message

    async with store.lock(session_id):
      session = store.get_or_create(session_id)
      first_exchange = session.is_fresh
      outgoing = build_first_message(message) if first_exchange else message
      history = list(session.turns)
      logger.info(
        "Chat: session=%s first=%s history_turns=%s",
        session_id,
        first_exchange,
        len(history),
      )

      try:
        reply = await client.generate(history, outgoing)
      except Exception as exc:  # noqa: BLE001
        logger.exception("Gemini API error for session %s", session_id)
        return JSONResponse(
          {
            "error": "AI service temporarily unavailable",
            "details": str(exc) or "Unknown error",
            "fallback": FALLBACK_MESSAGE,
          },
          status_code=500,
        )

      reply = reply or EMPTY_REPLY
      if not store.append_exchange(session_id, message, reply, expected=session):
        logger.info("Session %s was cleared during the exchange; reply not recorded", session_id)

    return JSONResponse({"reply": reply})

  @app.post("/api/clear-chat")
  async def clear_chat(payload: Optional[ClearRequest] = None) -> Dict[str, str]:
    session_id = resolve_session_id(payload.session_id if payload is not None else None)
    store.clear(session_id)
    logger.info("Cleared session %s", session_id)
    return {"message": "Conversation cleared"}

  return app


def run() -> None:
  import uvicorn

  try:
    settings = Settings.from_env()
  except ConfigError as exc:
    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
    logger.error("%s", exc)
    sys.exit(1)

  logging.basicConfig(level=settings.log_level, format="[%(asctime)s] %(levelname)s - %(message)s")

  app = create_app(GeminiClient(settings), SessionStore(), settings.allowed_origins)
  logger.info("%s running at http://localhost:%s", SERVICE_NAME, settings.port)
  logger.info("Gemini key loaded: %s...", settings.gemini_api_key[:6])
  uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
