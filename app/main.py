from __future__ import annotations

import logging
from typing import Dict, Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from app.errors import BackendError, setup_exception_handlers
from config.settings import Settings, get_settings
from llm.backend import InferenceBackend, build_backend
from llm.core.memory import start_conversation


settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("chat_api")


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, description="User's message")


class ChatResponse(BaseModel):
    reply: str


class ErrorResponse(BaseModel):
    error: str


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Message is required"},
    500: {"model": ErrorResponse, "description": "Failed to process request"},
}


def get_backend(request: Request) -> InferenceBackend:
    return request.app.state.backend


async def welcome() -> str:
    return "Welcome to Chat API"


async def health() -> Dict[str, str]:
    return {"status": "ok"}


async def chat(req: ChatRequest, backend: InferenceBackend = Depends(get_backend)) -> ChatResponse:
    logger.info("Incoming chat: message_len=%s", len(req.message))
    try:
        reply, _ = await backend.chat(start_conversation(req.message))
    except Exception:
        logger.exception("Chat processing failed")
        raise BackendError()
    return ChatResponse(reply=reply)


async def chat_completions(
    req: ChatRequest, backend: InferenceBackend = Depends(get_backend)
) -> ChatResponse:
    logger.info("Incoming completion: message_len=%s", len(req.message))
    try:
        result = await backend.complete(req.message)
    except Exception:
        logger.exception("Completion processing failed")
        raise BackendError()
    return ChatResponse(reply=result)


def create_app(
    settings: Optional[Settings] = None,
    backend: Optional[InferenceBackend] = None,
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="Local Chat API", version="1.0.0")
    app.state.backend = backend or build_backend(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)

    app.add_api_route("/", welcome, methods=["GET"], response_class=PlainTextResponse)
    app.add_api_route("/health", health, methods=["GET"])
    app.add_api_route(
        "/chat",
        chat,
        methods=["POST"],
        response_model=ChatResponse,
        responses=ERROR_RESPONSES,
    )
    app.add_api_route(
        "/chat-completions",
        chat_completions,
        methods=["POST"],
        response_model=ChatResponse,
        responses=ERROR_RESPONSES,
    )
    return app


app = create_app(settings)


def run() -> None:
    logger.info("Server is running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
