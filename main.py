from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from studybuddy.core.config import settings
from studybuddy.core.logging import setup_logging
from studybuddy.apis.chat.main import router as chat_router
from studybuddy.apis.quiz.main import router as quiz_router
from studybuddy.apis.flashcards.main import router as flashcards_router
from studybuddy.apis.notes.main import router as notes_router
from studybuddy.modules.chat.service import ChatService
from studybuddy.modules.chat.store import ChatStore
from studybuddy.modules.llm.registry import BackendRegistry

import uvicorn


def create_app(
    registry: Optional[BackendRegistry] = None,
    chat_store: Optional[ChatStore] = None,
) -> FastAPI:
    app = FastAPI(title=settings.app.name, version=settings.app.version)

    registry = registry or BackendRegistry.from_settings(settings.llm)
    app.state.registry = registry
    app.state.chat_store = chat_store or ChatStore()
    app.state.chat_service = ChatService(registry, max_turns=settings.llm.max_turns)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat_router)
    app.include_router(quiz_router)
    app.include_router(flashcards_router)
    app.include_router(notes_router)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
        }

    @app.get(f"/{settings.app.version}/health")
    async def health():
        return {
            "status": "ok",
            "default_provider": registry.default,
            "providers": {
                name: registry.get(name).is_configured for name in registry.names()
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    setup_logging()
    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.app.port,
            reload=not settings.app.is_production,
        )
    except Exception as e:
        print(f"An error occurred when starting the server: {e}.")
