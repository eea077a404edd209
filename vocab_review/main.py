"""FastAPI application factory."""
from __future__ import annotations

from typing import Callable, List

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vocab_review.api.v1 import api_router
from vocab_review.config import settings
from vocab_review.utils.exceptions import (
    ConfigurationError,
    EmptySelectionError,
    RemoteQueryError,
    VocabReviewException,
    handle_configuration_error,
    handle_empty_selection_error,
    handle_remote_query_error,
)


tags_metadata: List[dict[str, str]] = [
    {"name": "words", "description": "Browse and filter saved words."},
    {"name": "memorize", "description": "Run shuffled flashcard sessions over a selection."},
]

_ERROR_HANDLERS: dict[type[VocabReviewException], Callable[..., HTTPException]] = {
    ConfigurationError: handle_configuration_error,
    RemoteQueryError: handle_remote_query_error,
    EmptySelectionError: handle_empty_selection_error,
}


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Browse saved words and review them as shuffled flashcards.",
        version="0.1.0",
        openapi_tags=tags_metadata,
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors(), "message": "Validation failed"},
        )

    @app.exception_handler(VocabReviewException)
    async def application_exception_handler(
        request: Request, exc: VocabReviewException
    ) -> JSONResponse:
        for error_type, handler in _ERROR_HANDLERS.items():
            if isinstance(exc, error_type):
                http_exc = handler(exc)
                break
        else:
            http_exc = HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message
            )
        return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})

    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
