from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from layerproof import __version__
from layerproof.api.errors import unhandled_error_handler, validation_error_handler
from layerproof.api.routes.grammar_check import router as grammar_check_router
from layerproof.api.routes.health import router as health_router
from layerproof.config import RelaySettings, get_settings


def create_app(settings: RelaySettings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="LayerProof API",
        description="Batched grammar, spelling, and punctuation checking for text layers.",
        version=__version__,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health_router, include_in_schema=False)
    app.include_router(grammar_check_router)

    return app
