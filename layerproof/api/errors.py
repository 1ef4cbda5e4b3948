"""Map failures to the ``{"success": false, ...}`` error envelope."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from layerproof.api.dependencies import get_app_settings
from layerproof.utils.openai_client import provider_secrets
from layerproof.utils.redact import redact_secret

logger = logging.getLogger(__name__)

TEXT_LAYERS_REQUIRED = "Invalid request: textLayers array required"
CHECK_FAILED = "Grammar check failed"


def error_payload(error: str, details: str | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": False, "error": error}
    if details is not None:
        payload["details"] = details
    return payload


def _validation_message(exc: RequestValidationError) -> str:
    for err in exc.errors():
        loc = tuple(err.get("loc", ()))
        # No body at all, or textLayers missing or not a list.
        if loc in (("body",), ("body", "textLayers")):
            return TEXT_LAYERS_REQUIRED

    parts = []
    for err in exc.errors():
        where = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{where}: {err.get('msg')}" if where else str(err.get("msg")))
    return f"Invalid request: {'; '.join(parts)}"


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = _validation_message(exc)
    logger.info("Rejected request to %s: %s", request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_payload(message),
    )


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Grammar check failed: %s", type(exc).__name__)
    settings = get_app_settings(request)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_payload(
            CHECK_FAILED,
            details=redact_secret(str(exc), *provider_secrets(settings)),
        ),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return internal_error_response(request, exc)
