from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from layerproof.api.dependencies import get_checker
from layerproof.api.errors import internal_error_response
from layerproof.api.schemas import ErrorResponse, GrammarCheckRequest, GrammarCheckResponse
from layerproof.core import LayerProof

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["grammar"])

CHECK_PATH = "/grammar-check"


@router.post(
    CHECK_PATH,
    response_model=GrammarCheckResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def grammar_check(
    body: GrammarCheckRequest,
    request: Request,
    checker: LayerProof = Depends(get_checker),
) -> GrammarCheckResponse | JSONResponse:
    try:
        fragments = [layer.to_fragment() for layer in body.text_layers]
        batch_config = checker.batch_config(
            concurrency=body.batch_config.concurrency if body.batch_config else None,
            delay=body.batch_config.delay if body.batch_config else None,
        )
        outcome = await checker.check(fragments, batch_config)
        return GrammarCheckResponse.model_validate(outcome.to_response())
    except Exception as e:
        return internal_error_response(request, e)


@router.options(CHECK_PATH, include_in_schema=False)
async def grammar_check_preflight() -> Response:
    return Response(status_code=status.HTTP_200_OK)


@router.api_route(
    CHECK_PATH,
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def grammar_check_method_not_allowed() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method not allowed"},
    )
