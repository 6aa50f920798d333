"""Costume generation JSON endpoint.

POST only; OPTIONS answers with permissive CORS headers and an empty body so
bare preflights from any host succeed. Other methods get 405 via the app's
HTTP error handler.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from costume.models.contracts import CostumeRequest, CostumeResponse, ErrorResponse
from costume.pipeline.generate import generate_costume
from costume.pipeline.model_client import ChatCompletionClient, get_model_client

router = APIRouter(tags=["costume"])

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


@router.options("/generate-costume", include_in_schema=False)
async def generate_costume_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post(
    "/generate-costume",
    response_model=CostumeResponse,
    responses={
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def generate_costume_endpoint(
    body: CostumeRequest,
    client: ChatCompletionClient = Depends(get_model_client),
) -> CostumeResponse:
    """Generate a costume shopping list for a description and budget.

    Errors use the ``{"error": ...}`` shape; model API failures keep the
    upstream status and body.
    """
    return await generate_costume(body, client)
