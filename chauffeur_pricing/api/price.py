"""Public price estimate endpoints"""
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from chauffeur_pricing.api.deps import get_estimate_handler
from chauffeur_pricing.core.enums import ResponseProjection
from chauffeur_pricing.core.response_builders import (
    PRICE_CALCULATION_ERROR,
    build_server_error_response,
    build_success_response,
    build_validation_error_response,
)
from chauffeur_pricing.schemas.estimate import PriceEstimateRequest
from chauffeur_pricing.services.estimates import EstimateHandler

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/price", tags=["price"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


async def _estimate_response(
    payload: PriceEstimateRequest,
    handler: EstimateHandler,
    projection: ResponseProjection,
) -> JSONResponse:
    try:
        result = await handler.estimate(payload, projection)
    except Exception as e:
        logger.error(f"Price calculation failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=build_server_error_response(PRICE_CALCULATION_ERROR, e),
        )

    if not result.success:
        return JSONResponse(status_code=400, content=build_validation_error_response(result.errors))

    return JSONResponse(status_code=200, content=build_success_response(result.data))


@router.post("")
async def price(
    payload: PriceEstimateRequest,
    handler: EstimateHandler = Depends(get_estimate_handler),
):
    return await _estimate_response(payload, handler, ResponseProjection.ESTIMATE)


@router.post("/estimate")
async def price_estimate(
    payload: PriceEstimateRequest,
    handler: EstimateHandler = Depends(get_estimate_handler),
):
    return await _estimate_response(payload, handler, ResponseProjection.FULL)


@router.options("")
@router.options("/estimate")
async def price_options():
    return Response(status_code=200, headers=CORS_HEADERS)
