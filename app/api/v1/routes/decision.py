"""
Decision Route - POST /should-i-buy
Asks the model whether the user should make a purchase.
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.core.dependencies import get_pipeline
from app.core.security import require_client_id, verify_app_header
from app.middleware.cors import get_cors_headers
from app.services.decision.pipeline import DecisionPipeline

logger = logging.getLogger(__name__)

ROUTE_PATH = "/should-i-buy"

router = APIRouter(tags=["decision"])


@router.post(ROUTE_PATH, dependencies=[Depends(verify_app_header)])
async def should_i_buy(
    request: Request,
    client_id: str = Depends(require_client_id),
    pipeline: DecisionPipeline = Depends(get_pipeline),
):
    """
    Get a BUY / WAIT / NO decision for a purchase.

    Headers:
        X-PEZO-APP: Shared app secret
        X-CLIENT-ID: Opaque client identifier (quota key)

    Body:
        DecisionRequest JSON (item, price, currency, snapshot, ...)

    Returns:
        Decision JSON exactly as produced by the model, once validated
    """
    raw_body = await request.body()
    decision = await pipeline.run(client_id, raw_body)
    return JSONResponse(content=decision, headers=get_cors_headers())
