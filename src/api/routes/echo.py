"""
GET /request-id: report the identifier resolved for this request.

Reads it back the way any downstream handler would: from the request header
and from the request context.
"""

from fastapi import APIRouter, Request

from src.api.logging_config import get_logger
from src.api.schemas import RequestIDResponse
from src.requestid import get_context_value

router = APIRouter(tags=["request-id"])

logger = get_logger(__name__)


@router.get("/request-id", response_model=RequestIDResponse)
async def request_id(request: Request):
    settings = request.app.state.app_state.settings.request_id

    header_id = request.headers.get(settings.header, "")
    context_id = get_context_value(request, settings.context_key)

    logger.info("request_id_echoed", header_id=header_id, context_id=context_id)
    return RequestIDResponse(request_id=header_id, context_id=context_id)
