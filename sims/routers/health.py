from fastapi import APIRouter, Request

from sims.schemas.response_schemas import HealthResponse
from sims.utils.responses import ResponseBuilder

health_router = APIRouter()


@health_router.get("")
async def health_check(request: Request):
    """Liveness probe"""
    return ResponseBuilder.success(request=request, data=HealthResponse(ok=True))
