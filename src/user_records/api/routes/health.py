"""
Health check API route
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from user_records.models.user import HealthResponse
from user_records.services.user_service import UserService, get_user_service

router = APIRouter()


@router.get("/health", response_model=HealthResponse, responses={500: {"model": HealthResponse}})
async def health_check(service: UserService = Depends(get_user_service)):
    """Report service and database status using a trivial query"""
    result = await service.check_health()
    if not result.success:
        return JSONResponse(status_code=500, content=result.data)
    return result.data
