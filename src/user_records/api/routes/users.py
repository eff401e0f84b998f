"""
User record API routes
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request

from user_records.models.user import ErrorResponse, MessageResponse, User
from user_records.services.user_service import (
    DATABASE_ERROR,
    NOT_FOUND,
    VALIDATION_ERROR,
    ServiceResult,
    UserService,
    get_user_service,
)

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    VALIDATION_ERROR: 400,
    NOT_FOUND: 404,
    DATABASE_ERROR: 500,
}

ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


async def read_json_body(request: Request) -> Any:
    """Parsed JSON body, or None when the body is missing or malformed"""
    try:
        return await request.json()
    except ValueError:
        logger.debug("Request body is not valid JSON")
        return None


def unwrap(result: ServiceResult) -> Any:
    """Return the result data or raise the HTTPException matching its error type"""
    if not result.success:
        raise HTTPException(
            status_code=ERROR_STATUS_CODES.get(result.error_type, 500),
            detail=result.error
        )
    return result.data


@router.get("", response_model=List[User], responses={500: ERROR_RESPONSES[500]})
async def list_users(service: UserService = Depends(get_user_service)):
    """List every user in storage order"""
    return unwrap(await service.list_users())


@router.get("/{uuid}", response_model=User, responses=ERROR_RESPONSES)
async def get_user(uuid: str, service: UserService = Depends(get_user_service)):
    """Get a user by uuid"""
    return unwrap(await service.get_user(uuid))


@router.post("", status_code=201, response_model=User, responses=ERROR_RESPONSES)
async def create_user(request: Request, service: UserService = Depends(get_user_service)):
    """Create a user; the uuid is generated by the server"""
    payload = await read_json_body(request)
    return unwrap(await service.create_user(payload))


@router.put("/{uuid}", responses=ERROR_RESPONSES)
async def update_user(uuid: str, request: Request, service: UserService = Depends(get_user_service)):
    """Replace fullname, study_level and age of a user"""
    payload = await read_json_body(request)
    return unwrap(await service.update_user(uuid, payload))


@router.delete("/{uuid}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_user(uuid: str, service: UserService = Depends(get_user_service)):
    """Delete a user by uuid"""
    return unwrap(await service.delete_user(uuid))
