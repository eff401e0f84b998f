"""
Record service for the users table

Every operation runs a single parameterized statement through the injected
gateway, writes one entry through the injected application logger and
returns a ServiceResult. Persistence failures never propagate out of an
operation.
"""

import uuid as uuid_lib
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Request

from user_records.database import schema
from user_records.database.connection import PersistenceError, PersistenceGateway
from user_records.models.user import User
from user_records.services.validation import coerce_age, validate_user
from user_records.utils.app_logger import AppLogger
from user_records.utils.error_handling import INTERNAL_ERROR_MESSAGE

VALIDATION_ERROR = "VALIDATION_ERROR"
NOT_FOUND = "NOT_FOUND"
DATABASE_ERROR = "DATABASE_ERROR"

INVALID_DATA_MESSAGE = "Données utilisateur invalides"
NOT_FOUND_MESSAGE = "Utilisateur non trouvé"
DELETED_MESSAGE = "Utilisateur supprimé"


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[Any] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None


def _invalid() -> ServiceResult:
    return ServiceResult(success=False, error=INVALID_DATA_MESSAGE, error_type=VALIDATION_ERROR)


def _not_found() -> ServiceResult:
    return ServiceResult(success=False, error=NOT_FOUND_MESSAGE, error_type=NOT_FOUND)


def _database_failure() -> ServiceResult:
    return ServiceResult(success=False, error=INTERNAL_ERROR_MESSAGE, error_type=DATABASE_ERROR)


class UserService:
    """CRUD operations on user records"""

    def __init__(self, gateway: PersistenceGateway, app_logger: AppLogger):
        self.gateway = gateway
        self.app_logger = app_logger

    async def list_users(self) -> ServiceResult:
        endpoint = "GET /api/users"
        try:
            rows = await self.gateway.query(schema.SELECT_ALL_USERS)
        except PersistenceError as e:
            self.app_logger.error(
                "Erreur lors de la récupération des utilisateurs GET /api/users",
                endpoint=endpoint, error=e
            )
            return _database_failure()

        users = [User.from_row(row).model_dump() for row in rows]
        self.app_logger.info("Listes des utilisateurs récupérée", endpoint=endpoint, count=len(users))
        return ServiceResult(success=True, data=users, count=len(users))

    async def get_user(self, user_uuid: str) -> ServiceResult:
        endpoint = f"GET /api/users/{user_uuid}"
        try:
            rows = await self.gateway.query(schema.SELECT_USER_BY_UUID, user_uuid)
        except PersistenceError as e:
            self.app_logger.error(
                "Erreur lors de la récupération de l'utilisateur GET /api/users/:uuid",
                endpoint=endpoint, error=e
            )
            return _database_failure()

        if not rows:
            return _not_found()

        self.app_logger.info("Utilisateur récupéré", endpoint=endpoint, uuid=user_uuid)
        return ServiceResult(success=True, data=User.from_row(rows[0]).model_dump(), count=1)

    async def create_user(self, data: Any) -> ServiceResult:
        endpoint = "POST /api/users"
        if not validate_user(data):
            self.app_logger.warn(
                "Validation échouée pour la création d'utilisateur",
                endpoint=endpoint, data=data
            )
            return _invalid()

        user = User(
            uuid=str(uuid_lib.uuid4()),
            fullname=data["fullname"],
            study_level=data["study_level"],
            age=coerce_age(data["age"])
        )
        try:
            await self.gateway.execute(
                schema.INSERT_USER, user.uuid, user.fullname, user.study_level, user.age
            )
        except PersistenceError as e:
            self.app_logger.error(
                "Erreur lors de la création de l'utilisateur POST /api/users",
                endpoint=endpoint, error=e
            )
            return _database_failure()

        self.app_logger.info("Utilisateur créé", endpoint=endpoint, uuid=user.uuid)
        return ServiceResult(success=True, data=user.model_dump(), count=1)

    async def update_user(self, user_uuid: str, data: Any) -> ServiceResult:
        """
        Replace fullname, study_level and age of an existing user

        The response echoes the submitted age as received; the stored value
        is the coerced integer.
        """
        endpoint = f"PUT /api/users/{user_uuid}"
        if not validate_user(data):
            self.app_logger.warn(
                "Validation échouée pour la mise à jour d'utilisateur",
                endpoint=endpoint, data=data
            )
            return _invalid()

        fullname, study_level, age = data["fullname"], data["study_level"], data["age"]
        try:
            affected = await self.gateway.execute(
                schema.UPDATE_USER, fullname, study_level, coerce_age(age), user_uuid
            )
        except PersistenceError as e:
            self.app_logger.error(
                "Erreur lors de la mise à jour de l'utilisateur PUT /api/users/:uuid",
                endpoint=endpoint, error=e
            )
            return _database_failure()

        if affected == 0:
            return _not_found()

        self.app_logger.info("Utilisateur mis à jour", endpoint=endpoint, uuid=user_uuid)
        updated: Dict[str, Any] = {
            "uuid": user_uuid,
            "fullname": fullname,
            "study_level": study_level,
            "age": age,
        }
        return ServiceResult(success=True, data=updated, count=affected)

    async def delete_user(self, user_uuid: str) -> ServiceResult:
        endpoint = f"DELETE /api/users/{user_uuid}"
        try:
            affected = await self.gateway.execute(schema.DELETE_USER, user_uuid)
        except PersistenceError as e:
            self.app_logger.error(
                "Erreur lors de la suppression de l'utilisateur DELETE /api/users/:uuid",
                endpoint=endpoint, error=e
            )
            return _database_failure()

        if affected == 0:
            return _not_found()

        self.app_logger.info(DELETED_MESSAGE, endpoint=endpoint, uuid=user_uuid)
        return ServiceResult(success=True, data={"message": DELETED_MESSAGE}, count=affected)

    async def check_health(self) -> ServiceResult:
        endpoint = "/health"
        try:
            await self.gateway.query(schema.PING)
        except PersistenceError as e:
            self.app_logger.error("Health check échoué", endpoint=endpoint, error=e)
            return ServiceResult(
                success=False,
                data={"status": "ERROR", "database": "disconnected"},
                error=str(e),
                error_type=DATABASE_ERROR
            )

        self.app_logger.info("Health check réussi", endpoint=endpoint)
        return ServiceResult(success=True, data={"status": "OK", "database": "connected"})


def get_user_service(request: Request) -> UserService:
    """FastAPI dependency returning the service bound to the running app"""
    return request.app.state.user_service
