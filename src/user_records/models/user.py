"""
User-related Pydantic models
"""

from typing import Any, Dict
from pydantic import BaseModel


class User(BaseModel):
    uuid: str
    fullname: str
    study_level: str
    age: int

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "User":
        return cls(
            uuid=row["uuid"],
            fullname=row["fullname"],
            study_level=row["study_level"],
            age=row["age"]
        )


class ErrorResponse(BaseModel):
    error: str


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    database: str
