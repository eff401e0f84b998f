"""
pytest configuration and fixtures for the user records test suite
In-memory gateway and recording logger injected through create_app
"""

import pytest
import pytest_asyncio
from typing import Any, Dict, List, Optional, Tuple

import httpx

from user_records.app import create_app
from user_records.database import schema
from user_records.database.connection import PersistenceError, PersistenceGateway
from user_records.utils.app_logger import AppLogger, build_log_entry


class InMemoryGateway(PersistenceGateway):
    """Gateway answering the users-table statements from a dict"""

    def __init__(self):
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.table_created = False
        self.fail_with: Optional[str] = None
        self.statements: List[Tuple[str, Tuple[Any, ...]]] = []
        self.closed = False

    def _check_failure(self):
        if self.fail_with:
            raise PersistenceError(self.fail_with)

    async def execute(self, query: str, *params: Any) -> int:
        self.statements.append((query, params))
        self._check_failure()

        if query == schema.CREATE_USERS_TABLE:
            self.table_created = True
            return 0
        if query == schema.INSERT_USER:
            user_uuid, fullname, study_level, age = params
            if user_uuid in self.rows:
                raise PersistenceError("duplicate key value violates unique constraint")
            self.rows[user_uuid] = {
                "uuid": user_uuid, "fullname": fullname, "study_level": study_level, "age": age
            }
            return 1
        if query == schema.UPDATE_USER:
            fullname, study_level, age, user_uuid = params
            if user_uuid not in self.rows:
                return 0
            self.rows[user_uuid].update(fullname=fullname, study_level=study_level, age=age)
            return 1
        if query == schema.DELETE_USER:
            (user_uuid,) = params
            return 1 if self.rows.pop(user_uuid, None) is not None else 0
        raise AssertionError(f"Unexpected statement: {query}")

    async def query(self, query: str, *params: Any) -> List[Dict[str, Any]]:
        self.statements.append((query, params))
        self._check_failure()

        if query == schema.PING:
            return [{"?column?": 1}]
        if query == schema.SELECT_ALL_USERS:
            return [dict(row) for row in self.rows.values()]
        if query == schema.SELECT_USER_BY_UUID:
            row = self.rows.get(params[0])
            return [dict(row)] if row else []
        raise AssertionError(f"Unexpected query: {query}")

    async def close(self) -> None:
        self.closed = True


class RecordingLogger(AppLogger):
    """Keeps log entries in memory"""

    def __init__(self):
        self.entries: List[Dict[str, Any]] = []
        self.started = False
        self.stopped = False

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def log(self, level: str, message: str, **context: Any) -> None:
        self.entries.append(build_log_entry(level, message, context))

    def at_level(self, level: str) -> List[Dict[str, Any]]:
        return [entry for entry in self.entries if entry["level"] == level]


@pytest.fixture
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture
def app_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def app(gateway, app_logger):
    return create_app(gateway=gateway, app_logger=app_logger, bootstrap_strict=False)


@pytest_asyncio.fixture
async def client(app):
    """HTTP client bound to the app without running its lifespan"""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def valid_user() -> Dict[str, Any]:
    return {"fullname": "Ana", "study_level": "MSc", "age": 24}
