"""Runtime discovery of optional ``accounts`` columns.

Deployments may run any migration revision of the accounts table. The probe
reads the table's column metadata once per process and the result decides
which column layout the account queries use.
"""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from roster.modules.accounts.models import SchemaCapabilities

logger = logging.getLogger(__name__)

ACCOUNTS_TABLE = "accounts"
FEDERATED_SUBJECT_COLUMN = "federated_subject_id"
AVATAR_COLUMN = "avatar_url"


def _column_names(connection: Connection, table_name: str) -> set[str]:
    return {column["name"].lower() for column in inspect(connection).get_columns(table_name)}


class SchemaCapabilityDetector:
    """Computes ``SchemaCapabilities`` once and serves the cached value after.

    Concurrent first callers wait on one lock, so exactly one probe runs and
    every caller receives the same frozen result.
    """

    def __init__(self, engine: AsyncEngine, *, table_name: str = ACCOUNTS_TABLE, timeout: float = 5.0) -> None:
        self._engine = engine
        self._table_name = table_name
        self._timeout = timeout
        self._lock = asyncio.Lock()
        self._capabilities: SchemaCapabilities | None = None

    @property
    def detected(self) -> bool:
        return self._capabilities is not None

    async def detect(self) -> SchemaCapabilities:
        if self._capabilities is not None:
            return self._capabilities
        async with self._lock:
            if self._capabilities is None:
                self._capabilities = await self._probe()
        return self._capabilities

    async def _probe(self) -> SchemaCapabilities:
        try:
            columns = await asyncio.wait_for(self._read_columns(), timeout=self._timeout)
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
            logger.warning("Schema probe on %s failed, optional columns disabled: %s", self._table_name, exc)
            return SchemaCapabilities.none()

        capabilities = SchemaCapabilities(
            supports_federated_id=FEDERATED_SUBJECT_COLUMN in columns,
            supports_avatar=AVATAR_COLUMN in columns,
        )
        logger.info(
            "Accounts schema: federated_subject_id=%s avatar_url=%s",
            capabilities.supports_federated_id,
            capabilities.supports_avatar,
        )
        return capabilities

    async def _read_columns(self) -> set[str]:
        async with self._engine.connect() as conn:
            return await conn.run_sync(_column_names, self._table_name)


__all__ = ["SchemaCapabilityDetector"]
