"""
SQLModel-backed tabular store.

Serves the tenant-owned tables listed in ``src.domain.tables``. Wire values
(strings from query parameters, JSON from request bodies) are coerced to the
column's declared type before they reach SQL.
"""

import logging
from typing import Any, Type

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.tabular_store import (
    Filters,
    ITabularStore,
    Row,
    StoreResponse,
)
from src.domain.base import TenantOwnedRecord, utcnow
from src.domain.tables import PROTECTED_COLUMNS, model_for

logger = logging.getLogger(__name__)

STORE_ASSIGNED_COLUMNS = ("id", "created_at", "updated_at")


class _StoreFailure(Exception):
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


def _model(table: str) -> Type[TenantOwnedRecord]:
    model = model_for(table)
    if model is None:
        raise _StoreFailure("UNKNOWN_TABLE", f"Unknown table '{table}'")
    return model


def _coerce(model: Type[TenantOwnedRecord], column: str, value: Any) -> Any:
    field = model.model_fields.get(column)
    if field is None:
        raise _StoreFailure(
            "UNKNOWN_COLUMN", f"Unknown column '{column}' on '{model.__tablename__}'"
        )
    try:
        return TypeAdapter(field.annotation).validate_python(value)
    except ValidationError:
        raise _StoreFailure("INVALID_FILTER", f"Invalid value for column '{column}'")


def _dump(record: TenantOwnedRecord) -> Row:
    return record.model_dump(mode="json")


class SqlTabularStore(ITabularStore):
    """Tabular store over an async SQLModel session (flushes, never commits)"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _query(self, model: Type[TenantOwnedRecord], filters: Filters):
        stmt = select(model)
        for column, value in filters.items():
            value = _coerce(model, column, value)
            stmt = stmt.where(getattr(model, column) == value)
        return stmt.order_by(model.id)

    async def _matching(self, model: Type[TenantOwnedRecord], filters: Filters):
        result = await self.session.exec(self._query(model, filters))
        return list(result.all())

    async def select(self, table: str, filters: Filters) -> StoreResponse:
        try:
            model = _model(table)
            records = await self._matching(model, filters)
            return StoreResponse.success([_dump(record) for record in records])
        except _StoreFailure as exc:
            return StoreResponse.failure(exc.code, exc.message)
        except SQLAlchemyError:
            logger.exception(f"Select on {table} failed")
            return StoreResponse.failure("STORE_ERROR", "Select failed")

    async def insert(self, table: str, row: Row) -> StoreResponse:
        try:
            model = _model(table)
            unknown = sorted(set(row) - set(model.model_fields))
            if unknown:
                raise _StoreFailure(
                    "UNKNOWN_COLUMN", f"Unknown column(s): {', '.join(unknown)}"
                )
            payload = {
                key: value
                for key, value in row.items()
                if key not in STORE_ASSIGNED_COLUMNS
            }
            try:
                record = model.model_validate(payload)
            except ValidationError as exc:
                fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
                raise _StoreFailure(
                    "INVALID_ROW", f"Invalid or missing column(s): {', '.join(fields)}"
                )

            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
            logger.debug(f"Inserted {table} row {record.id}")
            return StoreResponse.success([_dump(record)])
        except _StoreFailure as exc:
            return StoreResponse.failure(exc.code, exc.message)
        except IntegrityError:
            logger.warning(f"Insert on {table} violated a constraint")
            return StoreResponse.failure("CONSTRAINT_VIOLATION", "Row conflicts with an existing row")
        except SQLAlchemyError:
            logger.exception(f"Insert on {table} failed")
            return StoreResponse.failure("STORE_ERROR", "Insert failed")

    async def update(self, table: str, patch: Row, filters: Filters) -> StoreResponse:
        try:
            model = _model(table)
            protected = sorted(set(patch) & PROTECTED_COLUMNS)
            if protected:
                raise _StoreFailure(
                    "IMMUTABLE_COLUMN", f"Column(s) cannot be changed: {', '.join(protected)}"
                )
            values = {column: _coerce(model, column, value) for column, value in patch.items()}

            records = await self._matching(model, filters)
            for record in records:
                for column, value in values.items():
                    setattr(record, column, value)
                record.updated_at = utcnow()
                self.session.add(record)
            await self.session.flush()
            logger.debug(f"Updated {len(records)} {table} row(s)")
            return StoreResponse.success(None)
        except _StoreFailure as exc:
            return StoreResponse.failure(exc.code, exc.message)
        except IntegrityError:
            logger.warning(f"Update on {table} violated a constraint")
            return StoreResponse.failure("CONSTRAINT_VIOLATION", "Update conflicts with an existing row")
        except SQLAlchemyError:
            logger.exception(f"Update on {table} failed")
            return StoreResponse.failure("STORE_ERROR", "Update failed")

    async def delete(self, table: str, filters: Filters) -> StoreResponse:
        try:
            model = _model(table)
            records = await self._matching(model, filters)
            for record in records:
                await self.session.delete(record)
            await self.session.flush()
            logger.debug(f"Deleted {len(records)} {table} row(s)")
            return StoreResponse.success(None)
        except _StoreFailure as exc:
            return StoreResponse.failure(exc.code, exc.message)
        except SQLAlchemyError:
            logger.exception(f"Delete on {table} failed")
            return StoreResponse.failure("STORE_ERROR", "Delete failed")
