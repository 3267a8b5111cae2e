"""
Table API Routes

Remote tabular store surface: per-table select/insert/update/delete filtered
by column equality. Query parameters are the equality filters; ``tenant_id``
is mandatory on every call.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.caller import Caller
from src.app.use_cases.tables import (
    DeleteRowsUseCase,
    InsertRowUseCase,
    SelectRowsUseCase,
    UpdateRowsUseCase,
)
from src.depends import get_caller, get_unit_of_work
from src.libs.result import Error

router = APIRouter(prefix="/tables", tags=["Tables"])

ERROR_STATUS = {
    "MISSING_TENANT_FILTER": status.HTTP_400_BAD_REQUEST,
    "MISSING_ID_FILTER": status.HTTP_400_BAD_REQUEST,
    "INVALID_TENANT_ID": status.HTTP_400_BAD_REQUEST,
    "UNKNOWN_COLUMN": status.HTTP_400_BAD_REQUEST,
    "IMMUTABLE_COLUMN": status.HTTP_400_BAD_REQUEST,
    "INVALID_ROW": status.HTTP_400_BAD_REQUEST,
    "INVALID_FILTER": status.HTTP_400_BAD_REQUEST,
    "TENANT_FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "UNKNOWN_TABLE": status.HTTP_404_NOT_FOUND,
    "NO_ROWS": status.HTTP_404_NOT_FOUND,
    "CONSTRAINT_VIOLATION": status.HTTP_409_CONFLICT,
}


def raise_for(error: Error):
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)


def query_filters(request: Request) -> Dict[str, Any]:
    return dict(request.query_params)


class InsertRequest(BaseModel):
    row: Dict[str, Any] = Field(..., description="Column values of the new row")


class UpdateRequest(BaseModel):
    patch: Dict[str, Any] = Field(..., description="Columns to overwrite")


class RowsResponse(BaseModel):
    data: Any = None


@router.get("/{table}", status_code=status.HTTP_200_OK, response_model=RowsResponse)
async def select_rows(
    table: str,
    filters: Dict[str, Any] = Depends(query_filters),
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Rows of ``table`` whose columns equal every query parameter, ordered by id.

    Raises:
        - 400 Bad Request: Missing tenant filter, unknown column, bad value
        - 403 Forbidden: Tenant of another company
        - 404 Not Found: Unknown table
    """
    result = await SelectRowsUseCase(uow).execute(caller, table, filters)
    if result.is_err():
        raise_for(result.error)
    return RowsResponse(data=result.value)


@router.post("/{table}", status_code=status.HTTP_201_CREATED, response_model=RowsResponse)
async def insert_row(
    table: str,
    request: InsertRequest,
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Create one row; the response echoes the stored row(s)"""
    result = await InsertRowUseCase(uow).execute(caller, table, request.row)
    if result.is_err():
        raise_for(result.error)
    return RowsResponse(data=result.value)


@router.patch("/{table}", status_code=status.HTTP_200_OK, response_model=RowsResponse)
async def update_rows(
    table: str,
    request: UpdateRequest,
    filters: Dict[str, Any] = Depends(query_filters),
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Overwrite columns of the record matching ``id`` and ``tenant_id``"""
    result = await UpdateRowsUseCase(uow).execute(caller, table, request.patch, filters)
    if result.is_err():
        raise_for(result.error)
    return RowsResponse(data=None)


@router.delete("/{table}", status_code=status.HTTP_200_OK, response_model=RowsResponse)
async def delete_rows(
    table: str,
    filters: Dict[str, Any] = Depends(query_filters),
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete the record matching ``id`` and ``tenant_id``"""
    result = await DeleteRowsUseCase(uow).execute(caller, table, filters)
    if result.is_err():
        raise_for(result.error)
    return RowsResponse(data=None)
