from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.caller import Caller
from src.app.use_cases.export import ExportTableUseCase
from src.depends import get_caller, get_unit_of_work

from .tables import raise_for

router = APIRouter(prefix="/export", tags=["Export"])


@router.get("/{table}", status_code=status.HTTP_200_OK)
async def export_table(
    table: str,
    tenant_id: Optional[str] = Query(None, description="Company whose rows to export"),
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Download one table's rows for a company as CSV.

    Raises:
        - 400 Bad Request: Missing tenant_id
        - 403 Forbidden: Company of another user
        - 404 Not Found: Unknown table, or no competitor matrix yet
    """
    result = await ExportTableUseCase(uow).execute(caller, table, tenant_id)
    if result.is_err():
        raise_for(result.error)

    export = result.value
    return Response(
        content=export.content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )
