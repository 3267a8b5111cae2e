"""
Table Use Cases

Tenant-scoped select/insert/update/delete over the tabular store.
"""

from .delete_rows_use_case import DeleteRowsUseCase
from .insert_row_use_case import InsertRowUseCase
from .scope import resolve_tenant_scope
from .select_rows_use_case import SelectRowsUseCase
from .update_rows_use_case import UpdateRowsUseCase

__all__ = [
    "SelectRowsUseCase",
    "InsertRowUseCase",
    "UpdateRowsUseCase",
    "DeleteRowsUseCase",
    "resolve_tenant_scope",
]
