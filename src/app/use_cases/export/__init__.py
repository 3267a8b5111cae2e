"""
Export Use Cases

CSV renderings of tenant-owned tables.
"""

from .csv_render import column_label, render_competitor_matrix, render_rows
from .export_table_use_case import ExportResponse, ExportTableUseCase

__all__ = [
    "ExportTableUseCase",
    "ExportResponse",
    "render_rows",
    "render_competitor_matrix",
    "column_label",
]
