"""
CSV rendering of tenant-owned rows.

Columns carry human-readable labels; bookkeeping columns (tenant, timestamps)
are left out of the file.
"""

import csv
import io
from typing import Any, Dict, Iterable, List

from src.app.repositories.tabular_store import Row

HIDDEN_COLUMNS = ("tenant_id", "created_at", "updated_at")

COLUMN_LABELS: Dict[str, Dict[str, str]] = {
    "problems": {
        "description": "Problem overview",
        "current_solution": "How it is solved today",
        "impact": "Impact of the problem",
        "examples": "Examples and use cases",
        "frequency": "Frequency and occurrence",
        "segment": "Affected customer segment",
        "severity": "Severity of the problem",
    },
    "customer_segments": {"client_type": "Client type", "will_serve": "Will serve"},
    "financial_entries": {"entry_type": "Type", "entry_date": "Date"},
    "tasks": {"due_date": "Due date"},
}

MATRIX_FIRST_COLUMN = "Feature"


def column_label(table: str, column: str) -> str:
    labels = COLUMN_LABELS.get(table, {})
    if column in labels:
        return labels[column]
    if column == "id":
        return "ID"
    return column.replace("_", " ").capitalize()


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, list):
        parts = []
        for item in value:
            if isinstance(item, dict) and "month" in item:
                parts.append(f"{item['month']}: {item.get('value', '')}")
            else:
                parts.append(str(item))
        return "; ".join(parts)
    if isinstance(value, dict):
        return "; ".join(f"{key}: {val}" for key, val in value.items())
    return str(value).replace("\n", " ")


def _columns(rows: Iterable[Row]) -> List[str]:
    columns: List[str] = []
    for row in rows:
        for column in row:
            if column not in columns and column not in HIDDEN_COLUMNS:
                columns.append(column)
    return columns


def render_rows(table: str, rows: List[Row]) -> str:
    """One header line of labels, then one line per row"""
    columns = _columns(rows)
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow([column_label(table, column) for column in columns])
    for row in rows:
        writer.writerow([_cell(row.get(column)) for column in columns])
    return buf.getvalue()


def render_competitor_matrix(matrix: Row) -> str:
    """Criteria down the side, one column per competitor, Yes/No cells"""
    columns = list(matrix.get("columns") or [])
    cells = matrix.get("cells") or {}
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow([MATRIX_FIRST_COLUMN, *columns])
    for row in matrix.get("rows") or []:
        marks = cells.get(row, {})
        writer.writerow([row, *(_cell(bool(marks.get(column))) for column in columns)])
    return buf.getvalue()
