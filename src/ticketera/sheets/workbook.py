from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from openpyxl import load_workbook

from ..errors import CollaboratorError
from ..parsing import cell_text


@dataclass(frozen=True, slots=True)
class TableSnapshot:
    headers: list[str]
    rows: list[tuple]


def load_tables(path: Path, sheet_names: Iterable[str]) -> dict[str, TableSnapshot | None]:
    """Copy the requested sheets out of a workbook; absent sheets map to None."""
    if not path.exists():
        raise CollaboratorError(f"Workbook not found: {path}")

    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except Exception as exc:
        raise CollaboratorError(f"Could not open workbook {path}: {exc}") from exc

    try:
        tables: dict[str, TableSnapshot | None] = {}
        for name in sheet_names:
            if name not in workbook.sheetnames:
                tables[name] = None
                continue
            tables[name] = _snapshot(workbook[name].iter_rows(values_only=True))
        return tables
    finally:
        workbook.close()


def table_from_rows(rows: Iterable[Iterable[object]]) -> TableSnapshot:
    return _snapshot(tuple(row) for row in rows)


def _snapshot(rows: Iterable[tuple]) -> TableSnapshot:
    materialized = [tuple(row) for row in rows]
    while materialized and all(value is None for value in materialized[-1]):
        materialized.pop()
    if not materialized:
        return TableSnapshot(headers=[], rows=[])
    headers = [cell_text(value) for value in materialized[0]]
    return TableSnapshot(headers=headers, rows=materialized[1:])
