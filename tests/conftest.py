from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from openpyxl import Workbook

from ticketera.settings import Settings

from sheet_data import DEFAULT_CUSTOMERS, DEFAULT_ORDER_LINES

WorkbookFactory = Callable[..., Path]


@pytest.fixture
def make_workbook(tmp_path: Path) -> WorkbookFactory:
    def _make(
        customers: list[list[object]] | None = DEFAULT_CUSTOMERS,
        order_lines: list[list[object]] | None = DEFAULT_ORDER_LINES,
        name: str = "orders.xlsx",
    ) -> Path:
        workbook = Workbook()
        workbook.remove(workbook.active)
        if customers is not None:
            sheet = workbook.create_sheet("Clientes")
            for row in customers:
                sheet.append(row)
        if order_lines is not None:
            sheet = workbook.create_sheet("Pedidos")
            for row in order_lines:
                sheet.append(row)
        if not workbook.sheetnames:
            workbook.create_sheet("Otros")
        path = tmp_path / name
        workbook.save(path)
        return path

    return _make


@pytest.fixture
def settings_for(tmp_path: Path) -> Callable[[Path], Settings]:
    def _settings(workbook_path: Path, **overrides: object) -> Settings:
        values: dict[str, object] = {
            "root": tmp_path,
            "workbook_path": workbook_path,
            "output_dir": tmp_path / "tickets",
            "layouts_path": tmp_path / "layouts.yml",
        }
        values.update(overrides)
        return Settings(**values)

    return _settings
