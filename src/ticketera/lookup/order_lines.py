from __future__ import annotations

import logging

from ..models import LineItem
from ..parsing import cell_text, parse_number_or_zero
from ..sheets.layout import ORDER_LINES_LAYOUT, ColumnBinding, TableLayout, resolve_columns
from ..sheets.workbook import TableSnapshot

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = ("quantity", "unit_price", "line_total")
_TEXT_FIELDS = ("code", "description")


def find_order_lines(
    table: TableSnapshot | None,
    order_id: str,
    layout: TableLayout = ORDER_LINES_LAYOUT,
) -> list[LineItem]:
    if table is None:
        logger.warning("Sheet %s not found; no line items for order %s", layout.sheet, order_id)
        return []

    binding = resolve_columns(table.headers, layout)
    wanted = str(order_id)
    items: list[LineItem] = []
    for row in table.rows:
        if cell_text(binding.value(row, layout.key_field)) != wanted:
            continue
        items.append(_line_item(row, binding))
    return items


def _line_item(row: tuple, binding: ColumnBinding) -> LineItem:
    values: dict[str, object] = {}
    for name in _TEXT_FIELDS:
        value = binding.value(row, name)
        values[name] = cell_text(value) if value is not None else None
    for name in _NUMERIC_FIELDS:
        number = parse_number_or_zero(binding.value(row, name))
        values[name] = number if number >= 0 else 0.0
    return LineItem(**values)
