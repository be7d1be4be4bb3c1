from __future__ import annotations

import logging

from ..models import CustomerRecord
from ..parsing import cell_text
from ..sheets.layout import CUSTOMERS_LAYOUT, TableLayout, resolve_columns
from ..sheets.workbook import TableSnapshot

logger = logging.getLogger(__name__)


def find_customer(
    table: TableSnapshot | None,
    order_id: str,
    layout: TableLayout = CUSTOMERS_LAYOUT,
) -> CustomerRecord:
    """Return the first customer row whose match-key cell equals ``order_id``.

    The match key is the customer's tax-ID column. A missing sheet or a miss
    yields an empty record.
    """
    if table is None:
        logger.warning("Sheet %s not found; ticket for order %s has no customer data", layout.sheet, order_id)
        return CustomerRecord()

    binding = resolve_columns(table.headers, layout)
    wanted = str(order_id)
    for row in table.rows:
        if cell_text(binding.value(row, layout.key_field)) != wanted:
            continue
        values = {}
        for field_name in layout.fields():
            if field_name not in CustomerRecord.model_fields:
                continue
            value = binding.value(row, field_name)
            values[field_name] = cell_text(value) if value is not None else None
        return CustomerRecord(**values)

    logger.info("No customer row in sheet %s matches %s", layout.sheet, order_id)
    return CustomerRecord()
