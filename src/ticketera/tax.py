from __future__ import annotations

from collections.abc import Sequence

from .models import LineItem, Totals

DEFAULT_TAX_RATE = 0.18


def compute_totals(items: Sequence[LineItem], tax_rate: float = DEFAULT_TAX_RATE) -> Totals:
    """Back the tax out of tax-inclusive line totals.

    No rounding happens here; the renderer formats amounts for display.
    """
    total_payable = sum((item.line_total for item in items), 0.0)
    pre_tax_subtotal = total_payable / (1 + tax_rate)
    return Totals(
        pre_tax_subtotal=pre_tax_subtotal,
        tax_amount=total_payable - pre_tax_subtotal,
        total_payable=total_payable,
    )
