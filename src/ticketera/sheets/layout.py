from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    field: str
    header: str
    position: int


@dataclass(frozen=True, slots=True)
class TableLayout:
    sheet: str
    key_field: str
    columns: tuple[ColumnSpec, ...]

    def fields(self) -> list[str]:
        return [col.field for col in self.columns]


@dataclass(frozen=True, slots=True)
class ColumnBinding:
    """Column index per logical field, resolved once per table load."""

    indexes: dict[str, int]
    fallback_fields: list[str] = field(default_factory=list)

    def value(self, row: Sequence[object], field_name: str) -> object:
        index = self.indexes.get(field_name)
        if index is None or index >= len(row):
            return None
        return row[index]


CUSTOMERS_LAYOUT = TableLayout(
    sheet="Clientes",
    key_field="tax_id",
    columns=(
        ColumnSpec("order_id", "ID_ORDEN", 0),
        ColumnSpec("tax_id", "RUC", 1),
        ColumnSpec("full_name", "NOMBRE", 2),
        ColumnSpec("business_name", "RAZON_SOCIAL", 3),
        ColumnSpec("contact", "CONTACTO", 4),
        ColumnSpec("address", "DIRECCION", 5),
    ),
)

ORDER_LINES_LAYOUT = TableLayout(
    sheet="Pedidos",
    key_field="order_id",
    columns=(
        ColumnSpec("order_id", "ID_ORDEN", 0),
        ColumnSpec("code", "CODIGO", 1),
        ColumnSpec("description", "DESCRIPCION", 2),
        ColumnSpec("quantity", "CANTIDAD", 3),
        ColumnSpec("unit_price", "PRECIO_UNITARIO", 4),
        ColumnSpec("line_total", "TOTAL", 5),
    ),
)


@dataclass(frozen=True, slots=True)
class Layouts:
    customers: TableLayout = CUSTOMERS_LAYOUT
    order_lines: TableLayout = ORDER_LINES_LAYOUT

    @classmethod
    def load(cls, path: Path) -> "Layouts":
        if not path.exists():
            return cls()
        data = _load_yaml(path)
        if data is None:
            return cls()
        return cls(
            customers=_layout_from_mapping(data.get("customers"), CUSTOMERS_LAYOUT),
            order_lines=_layout_from_mapping(data.get("order_lines"), ORDER_LINES_LAYOUT),
        )


def resolve_columns(headers: Sequence[str], layout: TableLayout) -> ColumnBinding:
    # Header names are matched exactly; a missing header falls back to its documented position.
    positions: dict[str, int] = {}
    for idx, header in enumerate(headers):
        positions.setdefault(header, idx)

    indexes: dict[str, int] = {}
    fallback_fields: list[str] = []
    for col in layout.columns:
        if col.header in positions:
            indexes[col.field] = positions[col.header]
        else:
            indexes[col.field] = col.position
            fallback_fields.append(col.field)

    if fallback_fields:
        logger.warning(
            "Sheet %s: headers not found for %s, using fixed column positions",
            layout.sheet,
            ", ".join(fallback_fields),
        )
    return ColumnBinding(indexes=indexes, fallback_fields=fallback_fields)


def _layout_from_mapping(raw: object, default: TableLayout) -> TableLayout:
    if raw is None:
        return default
    if not isinstance(raw, dict):
        raise ValueError(f"Expected a mapping for sheet layout {default.sheet!r}, got {type(raw).__name__}.")

    raw_columns = raw.get("columns") or {}
    if not isinstance(raw_columns, dict):
        raise ValueError(f"Expected a mapping of columns for sheet layout {default.sheet!r}, got {type(raw_columns).__name__}.")

    known = {col.field: col for col in default.columns}
    columns = []
    for field_name, spec in raw_columns.items():
        base = known.get(str(field_name))
        spec = spec or {}
        if not isinstance(spec, dict):
            raise ValueError(
                f"Expected a mapping for column {field_name!r} in sheet layout {default.sheet!r}, got {type(spec).__name__}."
            )
        header = spec.get("header", base.header if base else field_name)
        position = spec.get("position", base.position if base else None)
        if position is None:
            raise ValueError(f"Column {field_name!r} in sheet layout {default.sheet!r} needs a position.")
        columns.append(ColumnSpec(field=str(field_name), header=str(header), position=int(position)))

    # Fields the override does not mention keep their defaults.
    overridden = {col.field for col in columns}
    columns.extend(col for col in default.columns if col.field not in overridden)

    key_field = str(raw.get("key") or default.key_field)
    if key_field not in overridden and key_field not in known:
        raise ValueError(f"Key {key_field!r} in sheet layout {default.sheet!r} is not one of its columns.")

    return TableLayout(
        sheet=str(raw.get("sheet") or default.sheet),
        key_field=key_field,
        columns=tuple(columns),
    )


def _load_yaml(path: Path) -> dict | None:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping at {path}, got {type(data).__name__}.")
    return data
