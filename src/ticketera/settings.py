from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path

from .tax import DEFAULT_TAX_RATE


def _resolve_from_root(root: Path, value: str) -> Path:
    candidate = Path(value)
    if candidate.is_absolute():
        return candidate
    return (root / candidate).resolve()


def find_project_root(start: Path | None = None) -> Path:
    cursor = (start or Path.cwd()).resolve()
    for candidate in [cursor, *cursor.parents]:
        if (candidate / "pyproject.toml").exists():
            return candidate
    return cursor


def _parse_tax_rate(raw: str) -> float:
    try:
        rate = float(raw)
    except ValueError as exc:
        raise ValueError(f"TICKETERA_TAX_RATE must be a number, got {raw!r}.") from exc
    if not math.isfinite(rate) or rate <= -1:
        raise ValueError(f"TICKETERA_TAX_RATE must be a finite number greater than -1, got {rate}.")
    return rate


@dataclass(frozen=True, slots=True)
class Settings:
    root: Path
    workbook_path: Path
    output_dir: Path
    layouts_path: Path
    tax_rate: float = DEFAULT_TAX_RATE
    base_url: str = ""
    issuer: str = ""
    currency: str = "S/"
    log_level: str = "INFO"

    @classmethod
    def detect(cls, start: Path | None = None) -> "Settings":
        root = find_project_root(start)

        workbook_path = _resolve_from_root(root, os.getenv("TICKETERA_WORKBOOK", "data/orders.xlsx"))
        output_dir = _resolve_from_root(root, os.getenv("TICKETERA_OUTPUT_DIR", "data/tickets"))
        layouts_path = _resolve_from_root(root, os.getenv("TICKETERA_LAYOUTS", "data/layouts.yml"))

        return cls(
            root=root,
            workbook_path=workbook_path,
            output_dir=output_dir,
            layouts_path=layouts_path,
            tax_rate=_parse_tax_rate(os.getenv("TICKETERA_TAX_RATE", str(DEFAULT_TAX_RATE))),
            base_url=os.getenv("TICKETERA_BASE_URL", "").rstrip("/"),
            issuer=os.getenv("TICKETERA_ISSUER", ""),
            currency=os.getenv("TICKETERA_CURRENCY", "S/"),
            log_level=os.getenv("TICKETERA_LOG_LEVEL", "INFO").upper(),
        )
