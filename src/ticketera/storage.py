from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


def ticket_file_name(order_id: str, date: str | None) -> str:
    date_part = (date or "").replace("/", "-")
    return f"TICKET_{order_id}_{date_part}.pdf"


@dataclass(frozen=True, slots=True)
class StoredFile:
    name: str
    url: str


@dataclass(frozen=True, slots=True)
class LocalFileStore:
    root: Path
    base_url: str = ""

    def save(self, name: str, payload: bytes) -> StoredFile:
        if not name or Path(name).name != name or "\\" in name:
            raise ValueError(f"Invalid file name for the ticket store: {name!r}")
        path = self.root / name
        write_bytes(path, payload)
        return StoredFile(name=name, url=self.url_for(path))

    def url_for(self, path: Path) -> str:
        if self.base_url:
            return f"{self.base_url.rstrip('/')}/{path.name}"
        return path.resolve().as_uri()


def write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
