from pathlib import Path

import pytest

from ticketera.storage import LocalFileStore, ticket_file_name


def test_ticket_file_name_replaces_date_slashes() -> None:
    assert ticket_file_name("1002", "19/10/2026") == "TICKET_1002_19-10-2026.pdf"
    assert ticket_file_name("1002", "2026-10-19") == "TICKET_1002_2026-10-19.pdf"
    assert ticket_file_name("1002", None) == "TICKET_1002_.pdf"


def test_local_file_store_writes_and_reports_public_url(tmp_path: Path) -> None:
    store = LocalFileStore(tmp_path / "tickets", base_url="https://files.example.com/tickets/")

    stored = store.save("TICKET_1002_19-10-2026.pdf", b"%PDF-1.4 test")

    assert stored.name == "TICKET_1002_19-10-2026.pdf"
    assert stored.url == "https://files.example.com/tickets/TICKET_1002_19-10-2026.pdf"
    assert (tmp_path / "tickets" / stored.name).read_bytes() == b"%PDF-1.4 test"


def test_local_file_store_defaults_to_file_uri(tmp_path: Path) -> None:
    store = LocalFileStore(tmp_path)

    stored = store.save("TICKET_7_.pdf", b"data")

    assert stored.url.startswith("file://")
    assert stored.url.endswith("/TICKET_7_.pdf")


@pytest.mark.parametrize("name", ["", "../escape.pdf", "sub/dir.pdf"])
def test_local_file_store_rejects_path_like_names(tmp_path: Path, name: str) -> None:
    with pytest.raises(ValueError):
        LocalFileStore(tmp_path).save(name, b"data")
