from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from .errors import CollaboratorError, NotFoundError, RequestFormatError, TicketError, ValidationError
from .lookup.customers import find_customer
from .lookup.order_lines import find_order_lines
from .models import ReceiptRequest, TicketDocument, TicketResponse, TicketResult
from .render.pdf import render_ticket_pdf
from .settings import Settings
from .sheets.layout import Layouts
from .sheets.workbook import load_tables
from .storage import LocalFileStore, StoredFile, ticket_file_name
from .tax import compute_totals

logger = logging.getLogger(__name__)

Renderer = Callable[[TicketDocument], bytes]


class FileStore(Protocol):
    def save(self, name: str, payload: bytes) -> StoredFile: ...


def parse_ticket_body(body: bytes | str) -> ReceiptRequest:
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise RequestFormatError("Request body is not valid JSON.") from exc
    return parse_ticket_request(payload)


def parse_ticket_request(payload: object) -> ReceiptRequest:
    if not isinstance(payload, dict):
        raise RequestFormatError("Request body must be a JSON object.")
    try:
        return ReceiptRequest.model_validate(payload)
    except PydanticValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
        raise ValidationError(f"Request fields have unsupported values: {fields}") from exc


class TicketEngine:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        renderer: Renderer | None = None,
        store: FileStore | None = None,
        layouts: Layouts | None = None,
    ) -> None:
        self.settings = settings or Settings.detect()
        self.layouts = layouts or Layouts.load(self.settings.layouts_path)
        self.renderer = renderer or render_ticket_pdf
        self.store = store or LocalFileStore(self.settings.output_dir, base_url=self.settings.base_url)

    def generate(self, request: ReceiptRequest) -> TicketResult:
        if not request.order_id:
            raise ValidationError("Missing required field: id_orden")
        order_id = request.order_id
        if "/" in order_id or "\\" in order_id:
            raise ValidationError(f"id_orden must not contain path separators: {order_id!r}")

        customers_layout = self.layouts.customers
        lines_layout = self.layouts.order_lines
        tables = load_tables(self.settings.workbook_path, [customers_layout.sheet, lines_layout.sheet])

        customer = find_customer(tables.get(customers_layout.sheet), order_id, customers_layout)
        items = find_order_lines(tables.get(lines_layout.sheet), order_id, lines_layout)
        if not items:
            raise NotFoundError(f"No line items found for order {order_id}")

        totals = compute_totals(items, self.settings.tax_rate)
        file_name = ticket_file_name(order_id, request.date)
        document = TicketDocument(
            file_name=file_name,
            request=request,
            customer=customer,
            items=items,
            totals=totals,
            tax_rate=self.settings.tax_rate,
            currency=self.settings.currency,
            issuer=self.settings.issuer or None,
        )

        try:
            payload = self.renderer(document)
        except Exception as exc:
            raise CollaboratorError(f"Rendering {file_name} failed: {exc}") from exc

        try:
            stored = self.store.save(file_name, payload)
        except Exception as exc:
            raise CollaboratorError(f"Storing {file_name} failed: {exc}") from exc

        logger.info(
            "Generated %s for order %s: %d items, total %.2f",
            stored.name,
            order_id,
            len(items),
            totals.total_payable,
        )
        return TicketResult(file_name=stored.name, file_url=stored.url)


def handle_ticket_payload(engine: TicketEngine, body: bytes | str) -> TicketResponse:
    """Run one ticket request end to end; every failure becomes an error response."""
    try:
        request = parse_ticket_body(body)
        result = engine.generate(request)
    except TicketError as exc:
        logger.warning("Ticket request failed (%s): %s", type(exc).__name__, exc)
        return TicketResponse(status="error", message=str(exc))
    except Exception as exc:
        logger.exception("Unexpected failure while generating ticket")
        return TicketResponse(status="error", message=f"Ticket generation failed: {exc}")

    return TicketResponse(
        status="success",
        message=f"Ticket generated for order {request.order_id}",
        file_name=result.file_name,
        file_url=result.file_url,
    )
