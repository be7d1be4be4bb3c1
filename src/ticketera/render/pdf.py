from __future__ import annotations

from io import BytesIO

from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from ..models import TicketDocument

PAGE_WIDTH = 80 * mm
PAGE_HEIGHT = 297 * mm
MARGIN = 4 * mm
FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_SIZE = 8
LINE_HEIGHT = 10


class _TicketCanvas:
    """Top-down line writer over a narrow receipt page; starts a new page when full."""

    def __init__(self, buffer: BytesIO, *, title: str) -> None:
        self.canvas = canvas.Canvas(buffer, pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
        self.canvas.setTitle(title)
        self.y = self._top()

    def _top(self) -> float:
        return PAGE_HEIGHT - MARGIN - FONT_SIZE

    def _ensure_room(self) -> None:
        if self.y < MARGIN:
            self.canvas.showPage()
            self.y = self._top()

    def text(self, value: str, *, bold: bool = False, center: bool = False) -> None:
        font = FONT_BOLD if bold else FONT
        for line in simpleSplit(value, font, FONT_SIZE, PAGE_WIDTH - 2 * MARGIN) or [""]:
            self._ensure_room()
            self.canvas.setFont(font, FONT_SIZE)
            if center:
                self.canvas.drawCentredString(PAGE_WIDTH / 2, self.y, line)
            else:
                self.canvas.drawString(MARGIN, self.y, line)
            self.y -= LINE_HEIGHT

    def pair(self, label: str, value: str, *, bold: bool = False) -> None:
        self._ensure_room()
        self.canvas.setFont(FONT_BOLD if bold else FONT, FONT_SIZE)
        self.canvas.drawString(MARGIN, self.y, label)
        self.canvas.drawRightString(PAGE_WIDTH - MARGIN, self.y, value)
        self.y -= LINE_HEIGHT

    def rule(self) -> None:
        self._ensure_room()
        self.canvas.setLineWidth(0.5)
        self.canvas.line(MARGIN, self.y + FONT_SIZE / 2, PAGE_WIDTH - MARGIN, self.y + FONT_SIZE / 2)
        self.y -= LINE_HEIGHT / 2

    def save(self) -> None:
        self.canvas.save()


def format_money(value: float, currency: str) -> str:
    return f"{currency} {value:,.2f}".strip()


def format_quantity(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def render_ticket_pdf(document: TicketDocument) -> bytes:
    buffer = BytesIO()
    ticket = _TicketCanvas(buffer, title=document.file_name)
    req = document.request
    customer = document.customer
    currency = document.currency

    if document.issuer:
        ticket.text(document.issuer, bold=True, center=True)
    ticket.text(f"TICKET {req.order_id}", bold=True, center=True)
    if req.movement_type:
        ticket.text(req.movement_type, center=True)
    ticket.rule()

    ticket.pair("Fecha", req.date or "")
    ticket.pair("Hora", req.time or "")
    if req.employee:
        ticket.pair("Atendido por", req.employee)
    ticket.rule()

    name = customer.business_name or customer.full_name
    if name:
        ticket.text(f"Cliente: {name}")
    if customer.tax_id:
        ticket.text(f"RUC/DNI: {customer.tax_id}")
    if customer.contact:
        ticket.text(f"Contacto: {customer.contact}")
    address = req.address or customer.address
    if address:
        ticket.text(f"Dirección: {address}")
    ticket.rule()

    ticket.pair("Cant. x P.Unit", "Importe", bold=True)
    for item in document.items:
        label = " ".join(part for part in (item.code, item.description) if part)
        ticket.text(label or "-")
        ticket.pair(
            f"  {format_quantity(item.quantity)} x {item.unit_price:,.2f}",
            format_money(item.line_total, currency),
        )
    ticket.rule()

    totals = document.totals
    ticket.pair("Op. gravada", format_money(totals.pre_tax_subtotal, currency))
    ticket.pair(f"IGV {document.tax_rate * 100:g}%", format_money(totals.tax_amount, currency))
    ticket.pair("TOTAL", format_money(totals.total_payable, currency), bold=True)
    ticket.rule()

    if req.payment:
        ticket.pair("Pago", req.payment)
    if req.note:
        ticket.text(f"Obs.: {req.note}")

    ticket.save()
    return buffer.getvalue()
