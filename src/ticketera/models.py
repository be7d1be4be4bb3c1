from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CustomerRecord(BaseModel):
    order_id: str | None = None
    tax_id: str | None = None
    full_name: str | None = None
    business_name: str | None = None
    contact: str | None = None
    address: str | None = None


class LineItem(BaseModel):
    code: str | None = None
    description: str | None = None
    quantity: float = Field(default=0.0, ge=0)
    unit_price: float = Field(default=0.0, ge=0)
    line_total: float = Field(default=0.0, ge=0)


class Totals(BaseModel):
    pre_tax_subtotal: float = 0.0
    tax_amount: float = 0.0
    total_payable: float = 0.0


class ReceiptRequest(BaseModel):
    """Flat parameter bag sent by the ticket callback (Spanish wire names)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    order_id: str | None = Field(default=None, alias="id_orden")
    date: str | None = Field(default=None, alias="fecha")
    time: str | None = Field(default=None, alias="hora")
    address: str | None = Field(default=None, alias="direccion")
    note: str | None = Field(default=None, alias="observacion")
    employee: str | None = Field(default=None, alias="empleado")
    movement_type: str | None = Field(default=None, alias="tipo_movimiento")
    payment: str | None = Field(default=None, alias="pago")

    @field_validator("*", mode="before")
    @classmethod
    def _scalars_as_text(cls, value: object) -> object:
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return value


class TicketDocument(BaseModel):
    file_name: str
    request: ReceiptRequest
    customer: CustomerRecord
    items: list[LineItem]
    totals: Totals
    tax_rate: float
    currency: str = "S/"
    issuer: str | None = None


class TicketResult(BaseModel):
    file_name: str
    file_url: str


class TicketResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str
    message: str
    file_name: str | None = Field(default=None, alias="fileName")
    file_url: str | None = Field(default=None, alias="fileUrl")
