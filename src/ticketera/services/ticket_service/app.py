from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI, Request

from ...engine import TicketEngine, handle_ticket_payload
from ...models import TicketResponse
from ...settings import Settings

settings = Settings.detect()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Ticketera Ticket Service", version="0.1.0")
engine = TicketEngine(settings)


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


@app.post("/tickets", response_model=TicketResponse, response_model_exclude_none=True)
async def create_ticket(request: Request) -> TicketResponse:
    body = await request.body()
    return await asyncio.to_thread(handle_ticket_payload, engine, body)
