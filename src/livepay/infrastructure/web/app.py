"""HTTP surface: FastAPI application.

- ``POST /orders/reserve``    structured reservation from the chat parser
- ``POST /webhooks/payments`` payment provider callback (signed)
- ``GET  /pay/{token}``       public payment page data
- ``GET  /health``

Endpoints are plain ``def`` so FastAPI runs them in its worker threads;
the ledger and order store locks serialize what must be serialized.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel, Field

from livepay.application.dto import ReserveRequest
from livepay.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidSignatureError,
    InvalidTransitionError,
    ProductInactiveError,
    ValidationError,
)
from livepay.domain.model.payment import PaymentEvent, PaymentOutcome
from livepay.infrastructure.bootstrap import Container, build_container

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-LivePay-Signature"


# ── Request / Response Models ───────────────────


class ReserveBody(BaseModel):
    vendorId: str = Field(min_length=1)
    keyword: str = Field(min_length=1)
    quantity: int = 1
    buyerPhone: str = Field(min_length=1)
    buyerName: str | None = None


class ReservationResponse(BaseModel):
    orderId: int
    paymentToken: str
    amount: int
    expiresAt: datetime


class PaymentWebhookBody(BaseModel):
    token: str = Field(min_length=1)
    providerRef: str = Field(min_length=1)
    amount: int = Field(ge=0)
    outcome: PaymentOutcome
    idempotencyKey: str | None = None


class PaymentAckResponse(BaseModel):
    result: str
    replayed: bool


class PaymentPageResponse(BaseModel):
    productName: str
    amount: int
    clientName: str | None
    status: str
    expiresAt: datetime
    vendorName: str


def create_app(container: Container | None = None, run_scheduler: bool = True) -> FastAPI:
    container = container or build_container()
    scheduler = container.scheduler() if run_scheduler else None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if scheduler is not None:
            scheduler.start()
        yield
        if scheduler is not None:
            scheduler.stop(timeout=container.settings.sweep_interval_seconds)

    app = FastAPI(title="LivePay Reservation Engine", lifespan=lifespan)
    app.state.container = container

    @app.post("/orders/reserve", status_code=201, response_model=ReservationResponse)
    def reserve(body: ReserveBody):
        try:
            dto = container.reserve_order().handle(
                ReserveRequest(
                    vendor_id=body.vendorId,
                    product_keyword=body.keyword,
                    quantity=body.quantity,
                    buyer_phone=body.buyerPhone,
                    buyer_name=body.buyerName,
                )
            )
        except EntityNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        except (InsufficientStockError, ProductInactiveError) as exc:
            raise HTTPException(status_code=409, detail=str(exc))
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=str(exc))
        return ReservationResponse(
            orderId=dto.order_id,
            paymentToken=dto.payment_token,
            amount=dto.amount,
            expiresAt=dto.expires_at,
        )

    @app.post("/webhooks/payments", response_model=PaymentAckResponse)
    def payment_webhook(
        body: PaymentWebhookBody,
        signature: str | None = Header(default=None, alias=SIGNATURE_HEADER),
    ):
        try:
            event = PaymentEvent(
                token=body.token,
                provider_ref=body.providerRef,
                amount=body.amount,
                outcome=body.outcome,
                idempotency_key=body.idempotencyKey,
            )
            ack = container.payment_handler.handle(event, signature)
        except InvalidSignatureError as exc:
            raise HTTPException(status_code=401, detail=str(exc))
        except EntityNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=str(exc))
        except InvalidTransitionError as exc:
            raise HTTPException(status_code=409, detail=str(exc))
        return PaymentAckResponse(result=ack.result, replayed=ack.replayed)

    @app.get("/pay/{token}", response_model=PaymentPageResponse)
    def payment_page(token: str):
        try:
            page = container.show_payment_page().handle(token)
        except EntityNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        return PaymentPageResponse(
            productName=page.product_name,
            amount=page.amount,
            clientName=page.client_name,
            status=page.status,
            expiresAt=page.expires_at,
            vendorName=page.vendor_name,
        )

    @app.get("/health")
    def health():
        return {"status": "ok", "service": "livepay"}

    return app
