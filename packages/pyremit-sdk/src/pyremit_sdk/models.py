from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pyremit_sdk.types import (
    DeliveryChannel,
    PaymentMethod,
    RateSource,
    TransferStatus,
    WizardStep,
)


class Country(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    currency: str


class TransferRequest(BaseModel):
    destination_country: str = ""
    amount_usd: str = ""
    delivery_channel: DeliveryChannel | None = None
    recipient_name: str = ""
    recipient_details: str = ""
    payment_method: PaymentMethod | None = None
    card_number: str = ""
    card_expiry: str = ""
    card_cvv: str = ""
    sender_mobile: str = ""

    def redacted(self) -> "TransferRequest":
        """Copy safe to keep after submission: card digits masked, CVV dropped."""

        digits = "".join(ch for ch in self.card_number if ch.isdigit())
        masked = f"**** {digits[-4:]}" if digits else ""

        return self.model_copy(update={"card_number": masked, "card_cvv": ""})


class RateSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    rates: dict[str, Decimal]
    source: RateSource
    fetched_at: datetime | None = None
    error: str | None = None

    def get_rate(self, currency: str) -> Decimal | None:
        return self.rates.get(currency.upper())


class TransferQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount_usd: Decimal | None
    target_currency: str | None
    fee_usd: int
    rate: Decimal | None
    received_amount: int
    is_valid: bool


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str


class ReviewSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    send_currency: str
    amount_usd: Decimal
    fee_usd: int
    total_usd: Decimal
    exchange_rate: Decimal | None
    exchange_rate_display: str
    received_amount: int
    received_display: str
    target_currency: str | None
    destination_name: str | None
    delivery_channel: str
    recipient_name: str
    recipient_detail_label: str
    recipient_details: str
    payment_method: str
    is_valid: bool


class SubmittedTransfer(BaseModel):
    tracking_ref: str
    status: TransferStatus
    request: TransferRequest
    quote: TransferQuote
    created_at: datetime
    updated_at: datetime


class StepStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    step: WizardStep
    number: int
    valid: bool
