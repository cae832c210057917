"""Review summary shown before a transfer is confirmed."""

from decimal import Decimal

from pyremit_sdk.config import TransferLimits
from pyremit_sdk.countries import SUPPORTED_COUNTRIES, find_country
from pyremit_sdk.fees import (
    DEFAULT_FEE_SCHEDULE,
    DEFAULT_LIMITS,
    INVALID_AMOUNT,
    FeeSchedule,
    RateLookup,
    calculate_fee,
    calculate_received_amount,
    lookup_rate,
)
from pyremit_sdk.models import Country, ReviewSummary, TransferRequest
from pyremit_sdk.types import WALLET_CHANNELS, DeliveryChannel, PaymentMethod
from pyremit_sdk.validators import parse_amount


SEND_CURRENCY = "USD"

CHANNEL_LABELS: dict[DeliveryChannel, str] = {
    DeliveryChannel.CASH_PICKUP: "Cash Pickup",
    DeliveryChannel.BANK_DEPOSIT: "Bank Deposit",
    DeliveryChannel.ECOCASH: "EcoCash",
    DeliveryChannel.MPESA: "M-Pesa",
    DeliveryChannel.MOBILE_MONEY: "Mobile Money",
}

PAYMENT_LABELS: dict[PaymentMethod, str] = {
    PaymentMethod.CREDIT_CARD: "Credit/Debit Card",
    PaymentMethod.MOBILE_MONEY: "Mobile Money",
}


def recipient_detail_label(channel: DeliveryChannel | None) -> str:
    if channel == DeliveryChannel.BANK_DEPOSIT:
        return "Bank Account"
    if channel in WALLET_CHANNELS:
        return "Mobile Number"
    return "Contact Info"


def build_review(
    request: TransferRequest,
    rates: RateLookup,
    countries: tuple[Country, ...] = SUPPORTED_COUNTRIES,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
    limits: TransferLimits = DEFAULT_LIMITS,
) -> ReviewSummary:
    """Derive the review figures from a request and the current rates.

    Nothing is cached: calling this again after a rate refresh reflects the
    new rate.
    """
    amount = parse_amount(request.amount_usd) or Decimal(0)
    country = find_country(request.destination_country, countries)
    currency = country.currency if country else None

    rate = lookup_rate(rates, currency)
    fee = calculate_fee(amount, currency, schedule, limits)
    received = calculate_received_amount(amount, currency, rates, schedule, limits)

    if rate is not None and currency:
        rate_display = f"1 {SEND_CURRENCY} = {rate:.4f} {currency}"
    else:
        rate_display = "Rate unavailable"

    if received != INVALID_AMOUNT:
        received_display = f"{currency} {received:,}"
    else:
        received_display = "Invalid amount"

    channel = request.delivery_channel
    method = request.payment_method

    return ReviewSummary(
        send_currency=SEND_CURRENCY,
        amount_usd=amount,
        fee_usd=fee,
        total_usd=amount,
        exchange_rate=rate,
        exchange_rate_display=rate_display,
        received_amount=received,
        received_display=received_display,
        target_currency=currency,
        destination_name=country.name if country else None,
        delivery_channel=CHANNEL_LABELS.get(channel, "") if channel else "",
        recipient_name=request.recipient_name.strip(),
        recipient_detail_label=recipient_detail_label(channel),
        recipient_details=request.recipient_details,
        payment_method=PAYMENT_LABELS.get(method, "") if method else "",
        is_valid=received != INVALID_AMOUNT,
    )
