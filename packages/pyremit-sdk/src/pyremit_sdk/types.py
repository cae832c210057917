from enum import StrEnum


class WizardStep(StrEnum):
    DESTINATION = "destination"
    DELIVERY = "delivery"
    RECIPIENT = "recipient"
    REVIEW = "review"


class DeliveryChannel(StrEnum):
    CASH_PICKUP = "cash-pickup"
    BANK_DEPOSIT = "bank-deposit"
    ECOCASH = "ecocash"
    MPESA = "mpesa"
    MOBILE_MONEY = "mobile-money"


class PaymentMethod(StrEnum):
    CREDIT_CARD = "credit-card"
    MOBILE_MONEY = "mobile-money"


class TransferStatus(StrEnum):
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class RateSource(StrEnum):
    INITIAL = "initial"
    LIVE = "live"
    FALLBACK = "fallback"


WALLET_CHANNELS = frozenset(
    {DeliveryChannel.ECOCASH, DeliveryChannel.MPESA, DeliveryChannel.MOBILE_MONEY}
)
