"""Fee and currency-conversion engine.

All amounts are computed in ``Decimal``. Both the fee and the received
amount are rounded up to whole units. An amount outside the configured
range, or a missing rate, yields the sentinel ``0`` rather than a number
that could be mistaken for a real figure.
"""

import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Protocol

from pydantic import BaseModel, ConfigDict, field_validator
from pyremit_sdk.config import TransferLimits
from pyremit_sdk.models import TransferQuote
from pyremit_sdk.validators import parse_amount

log = logging.getLogger(__name__)

INVALID_AMOUNT = 0

DEFAULT_FEE_RATE = Decimal("0.05")
DEFAULT_LIMITS = TransferLimits()

Amount = Decimal | int | float | str | None


class RateLookup(Protocol):
    def get_rate(self, currency: str) -> Decimal | float | None: ...


def lookup_rate(rates: RateLookup, currency: str | None) -> Decimal | None:
    """Rate for ``currency`` as a positive finite ``Decimal``, or ``None``."""

    if not currency:
        return None

    raw = rates.get_rate(currency)

    if raw is None or isinstance(raw, bool):
        return None

    try:
        rate = Decimal(str(raw))
    except InvalidOperation:
        return None

    if not rate.is_finite() or rate <= 0:
        return None

    return rate


class FeeSchedule(BaseModel):
    """Fee fraction per target currency, with a default for the rest."""

    model_config = ConfigDict(frozen=True)

    rates: dict[str, Decimal] = {}
    default_rate: Decimal = DEFAULT_FEE_RATE

    @field_validator("rates")
    @classmethod
    def _check_rates(cls, value: dict[str, Decimal]) -> dict[str, Decimal]:
        for currency, fraction in value.items():
            if not 0 <= fraction <= 1:
                raise ValueError(
                    f"Fee fraction for {currency} must be within [0, 1], got {fraction}"
                )
        return {currency.upper(): fraction for currency, fraction in value.items()}

    @field_validator("default_rate")
    @classmethod
    def _check_default(cls, value: Decimal) -> Decimal:
        if not 0 <= value <= 1:
            raise ValueError(f"Default fee fraction must be within [0, 1], got {value}")
        return value

    def rate_for(self, currency: str | None) -> Decimal:
        if not currency:
            return self.default_rate
        return self.rates.get(currency.upper(), self.default_rate)


DEFAULT_FEE_SCHEDULE = FeeSchedule(
    rates={"GBP": Decimal("0.10"), "ZAR": Decimal("0.20")},
)


def _in_range(amount: Decimal | None, limits: TransferLimits) -> bool:
    return amount is not None and limits.allows(amount)


def calculate_fee(
    amount_usd: Amount,
    target_currency: str | None,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
    limits: TransferLimits = DEFAULT_LIMITS,
) -> int:
    """Return the fee in whole USD, rounded up; ``0`` when the amount is out of range."""

    amount = parse_amount(amount_usd)

    if not _in_range(amount, limits):
        return INVALID_AMOUNT

    return math.ceil(amount * schedule.rate_for(target_currency))


def calculate_received_amount(
    amount_usd: Amount,
    target_currency: str | None,
    rates: RateLookup,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
    limits: TransferLimits = DEFAULT_LIMITS,
) -> int:
    """Return what the recipient gets in ``target_currency``, rounded up.

    ``0`` when the amount is out of range or no usable rate is known for the
    currency; an unknown rate is never treated as 1:1.
    """

    amount = parse_amount(amount_usd)

    if not _in_range(amount, limits) or not target_currency:
        return INVALID_AMOUNT

    rate = lookup_rate(rates, target_currency)

    if rate is None:
        log.debug("No usable rate for %s, received amount unavailable", target_currency)
        return INVALID_AMOUNT

    fee = calculate_fee(amount, target_currency, schedule, limits)

    return math.ceil((amount - fee) * rate)


def quote(
    amount_usd: Amount,
    target_currency: str | None,
    rates: RateLookup,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
    limits: TransferLimits = DEFAULT_LIMITS,
) -> TransferQuote:
    """Bundle the fee, rate and received amount shown while the user types."""

    amount = parse_amount(amount_usd)
    rate = lookup_rate(rates, target_currency)
    received = calculate_received_amount(amount, target_currency, rates, schedule, limits)

    return TransferQuote(
        amount_usd=amount,
        target_currency=target_currency,
        fee_usd=calculate_fee(amount, target_currency, schedule, limits),
        rate=rate,
        received_amount=received,
        is_valid=received != INVALID_AMOUNT,
    )
