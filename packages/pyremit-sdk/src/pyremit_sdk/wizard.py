"""Step-gated transfer wizard.

The wizard walks through four named steps::

    destination -> delivery -> recipient -> review

Forward moves are gated by the current step's validity, which is derived
from the live :class:`TransferRequest` every time it is asked for. Backward
moves are never gated. The review step is the last one: confirming there
submits the transfer and starts over with an empty request.
"""

import logging
from collections.abc import Callable
from datetime import date
from enum import StrEnum
from typing import Any

from pyremit_sdk.config import TransferLimits
from pyremit_sdk.countries import SUPPORTED_COUNTRIES, find_country
from pyremit_sdk.exceptions import UnknownFieldError, WizardStateError
from pyremit_sdk.fees import (
    DEFAULT_FEE_SCHEDULE,
    DEFAULT_LIMITS,
    FeeSchedule,
    RateLookup,
    quote as build_quote,
)
from pyremit_sdk.ledger import TransferLedger
from pyremit_sdk.models import (
    Country,
    ReviewSummary,
    StepStatus,
    SubmittedTransfer,
    TransferQuote,
    TransferRequest,
)
from pyremit_sdk.notifications import LoggingNotifier, Notifier, transfer_initiated
from pyremit_sdk.review import build_review
from pyremit_sdk.types import WALLET_CHANNELS, DeliveryChannel, PaymentMethod, WizardStep
from pyremit_sdk.validators import (
    parse_amount,
    validate_bank_account,
    validate_card_number,
    validate_cvv,
    validate_expiry,
    validate_mobile_number,
)

log = logging.getLogger(__name__)

STEP_ORDER: tuple[WizardStep, ...] = (
    WizardStep.DESTINATION,
    WizardStep.DELIVERY,
    WizardStep.RECIPIENT,
    WizardStep.REVIEW,
)

# step -> (previous, next)
TRANSITIONS: dict[WizardStep, tuple[WizardStep | None, WizardStep | None]] = {
    step: (
        STEP_ORDER[i - 1] if i > 0 else None,
        STEP_ORDER[i + 1] if i + 1 < len(STEP_ORDER) else None,
    )
    for i, step in enumerate(STEP_ORDER)
}

TRANSFER_FIELDS = frozenset(TransferRequest.model_fields)

_ENUM_FIELDS: dict[str, type[StrEnum]] = {
    "delivery_channel": DeliveryChannel,
    "payment_method": PaymentMethod,
}

INVALID_CARD_NUMBER = "Invalid card number"
INVALID_EXPIRY = "Invalid expiry date"
INVALID_CVV = "Invalid CVV"
INVALID_MOBILE = "Invalid mobile number. Include country code"
INVALID_BANK_ACCOUNT = "Invalid bank account"
INVALID_AMOUNT_TEXT = "Enter a valid amount"
UNSUPPORTED_COUNTRY = "Unsupported destination country"


def _coerce(name: str, value: Any) -> Any:
    enum_type = _ENUM_FIELDS.get(name)

    if enum_type is None:
        return "" if value is None else str(value)

    if value is None or value == "":
        return None

    try:
        return enum_type(value)
    except ValueError:
        # An unrecognised choice leaves the field unset so its step stays invalid
        log.debug("Ignoring unknown %s value %r", name, value)
        return None


class WizardController:
    """Owns one in-progress transfer and the step it is on.

    Collaborators are injected: ``rates`` answers ``get_rate(currency)``,
    ``notifier`` receives the transfer-initiated notification and ``ledger``
    records confirmed transfers.
    """

    def __init__(
        self,
        rates: RateLookup,
        *,
        schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
        limits: TransferLimits = DEFAULT_LIMITS,
        countries: tuple[Country, ...] = SUPPORTED_COUNTRIES,
        notifier: Notifier | None = None,
        ledger: TransferLedger | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._rates = rates
        self._schedule = schedule
        self._limits = limits
        self._countries = countries
        self._notifier = notifier or LoggingNotifier()
        self._ledger = ledger if ledger is not None else TransferLedger()
        self._today = today

        self._request = TransferRequest()
        self._step = STEP_ORDER[0]

    # -- state -------------------------------------------------------------

    @property
    def step(self) -> WizardStep:
        return self._step

    @property
    def step_number(self) -> int:
        return STEP_ORDER.index(self._step) + 1

    @property
    def total_steps(self) -> int:
        return len(STEP_ORDER)

    @property
    def request(self) -> TransferRequest:
        """A copy of the in-progress request; edit it through :meth:`set_field`."""
        return self._request.model_copy()

    @property
    def countries(self) -> tuple[Country, ...]:
        return self._countries

    @property
    def ledger(self) -> TransferLedger:
        return self._ledger

    def set_field(self, name: str, value: Any) -> None:
        """Write one request field. No validation happens here."""

        if name not in TRANSFER_FIELDS:
            raise UnknownFieldError(name)

        setattr(self._request, name, _coerce(name, value))

    def reset(self) -> None:
        self._request = TransferRequest()
        self._step = STEP_ORDER[0]

    # -- validity ----------------------------------------------------------

    def _resolve_step(self, step: WizardStep | int | str | None) -> WizardStep:
        if step is None:
            return self._step

        if isinstance(step, int) and not isinstance(step, bool):
            if not 1 <= step <= len(STEP_ORDER):
                raise ValueError(f"Step number must be 1-{len(STEP_ORDER)}, got {step}")
            return STEP_ORDER[step - 1]

        return WizardStep(step)

    def _destination_valid(self) -> bool:
        req = self._request
        amount = parse_amount(req.amount_usd)

        return (
            find_country(req.destination_country, self._countries) is not None
            and amount is not None
            and self._limits.allows(amount)
        )

    def _delivery_valid(self) -> bool:
        return self._request.delivery_channel is not None

    def _payment_valid(self) -> bool:
        req = self._request

        if req.payment_method == PaymentMethod.CREDIT_CARD:
            return (
                validate_card_number(req.card_number)
                and validate_expiry(req.card_expiry, self._today())
                and validate_cvv(req.card_cvv)
            )

        if req.payment_method == PaymentMethod.MOBILE_MONEY:
            return validate_mobile_number(req.sender_mobile)

        return False

    def _recipient_contact_valid(self) -> bool:
        req = self._request
        channel = req.delivery_channel

        if channel == DeliveryChannel.BANK_DEPOSIT:
            return validate_bank_account(req.recipient_details)

        if channel in WALLET_CHANNELS:
            return validate_mobile_number(
                req.recipient_details, req.destination_country or None
            )

        return channel == DeliveryChannel.CASH_PICKUP

    def _recipient_valid(self) -> bool:
        return (
            bool(self._request.recipient_name.strip())
            and self._payment_valid()
            and self._recipient_contact_valid()
        )

    def _review_valid(self) -> bool:
        return all(self.is_step_valid(s) for s in STEP_ORDER[:-1])

    def is_step_valid(self, step: WizardStep | int | str | None = None) -> bool:
        """Whether ``step`` (default: the current one) is complete.

        Recomputed from the request on every call; never cached.
        """

        checks = {
            WizardStep.DESTINATION: self._destination_valid,
            WizardStep.DELIVERY: self._delivery_valid,
            WizardStep.RECIPIENT: self._recipient_valid,
            WizardStep.REVIEW: self._review_valid,
        }

        return checks[self._resolve_step(step)]()

    def steps(self) -> list[StepStatus]:
        return [
            StepStatus(step=s, number=i + 1, valid=self.is_step_valid(s))
            for i, s in enumerate(STEP_ORDER)
        ]

    def field_errors(self, step: WizardStep | int | str | None = None) -> dict[str, str]:
        """Inline messages for filled-in fields that fail validation.

        Empty fields are not reported; they only keep the step invalid.
        """

        target = self._resolve_step(step)
        req = self._request
        errors: dict[str, str] = {}

        if target == WizardStep.DESTINATION:
            if req.destination_country and not find_country(
                req.destination_country, self._countries
            ):
                errors["destination_country"] = UNSUPPORTED_COUNTRY

            if req.amount_usd:
                amount = parse_amount(req.amount_usd)
                if amount is None:
                    errors["amount_usd"] = INVALID_AMOUNT_TEXT
                elif not self._limits.allows(amount):
                    errors["amount_usd"] = (
                        f"Amount must be between ${self._limits.min_amount_usd:,} "
                        f"and ${self._limits.max_amount_usd:,}"
                    )

        elif target == WizardStep.RECIPIENT:
            if req.payment_method == PaymentMethod.CREDIT_CARD:
                if req.card_number and not validate_card_number(req.card_number):
                    errors["card_number"] = INVALID_CARD_NUMBER
                if req.card_expiry and not validate_expiry(req.card_expiry, self._today()):
                    errors["card_expiry"] = INVALID_EXPIRY
                if req.card_cvv and not validate_cvv(req.card_cvv):
                    errors["card_cvv"] = INVALID_CVV

            elif req.payment_method == PaymentMethod.MOBILE_MONEY:
                if req.sender_mobile and not validate_mobile_number(req.sender_mobile):
                    errors["sender_mobile"] = INVALID_MOBILE

            if req.recipient_details and not self._recipient_contact_valid():
                if req.delivery_channel == DeliveryChannel.BANK_DEPOSIT:
                    errors["recipient_details"] = INVALID_BANK_ACCOUNT
                elif req.delivery_channel in WALLET_CHANNELS:
                    errors["recipient_details"] = INVALID_MOBILE

        return errors

    # -- figures -----------------------------------------------------------

    def _target_currency(self, request: TransferRequest) -> str | None:
        country = find_country(request.destination_country, self._countries)
        return country.currency if country else None

    def quote(self) -> TransferQuote:
        """Live fee and received-amount estimate for the current values."""

        return build_quote(
            self._request.amount_usd,
            self._target_currency(self._request),
            self._rates,
            self._schedule,
            self._limits,
        )

    def review(self) -> ReviewSummary:
        """Review figures for the request as it stands; only at the review step."""

        if self._step != WizardStep.REVIEW:
            raise WizardStateError(
                f"Review is only available at the review step, not {self._step}"
            )

        return build_review(
            self._request.model_copy(),
            self._rates,
            self._countries,
            self._schedule,
            self._limits,
        )

    # -- transitions -------------------------------------------------------

    def advance(self) -> WizardStep:
        """Move to the next step if the current one is valid; otherwise stay."""

        _, nxt = TRANSITIONS[self._step]

        if nxt is None:
            return self._step

        if not self.is_step_valid(self._step):
            log.debug("Advance refused at step %s", self._step)
            return self._step

        log.info("Wizard step %s -> %s", self._step, nxt)
        self._step = nxt

        return self._step

    def retreat(self) -> WizardStep:
        """Move back one step; stays on the first step."""

        prev, _ = TRANSITIONS[self._step]

        if prev is not None:
            log.info("Wizard step %s -> %s", self._step, prev)
            self._step = prev

        return self._step

    def edit(self) -> WizardStep:
        """Go back to the first step, keeping every field."""

        self._step = STEP_ORDER[0]

        return self._step

    def confirm(self) -> SubmittedTransfer:
        """Submit the reviewed transfer, notify, and start a fresh request.

        Raises:
            WizardStateError: not at the review step, or an earlier step no
                longer validates.
        """

        if self._step != WizardStep.REVIEW:
            raise WizardStateError(f"Cannot confirm at step {self._step}")

        if not self.is_step_valid(WizardStep.REVIEW):
            raise WizardStateError("Cannot confirm: transfer details are incomplete")

        frozen = self._request.model_copy()
        transfer_quote = self.quote()

        self._notifier.notify(
            transfer_initiated(transfer_quote.amount_usd, frozen.recipient_name.strip())
        )

        transfer = self._ledger.record(frozen.redacted(), transfer_quote)

        log.info(
            "Transfer %s confirmed, fee=%d received=%d %s",
            transfer.tracking_ref,
            transfer_quote.fee_usd,
            transfer_quote.received_amount,
            transfer_quote.target_currency,
        )

        self.reset()

        return transfer
