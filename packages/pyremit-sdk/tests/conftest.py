"""Shared fixtures for the SDK test suite."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from pyremit_sdk.notifications import RecordingNotifier
from pyremit_sdk.wizard import WizardController

TODAY = date(2026, 10, 19)

VALID_CARD = "4539 1488 0343 6467"


@dataclass
class StaticRates:
    """Rate lookup backed by a plain dict, editable between calls."""

    rates: dict[str, Decimal] = field(default_factory=dict)

    def get_rate(self, currency: str) -> Decimal | None:
        return self.rates.get(currency.upper())


@pytest.fixture
def rates() -> StaticRates:
    return StaticRates({"GBP": Decimal("0.8"), "ZAR": Decimal("18.5")})


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def wizard(rates: StaticRates, notifier: RecordingNotifier) -> WizardController:
    return WizardController(rates, notifier=notifier, today=lambda: TODAY)


@pytest.fixture
def fake_session() -> MagicMock:
    """A curl_cffi Session mock usable as a context manager."""
    session = MagicMock()
    session.__enter__.return_value = session
    session.__exit__.return_value = False
    return session


@pytest.fixture
def at_recipient(wizard: WizardController) -> WizardController:
    """Wizard on the recipient step: 100 USD to GB by bank deposit."""
    wizard.set_field("destination_country", "GB")
    wizard.set_field("amount_usd", "100")
    wizard.advance()
    wizard.set_field("delivery_channel", "bank-deposit")
    wizard.advance()
    return wizard


@pytest.fixture
def at_review(at_recipient: WizardController) -> WizardController:
    """Wizard on the review step with a valid card payment."""
    at_recipient.set_field("recipient_name", "Jane Doe")
    at_recipient.set_field("recipient_details", "12345678")
    at_recipient.set_field("payment_method", "credit-card")
    at_recipient.set_field("card_number", VALID_CARD)
    at_recipient.set_field("card_expiry", "12/28")
    at_recipient.set_field("card_cvv", "123")
    at_recipient.advance()
    return at_recipient
