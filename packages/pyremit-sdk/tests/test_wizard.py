"""Unit tests for pyremit_sdk.wizard."""

from decimal import Decimal

import pytest
from pyremit_sdk.exceptions import UnknownFieldError, WizardStateError
from pyremit_sdk.models import TransferRequest
from pyremit_sdk.notifications import RecordingNotifier
from pyremit_sdk.types import (
    DeliveryChannel,
    PaymentMethod,
    TransferStatus,
    WizardStep,
)
from pyremit_sdk.wizard import STEP_ORDER, TRANSITIONS, WizardController


class TestTransitionTable:
    def test_order(self) -> None:
        assert STEP_ORDER == (
            WizardStep.DESTINATION,
            WizardStep.DELIVERY,
            WizardStep.RECIPIENT,
            WizardStep.REVIEW,
        )

    def test_ends_have_no_neighbour(self) -> None:
        assert TRANSITIONS[WizardStep.DESTINATION][0] is None
        assert TRANSITIONS[WizardStep.REVIEW][1] is None


class TestSetField:
    def test_writes_without_validating(self, wizard: WizardController) -> None:
        wizard.set_field("amount_usd", "not a number")
        assert wizard.request.amount_usd == "not a number"

    def test_coerces_enum_values(self, wizard: WizardController) -> None:
        wizard.set_field("payment_method", "mobile-money")
        wizard.set_field("delivery_channel", "ecocash")
        assert wizard.request.payment_method == PaymentMethod.MOBILE_MONEY
        assert wizard.request.delivery_channel == DeliveryChannel.ECOCASH

    def test_unknown_enum_value_leaves_field_unset(self, wizard: WizardController) -> None:
        wizard.set_field("payment_method", "bitcoin")
        assert wizard.request.payment_method is None

    def test_none_clears_text_field(self, wizard: WizardController) -> None:
        wizard.set_field("recipient_name", "Jane")
        wizard.set_field("recipient_name", None)
        assert wizard.request.recipient_name == ""

    def test_numbers_are_stored_as_text(self, wizard: WizardController) -> None:
        wizard.set_field("amount_usd", 250)
        assert wizard.request.amount_usd == "250"

    def test_unknown_field(self, wizard: WizardController) -> None:
        with pytest.raises(UnknownFieldError):
            wizard.set_field("recipient_email", "x@example.com")

    def test_request_is_a_copy(self, wizard: WizardController) -> None:
        copy = wizard.request
        copy.recipient_name = "Mallory"
        assert wizard.request.recipient_name == ""


class TestDestinationStep:
    def test_starts_on_destination(self, wizard: WizardController) -> None:
        assert wizard.step == WizardStep.DESTINATION
        assert wizard.step_number == 1
        assert wizard.total_steps == 4

    def test_requires_country_and_amount(self, wizard: WizardController) -> None:
        assert wizard.is_step_valid() is False
        wizard.set_field("destination_country", "GB")
        assert wizard.is_step_valid() is False
        wizard.set_field("amount_usd", "100")
        assert wizard.is_step_valid() is True

    def test_unsupported_country(self, wizard: WizardController) -> None:
        wizard.set_field("destination_country", "FR")
        wizard.set_field("amount_usd", "100")
        assert wizard.is_step_valid() is False

    @pytest.mark.parametrize(
        "amount, valid",
        [("9.99", False), ("10", True), ("5000", True), ("5000.01", False), ("abc", False)],
    )
    def test_amount_range(self, wizard: WizardController, amount: str, valid: bool) -> None:
        wizard.set_field("destination_country", "ZA")
        wizard.set_field("amount_usd", amount)
        assert wizard.is_step_valid(1) is valid

    def test_advance_refused_when_invalid(self, wizard: WizardController) -> None:
        wizard.set_field("destination_country", "GB")
        wizard.set_field("amount_usd", "5")
        assert wizard.advance() == WizardStep.DESTINATION
        assert wizard.step == WizardStep.DESTINATION

    def test_advance_when_valid(self, wizard: WizardController) -> None:
        wizard.set_field("destination_country", "GB")
        wizard.set_field("amount_usd", "100")
        assert wizard.advance() == WizardStep.DELIVERY


class TestDeliveryStep:
    def test_requires_channel(self, wizard: WizardController) -> None:
        wizard.set_field("destination_country", "GB")
        wizard.set_field("amount_usd", "100")
        wizard.advance()

        assert wizard.advance() == WizardStep.DELIVERY

        wizard.set_field("delivery_channel", "cash-pickup")
        assert wizard.advance() == WizardStep.RECIPIENT


class TestRecipientStep:
    def _fill_card(self, wizard: WizardController, cvv: str) -> None:
        wizard.set_field("recipient_name", "Jane Doe")
        wizard.set_field("recipient_details", "12345678")
        wizard.set_field("payment_method", "credit-card")
        wizard.set_field("card_number", "4539 1488 0343 6467")
        wizard.set_field("card_expiry", "12/28")
        wizard.set_field("card_cvv", cvv)

    def test_invalid_cvv_blocks_then_fix_advances(self, at_recipient: WizardController) -> None:
        self._fill_card(at_recipient, cvv="12")

        assert at_recipient.advance() == WizardStep.RECIPIENT
        assert at_recipient.is_step_valid() is False

        at_recipient.set_field("card_cvv", "123")

        assert at_recipient.is_step_valid() is True
        assert at_recipient.advance() == WizardStep.REVIEW

    def test_is_step_valid_is_idempotent(self, at_recipient: WizardController) -> None:
        self._fill_card(at_recipient, cvv="123")
        before = at_recipient.request

        results = {at_recipient.is_step_valid() for _ in range(5)}

        assert results == {True}
        assert at_recipient.request == before
        assert at_recipient.step == WizardStep.RECIPIENT

    def test_requires_recipient_name(self, at_recipient: WizardController) -> None:
        self._fill_card(at_recipient, cvv="123")
        at_recipient.set_field("recipient_name", "   ")
        assert at_recipient.is_step_valid() is False

    def test_requires_payment_method(self, at_recipient: WizardController) -> None:
        self._fill_card(at_recipient, cvv="123")
        at_recipient.set_field("payment_method", "")
        assert at_recipient.is_step_valid() is False

    def test_expired_card(self, at_recipient: WizardController) -> None:
        self._fill_card(at_recipient, cvv="123")
        at_recipient.set_field("card_expiry", "09/26")
        assert at_recipient.is_step_valid() is False

    def test_mobile_money_sender(self, at_recipient: WizardController) -> None:
        at_recipient.set_field("recipient_name", "Jane Doe")
        at_recipient.set_field("recipient_details", "12345678")
        at_recipient.set_field("payment_method", "mobile-money")
        at_recipient.set_field("sender_mobile", "0711234567")
        assert at_recipient.is_step_valid() is False

        at_recipient.set_field("sender_mobile", "+27711234567")
        assert at_recipient.is_step_valid() is True

    def test_card_fields_ignored_for_mobile_money(self, at_recipient: WizardController) -> None:
        self._fill_card(at_recipient, cvv="x")
        at_recipient.set_field("payment_method", "mobile-money")
        at_recipient.set_field("sender_mobile", "+447400123456")
        assert at_recipient.is_step_valid() is True

    def test_bank_deposit_needs_account(self, at_recipient: WizardController) -> None:
        self._fill_card(at_recipient, cvv="123")
        at_recipient.set_field("recipient_details", "12345")
        assert at_recipient.is_step_valid() is False

    def test_wallet_channel_needs_phone(self, at_recipient: WizardController) -> None:
        self._fill_card(at_recipient, cvv="123")
        at_recipient.set_field("delivery_channel", "mpesa")
        assert at_recipient.is_step_valid() is False

        # National format accepted for the destination region (GB)
        at_recipient.set_field("recipient_details", "07400 123456")
        assert at_recipient.is_step_valid() is True

    def test_cash_pickup_needs_no_identifier(self, at_recipient: WizardController) -> None:
        self._fill_card(at_recipient, cvv="123")
        at_recipient.set_field("delivery_channel", "cash-pickup")
        at_recipient.set_field("recipient_details", "")
        assert at_recipient.is_step_valid() is True


class TestFieldErrors:
    def test_amount_out_of_range_message(self, wizard: WizardController) -> None:
        wizard.set_field("amount_usd", "5")
        assert wizard.field_errors() == {
            "amount_usd": "Amount must be between $10 and $5,000"
        }

    def test_unparseable_amount(self, wizard: WizardController) -> None:
        wizard.set_field("amount_usd", "ten")
        assert wizard.field_errors()["amount_usd"] == "Enter a valid amount"

    def test_empty_fields_not_reported(self, at_recipient: WizardController) -> None:
        at_recipient.set_field("payment_method", "credit-card")
        assert at_recipient.field_errors() == {}

    def test_card_messages_clear_on_edit(self, at_recipient: WizardController) -> None:
        at_recipient.set_field("payment_method", "credit-card")
        at_recipient.set_field("card_number", "1234")
        at_recipient.set_field("card_expiry", "13/30")
        at_recipient.set_field("card_cvv", "1")

        assert at_recipient.field_errors() == {
            "card_number": "Invalid card number",
            "card_expiry": "Invalid expiry date",
            "card_cvv": "Invalid CVV",
        }

        at_recipient.set_field("card_cvv", "123")

        assert "card_cvv" not in at_recipient.field_errors()

    def test_recipient_contact_message_per_channel(
        self, at_recipient: WizardController
    ) -> None:
        at_recipient.set_field("recipient_details", "12")
        assert at_recipient.field_errors()["recipient_details"] == "Invalid bank account"

        at_recipient.set_field("delivery_channel", "ecocash")
        assert at_recipient.field_errors()["recipient_details"] == (
            "Invalid mobile number. Include country code"
        )

    def test_sender_mobile_message(self, at_recipient: WizardController) -> None:
        at_recipient.set_field("payment_method", "mobile-money")
        at_recipient.set_field("sender_mobile", "12345")
        assert "sender_mobile" in at_recipient.field_errors()


class TestRetreatAndEdit:
    def test_retreat_is_unconditional(self, at_recipient: WizardController) -> None:
        at_recipient.set_field("amount_usd", "1")
        assert at_recipient.retreat() == WizardStep.DELIVERY
        assert at_recipient.retreat() == WizardStep.DESTINATION

    def test_retreat_floors_at_first_step(self, wizard: WizardController) -> None:
        assert wizard.retreat() == WizardStep.DESTINATION

    def test_edit_keeps_fields(self, at_review: WizardController) -> None:
        assert at_review.edit() == WizardStep.DESTINATION
        assert at_review.request.recipient_name == "Jane Doe"

    def test_advance_at_last_step_is_noop(self, at_review: WizardController) -> None:
        assert at_review.advance() == WizardStep.REVIEW


class TestQuote:
    def test_live_estimate(self, wizard: WizardController) -> None:
        wizard.set_field("destination_country", "GB")
        wizard.set_field("amount_usd", "100")

        q = wizard.quote()

        assert q.fee_usd == 10
        assert q.received_amount == 72
        assert q.target_currency == "GBP"

    def test_tracks_rate_changes(self, wizard: WizardController, rates) -> None:
        wizard.set_field("destination_country", "GB")
        wizard.set_field("amount_usd", "100")
        rates.rates["GBP"] = Decimal("0.5")

        assert wizard.quote().received_amount == 45


class TestReview:
    def test_only_at_review_step(self, wizard: WizardController) -> None:
        with pytest.raises(WizardStateError):
            wizard.review()

    def test_review_figures(self, at_review: WizardController) -> None:
        summary = at_review.review()

        assert summary.amount_usd == Decimal("100")
        assert summary.fee_usd == 10
        assert summary.received_amount == 72
        assert summary.destination_name == "United Kingdom"
        assert summary.recipient_detail_label == "Bank Account"


class TestConfirm:
    def test_outside_review_step(self, at_recipient: WizardController) -> None:
        with pytest.raises(WizardStateError):
            at_recipient.confirm()

    def test_emits_notification(
        self, at_review: WizardController, notifier: RecordingNotifier
    ) -> None:
        at_review.confirm()

        assert notifier.last is not None
        assert notifier.last.title == "Transfer Initiated!"
        assert notifier.last.description == (
            "Your transfer of 100.00 USD to Jane Doe has been initiated."
        )

    def test_resets_wizard(self, at_review: WizardController) -> None:
        at_review.confirm()

        assert at_review.step == WizardStep.DESTINATION
        assert at_review.request == TransferRequest()

    def test_records_redacted_transfer(self, at_review: WizardController) -> None:
        transfer = at_review.confirm()

        assert transfer.status == TransferStatus.PROCESSING
        assert transfer.request.card_number == "**** 6467"
        assert transfer.request.card_cvv == ""
        assert transfer.quote.received_amount == 72
        assert at_review.ledger.get(transfer.tracking_ref) == transfer

    def test_refuses_when_earlier_step_invalid(
        self, at_review: WizardController, notifier: RecordingNotifier
    ) -> None:
        at_review.set_field("amount_usd", "1")

        with pytest.raises(WizardStateError):
            at_review.confirm()

        assert notifier.notifications == []
        assert at_review.step == WizardStep.REVIEW
