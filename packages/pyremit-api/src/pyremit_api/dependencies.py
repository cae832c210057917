import logging
import secrets

from fastapi import Header, HTTPException, Request
from pyremit_sdk import RatesProvider, TransferLedger, WizardController

log = logging.getLogger(__name__)


def get_rates(request: Request) -> RatesProvider:
    return request.app.state.rates


def get_ledger(request: Request) -> TransferLedger:
    return request.app.state.ledger


def get_wizard(request: Request, x_session_id: str = Header()) -> WizardController:
    """Return the wizard for this session, starting one on first use."""

    state = request.app.state
    wizard = state.wizards.get(x_session_id)

    if wizard is None:
        wizard = state.wizards.setdefault(
            x_session_id,
            WizardController(
                state.rates,
                limits=state.limits,
                notifier=state.notifier,
                ledger=state.ledger,
            ),
        )
        log.info("Started wizard for session %s", x_session_id)

    return wizard


def verify_api_key(request: Request, x_api_key: str = Header()) -> None:
    if not secrets.compare_digest(x_api_key, request.app.state.api_key):
        raise HTTPException(status_code=401, detail="Invalid API key")


def discard_wizard(request: Request, x_session_id: str = Header()) -> bool:
    """Drop this session's wizard; True if one existed."""

    discarded = request.app.state.wizards.pop(x_session_id, None) is not None

    if discarded:
        log.info("Discarded wizard for session %s", x_session_id)

    return discarded
