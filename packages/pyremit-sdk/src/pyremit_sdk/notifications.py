"""Notification collaborators for submitted transfers."""

import logging
from decimal import Decimal
from typing import Protocol

from pyremit_sdk.models import Notification

log = logging.getLogger(__name__)

TRANSFER_INITIATED_TITLE = "Transfer Initiated!"


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


class LoggingNotifier:
    """Write notifications to the log."""

    def notify(self, notification: Notification) -> None:
        log.info("%s %s", notification.title, notification.description)


class RecordingNotifier:
    """Keep every notification in memory, newest last."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def last(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None


def transfer_initiated(
    amount_usd: Decimal, recipient_name: str, currency: str = "USD"
) -> Notification:
    return Notification(
        title=TRANSFER_INITIATED_TITLE,
        description=(
            f"Your transfer of {amount_usd:.2f} {currency} to {recipient_name} "
            "has been initiated."
        ),
    )
