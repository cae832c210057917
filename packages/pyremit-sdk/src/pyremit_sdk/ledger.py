"""In-memory record of confirmed transfers.

Submission is simulated: a transfer is recorded as ``PROCESSING`` and moves
to a final status when :meth:`TransferLedger.settle` is called. Nothing is
written to disk; the ledger lives as long as the process.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from pyremit_sdk.models import SubmittedTransfer, TransferQuote, TransferRequest
from pyremit_sdk.types import TransferStatus

log = logging.getLogger(__name__)


def _tracking_ref() -> str:
    return f"WR-{uuid.uuid4().hex[:10].upper()}"


class TransferLedger:
    """Keep submitted transfers keyed by tracking reference."""

    def __init__(self, ref_factory: Callable[[], str] = _tracking_ref) -> None:
        self._ref_factory = ref_factory
        self._records: dict[str, SubmittedTransfer] = {}

    def __len__(self) -> int:
        return len(self._records)

    def record(self, request: TransferRequest, quote: TransferQuote) -> SubmittedTransfer:
        """Record a confirmed transfer; card data must already be redacted."""
        now = datetime.now(timezone.utc)
        ref = self._ref_factory()

        transfer = SubmittedTransfer(
            tracking_ref=ref,
            status=TransferStatus.PROCESSING,
            request=request,
            quote=quote,
            created_at=now,
            updated_at=now,
        )
        self._records[ref] = transfer

        log.info(
            "Recorded transfer %s: %s USD to %s",
            ref,
            quote.amount_usd,
            request.destination_country,
        )
        return transfer

    def get(self, tracking_ref: str) -> SubmittedTransfer | None:
        return self._records.get(tracking_ref)

    def settle(
        self, tracking_ref: str, status: TransferStatus = TransferStatus.COMPLETED
    ) -> SubmittedTransfer | None:
        """Move a processing transfer to its final status.

        Returns the updated record, or ``None`` for an unknown reference.
        Already-settled transfers are returned unchanged.
        """
        transfer = self._records.get(tracking_ref)

        if transfer is None:
            return None

        if transfer.status != TransferStatus.PROCESSING:
            return transfer

        settled = transfer.model_copy(
            update={"status": status, "updated_at": datetime.now(timezone.utc)}
        )
        self._records[tracking_ref] = settled

        log.info("Transfer %s settled as %s", tracking_ref, status)
        return settled
