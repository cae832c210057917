from fastapi import APIRouter, Depends, HTTPException
from pyremit_api.dependencies import get_ledger
from pyremit_sdk import TransferLedger
from pyremit_sdk.types import TransferStatus

router = APIRouter()


def _not_found(tracking_ref: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Transfer '{tracking_ref}' not found")


@router.get("/transfers/{tracking_ref}")
def transfer_status(
    tracking_ref: str,
    ledger: TransferLedger = Depends(get_ledger),
) -> dict:
    transfer = ledger.get(tracking_ref)

    if transfer is None:
        raise _not_found(tracking_ref)

    return transfer.model_dump(mode="json")


@router.post("/transfers/{tracking_ref}/settle")
def settle_transfer(
    tracking_ref: str,
    status: TransferStatus = TransferStatus.COMPLETED,
    ledger: TransferLedger = Depends(get_ledger),
) -> dict:
    if status == TransferStatus.PROCESSING:
        raise HTTPException(
            status_code=400, detail="A transfer can only settle as COMPLETED or FAILED"
        )

    transfer = ledger.settle(tracking_ref, status)

    if transfer is None:
        raise _not_found(tracking_ref)

    return transfer.model_dump(mode="json")
