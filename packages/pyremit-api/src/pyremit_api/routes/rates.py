from fastapi import APIRouter, Depends
from pyremit_api.dependencies import get_rates
from pyremit_sdk import RatesProvider

router = APIRouter()


def _rates_payload(rates: RatesProvider) -> dict:
    payload = rates.snapshot.model_dump(mode="json")
    payload["loading"] = rates.loading

    return payload


@router.get("/rates")
def current_rates(rates: RatesProvider = Depends(get_rates)) -> dict:
    return _rates_payload(rates)


@router.post("/rates/refresh")
def refresh_rates(rates: RatesProvider = Depends(get_rates)) -> dict:
    rates.refresh()

    return _rates_payload(rates)
