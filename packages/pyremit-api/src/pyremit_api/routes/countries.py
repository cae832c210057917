from fastapi import APIRouter
from pyremit_sdk import SUPPORTED_COUNTRIES

router = APIRouter()


@router.get("/countries")
def list_countries() -> list:
    return [country.model_dump() for country in SUPPORTED_COUNTRIES]
