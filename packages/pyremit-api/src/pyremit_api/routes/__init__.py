from fastapi import APIRouter, Depends
from pyremit_api.dependencies import verify_api_key
from pyremit_api.routes import countries, health, rates, transfers, wizard

health_router = health.router

router = APIRouter(prefix="/api", dependencies=[Depends(verify_api_key)])

router.include_router(wizard.router)
router.include_router(transfers.router)
router.include_router(rates.router)
router.include_router(countries.router)
