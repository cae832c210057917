from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pyremit_api.config import get_server_config
from pyremit_api.routes import health_router, router
from pyremit_sdk import (
    get_rates_config,
    get_transfer_limits,
    LoggingNotifier,
    RatesProvider,
    TransferLedger,
    UnknownFieldError,
    WizardStateError,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    config = get_server_config()

    app.state.server_config = config
    app.state.api_key = config.api_key

    app.state.rates = RatesProvider(get_rates_config())
    app.state.rates_refresh = app.state.rates.refresh_in_background()

    app.state.limits = get_transfer_limits()
    app.state.notifier = LoggingNotifier()
    app.state.ledger = TransferLedger()
    app.state.wizards = {}

    try:
        yield

    finally:
        app.state.wizards.clear()


def add_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(WizardStateError)
    async def wizard_state_handler(
        request: Request, exc: WizardStateError
    ) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(UnknownFieldError)
    async def unknown_field_handler(
        request: Request, exc: UnknownFieldError
    ) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(title="PyRemit API", lifespan=lifespan)

    add_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(router)

    return app
