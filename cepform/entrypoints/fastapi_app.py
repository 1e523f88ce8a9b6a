# cepform/entrypoints/fastapi_app.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..domain.errors import (
    AddressValidationError,
    LookupUnavailable,
    PersistenceError,
    PostalCodeNotFound,
)
from ..domain.form import LOOKUP_FAILED, POSTAL_CODE_NOT_FOUND
from ..logging_setup import configure_logging
from ..schemas import IssueOut, MessageOut, ValidationFailedOut
from .api.routers import addresses, health, lookup

log = logging.getLogger(__name__)

INVALID_DATA_MESSAGE = "Dados inválidos."


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AddressValidationError)
    async def _invalid_address(request: Request, exc: AddressValidationError) -> JSONResponse:
        body = ValidationFailedOut(
            message=INVALID_DATA_MESSAGE,
            issues=[IssueOut.from_issue(i) for i in exc.issues],
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(PersistenceError)
    async def _persistence_failed(request: Request, exc: PersistenceError) -> JSONResponse:
        log.error("error saving address path=%s", request.url.path, exc_info=exc)
        body = MessageOut(message=PersistenceError.public_message)
        return JSONResponse(status_code=500, content=body.model_dump())

    @app.exception_handler(PostalCodeNotFound)
    async def _postal_code_not_found(request: Request, exc: PostalCodeNotFound) -> JSONResponse:
        return JSONResponse(status_code=404, content=MessageOut(message=POSTAL_CODE_NOT_FOUND).model_dump())

    @app.exception_handler(LookupUnavailable)
    async def _lookup_unavailable(request: Request, exc: LookupUnavailable) -> JSONResponse:
        return JSONResponse(status_code=502, content=MessageOut(message=LOOKUP_FAILED).model_dump())


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="CEP Form - address lookup & save")
    _register_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(addresses.router)
    app.include_router(lookup.router)

    return app
