# cepform/entrypoints/api/routers/addresses.py
from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from ....adapters.repos.addresses import JsonAddressStore
from ....domain.errors import AddressValidationError, ValidationIssue
from ....schemas import MessageOut, ValidationFailedOut
from ....service_layer.use_cases.save_address import save_address
from ..deps import get_address_store

router = APIRouter(tags=["addresses"])

SAVED_MESSAGE = "Endereço salvo com sucesso."
INVALID_JSON_MESSAGE = "JSON inválido."


async def _json_body(request: Request) -> Any:
    raw = await request.body()
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        raise AddressValidationError([ValidationIssue(path=(), message=INVALID_JSON_MESSAGE)]) from None


@router.post(
    "/api/addresses",
    response_model=MessageOut,
    responses={400: {"model": ValidationFailedOut}, 500: {"model": MessageOut}},
)
async def create_address(
    request: Request,
    store: JsonAddressStore = Depends(get_address_store),
) -> MessageOut:
    """
    Body: postalCode, street, number, complement, neighborhood, city, stateCode.
    savedAt is assigned here; anything the caller sends for it is ignored.
    """
    payload = await _json_body(request)
    # read-modify-write of the whole file: keep it off the event loop
    await run_in_threadpool(save_address, payload, store)
    return MessageOut(message=SAVED_MESSAGE)
