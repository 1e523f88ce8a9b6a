# cepform/entrypoints/api/routers/lookup.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from ....schemas import AddressFragmentOut, MessageOut
from ....service_layer.form_flow import LookupFn
from ..deps import get_lookup

router = APIRouter(tags=["lookup"])


@router.get(
    "/api/lookup/{postal_code}",
    response_model=AddressFragmentOut,
    responses={404: {"model": MessageOut}, 502: {"model": MessageOut}},
)
async def lookup_address(
    postal_code: str,
    lookup: LookupFn = Depends(get_lookup),
) -> AddressFragmentOut:
    """Server-side ViaCEP proxy. Accepts masked input (01001-000)."""
    code = postal_code.strip().replace("-", "")
    fragment = await lookup(code)
    return AddressFragmentOut.from_fragment(code, fragment)
