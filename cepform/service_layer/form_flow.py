# cepform/service_layer/form_flow.py
from __future__ import annotations

import logging
from typing import Awaitable, Callable

from ..domain.address import AddressFragment, AddressRecord
from ..domain.errors import (
    AddressLookupError,
    AddressValidationError,
    PersistenceError,
    PostalCodeNotFound,
)
from ..domain.form import (
    FieldBlurred,
    FormState,
    LookupFailed,
    LookupNotFound,
    LookupStarted,
    LookupSucceeded,
    SaveFailed,
    SaveStarted,
    SaveSucceeded,
    SubmitRejected,
    reduce,
)
from ..domain.validation import validate_address

log = logging.getLogger(__name__)

LookupFn = Callable[[str], Awaitable[AddressFragment]]
SaveFn = Callable[[AddressRecord], Awaitable[object]]


async def on_postal_code_blur(state: FormState, lookup: LookupFn) -> FormState:
    """
    Validate the postal code and, when it has all 8 digits, look it up.
    Lookup problems only produce feedback; the form stays usable.
    """
    state = reduce(state, FieldBlurred("postalCode"))

    code = state.values.get("postalCode", "")
    if len(code) != 8:
        return state

    state = reduce(state, LookupStarted())
    try:
        fragment = await lookup(code)
    except PostalCodeNotFound:
        return reduce(state, LookupNotFound())
    except AddressLookupError as e:
        log.warning("postal code lookup failed postal_code=%s err=%s", code, e)
        return reduce(state, LookupFailed())

    return reduce(state, LookupSucceeded(fragment))


async def submit(state: FormState, save: SaveFn) -> FormState:
    candidate = dict(state.values)
    candidate["stateCode"] = candidate.get("stateCode", "").upper()

    try:
        record = validate_address(candidate)
    except AddressValidationError as e:
        return reduce(state, SubmitRejected(tuple(e.issues)))

    state = reduce(state, SaveStarted())
    try:
        await save(record)
    except PersistenceError as e:
        log.error("saving address failed: %s", e)
        return reduce(state, SaveFailed(PersistenceError.public_message))

    return reduce(state, SaveSucceeded())
