# cepform/service_layer/use_cases/save_address.py
from __future__ import annotations

import logging
from typing import Any

from ...adapters.repos.addresses import JsonAddressStore
from ...domain.address import StoredAddress
from ...domain.errors import AddressValidationError
from ...domain.validation import validate_address

log = logging.getLogger(__name__)


def save_address(payload: Any, store: JsonAddressStore) -> StoredAddress:
    """
    Validate first, then append. Validation failures never touch the store.

    Raises:
      AddressValidationError - caller sent something the schema rejects
      PersistenceError       - store could not be read, parsed or written
    """
    try:
        record = validate_address(payload)
    except AddressValidationError as e:
        # user input problem, not an operational fault
        log.debug("address rejected fields=%s", [i.field for i in e.issues])
        raise

    return store.append(record)
