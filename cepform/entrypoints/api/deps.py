# cepform/entrypoints/api/deps.py
from __future__ import annotations

from ...adapters.clients.viacep import lookup_postal_code
from ...adapters.repos.addresses import JsonAddressStore
from ...service_layer.form_flow import LookupFn


def get_address_store() -> JsonAddressStore:
    # Fresh per request: all state lives in the file
    return JsonAddressStore.from_settings()


def get_lookup() -> LookupFn:
    return lookup_postal_code
