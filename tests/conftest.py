# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from cepform.adapters.repos.addresses import JsonAddressStore
from cepform.domain.address import AddressFragment
from cepform.domain.errors import LookupUnavailable, PostalCodeNotFound
from cepform.entrypoints.api.deps import get_address_store, get_lookup
from cepform.entrypoints.fastapi_app import create_app


class TickingClock:
    """Deterministic clock: every call is one millisecond after the previous one."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 31, 12, 0, 0, tzinfo=timezone.utc)
        self.calls = 0

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(milliseconds=1)
        self.calls += 1
        return current


SE_FRAGMENT = AddressFragment(
    street="Praça da Sé",
    complement="lado ímpar",
    neighborhood="Sé",
    city="São Paulo",
    state_code="SP",
)


async def fake_lookup(postal_code: str) -> AddressFragment:
    if postal_code == "01001000":
        return SE_FRAGMENT
    if postal_code == "99999999":
        raise LookupUnavailable("viacep_error:ConnectError")
    raise PostalCodeNotFound(postal_code)


@pytest.fixture
def valid_payload() -> dict[str, str]:
    return {
        "postalCode": "01001000",
        "street": "Praça da Sé",
        "number": "1",
        "complement": "",
        "neighborhood": "Sé",
        "city": "São Paulo",
        "stateCode": "sp",
    }


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "data" / "saved-addresses.json"


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def store(store_path, clock):
    return JsonAddressStore(path=store_path, clock=clock)


@pytest.fixture
def client(store):
    app = create_app()
    app.dependency_overrides[get_address_store] = lambda: store
    app.dependency_overrides[get_lookup] = lambda: fake_lookup
    with TestClient(app) as c:
        yield c


@pytest.fixture
def lookup():
    return fake_lookup
