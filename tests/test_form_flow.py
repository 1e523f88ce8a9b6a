# tests/test_form_flow.py
import json

import pytest

from cepform.domain.errors import PersistenceError
from cepform.domain.form import FieldChanged, FormState, reduce
from cepform.service_layer.form_flow import on_postal_code_blur, submit


def _typed(**values):
    state = FormState()
    for name, raw in values.items():
        state = reduce(state, FieldChanged(name, raw))
    return state


@pytest.mark.asyncio
async def test_blur_with_known_code_fills_the_form(lookup):
    state = await on_postal_code_blur(_typed(postalCode="01001-000"), lookup)

    assert state.values["street"] == "Praça da Sé"
    assert state.values["city"] == "São Paulo"
    assert state.values["stateCode"] == "SP"
    assert state.feedback.kind == "info"
    assert state.errors == {}


@pytest.mark.asyncio
async def test_blur_with_short_code_validates_without_lookup():
    calls = []

    async def lookup(code):
        calls.append(code)
        raise AssertionError("should not be called")

    state = await on_postal_code_blur(_typed(postalCode="1234"), lookup)

    assert calls == []
    assert state.errors == {"postalCode": "Informe um CEP com 8 dígitos."}
    assert state.feedback is None


@pytest.mark.asyncio
async def test_blur_with_unknown_code_marks_postal_code_only(lookup):
    before = _typed(postalCode="00000000", number="7")

    state = await on_postal_code_blur(before, lookup)

    assert state.values == before.values
    assert state.errors == {"postalCode": "CEP não encontrado."}
    assert state.feedback.kind == "error"


@pytest.mark.asyncio
async def test_blur_when_lookup_is_down_only_shows_notice(lookup):
    before = _typed(postalCode="99999999")

    state = await on_postal_code_blur(before, lookup)

    assert state.values == before.values
    assert state.errors == {}
    assert state.feedback.text.startswith("Não foi possível buscar o CEP")
    assert state.is_fetching is False


@pytest.mark.asyncio
async def test_submit_rejected_never_calls_save():
    saved = []

    async def save(record):
        saved.append(record)

    state = await submit(_typed(postalCode="1234"), save)

    assert saved == []
    assert state.errors["postalCode"] == "Informe um CEP com 8 dígitos."
    assert state.feedback.kind == "error"
    assert state.is_saving is False


@pytest.mark.asyncio
async def test_submit_saves_normalized_record(store, store_path, valid_payload):
    async def save(record):
        store.append(record)

    state = FormState(values=dict(valid_payload))  # stateCode "sp" as typed, unsanitized
    state = await submit(state, save)

    assert state.feedback.kind == "success"
    assert state.is_saving is False
    rows = json.loads(store_path.read_text(encoding="utf-8"))
    assert rows[0]["stateCode"] == "SP"


@pytest.mark.asyncio
async def test_submit_persistence_failure_shows_generic_message(valid_payload):
    async def save(record):
        raise PersistenceError("disk full at /secret/path")

    state = await submit(FormState(values=dict(valid_payload)), save)

    assert state.feedback.kind == "error"
    assert state.feedback.text == "Erro ao salvar o endereço."
    assert "/secret/path" not in state.feedback.text
