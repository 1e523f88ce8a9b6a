# scripts/fill_address.py
"""
Terminal version of the address form.

Asks for a CEP, fills what ViaCEP knows, lets you review every field and
saves the result to the local JSON store (CEPFORM_DATA_FILE).
"""
from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from cepform.adapters.clients.viacep import lookup_postal_code
from cepform.adapters.repos.addresses import JsonAddressStore
from cepform.domain.address import AddressRecord
from cepform.domain.form import FieldChanged, FormState, format_postal_code, reduce
from cepform.logging_setup import configure_logging
from cepform.service_layer.form_flow import on_postal_code_blur, submit

LABELS = {
    "postalCode": "CEP",
    "street": "Logradouro",
    "number": "Número",
    "complement": "Complemento",
    "neighborhood": "Bairro",
    "city": "Cidade",
    "stateCode": "Estado (UF)",
}


def _show(state: FormState) -> None:
    if state.feedback:
        print(f"[{state.feedback.kind}] {state.feedback.text}")
    for name, msg in state.errors.items():
        print(f"  ! {LABELS.get(name, name)}: {msg}")


def _ask(state: FormState, name: str) -> FormState:
    current = state.values.get(name, "")
    shown = format_postal_code(current) if name == "postalCode" else current
    raw = input(f"{LABELS[name]} [{shown}]: ").strip()
    if not raw:
        return state
    return reduce(state, FieldChanged(name, raw))


async def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--store", type=Path, default=None, help="override CEPFORM_DATA_FILE")
    args = parser.parse_args()

    configure_logging("WARNING")
    store = JsonAddressStore(path=args.store) if args.store else JsonAddressStore.from_settings()

    async def _save(record: AddressRecord) -> None:
        await asyncio.to_thread(store.append, record)

    state = FormState()
    try:
        state = _ask(state, "postalCode")
        state = await on_postal_code_blur(state, lookup_postal_code)
        _show(state)

        pending = [n for n in LABELS if n != "postalCode"]
        while True:
            for name in pending:
                state = _ask(state, name)

            state = await submit(state, _save)
            _show(state)
            if state.feedback and state.feedback.kind == "success":
                print(f"saved to {store.path}")
                return 0
            if not state.errors:
                return 1
            # only re-ask what was rejected; a corrected CEP is not looked up again
            pending = [n for n in LABELS if n in state.errors]
    except (EOFError, KeyboardInterrupt):
        print()
        return 130


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
