# scripts/lookup_cep.py
from __future__ import annotations

import argparse
import asyncio

from cepform.adapters.clients.viacep import lookup_postal_code
from cepform.domain.errors import AddressLookupError
from cepform.domain.form import format_postal_code, sanitize_input
from cepform.logging_setup import configure_logging


async def main() -> int:
    parser = argparse.ArgumentParser(description="Look up a CEP on ViaCEP and print the address fragment")
    parser.add_argument("cep", help="8-digit CEP, masked or not (01001-000)")
    args = parser.parse_args()

    configure_logging()

    code = sanitize_input("postalCode", args.cep)
    try:
        fragment = await lookup_postal_code(code)
    except AddressLookupError as e:
        print(f"{format_postal_code(code)}: {e}")
        return 1

    print(format_postal_code(code))
    for k, v in fragment.as_form_values().items():
        print(f"  {k:<13} {v}")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
