# cepform/adapters/clients/viacep.py
from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from ...config import settings
from ...domain.address import AddressFragment
from ...domain.errors import LookupUnavailable, PostalCodeNotFound

log = logging.getLogger(__name__)

_POSTAL_CODE = re.compile(r"[0-9]{8}")


def _timeout() -> httpx.Timeout:
    t = float(settings.VIACEP_TIMEOUT_S)
    return httpx.Timeout(t if t > 0 else None)


def _as_str(x: Any) -> str:
    if x is None:
        return ""
    return str(x).strip()


def _to_fragment(data: dict[str, Any]) -> AddressFragment:
    return AddressFragment(
        street=_as_str(data.get("logradouro")),
        complement=_as_str(data.get("complemento")),
        neighborhood=_as_str(data.get("bairro")),
        city=_as_str(data.get("localidade")),
        state_code=_as_str(data.get("uf")).upper(),
    )


async def lookup_postal_code(
    postal_code: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> AddressFragment:
    """
    Resolve an 8-digit CEP through ViaCEP.

    ViaCEP answers 200 + {"erro": true} (sometimes "true") for unknown codes;
    that becomes PostalCodeNotFound. Anything else that keeps us from reading
    an address becomes LookupUnavailable. No retries.
    """
    if not _POSTAL_CODE.fullmatch(postal_code or ""):
        # ViaCEP would answer 400; the form never asks for these anyway
        raise PostalCodeNotFound(postal_code)

    url = f"{settings.VIACEP_BASE_URL.rstrip('/')}/ws/{postal_code}/json/"

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=_timeout()) as c:
                r = await c.get(url)
        else:
            r = await client.get(url)
        r.raise_for_status()
        data = r.json()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        log.warning("viacep lookup failed postal_code=%s err=%s", postal_code, type(e).__name__)
        raise LookupUnavailable(f"viacep_error:{type(e).__name__}") from e
    except (ValueError, RecursionError) as e:
        log.warning("viacep returned a non-JSON body postal_code=%s", postal_code)
        raise LookupUnavailable("viacep_bad_json") from e

    if not isinstance(data, dict):
        raise LookupUnavailable("viacep_bad_payload")

    erro = data.get("erro")
    if erro is True or str(erro).lower() == "true":
        raise PostalCodeNotFound(postal_code)

    return _to_fragment(data)
