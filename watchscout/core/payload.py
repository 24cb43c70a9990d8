# core/payload.py
from __future__ import annotations

import json
from typing import Any

from watchscout.core.errors import MarkerNotFound, PayloadDecodeError

DATA_START = b"window.__DATA__="
DATA_END = b"</script>"


def _as_bytes(v: bytes | str) -> bytes:
    return v.encode("utf-8") if isinstance(v, str) else v


def extract_payload(
    body: bytes | str,
    start: bytes | str = DATA_START,
    end: bytes | str = DATA_END,
) -> bytes:
    """
    Zwraca bajty dokładnie pomiędzy pierwszym wystąpieniem `start`
    a pierwszym kolejnym `end`. Bez trymowania, tym zajmuje się decode_payload.
    """
    body, start, end = _as_bytes(body), _as_bytes(start), _as_bytes(end)
    _, found, after = body.partition(start)
    if not found:
        raise MarkerNotFound(start)
    data, found, _ = after.partition(end)
    if not found:
        raise MarkerNotFound(end)
    return data


def decode_payload(raw: bytes | str) -> Any:
    """Dekoduje JSON; toleruje białe znaki na brzegach i jeden średnik na końcu."""
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        text = text.strip()
        if text.endswith(";"):
            text = text[:-1].rstrip()
        return json.loads(text)
    except ValueError as e:
        raise PayloadDecodeError(f"payload is not valid JSON: {e}") from e
