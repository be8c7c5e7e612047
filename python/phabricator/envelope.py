from __future__ import annotations

import json
from typing import Any

from .errors import DecodeError, RemoteAPIError


def parse_envelope(body: bytes, procedure: str) -> Any:
    """Decode a Conduit response and return its ``result`` member.

    Raises DecodeError when the body is not a JSON object and RemoteAPIError
    when the envelope carries an ``error_code``.
    """
    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as exc:
        snippet = body[:200].decode("utf-8", errors="replace") if body else ""
        raise DecodeError(f"Invalid JSON in {procedure} response: {snippet!r}") from exc
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected object at {procedure}")

    error_code = payload.get("error_code")
    if error_code:
        error_info = payload.get("error_info")
        raise RemoteAPIError(
            str(error_code),
            error_info if isinstance(error_info, str) else None,
            procedure=procedure,
        )
    return payload.get("result")
