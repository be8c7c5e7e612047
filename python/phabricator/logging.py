from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import parse_qsl, urlencode

_SENSITIVE_FIELDS = {"api.token"}


def get_logger(logger: logging.Logger | None = None) -> logging.Logger:
    return logger if logger is not None else logging.getLogger("phabricator")


def parse_log_level(level: Optional[str]) -> int:
    """Map a level name such as ``"debug"`` to its ``logging`` constant.

    Raises ValueError for names ``logging`` does not know about.
    """
    if level is None or not str(level).strip():
        raise ValueError("log level is empty")
    name = str(level).strip().upper()
    if name == "WARN":
        name = "WARNING"
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def sanitize_form(body: str) -> str:
    sanitized = []
    for key, value in parse_qsl(body, keep_blank_values=True):
        if key in _SENSITIVE_FIELDS:
            sanitized.append((key, "<redacted>"))
        else:
            sanitized.append((key, value))
    return urlencode(sanitized, safe="[]")
