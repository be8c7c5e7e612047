from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlparse

from .errors import ConfigError
from .logging import parse_log_level

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_ARCRC_PATH = "~/.arcrc"


@dataclass(frozen=True)
class ClientOptions:
    """Settings for PhabricatorClient.

    ``api_url`` is the Conduit root, e.g. ``https://phab.example.com/api/``.
    When ``token`` is empty it is looked up in ``.arcrc`` by ``api_url``;
    when both are empty ``.arcrc`` must define exactly one host.
    A ``timeout_seconds`` of 0 selects the default. ``log_level`` is applied
    to the client's logger only when set; left as None the logger level is
    not touched.
    """

    api_url: Optional[str] = None
    token: Optional[str] = None
    log_level: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    arcrc_path: Optional[str] = None
    buffer_size: int = 100


@dataclass(frozen=True)
class ResolvedOptions:
    api_url: str
    token: str
    log_level: Optional[int]
    timeout_seconds: float
    buffer_size: int


def _arcrc_path(path: Optional[str]) -> Path:
    return Path(path or DEFAULT_ARCRC_PATH).expanduser()


def load_arcrc(path: Optional[str] = None) -> Dict[str, Any]:
    arcrc = _arcrc_path(path)
    try:
        raw = arcrc.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to open {arcrc}") from exc
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Unable to parse {arcrc}") from exc
    if not isinstance(parsed, dict):
        raise ConfigError(f"Unable to parse {arcrc}: expected an object")
    return parsed


def _hosts(arcrc: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    hosts = arcrc.get("hosts")
    if not isinstance(hosts, dict):
        return {}
    return {k: v for k, v in hosts.items() if isinstance(k, str) and isinstance(v, dict)}


def read_auth_from_arcrc(path: Optional[str] = None) -> Tuple[str, str]:
    hosts = _hosts(load_arcrc(path))
    if len(hosts) != 1:
        raise ConfigError(
            "Cannot determine a Phabricator host to connect to. "
            "Exactly one must be defined in .arcrc."
        )
    ((api_url, host),) = hosts.items()
    token = host.get("token")
    if not isinstance(token, str) or not token.strip():
        raise ConfigError(f"No token found in .arcrc for {api_url}")
    return api_url, token.strip()


def read_token_from_arcrc(api_url: str, path: Optional[str] = None) -> str:
    hosts = _hosts(load_arcrc(path))
    host = hosts.get(api_url)
    if host is None:
        # arc writes hosts with a trailing slash; accept either spelling.
        alt = api_url[:-1] if api_url.endswith("/") else api_url + "/"
        host = hosts.get(alt)
    token = host.get("token") if host else None
    if not isinstance(token, str) or not token.strip():
        raise ConfigError(f"No token found in .arcrc for {api_url}")
    return token.strip()


def normalize_api_url(api_url: str) -> str:
    candidate = (api_url or "").strip()
    parsed = urlparse(candidate)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"Unable to parse the API URL: {api_url!r}")
    if not candidate.endswith("/"):
        candidate += "/"
    return candidate


def resolve_options(options: Optional[ClientOptions] = None) -> ResolvedOptions:
    opts = options or ClientOptions()

    timeout = opts.timeout_seconds
    if timeout is None or timeout == 0:
        timeout = DEFAULT_TIMEOUT_SECONDS
    if timeout < 0:
        raise ConfigError("Negative timeout specified")

    level = None
    if opts.log_level is not None:
        try:
            level = parse_log_level(opts.log_level)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    if opts.buffer_size <= 0:
        raise ConfigError("buffer_size must be > 0")

    api_url = (opts.api_url or "").strip()
    token = (opts.token or "").strip()
    if token and not api_url:
        raise ConfigError("Token specified without an API endpoint")
    if not token:
        if not api_url:
            api_url, token = read_auth_from_arcrc(opts.arcrc_path)
        else:
            token = read_token_from_arcrc(api_url, opts.arcrc_path)

    return ResolvedOptions(
        api_url=normalize_api_url(api_url),
        token=token,
        log_level=level,
        timeout_seconds=float(timeout),
        buffer_size=opts.buffer_size,
    )


def options_from_env(base: Optional[ClientOptions] = None) -> ClientOptions:
    opts = base or ClientOptions()
    api_url = os.getenv("PHABRICATOR_API_URL")
    token = os.getenv("PHABRICATOR_API_TOKEN")
    log_level = os.getenv("PHABRICATOR_LOG_LEVEL")
    timeout_raw = os.getenv("PHABRICATOR_TIMEOUT_SECONDS")
    arcrc = os.getenv("PHABRICATOR_ARCRC")

    timeout = opts.timeout_seconds
    if timeout_raw:
        try:
            timeout = float(timeout_raw)
        except ValueError as exc:
            raise ConfigError(f"PHABRICATOR_TIMEOUT_SECONDS is not a number: {timeout_raw!r}") from exc

    return replace(
        opts,
        api_url=api_url or opts.api_url,
        token=token or opts.token,
        log_level=log_level or opts.log_level,
        timeout_seconds=timeout,
        arcrc_path=arcrc or opts.arcrc_path,
    )
