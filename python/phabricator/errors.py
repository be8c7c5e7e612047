from __future__ import annotations

from typing import Optional


class PhabricatorError(Exception):
    pass


class TransportError(PhabricatorError):
    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        super().__init__(f"Request to {url} failed: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class DecodeError(PhabricatorError):
    pass


SerializationError = DecodeError


class RemoteAPIError(PhabricatorError):
    def __init__(self, code: str, info: Optional[str] = None, procedure: Optional[str] = None):
        message = f"[{code}] {info or ''}".rstrip()
        if procedure:
            message = f"{procedure}: {message}"
        super().__init__(message)
        self.code = code
        self.info = info
        self.procedure = procedure


class ConfigError(PhabricatorError, ValueError):
    pass


class UnknownProcedureError(PhabricatorError, LookupError):
    def __init__(self, procedure: str, expected_kind: Optional[str] = None):
        if expected_kind:
            message = f"{procedure!r} is not a known {expected_kind} procedure"
        else:
            message = f"{procedure!r} is not a known procedure"
        super().__init__(message)
        self.procedure = procedure
        self.expected_kind = expected_kind

    def __str__(self) -> str:
        return self.args[0]


class ArgumentError(PhabricatorError, ValueError):
    pass
