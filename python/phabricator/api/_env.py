from __future__ import annotations

from ..client import PhabricatorClient
from ..config import options_from_env


def client_from_env() -> PhabricatorClient:
    """Build a client from PHABRICATOR_* variables, falling back to ~/.arcrc."""
    return PhabricatorClient(options_from_env())
