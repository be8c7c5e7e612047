from __future__ import annotations

from typing import Iterator, List, Optional

from ..client import PhabricatorClient
from ..gen.conduit_args import UserSearchArgs
from ..gen.conduit_types import User
from ..search import CancelToken
from ._env import client_from_env

SEARCH_PROCEDURE = "user.search"


def iter_users_via_conduit(
    client: PhabricatorClient,
    args: Optional[UserSearchArgs] = None,
    *,
    cancel: Optional[CancelToken] = None,
    skip_decode_errors: bool = False,
) -> Iterator[User]:
    stream = client.search(SEARCH_PROCEDURE, args or UserSearchArgs(), User, cancel=cancel)
    yield from stream.values(skip_decode_errors=skip_decode_errors)


def list_users_via_conduit(args: Optional[UserSearchArgs] = None) -> List[User]:
    with client_from_env() as client:
        return list(iter_users_via_conduit(client, args))
