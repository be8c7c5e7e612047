from __future__ import annotations

from typing import Iterator, Optional

from ..client import PhabricatorClient
from ..gen.conduit_args import RepositorySearchArgs
from ..gen.conduit_types import Repository
from ..search import CancelToken

SEARCH_PROCEDURE = "diffusion.repository.search"


def iter_repositories_via_conduit(
    client: PhabricatorClient,
    args: Optional[RepositorySearchArgs] = None,
    *,
    cancel: Optional[CancelToken] = None,
    skip_decode_errors: bool = False,
) -> Iterator[Repository]:
    stream = client.search(
        SEARCH_PROCEDURE, args or RepositorySearchArgs(), Repository, cancel=cancel
    )
    yield from stream.values(skip_decode_errors=skip_decode_errors)
