from __future__ import annotations

from typing import Iterator, List, Optional

from ..client import PhabricatorClient
from ..gen.conduit_args import ProjectSearchArgs
from ..gen.conduit_types import Project
from ..search import CancelToken
from ._env import client_from_env

SEARCH_PROCEDURE = "project.search"


def iter_projects_via_conduit(
    client: PhabricatorClient,
    args: Optional[ProjectSearchArgs] = None,
    *,
    cancel: Optional[CancelToken] = None,
    skip_decode_errors: bool = False,
) -> Iterator[Project]:
    stream = client.search(SEARCH_PROCEDURE, args or ProjectSearchArgs(), Project, cancel=cancel)
    yield from stream.values(skip_decode_errors=skip_decode_errors)


def list_projects_via_conduit(args: Optional[ProjectSearchArgs] = None) -> List[Project]:
    with client_from_env() as client:
        return list(iter_projects_via_conduit(client, args))
