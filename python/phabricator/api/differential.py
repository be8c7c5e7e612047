from __future__ import annotations

from typing import Iterator, Optional

from ..client import PhabricatorClient
from ..gen.conduit_args import DiffSearchArgs, RevisionSearchArgs
from ..gen.conduit_types import Diff, Revision
from ..search import CancelToken

REVISION_SEARCH_PROCEDURE = "differential.revision.search"
DIFF_SEARCH_PROCEDURE = "differential.diff.search"


def iter_revisions_via_conduit(
    client: PhabricatorClient,
    args: Optional[RevisionSearchArgs] = None,
    *,
    cancel: Optional[CancelToken] = None,
    skip_decode_errors: bool = False,
) -> Iterator[Revision]:
    stream = client.search(
        REVISION_SEARCH_PROCEDURE, args or RevisionSearchArgs(), Revision, cancel=cancel
    )
    yield from stream.values(skip_decode_errors=skip_decode_errors)


def iter_diffs_via_conduit(
    client: PhabricatorClient,
    args: Optional[DiffSearchArgs] = None,
    *,
    cancel: Optional[CancelToken] = None,
    skip_decode_errors: bool = False,
) -> Iterator[Diff]:
    stream = client.search(DIFF_SEARCH_PROCEDURE, args or DiffSearchArgs(), Diff, cancel=cancel)
    yield from stream.values(skip_decode_errors=skip_decode_errors)
