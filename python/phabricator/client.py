from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Union

import httpx

from .catalog import ProcedureCatalog, discover
from .config import ClientOptions, resolve_options
from .decoding import RecordShape
from .edit import edit as _edit
from .envelope import parse_envelope
from .fixups import FixupTable
from .logging import get_logger
from .models import EditArguments, EditResult, ProcedureKind, Transaction, WhoAmI
from .search import CancelToken, ResultStream
from .search import search as _search
from .transport import ConduitTransport

WHOAMI_PROCEDURE = "user.whoami"


class PhabricatorClient:
    """Conduit client bound to one API root.

    Construction resolves credentials and runs endpoint discovery once; the
    resulting catalog is read-only and shared by every call on this client.
    """

    def __init__(
        self,
        options: Optional[ClientOptions] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        logger: logging.Logger | None = None,
        fixups: Optional[FixupTable] = None,
    ):
        resolved = resolve_options(options)
        self.logger = get_logger(logger)
        if resolved.log_level is not None:
            self.logger.setLevel(resolved.log_level)
        self.api_url = resolved.api_url
        self.buffer_size = resolved.buffer_size
        self.fixups = fixups.copy() if fixups is not None else FixupTable()
        self.transport = ConduitTransport(
            resolved.api_url,
            resolved.token,
            timeout_seconds=resolved.timeout_seconds,
            http_client=http_client,
            logger=self.logger,
        )
        self.logger.info(
            "Initializing a Phabricator client for %s (loglevel=%s)",
            self.api_url,
            logging.getLevelName(self.logger.getEffectiveLevel()),
        )
        try:
            self.catalog: ProcedureCatalog = discover(
                self.transport, fixups=self.fixups, logger=self.logger
            )
        except Exception:
            self.transport.close()
            raise

    def procedures(self, kind: Optional[ProcedureKind] = None) -> List[str]:
        return self.catalog.names(kind)

    def describe(self, procedure: str) -> str:
        return self.catalog[procedure].describe()

    def search(
        self,
        procedure: str,
        arguments: Any = None,
        shape: RecordShape = dict,
        *,
        cancel: Optional[CancelToken] = None,
    ) -> ResultStream[Any]:
        return _search(
            self.transport,
            self.catalog,
            procedure,
            arguments,
            shape,
            cancel=cancel,
            fixups=self.fixups,
            buffer_size=self.buffer_size,
            logger=self.logger,
        )

    def edit(
        self,
        procedure: str,
        object_identifier: Union[int, str, None] = None,
        transactions: Iterable[Transaction] = (),
        *,
        cancel: Optional[CancelToken] = None,
    ) -> Optional[EditResult]:
        arguments = EditArguments(
            object_identifier=object_identifier, transactions=list(transactions)
        )
        return _edit(
            self.transport,
            self.catalog,
            procedure,
            arguments,
            cancel=cancel,
            logger=self.logger,
        )

    def whoami(self) -> WhoAmI:
        body = self.transport.post(self.transport.url_for(WHOAMI_PROCEDURE))
        result = parse_envelope(body, WHOAMI_PROCEDURE)
        return WhoAmI.from_result(result, f"{WHOAMI_PROCEDURE}.result")

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "PhabricatorClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
