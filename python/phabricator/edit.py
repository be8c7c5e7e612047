from __future__ import annotations

import logging
from typing import Optional

from .catalog import ProcedureCatalog
from .encoding import encode_edit_arguments
from .envelope import parse_envelope
from .errors import PhabricatorError
from .logging import get_logger
from .models import EditArguments, EditResult, ProcedureKind
from .search import CancelToken
from .transport import ConduitTransport


def edit(
    transport: ConduitTransport,
    catalog: ProcedureCatalog,
    procedure: str,
    arguments: EditArguments,
    *,
    cancel: Optional[CancelToken] = None,
    logger: logging.Logger | None = None,
) -> Optional[EditResult]:
    """Apply ``arguments.transactions`` in order through one ``*.edit`` call.

    Returns the edited object's id/PHID and the created transaction PHIDs,
    or ``None`` when ``cancel`` fired before the request went out.
    Raises RemoteAPIError when Conduit rejects the edit.
    """
    log = get_logger(logger)
    catalog.require(procedure, ProcedureKind.EDIT)
    if arguments is None:
        raise ValueError("arguments are required")
    body = encode_edit_arguments(arguments)
    if cancel is not None and cancel.cancelled:
        log.debug("Edit %s cancelled before the request", procedure)
        return None

    try:
        result = parse_envelope(transport.post(transport.url_for(procedure), body), procedure)
        edited = EditResult.from_result(result, f"{procedure}.result")
    except PhabricatorError as exc:
        log.error("Edit %s failed: %s", procedure, exc)
        raise
    log.debug(
        "Edited %s id=%s phid=%s transactions=%s",
        procedure,
        edited.object_id,
        edited.object_phid,
        edited.transaction_phids,
    )
    return edited
