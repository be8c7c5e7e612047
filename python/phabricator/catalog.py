from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Mapping, Optional

from .errors import DecodeError, UnknownProcedureError
from .envelope import parse_envelope
from .fixups import FixupTable
from .logging import get_logger
from .models import ProcedureInfo, ProcedureKind
from .transport import ConduitTransport

INTROSPECTION_PROCEDURE = "conduit.query"


class ProcedureCatalog(Mapping[str, ProcedureInfo]):
    """Read-only table of discovered procedures and their kinds.

    Built once; never mutated afterwards, so concurrent lookups need no lock.
    """

    def __init__(self, procedures: Mapping[str, ProcedureInfo]):
        self._procedures: Dict[str, ProcedureInfo] = dict(procedures)
        self._kinds: Dict[str, ProcedureKind] = {
            name: ProcedureKind.for_name(name) for name in self._procedures
        }

    def __getitem__(self, name: str) -> ProcedureInfo:
        return self._procedures[name]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._procedures))

    def __len__(self) -> int:
        return len(self._procedures)

    def kind_of(self, name: str) -> Optional[ProcedureKind]:
        return self._kinds.get(name)

    def names(self, kind: Optional[ProcedureKind] = None) -> List[str]:
        return [name for name in self if kind is None or self._kinds[name] is kind]

    def require(self, name: str, kind: ProcedureKind) -> ProcedureInfo:
        if self._kinds.get(name) is not kind:
            raise UnknownProcedureError(name, kind.value)
        return self._procedures[name]


def parse_catalog(result: object, path: str = INTROSPECTION_PROCEDURE) -> ProcedureCatalog:
    if not isinstance(result, dict):
        raise DecodeError(f"Expected object at {path}.result")
    procedures: Dict[str, ProcedureInfo] = {}
    for name, info in result.items():
        procedures[name] = ProcedureInfo.from_dict(name, info, f"{path}.result[{name}]")
    return ProcedureCatalog(procedures)


def discover(
    transport: ConduitTransport,
    *,
    fixups: Optional[FixupTable] = None,
    logger: logging.Logger | None = None,
) -> ProcedureCatalog:
    """Query ``conduit.query`` and classify every procedure it reports."""
    log = get_logger(logger)
    fixups = fixups if fixups is not None else FixupTable()

    body = transport.post(transport.url_for(INTROSPECTION_PROCEDURE))
    body = fixups.apply(INTROSPECTION_PROCEDURE, body)
    try:
        result = parse_envelope(body, INTROSPECTION_PROCEDURE)
    except Exception as exc:
        log.error("Endpoint discovery failed: %s", exc)
        raise
    catalog = parse_catalog(result)

    for name in catalog:
        kind = catalog.kind_of(name)
        if kind is ProcedureKind.UNSUPPORTED:
            log.warning("Procedure not supported yet - skipping: %s", name)
        else:
            log.debug("Registered %s procedure: %s", kind.value, name)
    log.info(
        "Discovered %d procedures (%d search, %d edit)",
        len(catalog),
        len(catalog.names(ProcedureKind.SEARCH)),
        len(catalog.names(ProcedureKind.EDIT)),
    )
    return catalog
