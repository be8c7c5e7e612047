from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional


@dataclass(frozen=True)
class ResponseFixup:
    """A literal byte substitution applied to a raw response body.

    Conduit serializes an empty PHP map as ``[]``; a fixup rewrites such a
    field back to ``{}`` so the body decodes into the expected shape.
    """

    pattern: bytes
    replacement: bytes

    def apply(self, body: bytes) -> bytes:
        return body.replace(self.pattern, self.replacement)


def empty_map_fixup(field_name: str) -> ResponseFixup:
    if not field_name:
        raise ValueError("field_name is required")
    key = field_name.encode("utf-8")
    return ResponseFixup(pattern=b'"' + key + b'":[]', replacement=b'"' + key + b'":{}')


DEFAULT_FIXUPS: Mapping[str, tuple] = {
    "conduit.query": (empty_map_fixup("params"),),
    "maniphest.search": (empty_map_fixup("boards"),),
}


class FixupTable:
    """Per-procedure rule table; each client owns its own copy."""

    def __init__(self, rules: Optional[Mapping[str, Iterable[ResponseFixup]]] = None):
        self._rules: Dict[str, List[ResponseFixup]] = {}
        source = DEFAULT_FIXUPS if rules is None else rules
        for procedure, fixups in source.items():
            for fixup in fixups:
                self.register(procedure, fixup)

    def register(self, procedure: str, fixup: ResponseFixup) -> None:
        if not procedure:
            raise ValueError("procedure is required")
        self._rules.setdefault(procedure, []).append(fixup)

    def rules_for(self, procedure: str) -> List[ResponseFixup]:
        return list(self._rules.get(procedure, ()))

    def apply(self, procedure: str, body: bytes) -> bytes:
        for fixup in self._rules.get(procedure, ()):
            body = fixup.apply(body)
        return body

    def copy(self) -> "FixupTable":
        return FixupTable(self._rules)
