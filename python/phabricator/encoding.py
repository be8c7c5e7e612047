"""Form encoding for Conduit arguments.

Search arguments are dataclasses (or plain mappings) flattened into PHP-style
bracketed keys::

    constraints[ids][0]=5&attachments[subscribers]=true

``None`` and empty strings/containers are omitted. ``False`` and ``0`` are
sent, so argument shapes default optional fields to ``None``.
"""
from __future__ import annotations

import dataclasses
import json
import re
from enum import Enum
from typing import Any, Iterable, List, Mapping, Tuple
from urllib.parse import quote_plus, urlencode

from .errors import ArgumentError
from .models import EditArguments, Transaction

WIRE_NAME = "wire_name"

Pair = Tuple[str, str]

_CAMEL_RE = re.compile(r"_([a-z0-9])")


def wire(name: str, **kwargs: Any) -> Any:
    """A dataclass field whose form key differs from its camelCased name."""
    if "default_factory" not in kwargs:
        kwargs.setdefault("default", None)
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[WIRE_NAME] = name
    return dataclasses.field(metadata=metadata, **kwargs)


def _camel(name: str) -> str:
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), name)


def _dataclass_items(obj: Any) -> List[Tuple[str, Any]]:
    items: List[Tuple[str, Any]] = []
    for f in dataclasses.fields(obj):
        key = f.metadata.get(WIRE_NAME) or _camel(f.name)
        items.append((key, getattr(obj, f.name)))
    return items


def _is_dataclass_instance(obj: Any) -> bool:
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict)) and len(value) == 0:
        return True
    return False


def _scalar(value: Any, key: str) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    raise ArgumentError(f"Unsupported argument type {type(value).__name__} for {key}")


def _flatten(key: str, value: Any, out: List[Pair]) -> None:
    if _is_empty(value):
        return
    if _is_dataclass_instance(value):
        for sub_key, sub_value in _dataclass_items(value):
            _flatten(f"{key}[{sub_key}]", sub_value, out)
    elif isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            _flatten(f"{key}[{sub_key}]", sub_value, out)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{key}[{index}]", item, out)
    else:
        out.append((key, _scalar(value, key)))


def argument_pairs(arguments: Any) -> List[Pair]:
    if arguments is None:
        return []
    if _is_dataclass_instance(arguments):
        items: Iterable[Tuple[str, Any]] = _dataclass_items(arguments)
    elif isinstance(arguments, Mapping):
        items = [(str(key), value) for key, value in arguments.items()]
    else:
        raise ArgumentError(
            f"Arguments must be a dataclass instance or a mapping, got {type(arguments).__name__}"
        )
    pairs: List[Pair] = []
    for key, value in items:
        _flatten(key, value, pairs)
    return pairs


def encode_pairs(pairs: Iterable[Pair]) -> str:
    return urlencode(list(pairs), safe="[]", quote_via=quote_plus)


def encode_arguments(arguments: Any) -> str:
    return encode_pairs(argument_pairs(arguments))


def transaction_value(value: Any) -> str:
    """Strings go as-is; anything structured is sent as JSON."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if _is_dataclass_instance(value):
        value = dataclasses.asdict(value)
    try:
        return json.dumps(value, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise ArgumentError(
            f"Transaction value of type {type(value).__name__} is not JSON serializable"
        ) from exc


def _as_transaction(txn: Any, index: int) -> Transaction:
    if isinstance(txn, Transaction):
        return txn
    if isinstance(txn, (tuple, list)) and len(txn) == 2 and isinstance(txn[0], str):
        return Transaction(type=txn[0], value=txn[1])
    raise ArgumentError(f"transactions[{index}] must be a Transaction or a (type, value) pair")


def edit_argument_pairs(arguments: EditArguments) -> List[Pair]:
    pairs: List[Pair] = []
    identifier = arguments.object_identifier
    if isinstance(identifier, bool) or not (
        identifier is None or isinstance(identifier, (int, str))
    ):
        raise ArgumentError(
            f"objectIdentifier has unsupported type {type(identifier).__name__}; "
            "expected int, str or None"
        )
    if identifier is not None and identifier != "":
        pairs.append(("objectIdentifier", str(identifier)))
    for index, raw_txn in enumerate(arguments.transactions):
        txn = _as_transaction(raw_txn, index)
        if not txn.type:
            raise ArgumentError(f"transactions[{index}] has an empty type")
        pairs.append((f"transactions[{index}][type]", txn.type))
        pairs.append((f"transactions[{index}][value]", transaction_value(txn.value)))
    return pairs


def encode_edit_arguments(arguments: EditArguments) -> str:
    return encode_pairs(edit_argument_pairs(arguments))
