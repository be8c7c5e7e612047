from __future__ import annotations

import inspect
from typing import Any, Callable, Type, TypeVar, Union

from .errors import DecodeError

T = TypeVar("T")

RecordDecoder = Callable[[Any, str], T]
RecordShape = Union[Type[T], Callable[[Any], T]]


def resolve_decoder(shape: RecordShape) -> RecordDecoder:
    """Turn a destination shape into a ``decoder(raw, path)`` callable.

    A shape is either a class exposing ``from_dict(obj, path)`` (the record
    types in ``phabricator.gen``) or any one-argument callable such as
    ``dict`` or a lambda. Resolution happens once per search call.
    """
    if shape is None:
        raise ValueError("record shape is required")
    from_dict = getattr(shape, "from_dict", None)
    if inspect.isclass(shape) and callable(from_dict):
        return lambda raw, path: from_dict(raw, path)
    if callable(shape):
        return lambda raw, path: shape(raw)
    raise ValueError(f"record shape must be a class or a callable, got {type(shape).__name__}")


def decode_record(decoder: RecordDecoder, raw: Any, path: str) -> Any:
    try:
        return decoder(raw, path)
    except DecodeError:
        raise
    except Exception as exc:
        # Shapes are arbitrary caller code.
        raise DecodeError(f"Failed to decode record at {path}: {exc}") from exc
