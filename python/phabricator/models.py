from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar, Union

from .errors import DecodeError

T = TypeVar("T")

SEARCH_SUFFIX = ".search"
EDIT_SUFFIX = ".edit"


def _expect_dict(obj: Any, path: str) -> Dict[str, Any]:
    if not isinstance(obj, dict):
        raise DecodeError(f"Expected object at {path}")
    return obj


def _expect_list(obj: Any, path: str) -> List[Any]:
    if not isinstance(obj, list):
        raise DecodeError(f"Expected list at {path}")
    return obj


def _optional_str(obj: Any, path: str) -> Optional[str]:
    if obj is None:
        return None
    if not isinstance(obj, str):
        raise DecodeError(f"Expected string at {path}")
    return obj


def _optional_int(obj: Any, path: str) -> Optional[int]:
    if obj is None:
        return None
    if isinstance(obj, bool) or not isinstance(obj, int):
        raise DecodeError(f"Expected integer at {path}")
    return obj


class ProcedureKind(Enum):
    SEARCH = "search"
    EDIT = "edit"
    UNSUPPORTED = "unsupported"

    @classmethod
    def for_name(cls, name: str) -> "ProcedureKind":
        if name.endswith(SEARCH_SUFFIX):
            return cls.SEARCH
        if name.endswith(EDIT_SUFFIX):
            return cls.EDIT
        return cls.UNSUPPORTED


@dataclass(frozen=True)
class ProcedureInfo:
    name: str
    description: str = ""
    params: Tuple[Tuple[str, str], ...] = ()
    returns: str = ""

    @property
    def param_names(self) -> List[str]:
        return [name for name, _ in self.params]

    @staticmethod
    def from_dict(name: str, obj: Any, path: str) -> "ProcedureInfo":
        raw = _expect_dict(obj, path)
        params_raw = raw.get("params")
        params: List[Tuple[str, str]] = []
        if params_raw is not None:
            for key, value in _expect_dict(params_raw, f"{path}.params").items():
                params.append((key, value if isinstance(value, str) else str(value)))
        return ProcedureInfo(
            name=name,
            description=_optional_str(raw.get("description"), f"{path}.description") or "",
            params=tuple(params),
            returns=_optional_str(raw.get("return"), f"{path}.return") or "",
        )

    def describe(self) -> str:
        lines = [f"{self.name}:", f"\tDescription: {self.description}", "\tParams:"]
        for param, desc in self.params:
            lines.append(f"\t\t{param}: {desc}")
        lines.append("\tReturn:")
        lines.append(f"\t\t{self.returns}")
        return "\n".join(lines)


@dataclass(frozen=True)
class Page:
    """One decoded search response.

    ``data`` holds the raw records in server order; ``after`` is the opaque
    cursor for the next page and is ``None`` on the last one.
    """

    data: List[Any]
    after: Optional[str] = None
    before: Optional[str] = None
    limit: Optional[int] = None

    @property
    def is_last(self) -> bool:
        return not self.after

    @staticmethod
    def from_result(obj: Any, path: str) -> "Page":
        raw = _expect_dict(obj, path)
        data = _expect_list(raw.get("data", []), f"{path}.data")
        cursor_raw = raw.get("cursor")
        after = before = None
        limit = None
        if cursor_raw is not None:
            cursor = _expect_dict(cursor_raw, f"{path}.cursor")
            after = _cursor_token(cursor.get("after"), f"{path}.cursor.after")
            before = _cursor_token(cursor.get("before"), f"{path}.cursor.before")
            limit = _optional_int(cursor.get("limit"), f"{path}.cursor.limit")
        return Page(data=list(data), after=after, before=before, limit=limit)


def _cursor_token(obj: Any, path: str) -> Optional[str]:
    # Conduit returns cursors as strings, but integer ids show up in older installs.
    if obj is None:
        return None
    if isinstance(obj, bool):
        raise DecodeError(f"Expected cursor token at {path}")
    if isinstance(obj, int):
        return str(obj)
    token = _optional_str(obj, path)
    return token or None


@dataclass(frozen=True)
class Transaction:
    type: str
    value: Any = None


def new_transaction(type: str, value: Any) -> Transaction:
    if not type or not type.strip():
        raise ValueError("transaction type is required")
    return Transaction(type=type.strip(), value=value)


@dataclass
class EditArguments:
    object_identifier: Union[int, str, None] = None
    transactions: List[Transaction] = field(default_factory=list)


@dataclass(frozen=True)
class EditResult:
    object_id: Optional[int]
    object_phid: Optional[str]
    transaction_phids: List[str] = field(default_factory=list)

    @staticmethod
    def from_result(obj: Any, path: str) -> "EditResult":
        raw = _expect_dict(obj, path)
        object_id: Optional[int] = None
        object_phid: Optional[str] = None
        if raw.get("object") is not None:
            obj_raw = _expect_dict(raw.get("object"), f"{path}.object")
            object_id = _optional_int(obj_raw.get("id"), f"{path}.object.id")
            object_phid = _optional_str(obj_raw.get("phid"), f"{path}.object.phid")
        phids: List[str] = []
        for idx, txn in enumerate(_expect_list(raw.get("transactions", []), f"{path}.transactions")):
            txn_raw = _expect_dict(txn, f"{path}.transactions[{idx}]")
            phid = _optional_str(
                txn_raw.get("phid", txn_raw.get("PHID")), f"{path}.transactions[{idx}].phid"
            )
            if phid:
                phids.append(phid)
        return EditResult(object_id=object_id, object_phid=object_phid, transaction_phids=phids)


@dataclass(frozen=True)
class WhoAmI:
    phid: str
    user_name: str
    real_name: Optional[str] = None
    image: Optional[str] = None
    uri: Optional[str] = None
    roles: List[str] = field(default_factory=list)
    primary_email: Optional[str] = None

    @staticmethod
    def from_result(obj: Any, path: str) -> "WhoAmI":
        raw = _expect_dict(obj, path)
        phid = _optional_str(raw.get("phid"), f"{path}.phid")
        if not phid:
            raise DecodeError(f"Missing {path}.phid")
        user_name = _optional_str(raw.get("userName"), f"{path}.userName")
        if not user_name:
            raise DecodeError(f"Missing {path}.userName")
        roles: List[str] = []
        if raw.get("roles") is not None:
            for idx, role in enumerate(_expect_list(raw.get("roles"), f"{path}.roles")):
                role_str = _optional_str(role, f"{path}.roles[{idx}]")
                if role_str:
                    roles.append(role_str)
        return WhoAmI(
            phid=phid,
            user_name=user_name,
            real_name=_optional_str(raw.get("realName"), f"{path}.realName"),
            image=_optional_str(raw.get("image"), f"{path}.image"),
            uri=_optional_str(raw.get("uri"), f"{path}.uri"),
            roles=roles,
            primary_email=_optional_str(raw.get("primaryEmail"), f"{path}.primaryEmail"),
        )


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: Exception
    terminal: bool = True

    @property
    def is_ok(self) -> bool:
        return False


SearchResult = Union[Ok[T], Err]
