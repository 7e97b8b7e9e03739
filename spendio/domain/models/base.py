from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, TypeVar

R = TypeVar("R", bound="Record")


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _plain(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


class Record:
    """Dataclass mixin mapping snake_case attributes to the camelCase JSON we persist."""

    __slots__ = ()

    def to_dict(self) -> dict[str, Any]:
        assert is_dataclass(self)
        return {camel_case(f.name): _plain(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_dict(cls: type[R], raw: dict[str, Any]) -> R:
        if not isinstance(raw, dict):
            raise ValueError(f"{cls.__name__} row must be an object")
        kwargs: dict[str, Any] = {}
        for f in fields(cls):  # type: ignore[arg-type]
            key = camel_case(f.name)
            if key in raw:
                kwargs[f.name] = raw[key]
            elif f.name in raw:
                kwargs[f.name] = raw[f.name]
        return cls(**kwargs)

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}  # type: ignore[arg-type]


def to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("amount must be numeric")
    try:
        return float(value)
    except TypeError as exc:
        raise ValueError("amount must be numeric") from exc
