from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """Request bodies arrive camelCase; snake_case names are accepted too."""

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class UpdateModel(RequestModel):
    """Partial update: omitted fields are left alone.

    An explicit ``null`` is only accepted for fields listed in ``nullable_fields``.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name not in cls.nullable_fields:
            raise ValueError("must not be null")
        return value


def ok(payload: Any, *, request_id: str, meta: dict[str, Any] | None = None) -> dict[str, Any]:
    envelope_meta = {"request_id": request_id}
    if meta:
        envelope_meta.update(meta)
    return {"data": payload, "meta": envelope_meta}


def err(
    *,
    request_id: str,
    code: str,
    message: str,
    details: Any | None = None,
) -> dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
        },
        "request_id": request_id,
    }
