from __future__ import annotations

from typing import Any

from spendio.api.schemas.common import RequestModel
from spendio.domain.enums import RestoreMode


class RestorePayload(RequestModel):
    mode: RestoreMode = RestoreMode.MERGE
    snapshot: dict[str, Any]
