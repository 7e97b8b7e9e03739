from __future__ import annotations

from pydantic import Field

from spendio.api.schemas.common import UpdateModel
from spendio.domain.enums import ThemeMode


class SettingsUpdatePayload(UpdateModel):
    theme: ThemeMode | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    auto_backup_enabled: bool | None = None
