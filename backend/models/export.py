"""Export API models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class ExportCapabilities(BaseModel):
    """Which export actions are offered and whether one is running."""

    share: bool
    action_in_progress: str | None = None


class ShareResponse(BaseModel):
    """JSON answer of POST /api/export/share when no PDF is returned."""

    status: Literal["shared", "not_shared"]
    url: str | None = None
