from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class OperationStatus(BaseModel):
    """Acknowledgement for mutations that leave no resource to return."""

    status: Literal["ok", "deleted"] = "ok"
    id: str = Field(..., description="Identifier of the affected entry")
