"""Course schemas."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CourseSummaryRead(BaseModel):
    """Course fields embedded in booking responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tutor_id: UUID
    title: str
    location: str | None
