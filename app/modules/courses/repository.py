"""Course directory lookups consumed by the booking core."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.courses.models import Course


class CourseRepository:
    """Read-only access to course existence and ownership."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_course_by_id(self, course_id: UUID) -> Course | None:
        stmt = select(Course).where(Course.id == course_id)
        return await self.session.scalar(stmt)
