from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lesson_studio.db.models import Course, Lesson
from lesson_studio.schemas.lesson import CourseOutline, LessonSnapshot


class SqlLessonRepository:
    """LessonRepository backed by the course/lesson/activity tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_lesson(self, lesson_id: str) -> LessonSnapshot | None:
        result = await self.db.execute(
            select(Lesson)
            .where(Lesson.id == lesson_id)
            .options(selectinload(Lesson.course), selectinload(Lesson.activities))
        )
        lesson = result.scalar_one_or_none()
        if lesson is None:
            return None
        return LessonSnapshot.model_validate(lesson)

    async def get_course(self, course_id: str) -> CourseOutline | None:
        result = await self.db.execute(
            select(Course).where(Course.id == course_id).options(selectinload(Course.lessons))
        )
        course = result.scalar_one_or_none()
        if course is None:
            return None
        return CourseOutline.model_validate(course)
