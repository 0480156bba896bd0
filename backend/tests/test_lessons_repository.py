"""Tests for the SQLAlchemy-backed lesson and course lookups."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from lesson_studio.db.models import Activity, Course, Lesson
from lesson_studio.services.lesson_context import render_lesson_context
from lesson_studio.services.lessons import SqlLessonRepository


def _session_returning(obj):
    result = MagicMock()
    result.scalar_one_or_none.return_value = obj
    session = AsyncMock()
    session.execute.return_value = result
    return session


def _course() -> Course:
    course = Course(
        id="course-3",
        course_number=3,
        title="Money Matters",
        description="Core financial skills for founders",
    )
    course.lessons = [
        Lesson(id="lesson-1", lesson_number=1, title="Lesson 1", duration=540),
        Lesson(id="lesson-2", lesson_number=2, title="Lesson 2", duration=600),
    ]
    return course


class TestGetLesson:
    @pytest.mark.asyncio
    async def test_maps_lesson_course_and_activities(self):
        lesson = _course().lessons[0]
        lesson.description = "Understanding where the money goes"
        lesson.activities = [
            Activity(activity_number=1, title="Warm-up", type="quiz"),
            Activity(activity_number=2, title="Budget drill", type="exercise"),
        ]
        repository = SqlLessonRepository(_session_returning(lesson))

        snapshot = await repository.get_lesson("lesson-1")

        assert snapshot.title == "Lesson 1"
        assert snapshot.duration == 540
        assert snapshot.course.course_number == 3
        assert [a.title for a in snapshot.activities] == ["Warm-up", "Budget drill"]
        assert render_lesson_context(snapshot).startswith(
            "Course: Money Matters (Financial Intelligence)\n"
        )

    @pytest.mark.asyncio
    async def test_missing_lesson(self):
        repository = SqlLessonRepository(_session_returning(None))
        assert await repository.get_lesson("missing") is None


class TestGetCourse:
    @pytest.mark.asyncio
    async def test_maps_lessons_in_order(self):
        repository = SqlLessonRepository(_session_returning(_course()))

        outline = await repository.get_course("course-3")

        assert outline.id == "course-3"
        assert outline.course_number == 3
        assert [(ref.id, ref.lesson_number) for ref in outline.lessons] == [
            ("lesson-1", 1),
            ("lesson-2", 2),
        ]

    @pytest.mark.asyncio
    async def test_missing_course(self):
        repository = SqlLessonRepository(_session_returning(None))
        assert await repository.get_course("missing") is None
