from typing import Protocol

from lesson_studio.errors import NotFoundError
from lesson_studio.schemas.lesson import CourseOutline, LessonSnapshot

COURSE_THEMES = [
    "Business Fundamentals",
    "Marketing Mastery",
    "Financial Intelligence",
    "Sales & Conversion",
    "Operations & Systems",
    "Leadership & Team Building",
    "Growth & Scaling",
]


class LessonRepository(Protocol):
    """Read-only lookups the pipeline needs from the storage layer."""

    async def get_lesson(self, lesson_id: str) -> LessonSnapshot | None: ...

    async def get_course(self, course_id: str) -> CourseOutline | None: ...


def course_theme(course_number: int) -> str:
    """Theme name for a 1-based course ordinal, ``Business`` outside 1..7."""
    if 1 <= course_number <= len(COURSE_THEMES):
        return COURSE_THEMES[course_number - 1]
    return "Business"


def render_lesson_context(lesson: LessonSnapshot) -> str:
    course = lesson.course
    existing = "\n".join(
        f"- Activity {a.activity_number}: {a.title} ({a.type})" for a in lesson.activities
    ) or "None"

    return (
        f"Course: {course.title} ({course_theme(course.course_number)})\n"
        f"Course Description: {course.description}\n"
        f"\n"
        f"Lesson: {lesson.title}\n"
        f"Lesson Description: {lesson.description}\n"
        f"Lesson Number: {lesson.lesson_number}\n"
        f"Video Duration: {lesson.duration} seconds\n"
        f"\n"
        f"Existing Activities:\n"
        f"{existing}"
    )


async def build_lesson_context(lessons: LessonRepository, lesson_id: str) -> str:
    lesson = await lessons.get_lesson(lesson_id)
    if lesson is None:
        raise NotFoundError("Lesson not found")
    return render_lesson_context(lesson)
