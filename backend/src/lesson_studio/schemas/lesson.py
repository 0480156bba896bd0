from typing import Literal

from pydantic import BaseModel

from lesson_studio.schemas.activity import GeneratedActivity


class CourseSummary(BaseModel):
    course_number: int
    title: str
    description: str | None = None

    model_config = {"from_attributes": True}


class SiblingActivity(BaseModel):
    activity_number: int
    title: str
    type: str

    model_config = {"from_attributes": True}


class LessonSnapshot(BaseModel):
    """What the lesson lookup returns: the lesson, its course and its existing activities."""

    title: str
    description: str | None = None
    lesson_number: int
    duration: int | None = None
    course: CourseSummary
    activities: list[SiblingActivity] = []

    model_config = {"from_attributes": True}


class LessonRef(BaseModel):
    id: str
    title: str
    lesson_number: int

    model_config = {"from_attributes": True}


class CourseOutline(BaseModel):
    id: str
    title: str
    course_number: int
    lessons: list[LessonRef] = []

    model_config = {"from_attributes": True}


class LessonGenerationResult(BaseModel):
    lesson_id: str
    lesson_title: str
    lesson_number: int
    status: Literal["success", "error"]
    activities_generated: int = 0
    activities: list[GeneratedActivity] = []
    error: str | None = None


class CourseGenerationResult(BaseModel):
    course_id: str
    title: str
    course_number: int
    results: list[LessonGenerationResult]
    total_lessons: int
    successful: int
    failed: int
