from typing import Any, Literal

from pydantic import BaseModel, Field

ActivityType = Literal["quiz", "exercise", "practical_task", "reflection"]
QuizPosition = Literal["opening", "mid", "closing"]


class ActivityPlanEntry(BaseModel):
    """One slot of an ordered lesson plan. ``position`` only matters for quizzes."""

    type: ActivityType
    position: QuizPosition | None = None


class GenerateActivityOptions(BaseModel):
    lesson_id: str
    activity_type: str
    activity_number: int = Field(ge=1)
    position: QuizPosition | None = None


class ActivityMetadata(BaseModel):
    """Title and description produced by the metadata generator."""

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)


class GeneratedActivity(BaseModel):
    title: str
    description: str
    content: dict[str, Any]


class GenerateActivityRequest(BaseModel):
    activity_type: ActivityType
    activity_number: int = Field(ge=1)
    position: QuizPosition | None = None


class GenerateActivitiesRequest(BaseModel):
    activity_plan: list[ActivityPlanEntry] | None = None


class LessonActivitiesResponse(BaseModel):
    lesson_id: str
    activities: list[GeneratedActivity]
    count: int
