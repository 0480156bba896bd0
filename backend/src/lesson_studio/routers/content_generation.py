from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from lesson_studio.agents.text_generator import TextGenerator
from lesson_studio.db.session import get_db_session
from lesson_studio.errors import (
    ConfigurationError,
    ContentGenerationError,
    GenerationError,
    NotFoundError,
    UnsupportedTypeError,
)
from lesson_studio.schemas.activity import (
    GenerateActivitiesRequest,
    GenerateActivityOptions,
    GenerateActivityRequest,
    GeneratedActivity,
    LessonActivitiesResponse,
)
from lesson_studio.schemas.lesson import CourseGenerationResult
from lesson_studio.services.generation import ActivityGenerator
from lesson_studio.services.lessons import SqlLessonRepository

router = APIRouter(prefix="/api/admin", tags=["content-generation"])

STATUS_CODES: dict[type[GenerationError], int] = {
    NotFoundError: 404,
    UnsupportedTypeError: 400,
    ConfigurationError: 503,
    ContentGenerationError: 502,
}


def get_text_generator(request: Request) -> TextGenerator | None:
    """The generator built once at startup, or None if the AI client is not configured."""
    return getattr(request.app.state, "text_generator", None)


async def get_activity_generator(
    db: AsyncSession = Depends(get_db_session),
    generator: TextGenerator | None = Depends(get_text_generator),
) -> ActivityGenerator:
    return ActivityGenerator(SqlLessonRepository(db), generator)


def to_http_error(e: GenerationError) -> HTTPException:
    return HTTPException(status_code=STATUS_CODES.get(type(e), 500), detail=str(e))


@router.post("/lessons/{lesson_id}/generate-activity", response_model=GeneratedActivity)
async def generate_activity(
    lesson_id: str,
    req: GenerateActivityRequest,
    activity_generator: ActivityGenerator = Depends(get_activity_generator),
):
    try:
        return await activity_generator.generate_activity(
            GenerateActivityOptions(
                lesson_id=lesson_id,
                activity_type=req.activity_type,
                activity_number=req.activity_number,
                position=req.position,
            )
        )
    except GenerationError as e:
        raise to_http_error(e) from e


@router.post("/lessons/{lesson_id}/generate-activities", response_model=LessonActivitiesResponse)
async def generate_lesson_activities(
    lesson_id: str,
    req: GenerateActivitiesRequest | None = None,
    activity_generator: ActivityGenerator = Depends(get_activity_generator),
):
    plan = req.activity_plan if req else None
    try:
        activities = await activity_generator.generate_lesson_activities(lesson_id, plan)
    except GenerationError as e:
        raise to_http_error(e) from e
    return LessonActivitiesResponse(
        lesson_id=lesson_id, activities=activities, count=len(activities)
    )


@router.post("/courses/{course_id}/generate-activities", response_model=CourseGenerationResult)
async def generate_course_activities(
    course_id: str,
    activity_generator: ActivityGenerator = Depends(get_activity_generator),
):
    try:
        return await activity_generator.generate_course_activities(course_id)
    except GenerationError as e:
        raise to_http_error(e) from e
