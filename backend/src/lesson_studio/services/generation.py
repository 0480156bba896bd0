import asyncio
import logging

from lesson_studio.agents.content import generate_content
from lesson_studio.agents.metadata import generate_metadata
from lesson_studio.agents.templates import TEMPLATES
from lesson_studio.agents.text_generator import TextGenerator
from lesson_studio.config import settings
from lesson_studio.errors import GenerationError, NotFoundError, UnsupportedTypeError
from lesson_studio.schemas.activity import (
    ActivityPlanEntry,
    GenerateActivityOptions,
    GeneratedActivity,
)
from lesson_studio.schemas.lesson import CourseGenerationResult, LessonGenerationResult
from lesson_studio.services.lesson_context import LessonRepository, build_lesson_context

logger = logging.getLogger(__name__)

DEFAULT_ACTIVITY_PLAN: tuple[ActivityPlanEntry, ...] = (
    ActivityPlanEntry(type="quiz", position="opening"),
    ActivityPlanEntry(type="exercise"),
    ActivityPlanEntry(type="quiz", position="mid"),
    ActivityPlanEntry(type="practical_task"),
    ActivityPlanEntry(type="quiz", position="closing"),
)


class ActivityGenerator:
    """Generates learning activities for lessons.

    The text generator is created once at startup and passed in; ``None``
    means the AI client is not configured and every content call fails with
    ConfigurationError. Delays and the per-call timeout default to settings
    so tests can run batches with no throttling.
    """

    def __init__(
        self,
        lessons: LessonRepository,
        generator: TextGenerator | None,
        activity_delay_seconds: float | None = None,
        lesson_delay_seconds: float | None = None,
        timeout_seconds: float | None = None,
    ):
        self.lessons = lessons
        self.generator = generator
        self.activity_delay_seconds = (
            settings.activity_delay_seconds
            if activity_delay_seconds is None
            else activity_delay_seconds
        )
        self.lesson_delay_seconds = (
            settings.lesson_delay_seconds if lesson_delay_seconds is None else lesson_delay_seconds
        )
        self.timeout_seconds = (
            settings.generation_timeout_seconds if timeout_seconds is None else timeout_seconds
        )

    async def generate_activity(self, options: GenerateActivityOptions) -> GeneratedActivity:
        """Context -> metadata -> content for a single activity. No partial results."""
        logger.info(
            "Generating activity %d (%s, position=%s) for lesson %s",
            options.activity_number,
            options.activity_type,
            options.position,
            options.lesson_id,
        )

        context = await build_lesson_context(self.lessons, options.lesson_id)

        template = TEMPLATES.get(options.activity_type)
        if template is None:
            raise UnsupportedTypeError(options.activity_type)

        # Metadata sees the caller's position; only quiz content defaults to mid
        metadata = await generate_metadata(
            self.generator,
            context,
            options.activity_type,
            options.activity_number,
            options.position,
            timeout=self.timeout_seconds,
        )

        params = {"position": options.position or "mid"} if options.activity_type == "quiz" else {}
        content = await generate_content(
            self.generator, template, context, timeout=self.timeout_seconds, **params
        )

        return GeneratedActivity(
            title=metadata.title,
            description=metadata.description,
            content=content,
        )

    async def generate_lesson_activities(
        self,
        lesson_id: str,
        plan: list[ActivityPlanEntry] | None = None,
    ) -> list[GeneratedActivity]:
        """Generate every entry of ``plan`` (or the default plan) in order.

        Fails fast: the first failing entry aborts the batch and nothing is
        returned. The error keeps its type and is annotated with the lesson id
        and the failing activity number.
        """
        entries = list(DEFAULT_ACTIVITY_PLAN if plan is None else plan)
        activities: list[GeneratedActivity] = []

        for i, entry in enumerate(entries):
            activity_number = i + 1
            try:
                activity = await self.generate_activity(
                    GenerateActivityOptions(
                        lesson_id=lesson_id,
                        activity_type=entry.type,
                        activity_number=activity_number,
                        position=entry.position,
                    )
                )
            except GenerationError as e:
                e.lesson_id = lesson_id
                e.activity_number = activity_number
                e.add_note(f"while generating activity {activity_number} for lesson {lesson_id}")
                logger.error(
                    "Failed to generate activity %d for lesson %s: %s", activity_number, lesson_id, e
                )
                raise

            activities.append(activity)

            # Throttle between model calls to stay under provider rate limits
            if i < len(entries) - 1:
                await asyncio.sleep(self.activity_delay_seconds)

        return activities

    async def generate_course_activities(self, course_id: str) -> CourseGenerationResult:
        """Run the default plan for every lesson of a course.

        A failing lesson is recorded and the run moves on to the next one.
        """
        course = await self.lessons.get_course(course_id)
        if course is None:
            raise NotFoundError("Course not found")

        results: list[LessonGenerationResult] = []

        for i, lesson in enumerate(course.lessons):
            try:
                activities = await self.generate_lesson_activities(lesson.id)
                results.append(
                    LessonGenerationResult(
                        lesson_id=lesson.id,
                        lesson_title=lesson.title,
                        lesson_number=lesson.lesson_number,
                        status="success",
                        activities_generated=len(activities),
                        activities=activities,
                    )
                )
            except GenerationError as e:
                logger.exception("Error generating activities for lesson %s", lesson.id)
                results.append(
                    LessonGenerationResult(
                        lesson_id=lesson.id,
                        lesson_title=lesson.title,
                        lesson_number=lesson.lesson_number,
                        status="error",
                        error=str(e),
                    )
                )

            if i < len(course.lessons) - 1:
                await asyncio.sleep(self.lesson_delay_seconds)

        successful = sum(1 for r in results if r.status == "success")
        return CourseGenerationResult(
            course_id=course.id,
            title=course.title,
            course_number=course.course_number,
            results=results,
            total_lessons=len(course.lessons),
            successful=successful,
            failed=len(results) - successful,
        )
