import logging

from lesson_studio.agents.content import ensure_generator, parse_json_payload
from lesson_studio.agents.logging import run_agent
from lesson_studio.agents.templates import JSON_ONLY
from lesson_studio.agents.text_generator import TextGenerator
from lesson_studio.schemas.activity import ActivityMetadata, QuizPosition

logger = logging.getLogger(__name__)

METADATA_SYSTEM_INSTRUCTION = (
    "You are an expert eLearning content creator. Generate concise, engaging titles and "
    "descriptions for learning activities."
)

QUIZ_LABELS = {"opening": "Opening Quiz", "mid": "Mid-Lesson Quiz"}
TYPE_LABELS = {
    "exercise": "Exercise",
    "practical_task": "Practical Task",
    "reflection": "Reflection",
}

QUIZ_FALLBACK_TITLES = {"opening": "Opening Knowledge Check", "mid": "Mid-Lesson Quiz"}
FALLBACK_TITLES = {
    "exercise": "Guided Practice Exercise",
    "practical_task": "Practical Application Task",
    "reflection": "Learning Reflection",
}


def activity_label(activity_type: str, position: QuizPosition | None = None) -> str:
    if activity_type == "quiz":
        return QUIZ_LABELS.get(position, "Closing Quiz")
    return TYPE_LABELS.get(activity_type, "Reflection")


def fallback_metadata(activity_type: str, position: QuizPosition | None = None) -> ActivityMetadata:
    if activity_type == "quiz":
        title = QUIZ_FALLBACK_TITLES.get(position, "Lesson Assessment")
    else:
        title = FALLBACK_TITLES.get(activity_type, "Learning Activity")
    return ActivityMetadata(
        title=title,
        description=f"Complete this {activity_type.replace('_', ' ')} to reinforce your learning.",
    )


def build_metadata_prompt(
    context: str,
    activity_type: str,
    activity_number: int,
    position: QuizPosition | None = None,
) -> str:
    return (
        f"Generate a title and description for a {activity_label(activity_type, position)} "
        f"(Activity {activity_number}) for this lesson.\n\n"
        f"{context}\n\n"
        "Requirements:\n"
        "- Title should be concise (5-10 words), engaging, and specific to the lesson content\n"
        "- Description should be 1-2 sentences explaining what students will do\n"
        "- Make it clear and actionable\n\n"
        "Return ONLY a valid JSON object:\n"
        "{\n"
        '  "title": "Activity Title Here",\n'
        '  "description": "Brief description of what students will do in this activity."\n'
        "}\n\n"
        f"{JSON_ONLY}"
    )


async def generate_metadata(
    generator: TextGenerator | None,
    context: str,
    activity_type: str,
    activity_number: int,
    position: QuizPosition | None = None,
    timeout: float | None = None,
) -> ActivityMetadata:
    """Title and description for an activity. Never raises: falls back to fixed titles."""
    prompt = build_metadata_prompt(context, activity_type, activity_number, position)
    try:
        client = ensure_generator(generator)
        text = await run_agent(
            client, "metadata_generator", METADATA_SYSTEM_INSTRUCTION, prompt, timeout=timeout
        )
        payload = parse_json_payload(text)
        if not isinstance(payload, dict):
            raise ValueError("Invalid metadata structure: expected a JSON object")
        return ActivityMetadata.model_validate(payload)
    except Exception as e:
        logger.warning(
            "Falling back to default metadata for activity %d (%s): %s",
            activity_number,
            activity_type,
            e,
        )
        return fallback_metadata(activity_type, position)
