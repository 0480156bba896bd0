"""Shared fakes for the generation pipeline tests.

The text generator and the lesson repository are the pipeline's two external
collaborators; both are replaced here with in-memory versions so tests never
reach a model provider or a database.
"""

import json

import pytest

from lesson_studio.agents.metadata import METADATA_SYSTEM_INSTRUCTION
from lesson_studio.agents.templates import TEMPLATES
from lesson_studio.schemas.lesson import (
    CourseOutline,
    CourseSummary,
    LessonRef,
    LessonSnapshot,
    SiblingActivity,
)
from lesson_studio.services.generation import ActivityGenerator

CONTENT_PAYLOADS = {
    "quiz": {
        "questions": [
            {
                "id": "q1",
                "text": "What is a cash flow statement?",
                "options": ["A report", "A loan", "A tax", "A product"],
                "correctAnswer": 0,
                "explanation": "It reports cash moving in and out of the business.",
            }
        ]
    },
    "exercise": {
        "instructions": "Build a simple monthly budget.",
        "steps": [{"stepNumber": 1, "title": "List income", "description": "Write it down."}],
        "submissionType": "text",
        "checklist": ["Income listed"],
        "resources": [],
    },
    "practical_task": {
        "instructions": "Prepare a break-even analysis.",
        "scenario": "You run a small bakery.",
        "objectives": ["Find fixed costs", "Find the break-even point"],
        "deliverables": ["A one-page analysis"],
        "criteria": ["Numbers add up"],
        "submissionType": "text",
        "examples": [],
        "resources": [],
    },
    "reflection": {
        "instructions": "Reflect on your spending habits.",
        "questions": [{"id": "r1", "text": "Why do you spend?", "type": "text"}],
        "submissionType": "text",
        "guidance": "Be honest.",
    },
}

METADATA_PAYLOAD = {
    "title": "Reading Your First Cash Flow Statement",
    "description": "Work through the basics of tracking money in and out.",
}


def content_type_for(system_instruction: str) -> str | None:
    for activity_type, template in TEMPLATES.items():
        if template.system_instruction == system_instruction:
            return activity_type
    return None


def default_response(system_instruction: str, user_prompt: str) -> str:
    if system_instruction == METADATA_SYSTEM_INSTRUCTION:
        return json.dumps(METADATA_PAYLOAD)
    return json.dumps(CONTENT_PAYLOADS[content_type_for(system_instruction)])


class FakeTextGenerator:
    """Records every call; ``respond`` returns the raw text or an exception to raise."""

    def __init__(self, respond=default_response):
        self.respond = respond
        self.calls: list[tuple[str, str]] = []

    async def generate(self, system_instruction: str, user_prompt: str) -> str:
        self.calls.append((system_instruction, user_prompt))
        result = self.respond(system_instruction, user_prompt)
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def content_calls(self) -> list[tuple[str, str]]:
        return [c for c in self.calls if c[0] != METADATA_SYSTEM_INSTRUCTION]


class FakeLessonRepository:
    def __init__(self, lessons=None, courses=None):
        self.lessons = lessons or {}
        self.courses = courses or {}
        self.lesson_lookups: list[str] = []

    async def get_lesson(self, lesson_id: str) -> LessonSnapshot | None:
        self.lesson_lookups.append(lesson_id)
        return self.lessons.get(lesson_id)

    async def get_course(self, course_id: str) -> CourseOutline | None:
        return self.courses.get(course_id)


@pytest.fixture
def lesson_snapshot() -> LessonSnapshot:
    return LessonSnapshot(
        title="Lesson 1",
        description="Understanding where the money goes",
        lesson_number=1,
        duration=540,
        course=CourseSummary(
            course_number=3,
            title="Money Matters",
            description="Core financial skills for founders",
        ),
        activities=[],
    )


@pytest.fixture
def lesson_repository(lesson_snapshot) -> FakeLessonRepository:
    second = lesson_snapshot.model_copy(
        update={
            "title": "Lesson 2",
            "lesson_number": 2,
            "activities": [SiblingActivity(activity_number=1, title="Warm-up", type="quiz")],
        }
    )
    return FakeLessonRepository(
        lessons={"lesson-1": lesson_snapshot, "lesson-2": second},
        courses={
            "course-3": CourseOutline(
                id="course-3",
                title="Money Matters",
                course_number=3,
                lessons=[
                    LessonRef(id="lesson-1", title="Lesson 1", lesson_number=1),
                    LessonRef(id="lesson-2", title="Lesson 2", lesson_number=2),
                ],
            )
        },
    )


@pytest.fixture
def text_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture
def activity_generator(lesson_repository, text_generator) -> ActivityGenerator:
    return ActivityGenerator(
        lesson_repository,
        text_generator,
        activity_delay_seconds=0,
        lesson_delay_seconds=0,
    )


def fail_mid_quiz_response(system_instruction: str, user_prompt: str) -> str:
    """Responder whose mid-lesson quiz content comes back as prose."""
    if (
        system_instruction == TEMPLATES["quiz"].system_instruction
        and "Generate exactly 5 questions" in user_prompt
    ):
        return "Sorry, I can't produce that quiz right now."
    return default_response(system_instruction, user_prompt)
