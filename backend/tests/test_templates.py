"""Tests for the per-type prompt templates."""

import pytest

from lesson_studio.agents.templates import (
    JSON_ONLY,
    TEMPLATES,
    build_quiz_prompt,
    quiz_parameters,
)

CONTEXT = "Course: Money Matters (Financial Intelligence)\nLesson: Lesson 1"


class TestQuizParameters:
    @pytest.mark.parametrize(
        "position,count,framing",
        [
            ("opening", 3, "knowledge check"),
            ("mid", 5, "application"),
            ("closing", 7, "comprehensive assessment"),
        ],
    )
    def test_position_determines_count_and_framing(self, position, count, framing):
        params = quiz_parameters(position)
        assert params.question_count == count
        assert params.framing == framing

    def test_prompt_requests_the_derived_count(self):
        prompt = build_quiz_prompt(CONTEXT, "closing")
        assert "Generate a comprehensive assessment quiz for this lesson." in prompt
        assert "Generate exactly 7 questions" in prompt

    def test_prompt_defaults_to_mid(self):
        assert "Generate exactly 5 questions" in build_quiz_prompt(CONTEXT)


class TestTemplates:
    def test_covers_every_activity_type(self):
        assert set(TEMPLATES) == {"quiz", "exercise", "practical_task", "reflection"}

    @pytest.mark.parametrize(
        "activity_type,field",
        [
            ("quiz", "questions"),
            ("exercise", "steps"),
            ("practical_task", "objectives"),
            ("reflection", "questions"),
        ],
    )
    def test_required_fields(self, activity_type, field):
        assert TEMPLATES[activity_type].required_field == field

    @pytest.mark.parametrize("activity_type", list(TEMPLATES))
    def test_prompt_embeds_context_and_demands_json(self, activity_type):
        prompt = TEMPLATES[activity_type].build_prompt(CONTEXT)
        assert CONTEXT in prompt
        assert prompt.endswith(JSON_ONLY)

    @pytest.mark.parametrize("activity_type", list(TEMPLATES))
    def test_system_instruction_demands_pure_json(self, activity_type):
        instruction = TEMPLATES[activity_type].system_instruction
        assert "ONLY valid JSON" in instruction

    def test_system_instructions_are_distinct(self):
        instructions = {t.system_instruction for t in TEMPLATES.values()}
        assert len(instructions) == len(TEMPLATES)
