from collections.abc import Callable
from dataclasses import dataclass

from lesson_studio.schemas.activity import QuizPosition

JSON_ONLY = (
    "Do not include any markdown formatting, code blocks, or text outside the JSON. "
    "Return only the JSON object."
)


def _system_instruction(specialty: str, content_name: str) -> str:
    return (
        f"You are an expert eLearning content creator specializing in creating {specialty} "
        "for business and entrepreneurship courses.\n\n"
        f"Your task is to generate {content_name} content in JSON format that matches the "
        "exact structure required by the platform.\n\n"
        "IMPORTANT: You must return ONLY valid JSON, no markdown, no code blocks, just pure JSON."
    )


@dataclass(frozen=True)
class QuizParameters:
    question_count: int
    framing: str
    focus: str


QUIZ_PARAMETERS: dict[str, QuizParameters] = {
    "opening": QuizParameters(
        question_count=3,
        framing="knowledge check",
        focus="opening quiz: test prior knowledge and introduce concepts",
    ),
    "mid": QuizParameters(
        question_count=5,
        framing="application",
        focus="mid-lesson quiz: reinforce video content with scenario-based questions",
    ),
    "closing": QuizParameters(
        question_count=7,
        framing="comprehensive assessment",
        focus="closing quiz: comprehensive assessment with mixed difficulty levels",
    ),
}


def quiz_parameters(position: QuizPosition) -> QuizParameters:
    return QUIZ_PARAMETERS[position]


def build_quiz_prompt(context: str, position: QuizPosition = "mid") -> str:
    params = quiz_parameters(position)
    return (
        f"Generate a {params.framing} quiz for this lesson.\n\n"
        f"{context}\n\n"
        "Requirements:\n"
        f"- Generate exactly {params.question_count} questions\n"
        "- Each question must have 4 options (A, B, C, D)\n"
        "- Include detailed explanations for each answer\n"
        "- Questions should test understanding of key concepts from the lesson\n"
        f"- For {params.focus}\n\n"
        "Return ONLY a valid JSON object with this exact structure:\n"
        "{\n"
        '  "questions": [\n'
        "    {\n"
        '      "id": "q1",\n'
        '      "text": "Question text here",\n'
        '      "options": ["Option A", "Option B", "Option C", "Option D"],\n'
        '      "correctAnswer": 0,\n'
        '      "explanation": "Detailed explanation of why this answer is correct and why others are wrong"\n'
        "    }\n"
        "  ]\n"
        "}\n\n"
        f"{JSON_ONLY}"
    )


def build_exercise_prompt(context: str) -> str:
    return (
        "Generate a guided practice exercise for this lesson.\n\n"
        f"{context}\n\n"
        "Requirements:\n"
        "- Create 3-5 clear, actionable steps\n"
        "- Each step should have a title, description, and optional hint\n"
        "- Include a checklist for students to verify their work\n"
        "- Exercise should be hands-on and practical\n"
        "- Should help students apply concepts from the lesson\n\n"
        "Return ONLY a valid JSON object with this exact structure:\n"
        "{\n"
        '  "instructions": "Clear, actionable instructions for the exercise",\n'
        '  "steps": [\n'
        "    {\n"
        '      "stepNumber": 1,\n'
        '      "title": "Step Title",\n'
        '      "description": "What to do in this step",\n'
        '      "hint": "Optional hint if student gets stuck"\n'
        "    }\n"
        "  ],\n"
        '  "submissionType": "text",\n'
        '  "checklist": ["Item to verify", "Another verification point"],\n'
        '  "resources": []\n'
        "}\n\n"
        f"{JSON_ONLY}"
    )


def build_practical_task_prompt(context: str) -> str:
    return (
        "Generate a practical task for this lesson.\n\n"
        f"{context}\n\n"
        "Requirements:\n"
        "- Create a realistic business scenario\n"
        "- Define clear objectives (2-4 objectives)\n"
        "- Specify deliverables (what students should create/submit)\n"
        "- Include success criteria (3-5 criteria)\n"
        "- Task should be applicable to real business situations\n"
        "- Should help students build portfolio-worthy work\n\n"
        "Return ONLY a valid JSON object with this exact structure:\n"
        "{\n"
        '  "instructions": "Clear task description",\n'
        '  "scenario": "Real-world scenario description",\n'
        '  "objectives": ["Objective 1", "Objective 2"],\n'
        '  "deliverables": ["What students should create/deliver"],\n'
        '  "criteria": ["Success criterion 1", "Success criterion 2"],\n'
        '  "submissionType": "text",\n'
        '  "examples": [],\n'
        '  "resources": []\n'
        "}\n\n"
        f"{JSON_ONLY}"
    )


def build_reflection_prompt(context: str) -> str:
    return (
        "Generate a reflection activity for this lesson.\n\n"
        f"{context}\n\n"
        "Requirements:\n"
        "- Create 2-4 open-ended reflection questions\n"
        "- Questions should encourage deep thinking and self-assessment\n"
        "- Should connect learning to personal experience\n"
        '- Use "how" and "why" questions\n'
        "- Should help students internalize concepts\n\n"
        "Return ONLY a valid JSON object with this exact structure:\n"
        "{\n"
        '  "instructions": "Reflection prompt",\n'
        '  "questions": [\n'
        "    {\n"
        '      "id": "r1",\n'
        '      "text": "Reflection question",\n'
        '      "type": "text",\n'
        '      "hint": "Optional guidance"\n'
        "    }\n"
        "  ],\n"
        '  "submissionType": "text",\n'
        '  "guidance": "Additional guidance for reflection"\n'
        "}\n\n"
        f"{JSON_ONLY}"
    )


@dataclass(frozen=True)
class ContentTemplate:
    """Everything that differs between the four content generators."""

    content_type: str
    label: str
    system_instruction: str
    build_prompt: Callable[..., str]
    required_field: str


TEMPLATES: dict[str, ContentTemplate] = {
    "quiz": ContentTemplate(
        content_type="quiz",
        label="quiz",
        system_instruction=_system_instruction(
            "engaging, educational quiz questions", "quiz"
        ),
        build_prompt=build_quiz_prompt,
        required_field="questions",
    ),
    "exercise": ContentTemplate(
        content_type="exercise",
        label="exercise",
        system_instruction=_system_instruction(
            "hands-on, practical exercises", "exercise"
        ),
        build_prompt=build_exercise_prompt,
        required_field="steps",
    ),
    "practical_task": ContentTemplate(
        content_type="practical_task",
        label="practical task",
        system_instruction=_system_instruction(
            "real-world practical tasks", "practical task"
        ),
        build_prompt=build_practical_task_prompt,
        required_field="objectives",
    ),
    "reflection": ContentTemplate(
        content_type="reflection",
        label="reflection",
        system_instruction=_system_instruction(
            "reflective learning activities", "reflection"
        ),
        build_prompt=build_reflection_prompt,
        required_field="questions",
    ),
}
