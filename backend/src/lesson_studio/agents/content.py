import json
import logging
import re
from typing import Any

from lesson_studio.agents.logging import run_agent
from lesson_studio.agents.templates import ContentTemplate
from lesson_studio.agents.text_generator import TextGenerator
from lesson_studio.errors import ConfigurationError, ContentGenerationError

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "AI client is not configured. Set ANTHROPIC_API_KEY to enable AI features."

_OPENING_FENCE = re.compile(r"^```(?:json)?\n?")
_CLOSING_FENCE = re.compile(r"\n?```$")


def ensure_generator(generator: TextGenerator | None) -> TextGenerator:
    if generator is None:
        raise ConfigurationError(NOT_CONFIGURED_MESSAGE)
    return generator


def strip_code_fence(text: str) -> str:
    """Remove a markdown code fence wrapped around a model response."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
        cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_json_payload(text: str) -> Any:
    """Sanitize a raw model response and decode it. Raises json.JSONDecodeError."""
    return json.loads(strip_code_fence(text))


def parse_content(text: str, template: ContentTemplate) -> dict[str, Any]:
    try:
        payload = parse_json_payload(text)
    except json.JSONDecodeError as e:
        logger.error("Model returned invalid JSON for %s content: %s", template.content_type, e)
        raise ContentGenerationError(template.content_type, f"Invalid JSON response: {e}") from e

    field = template.required_field
    if not isinstance(payload, dict) or not isinstance(payload.get(field), list):
        logger.error("Model returned %s content without a %s array", template.content_type, field)
        raise ContentGenerationError(
            template.content_type,
            f"Invalid {template.label} structure: missing {field} array",
        )
    return payload


async def generate_content(
    generator: TextGenerator | None,
    template: ContentTemplate,
    context: str,
    timeout: float | None = None,
    **params: Any,
) -> dict[str, Any]:
    """Run one content template against the model and return the validated payload.

    ``params`` go to the template's prompt builder (quiz ``position``). Provider
    errors and timeouts are not retried; they surface as ContentGenerationError
    like parse and shape failures do.
    """
    client = ensure_generator(generator)
    prompt = template.build_prompt(context, **params)

    try:
        text = await run_agent(
            client,
            f"{template.content_type}_generator",
            template.system_instruction,
            prompt,
            timeout=timeout,
        )
    except Exception as e:
        logger.exception("Error generating %s content", template.content_type)
        raise ContentGenerationError(template.content_type, str(e) or type(e).__name__) from e

    return parse_content(text, template)
