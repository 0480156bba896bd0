from typing import Protocol

from pydantic_ai import Agent
from pydantic_ai.models import Model, infer_model

from lesson_studio.config import Settings


class TextGenerator(Protocol):
    """Submit a system instruction and a prompt, get raw model text back."""

    async def generate(self, system_instruction: str, user_prompt: str) -> str: ...


class AgentTextGenerator:
    """TextGenerator backed by a plain-text PydanticAI agent.

    The model is resolved once; a fresh agent is built per call because the
    system instruction differs for every content type.
    """

    def __init__(self, model: Model | str):
        self.model = infer_model(model)

    @property
    def model_name(self) -> str:
        return self.model.model_name

    async def generate(self, system_instruction: str, user_prompt: str) -> str:
        agent = Agent(self.model, output_type=str, system_prompt=system_instruction)
        result = await agent.run(user_prompt)
        return result.output


def build_text_generator(settings: Settings) -> TextGenerator | None:
    """Return the process-wide generator, or None when no API key is configured."""
    if not settings.ai_configured:
        return None
    return AgentTextGenerator(settings.default_model)
