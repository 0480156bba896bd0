import asyncio
import logging
import time

from lesson_studio.agents.text_generator import TextGenerator

logger = logging.getLogger(__name__)


class AgentTimer:
    """Times one model call; the duration freezes when the block exits."""

    def __init__(self):
        self._start: float | None = None
        self._end: float | None = None

    def __enter__(self):
        self._start = time.monotonic()
        return self

    def __exit__(self, *args):
        self._end = time.monotonic()

    @property
    def duration_ms(self) -> int:
        if self._start is None:
            return 0
        end = self._end if self._end is not None else time.monotonic()
        return int((end - self._start) * 1000)


async def run_agent(
    generator: TextGenerator,
    agent_name: str,
    system_instruction: str,
    prompt: str,
    timeout: float | None = None,
) -> str:
    """Call the text generator with timing and logging. Reduces per-agent boilerplate."""
    with AgentTimer() as timer:
        try:
            async with asyncio.timeout(timeout):
                output = await generator.generate(system_instruction, prompt)
        except Exception as e:
            logger.warning(
                "Agent %s failed after %dms: %s",
                agent_name,
                timer.duration_ms,
                str(e) or type(e).__name__,
            )
            raise
        logger.info(
            "Agent %s succeeded in %dms (prompt %d chars, output %d chars)",
            agent_name,
            timer.duration_ms,
            len(prompt),
            len(output),
        )
        return output
