import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lesson_studio.agents.text_generator import build_text_generator
from lesson_studio.config import settings
from lesson_studio.routers import content_generation, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.text_generator = build_text_generator(settings)
    if app.state.text_generator is None:
        logger.warning("ANTHROPIC_API_KEY is not set. AI features will be disabled.")
    yield


app = FastAPI(title="Lesson Studio", version="0.1.0", lifespan=lifespan)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(health.router)
app.include_router(content_generation.router)
