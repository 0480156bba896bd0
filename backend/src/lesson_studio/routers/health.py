from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from lesson_studio.db.session import get_db_session

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health_check(request: Request, db: AsyncSession = Depends(get_db_session)):
    await db.execute(text("SELECT 1"))
    ai_configured = getattr(request.app.state, "text_generator", None) is not None
    return {"status": "ok", "ai_configured": ai_configured}
