from fastapi import APIRouter, Depends, Request
from fastapi.openapi.utils import get_openapi
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.db.session import get_db
from feedhub.schemas.system import SystemStats

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/stats", response_model=SystemStats)
async def get_stats(db: AsyncSession = Depends(get_db)):
    """Return system-wide statistics."""
    sql = text("""
        SELECT
            (SELECT COUNT(*) FROM projects) AS projects,
            (SELECT COUNT(*) FROM feedback) AS feedback,
            (SELECT COUNT(*) FROM feedback_upvoters) AS upvotes,
            (SELECT COUNT(*) FROM changelogs) AS changelogs
    """)
    result = await db.execute(sql)
    return result.mappings().first()


@router.get("/docs.json", include_in_schema=False)
async def get_openapi_json(request: Request):
    """Return the full OpenAPI schema in JSON format."""
    app = request.app
    return get_openapi(
        title="Feedhub API",
        version=app.version,
        description="Full OpenAPI specification for the Feedhub backend.",
        routes=app.routes,
    )
