from collections.abc import Callable

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_session_factory
from app.core.admin_auth import verify_admin_api_key
from app.core.config import get_settings
from app.core.errors import InvalidInputError
from app.core.rate_limit import limiter
from app.schemas.common import CacheClearResponse
from app.schemas.search import CommentSearchResponse
from app.services.cache import clear_cache
from app.services.comment_search import search_comments

router = APIRouter()
settings = get_settings()


@router.get("", response_model=CommentSearchResponse)
@limiter.limit(lambda: f"{settings.search_rate_limit_per_minute}/minute")
async def search(
    request: Request,
    q: str | None = Query(None, max_length=200),
    channel_id: int | None = Query(None, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> CommentSearchResponse:
    """Find videos whose comments contain ``q``, newest first."""
    if not q or not q.strip():
        raise InvalidInputError("Expected ?q param")
    return await search_comments(session_factory, q, channel_id, limit, offset)


@router.delete(
    "/cache",
    response_model=CacheClearResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
def clear_search_cache(db: Session = Depends(get_db)) -> CacheClearResponse:
    """Drop all cached search aggregates (operator only)."""
    count = clear_cache(db)
    return CacheClearResponse(message=f"Cleared {count} cached search results")
