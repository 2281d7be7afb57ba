from fastapi import APIRouter, Depends, Query
from typing import List
import logging

from ..core.context import AppContext, get_context
from ..domain import seed
from ..domain.models import Category, CleanupEvent, ForumPost
from ..domain.services.community_service import search_posts

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/posts", response_model=List[ForumPost])
def list_posts(
    search: str = Query("", max_length=200, description="Matched against title and content, case-insensitive"),
    category: str = Query("all"),
    context: AppContext = Depends(get_context)
):
    return search_posts(context.forum_posts, search, category)


@router.get("/events", response_model=List[CleanupEvent])
def list_events(context: AppContext = Depends(get_context)):
    """Cleanup events and workshops, soonest first."""
    return sorted(context.events, key=lambda event: (event.date, event.time))


@router.get("/categories", response_model=List[Category])
def list_categories():
    return seed.FORUM_CATEGORIES
