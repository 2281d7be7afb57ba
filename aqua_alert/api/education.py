from fastapi import APIRouter, Depends, Query
from typing import List

from ..core.context import AppContext, get_context
from ..domain import seed
from ..domain.models import Category, EducationalResource
from ..domain.services.community_service import filter_resources

router = APIRouter()


@router.get("/resources", response_model=List[EducationalResource])
def list_resources(
    category: str = Query("all"),
    context: AppContext = Depends(get_context)
):
    return filter_resources(context.resources, category)


@router.get("/categories", response_model=List[Category])
def list_categories():
    return seed.EDUCATION_CATEGORIES
