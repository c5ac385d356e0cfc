from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from app.models.schema import SuggestionList, TemplateList
from app.services.database import ResumeDatabase, get_database
from app.services.suggestions import get_suggestions
from app.services.templates import list_templates

router = APIRouter(tags=["catalog"])


@router.get("/templates", response_model=TemplateList, response_model_exclude_none=True)
async def templates(db: ResumeDatabase = Depends(get_database)):
    return TemplateList(templates=list_templates(db))


@router.get("/suggestions", response_model=SuggestionList)
async def suggestions(
    kind: Literal["summary", "skills", "responsibilities"] = Query(..., alias="type"),
    industry: Optional[str] = None,
    job_title: Optional[str] = Query(None, alias="jobTitle"),
):
    return SuggestionList(suggestions=get_suggestions(kind, industry=industry, job_title=job_title))
