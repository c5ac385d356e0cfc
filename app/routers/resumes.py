import logging
from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from app.models.schema import (
    AtsReport,
    CreateResumeRequest,
    Resume,
    ResumeEnvelope,
    ResumeList,
    ReviewReport,
    SectionStatus,
    UpdateResumeRequest,
)
from app.services.database import ResumeDatabase, get_database
from app.services.render import render_resume
from app.services.resumes import create_resume, get_resume, list_resumes, update_resume
from app.services.scoring import ats_score, completeness_score, section_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["resumes"])

_EXPORT_MEDIA_TYPES = {
    "markdown": "text/markdown; charset=utf-8",
    "text": "text/plain; charset=utf-8",
}


@router.post("", response_model=ResumeEnvelope, response_model_exclude_none=True)
async def create(payload: CreateResumeRequest, db: ResumeDatabase = Depends(get_database)):
    resume = create_resume(db, payload)
    return ResumeEnvelope(resume=resume)


@router.get("", response_model=ResumeList, response_model_exclude_none=True)
async def list_for_user(user_id: str = Query(..., alias="userId"), db: ResumeDatabase = Depends(get_database)):
    resumes = list_resumes(db, user_id)
    logger.info("list_resumes: user=%s count=%d", user_id, len(resumes))
    return ResumeList(resumes=resumes)


@router.get("/{resume_id}", response_model=Resume, response_model_exclude_none=True)
async def get(resume_id: int, db: ResumeDatabase = Depends(get_database)):
    return get_resume(db, resume_id)


@router.put("/{resume_id}", response_model=ResumeEnvelope, response_model_exclude_none=True)
async def update(resume_id: int, payload: UpdateResumeRequest, db: ResumeDatabase = Depends(get_database)):
    resume = update_resume(db, resume_id, payload)
    return ResumeEnvelope(resume=resume)


@router.get("/{resume_id}/review", response_model=ReviewReport)
async def review(resume_id: int, db: ResumeDatabase = Depends(get_database)):
    """Completeness percentage, ATS score with issues, and the section checklist."""
    resume = get_resume(db, resume_id)
    score, issues = ats_score(resume)
    return ReviewReport(
        completeness=completeness_score(resume),
        ats=AtsReport(score=score, issues=issues),
        sections=SectionStatus(**section_status(resume)),
    )


@router.get("/{resume_id}/export")
async def export(
    resume_id: int,
    fmt: Literal["markdown", "text"] = Query("markdown", alias="format"),
    db: ResumeDatabase = Depends(get_database),
):
    resume = get_resume(db, resume_id)
    body = render_resume(resume, fmt)
    logger.info("export: id=%s format=%s chars=%d", resume_id, fmt, len(body))
    return PlainTextResponse(body, media_type=_EXPORT_MEDIA_TYPES[fmt])
