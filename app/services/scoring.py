from __future__ import annotations
from typing import Dict, List, Tuple
from app.models.schema import ADDITIONAL_SECTION_KEYS, AdditionalSections, Resume

# Completeness weights; they sum to MAX_COMPLETENESS
PERSONAL_WEIGHT = 20
SUMMARY_WEIGHT = 15
EXPERIENCE_WEIGHT = 25
EDUCATION_WEIGHT = 15
SKILLS_WEIGHT = 15
ADDITIONAL_MAX = 10
ADDITIONAL_PER_SECTION = 2
MAX_COMPLETENESS = 100

SUMMARY_MIN_LENGTH = 50

ATS_TWO_COLUMN = (10, "Two-column layout may not be ATS-friendly")
ATS_MISSING_CONTACT = (15, "Missing essential contact information")
ATS_NO_EXPERIENCE = (20, "No work experience added")
ATS_NO_TECHNICAL = (10, "No technical skills listed")


def filled_additional_sections(sections: AdditionalSections) -> int:
	count = 0
	for key in ADDITIONAL_SECTION_KEYS:
		if getattr(sections, key):
			count += 1
	return count


def _has_required_personal(resume: Resume) -> bool:
	info = resume.personal_info
	return bool(info.full_name and info.email and info.phone)


def completeness_score(resume: Resume) -> int:
	"""Weighted checklist, as a 0-100 percentage."""
	score = 0
	if _has_required_personal(resume):
		score += PERSONAL_WEIGHT
	if resume.professional_summary and len(resume.professional_summary) > SUMMARY_MIN_LENGTH:
		score += SUMMARY_WEIGHT
	if resume.work_experience:
		score += EXPERIENCE_WEIGHT
	if resume.education:
		score += EDUCATION_WEIGHT
	if resume.skills.technical or resume.skills.soft:
		score += SKILLS_WEIGHT
	extra = filled_additional_sections(resume.additional_sections)
	if extra:
		score += min(ADDITIONAL_MAX, extra * ADDITIONAL_PER_SECTION)
	return round(score / MAX_COMPLETENESS * 100)


def ats_score(resume: Resume) -> Tuple[int, List[str]]:
	"""Start at 100 and apply fixed deductions. Returns (score, issues)."""
	score = 100
	issues: List[str] = []

	def deduct(rule: Tuple[int, str]) -> None:
		nonlocal score
		score -= rule[0]
		issues.append(rule[1])

	if resume.customization.layout == "two-column":
		deduct(ATS_TWO_COLUMN)
	if not resume.personal_info.email or not resume.personal_info.phone:
		deduct(ATS_MISSING_CONTACT)
	if len(resume.work_experience) == 0:
		deduct(ATS_NO_EXPERIENCE)
	if len(resume.skills.technical) == 0:
		deduct(ATS_NO_TECHNICAL)
	return max(0, score), issues


def section_status(resume: Resume) -> Dict[str, bool]:
	"""Which review checklist items show as filled."""
	return {
		"personal": bool(resume.personal_info.full_name),
		"summary": bool(resume.professional_summary),
		"experience": len(resume.work_experience) > 0,
		"education": len(resume.education) > 0,
		"skills": bool(resume.skills.technical or resume.skills.soft),
		"additional": filled_additional_sections(resume.additional_sections) > 0,
	}
