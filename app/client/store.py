"""
Client-side resume state.

Transitions are pure: each takes the current Resume and returns a patch, a
dict of whole top-level fields to replace. ``merge`` applies a patch as a
shallow replacement. Both validate what they build: an unknown field name
raises KeyError and a bad value raises pydantic.ValidationError, before
anything reaches the store. ``ResumeStore`` holds one working copy per resume id
and counts local edits so late server responses do not clobber newer ones.
"""

from __future__ import annotations
import threading
import time
from typing import Any, Dict, Iterable, List, Optional, Tuple, TypeVar
from pydantic import BaseModel
from app.models.schema import (
    SECTION_IDS,
    Award,
    Certification,
    Education,
    LanguageSkill,
    Project,
    Publication,
    Resume,
    SkillItem,
    VolunteerExperience,
    WorkExperience,
)

Patch = Dict[str, Any]
M = TypeVar("M", bound=BaseModel)

MUTABLE_FIELDS = (
    "title",
    "template_id",
    "personal_info",
    "professional_summary",
    "work_experience",
    "education",
    "skills",
    "additional_sections",
    "customization",
)

_ADDITIONAL_ITEM_TYPES = {
    "certifications": Certification,
    "projects": Project,
    "volunteer": VolunteerExperience,
    "awards": Award,
    "publications": Publication,
}

_id_lock = threading.Lock()
_last_id = 0


def new_item_id() -> str:
    """Millisecond timestamp string, bumped when two ids land in the same millisecond."""
    global _last_id
    with _id_lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return str(candidate)


def _check_names(cls: type, fields: Dict[str, Any]) -> None:
    unknown = set(fields) - set(cls.model_fields)
    if unknown:
        raise KeyError(f"not a {cls.__name__} field: {', '.join(sorted(unknown))}")


def revise(model: M, **fields: Any) -> M:
    """Copy of a sub-document with fields replaced, validated like a fresh one.

    Raises KeyError for names the model does not declare (wire names such as
    ``fullName`` included) and pydantic.ValidationError for bad values.
    """
    cls = type(model)
    _check_names(cls, fields)
    return cls.model_validate({**model.model_dump(), **fields})


def merge(resume: Resume, patch: Patch) -> Resume:
    unknown = set(patch) - set(MUTABLE_FIELDS)
    if unknown:
        raise KeyError(f"not a mutable resume field: {', '.join(sorted(unknown))}")
    checked = Resume.model_validate({**resume.model_dump(), **patch})
    # untouched fields keep their identity
    return resume.model_copy(update={name: getattr(checked, name) for name in patch})


def is_valid_section_order(order: Iterable[str]) -> bool:
    """True when every id is a known section and none repeats."""
    seen = set()
    for sid in order:
        if sid not in SECTION_IDS or sid in seen:
            return False
        seen.add(sid)
    return True


# Scalars

def set_title(resume: Resume, title: str) -> Patch:
    return {"title": title}


def set_template(resume: Resume, template_id: str) -> Patch:
    return {"template_id": template_id}


def set_summary(resume: Resume, text: str) -> Patch:
    return {"professional_summary": text}


# Personal info

def update_personal_info(resume: Resume, **fields: Any) -> Patch:
    return {"personal_info": revise(resume.personal_info, **fields)}


# Ordered lists keyed by item id

def _new(cls: type, **fields: Any) -> Any:
    _check_names(cls, fields)
    return cls(id=new_item_id(), **fields)


def _add(items: List[Any], item: Any) -> List[Any]:
    return [*items, item]


def _replace(items: List[Any], item_id: str, fields: Dict[str, Any]) -> List[Any]:
    return [revise(it, **fields) if it.id == item_id else it for it in items]


def _remove(items: List[Any], item_id: str) -> List[Any]:
    return [it for it in items if it.id != item_id]


def add_work_experience(resume: Resume, **fields: Any) -> Patch:
    entry = _new(WorkExperience, **fields)
    return {"work_experience": _add(resume.work_experience, entry)}


def update_work_experience(resume: Resume, item_id: str, **fields: Any) -> Patch:
    return {"work_experience": _replace(resume.work_experience, item_id, fields)}


def remove_work_experience(resume: Resume, item_id: str) -> Patch:
    return {"work_experience": _remove(resume.work_experience, item_id)}


def add_education(resume: Resume, **fields: Any) -> Patch:
    entry = _new(Education, **fields)
    return {"education": _add(resume.education, entry)}


def update_education(resume: Resume, item_id: str, **fields: Any) -> Patch:
    return {"education": _replace(resume.education, item_id, fields)}


def remove_education(resume: Resume, item_id: str) -> Patch:
    return {"education": _remove(resume.education, item_id)}


# Skills

def add_technical_skill(resume: Resume, name: str, proficiency: int = 3, category: str = "") -> Patch:
    name = name.strip()
    if not name or any(s.name == name for s in resume.skills.technical):
        return {}
    technical = [*resume.skills.technical, SkillItem(name=name, proficiency=proficiency, category=category)]
    return {"skills": revise(resume.skills, technical=technical)}


def remove_technical_skill(resume: Resume, name: str) -> Patch:
    technical = [s for s in resume.skills.technical if s.name != name]
    return {"skills": revise(resume.skills, technical=technical)}


def add_soft_skill(resume: Resume, name: str) -> Patch:
    name = name.strip()
    if not name or name in resume.skills.soft:
        return {}
    return {"skills": revise(resume.skills, soft=[*resume.skills.soft, name])}


def remove_soft_skill(resume: Resume, name: str) -> Patch:
    soft = [s for s in resume.skills.soft if s != name]
    return {"skills": revise(resume.skills, soft=soft)}


def add_language(resume: Resume, language: str, proficiency: str = "Conversational") -> Patch:
    languages = [*resume.skills.languages, LanguageSkill(language=language, proficiency=proficiency)]
    return {"skills": revise(resume.skills, languages=languages)}


def remove_language(resume: Resume, language: str) -> Patch:
    languages = [lang for lang in resume.skills.languages if lang.language != language]
    return {"skills": revise(resume.skills, languages=languages)}


# Additional sections

def _additional_with(resume: Resume, section: str, items: List[Any]) -> Patch:
    return {"additional_sections": revise(resume.additional_sections, **{section: items})}


def _item_type(section: str):
    if section not in _ADDITIONAL_ITEM_TYPES:
        raise KeyError(f"not an itemized additional section: {section}")
    return _ADDITIONAL_ITEM_TYPES[section]


def add_additional_item(resume: Resume, section: str, **fields: Any) -> Patch:
    item = _new(_item_type(section), **fields)
    current = getattr(resume.additional_sections, section) or []
    return _additional_with(resume, section, _add(current, item))


def update_additional_item(resume: Resume, section: str, item_id: str, **fields: Any) -> Patch:
    _item_type(section)
    current = getattr(resume.additional_sections, section) or []
    return _additional_with(resume, section, _replace(current, item_id, fields))


def remove_additional_item(resume: Resume, section: str, item_id: str) -> Patch:
    _item_type(section)
    current = getattr(resume.additional_sections, section) or []
    return _additional_with(resume, section, _remove(current, item_id))


def set_associations(resume: Resume, associations: List[str]) -> Patch:
    return _additional_with(resume, "associations", [a for a in associations if a.strip()])


# Customization

def update_customization(resume: Resume, **fields: Any) -> Patch:
    return {"customization": revise(resume.customization, **fields)}


def reorder_section(resume: Resume, from_index: int, to_index: int) -> Patch:
    order = list(resume.customization.section_order)
    if not (0 <= from_index < len(order)) or not (0 <= to_index < len(order)):
        raise IndexError(f"section move {from_index}->{to_index} out of range for {len(order)} sections")
    moved = order.pop(from_index)
    order.insert(to_index, moved)
    return update_customization(resume, section_order=order)


class ResumeStore:
    """Working copies keyed by resume id, with a per-id edit counter."""

    def __init__(self):
        self._lock = threading.Lock()
        self._resumes: Dict[int, Resume] = {}
        self._versions: Dict[int, int] = {}

    def put(self, resume: Resume) -> None:
        with self._lock:
            self._resumes[resume.id] = resume
            self._versions.setdefault(resume.id, 0)

    def get(self, resume_id: int) -> Optional[Resume]:
        with self._lock:
            return self._resumes.get(resume_id)

    def version(self, resume_id: int) -> int:
        with self._lock:
            return self._versions.get(resume_id, 0)

    def dispatch(self, resume_id: int, patch: Patch) -> Tuple[Resume, int]:
        """Merge a patch into the working copy. Returns (new resume, new version)."""
        with self._lock:
            current = self._resumes.get(resume_id)
            if current is None:
                raise KeyError(f"resume {resume_id} is not loaded")
            updated = merge(current, patch)
            self._resumes[resume_id] = updated
            self._versions[resume_id] = self._versions.get(resume_id, 0) + 1
            return updated, self._versions[resume_id]

    def adopt(self, resume: Resume, if_version: int) -> bool:
        """Replace the working copy with a server row unless edits arrived since if_version."""
        with self._lock:
            if self._versions.get(resume.id, 0) != if_version:
                return False
            self._resumes[resume.id] = resume
            return True

    def drop(self, resume_id: int) -> None:
        with self._lock:
            self._resumes.pop(resume_id, None)
            self._versions.pop(resume_id, None)
