from __future__ import annotations
from typing import Any, Dict, List, NamedTuple, Optional, Tuple
import json
import logging
from pydantic import BaseModel
from app.models.schema import (
	CreateResumeRequest,
	Customization,
	PersonalInfo,
	Resume,
	Skills,
	UpdateResumeRequest,
)
from app.services.database import ResumeDatabase
from app.services.errors import InvalidArgumentError, PersistenceError, ResumeNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Resume"


class FieldColumn(NamedTuple):
	field: str
	column: str
	is_json: bool


# The nine mutable fields, in the order their SET clauses are emitted
UPDATABLE_FIELDS: Tuple[FieldColumn, ...] = (
	FieldColumn("title", "title", False),
	FieldColumn("template_id", "template_id", False),
	FieldColumn("personal_info", "personal_info", True),
	FieldColumn("professional_summary", "professional_summary", False),
	FieldColumn("work_experience", "work_experience", True),
	FieldColumn("education", "education", True),
	FieldColumn("skills", "skills", True),
	FieldColumn("additional_sections", "additional_sections", True),
	FieldColumn("customization", "customization", True),
)

_SELECT_COLUMNS = (
	"id, user_id, title, template_id, personal_info, professional_summary, "
	"work_experience, education, skills, additional_sections, customization, "
	"created_at, updated_at"
)


def _empty_skills() -> Dict[str, Any]:
	return {"technical": [], "soft": [], "languages": []}


# Per-column substitutes for NULL sub-documents on read
_NULL_DEFAULTS = {
	"personal_info": lambda: PersonalInfo().model_dump(by_alias=True, exclude_none=True),
	"professional_summary": lambda: "",
	"work_experience": list,
	"education": list,
	"skills": _empty_skills,
	"additional_sections": dict,
	"customization": lambda: Customization().model_dump(by_alias=True),
}


def _to_jsonable(value: Any) -> Any:
	if isinstance(value, BaseModel):
		return value.model_dump(by_alias=True, exclude_none=True, mode="json")
	if isinstance(value, list):
		return [_to_jsonable(v) for v in value]
	if isinstance(value, dict):
		return {k: _to_jsonable(v) for k, v in value.items()}
	return value


def _json(value: Any) -> str:
	return json.dumps(_to_jsonable(value))


def _encode(fc: FieldColumn, value: Any) -> Any:
	return _json(value) if fc.is_json else value


def _decode_json(raw: Optional[str]) -> Any:
	if raw is None:
		return None
	return json.loads(raw)


def row_to_resume(row: Dict[str, Any]) -> Resume:
	"""Build the canonical Resume from a row, coalescing each NULL column on its own."""
	data: Dict[str, Any] = {
		"id": row["id"],
		"user_id": row["user_id"],
		"title": row["title"],
		"template_id": row["template_id"],
		"created_at": row["created_at"],
		"updated_at": row["updated_at"],
	}
	for column, default in _NULL_DEFAULTS.items():
		raw = row.get(column)
		if column == "professional_summary":
			value = raw
		else:
			value = _decode_json(raw)
		data[column] = default() if value is None else value
	return Resume.model_validate(data)


def create_resume(db: ResumeDatabase, req: CreateResumeRequest) -> Resume:
	title = req.title or DEFAULT_TITLE
	now = db.now()
	values = [
		req.user_id,
		title,
		req.template_id,
		_json(PersonalInfo()),
		"",
		"[]",
		"[]",
		_json(Skills()),
		"{}",
		_json(Customization()),
		now,
		now,
	]
	cursor = db.execute(
		"""
		INSERT INTO resumes (
			user_id, title, template_id, personal_info, professional_summary,
			work_experience, education, skills, additional_sections, customization,
			created_at, updated_at
		) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
		""",
		values,
	)
	resume_id = cursor.lastrowid
	if not resume_id:
		raise PersistenceError("Failed to create resume")
	row = db.query_one(f"SELECT {_SELECT_COLUMNS} FROM resumes WHERE id = ?", (resume_id,))
	if row is None:
		raise PersistenceError("Failed to create resume")
	logger.info("resume: created id=%s user=%s template=%s", resume_id, req.user_id, req.template_id)
	return row_to_resume(row)


def get_resume(db: ResumeDatabase, resume_id: int) -> Resume:
	row = db.query_one(f"SELECT {_SELECT_COLUMNS} FROM resumes WHERE id = ?", (resume_id,))
	if row is None:
		raise ResumeNotFoundError(resume_id)
	return row_to_resume(row)


def list_resumes(db: ResumeDatabase, user_id: str) -> List[Resume]:
	rows = db.query(
		f"SELECT {_SELECT_COLUMNS} FROM resumes WHERE user_id = ? ORDER BY updated_at DESC, id DESC",
		(user_id,),
	)
	return [row_to_resume(r) for r in rows]


def present_fields(req: UpdateResumeRequest) -> Dict[str, Any]:
	"""Fields the caller actually sent. Explicit nulls count as absent."""
	changes: Dict[str, Any] = {}
	for name in req.model_fields_set:
		value = getattr(req, name)
		if value is not None:
			changes[name] = value
	return changes


def build_update_statement(resume_id: int, changes: Dict[str, Any], updated_at: str) -> Tuple[str, List[Any]]:
	"""
	Map the set of present fields onto a parameterized UPDATE.

	One ``column = ?`` clause per present field, in UPDATABLE_FIELDS order,
	followed by the updated_at bump. Values only ever travel as parameters.

	Raises InvalidArgumentError when no updatable field is present.
	"""
	unknown = set(changes) - {fc.field for fc in UPDATABLE_FIELDS}
	if unknown:
		raise InvalidArgumentError(f"unknown fields: {', '.join(sorted(unknown))}")

	assignments: List[str] = []
	params: List[Any] = []
	for fc in UPDATABLE_FIELDS:
		if fc.field not in changes:
			continue
		assignments.append(f"{fc.column} = ?")
		params.append(_encode(fc, changes[fc.field]))

	if not assignments:
		raise InvalidArgumentError("no fields to update")

	assignments.append("updated_at = ?")
	params.append(updated_at)
	params.append(resume_id)
	sql = f"UPDATE resumes SET {', '.join(assignments)} WHERE id = ?"
	return sql, params


def update_resume(db: ResumeDatabase, resume_id: int, req: UpdateResumeRequest) -> Resume:
	changes = present_fields(req)
	sql, params = build_update_statement(resume_id, changes, db.now())
	cursor = db.execute(sql, params)
	if cursor.rowcount == 0:
		raise ResumeNotFoundError(resume_id)
	logger.info("resume: updated id=%s fields=%s", resume_id, ",".join(sorted(changes)))
	return get_resume(db, resume_id)
