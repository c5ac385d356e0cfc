"""Unit tests for partial-update statement construction and persistence."""

import json
from itertools import combinations

import pytest

from app.models.schema import Customization, PersonalInfo, Skills, UpdateResumeRequest, WorkExperience
from app.services.errors import InvalidArgumentError, ResumeNotFoundError
from app.services.resumes import (
    UPDATABLE_FIELDS,
    build_update_statement,
    get_resume,
    present_fields,
    update_resume,
)

pytestmark = pytest.mark.unit

SAMPLE_VALUES = {
    "title": "Data Engineer",
    "template_id": "ats-simple",
    "personal_info": PersonalInfo(full_name="Grace Hopper", email="grace@example.com"),
    "professional_summary": "Compiler pioneer.",
    "work_experience": [WorkExperience(id="1", job_title="Rear Admiral", company="US Navy")],
    "education": [],
    "skills": Skills(soft=["Leadership"]),
    "additional_sections": {"associations": ["ACM"]},
    "customization": Customization(layout="single-column"),
}


def _assignments(sql):
    set_clause = sql.split(" SET ", 1)[1].rsplit(" WHERE ", 1)[0]
    return [part.strip() for part in set_clause.split(",")]


@pytest.mark.parametrize("n", [1, 2, 5, 9])
def test_n_fields_produce_n_clauses_plus_timestamp(n):
    for subset in combinations([fc.field for fc in UPDATABLE_FIELDS], n):
        changes = {name: SAMPLE_VALUES[name] for name in subset}

        sql, params = build_update_statement(7, changes, "2024-01-01T00:00:00.000000Z")

        clauses = _assignments(sql)
        assert len(clauses) == n + 1
        assert clauses[-1] == "updated_at = ?"
        assert params[-2] == "2024-01-01T00:00:00.000000Z"
        assert params[-1] == 7
        assert len(params) == n + 2


def test_clauses_follow_canonical_field_order():
    changes = {"customization": SAMPLE_VALUES["customization"], "title": "T"}
    sql, params = build_update_statement(1, changes, "ts")
    assert _assignments(sql) == ["title = ?", "customization = ?", "updated_at = ?"]
    assert params[0] == "T"
    assert json.loads(params[1])["layout"] == "single-column"


def test_values_never_appear_in_sql():
    hostile = "x'); DROP TABLE resumes; --"
    sql, params = build_update_statement(1, {"title": hostile, "professional_summary": hostile}, "ts")
    assert hostile not in sql
    assert params[:2] == [hostile, hostile]


def test_sub_documents_are_serialized_camel_case():
    sql, params = build_update_statement(1, {"personal_info": SAMPLE_VALUES["personal_info"]}, "ts")
    stored = json.loads(params[0])
    assert stored["fullName"] == "Grace Hopper"
    assert "linkedIn" not in stored


def test_no_fields_is_invalid_argument():
    with pytest.raises(InvalidArgumentError):
        build_update_statement(1, {}, "ts")


def test_unknown_field_is_invalid_argument():
    with pytest.raises(InvalidArgumentError):
        build_update_statement(1, {"user_id": "someone"}, "ts")


def test_present_fields_skips_unset_and_null():
    req = UpdateResumeRequest.model_validate({"title": "A", "skills": None})
    assert present_fields(req) == {"title": "A"}


def test_update_leaves_other_columns_bitwise_unchanged(db, new_resume):
    resume = new_resume()
    before = db.query_one("SELECT * FROM resumes WHERE id = ?", (resume.id,))

    update_resume(db, resume.id, UpdateResumeRequest(professional_summary="New summary", skills=Skills(soft=["Grit"])))

    after = db.query_one("SELECT * FROM resumes WHERE id = ?", (resume.id,))
    changed = {col for col in before if before[col] != after[col]}
    assert changed == {"professional_summary", "skills", "updated_at"}


def test_empty_update_performs_no_write(db, new_resume):
    resume = new_resume()
    before = db.query_one("SELECT * FROM resumes WHERE id = ?", (resume.id,))

    with pytest.raises(InvalidArgumentError):
        update_resume(db, resume.id, UpdateResumeRequest())

    assert db.query_one("SELECT * FROM resumes WHERE id = ?", (resume.id,)) == before


def test_update_unknown_id_is_not_found(db):
    with pytest.raises(ResumeNotFoundError):
        update_resume(db, 404, UpdateResumeRequest(title="Ghost"))


def test_get_unknown_id_is_not_found(db):
    with pytest.raises(ResumeNotFoundError):
        get_resume(db, 404)
