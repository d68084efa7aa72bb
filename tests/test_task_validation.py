"""Draft and patch validation helpers."""

from datetime import datetime, timezone

import pytest

from taskboard.schemas.task import TaskCreate, TaskUpdate
from taskboard.services.task_validation import (
    as_uuid,
    clamp_page,
    parse_due_date,
    supplied_patch_fields,
    validate_task_draft,
    validate_task_patch,
)

pytestmark = pytest.mark.unit


def test_parse_due_date_accepts_iso_dates_and_timestamps():
    assert parse_due_date("2030-05-01") == datetime(2030, 5, 1, tzinfo=timezone.utc)
    assert parse_due_date("2030-05-01T12:30:00Z") == datetime(2030, 5, 1, 12, 30, tzinfo=timezone.utc)
    aware = datetime(2030, 5, 1, 9, 0, tzinfo=timezone.utc)
    assert parse_due_date(aware) == aware


@pytest.mark.parametrize(
    "value", [None, "", "not a date", "2030-13-45", "12345", 1700000000, 5.5, True, {"year": 2030}, ["2030-01-01"]]
)
def test_parse_due_date_rejects_non_dates(value):
    assert parse_due_date(value) is None


def test_as_uuid():
    assert as_uuid("not-a-uuid") is None
    assert as_uuid("") is None
    assert str(as_uuid("7f6b8c1e-4a1d-4a65-9b0e-2c1b7e3b9a10")) == "7f6b8c1e-4a1d-4a65-9b0e-2c1b7e3b9a10"


def test_draft_reports_every_violation():
    _, errors = validate_task_draft(TaskCreate(title="  ", description=""))
    fields = [e["field"] for e in errors]
    assert fields == ["title", "description", "dueDate", "assignedTo"]


def test_draft_defaults_priority_and_status():
    cleaned, errors = validate_task_draft(
        TaskCreate(title=" Write report ", description="Quarterly", due_date="2030-01-15", assigned_to="someone")
    )
    assert errors == []
    assert cleaned["title"] == "Write report"
    assert cleaned["priority"] == "medium"
    assert cleaned["status"] == "pending"


def test_draft_rejects_unknown_priority():
    _, errors = validate_task_draft(
        TaskCreate(title="t", description="d", due_date="2030-01-15", assigned_to="x", priority="critical")
    )
    assert [e["field"] for e in errors] == ["priority"]


def test_draft_accepts_camel_case_input():
    draft = TaskCreate.model_validate({"title": "t", "description": "d", "dueDate": "2030-01-15", "assignedTo": "x"})
    assert draft.due_date == "2030-01-15"
    assert draft.assigned_to == "x"


def test_supplied_patch_fields_skips_unset_and_falsy_values():
    patch = TaskUpdate.model_validate({"title": "", "status": "completed", "priority": None})
    assert supplied_patch_fields(patch) == {"status": "completed"}


def test_patch_validation_collects_errors():
    changes, errors = validate_task_patch({"title": "   ", "due_date": "soon", "status": "done", "priority": "urgent"})
    assert {e["field"] for e in errors} == {"title", "dueDate", "status"}
    assert changes["priority"] == "urgent"


def test_clamp_page():
    assert clamp_page(None, 10) == 10
    assert clamp_page(0, 10) == 10
    assert clamp_page(-3, 10) == 1
    assert clamp_page(4, 10) == 4


def test_json_numbers_reach_validation_unconverted():
    draft = TaskCreate.model_validate_json('{"title": 5, "description": "d", "dueDate": 1700000000, "assignedTo": 42}')
    assert draft.due_date == 1700000000

    _, errors = validate_task_draft(draft)
    assert [e["field"] for e in errors] == ["title", "dueDate", "assignedTo"]
    assert errors[-1]["message"] == "Assigned user must be a user id"


def test_patch_rejects_wrong_types():
    patch = TaskUpdate.model_validate_json('{"title": 7, "dueDate": 5, "assignedTo": ["x"]}')
    changes, errors = validate_task_patch(supplied_patch_fields(patch))
    assert {e["field"]: e["message"] for e in errors} == {
        "title": "Title must be text",
        "dueDate": "Valid due date is required",
        "assignedTo": "Assigned user must be a user id",
    }
