"""
Input validation shared by the task service.

Everything here is pure: values in, cleaned values and a list of
``{"field", "message"}`` errors out. Field names in errors use the
wire (camelCase) spelling.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from taskboard.models.task import TaskPriority, TaskStatus
from taskboard.schemas.task import TaskCreate, TaskUpdate

STATUS_VALUES = [status.value for status in TaskStatus]
PRIORITY_VALUES = [priority.value for priority in TaskPriority]

_datetime_adapter = TypeAdapter(datetime)

FieldErrors = List[Dict[str, str]]


def field_error(field: str, message: str) -> Dict[str, str]:
    return {"field": to_camel(field), "message": message}


def parse_due_date(value: Any) -> Optional[datetime]:
    """
    Parse an ISO 8601 date or timestamp.
    
    Only strings and datetimes are considered; JSON numbers, booleans and
    objects are not calendar dates. Naive values are taken as UTC. Returns
    None when the value does not describe a calendar date.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text or text.lstrip("-").replace(".", "", 1).isdigit():
            return None
        try:
            parsed = _datetime_adapter.validate_python(text)
        except PydanticValidationError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def clean_text(value: Any) -> Optional[str]:
    """Stripped text, or None when ``value`` is not a string."""
    if not isinstance(value, str):
        return None
    return value.strip()


def is_id_like(value: Any) -> bool:
    """Strings and UUIDs can name a user; numbers and objects cannot."""
    return isinstance(value, (str, UUID))


def as_uuid(value: Any) -> Optional[UUID]:
    """Coerce an id to UUID, or None when it is not one."""
    if isinstance(value, UUID):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return UUID(value.strip())
    except ValueError:
        return None


def validate_task_draft(draft: TaskCreate) -> Tuple[Dict[str, Any], FieldErrors]:
    """
    Check a new task and collect every violation.
    
    Returns:
        (cleaned values, errors). ``cleaned`` is only meaningful when
        ``errors`` is empty. The assignee is returned as given; resolving
        it is the caller's job.
    """
    errors: FieldErrors = []
    cleaned: Dict[str, Any] = {}
    
    title = clean_text(draft.title) or ""
    if not title:
        errors.append(field_error("title", "Title is required"))
    cleaned["title"] = title
    
    description = clean_text(draft.description) or ""
    if not description:
        errors.append(field_error("description", "Description is required"))
    cleaned["description"] = description
    
    due_date = parse_due_date(draft.due_date)
    if due_date is None:
        errors.append(field_error("due_date", "Valid due date is required"))
    cleaned["due_date"] = due_date
    
    priority = draft.priority or TaskPriority.MEDIUM.value
    if priority not in PRIORITY_VALUES:
        errors.append(field_error("priority", f"Priority must be one of: {', '.join(PRIORITY_VALUES)}"))
    cleaned["priority"] = priority
    
    if not draft.assigned_to:
        errors.append(field_error("assigned_to", "Assigned user is required"))
    elif not is_id_like(draft.assigned_to):
        errors.append(field_error("assigned_to", "Assigned user must be a user id"))
    cleaned["assigned_to"] = draft.assigned_to
    
    cleaned["status"] = TaskStatus.PENDING.value
    return cleaned, errors


def supplied_patch_fields(patch: TaskUpdate) -> Dict[str, Any]:
    """
    The fields a patch actually asks to change.
    
    A field counts only when the caller sent it and its value is truthy;
    ``""`` and ``null`` mean "leave unchanged".
    """
    supplied = patch.model_dump(exclude_unset=True)
    return {field: value for field, value in supplied.items() if value}


def validate_task_patch(supplied: Dict[str, Any]) -> Tuple[Dict[str, Any], FieldErrors]:
    """
    Validate the values of a patch already reduced by ``supplied_patch_fields``.
    
    Returns:
        (changes keyed by schema field name, errors)
    """
    errors: FieldErrors = []
    changes: Dict[str, Any] = {}
    
    for field in ("title", "description"):
        if field in supplied:
            text = clean_text(supplied[field])
            if text is None:
                errors.append(field_error(field, f"{field.capitalize()} must be text"))
            elif not text:
                errors.append(field_error(field, f"{field.capitalize()} cannot be empty"))
            changes[field] = text
    
    if "due_date" in supplied:
        due_date = parse_due_date(supplied["due_date"])
        if due_date is None:
            errors.append(field_error("due_date", "Valid due date is required"))
        changes["due_date"] = due_date
    
    if "status" in supplied:
        if supplied["status"] not in STATUS_VALUES:
            errors.append(field_error("status", f"Status must be one of: {', '.join(STATUS_VALUES)}"))
        changes["status"] = supplied["status"]
    
    if "priority" in supplied:
        if supplied["priority"] not in PRIORITY_VALUES:
            errors.append(field_error("priority", f"Priority must be one of: {', '.join(PRIORITY_VALUES)}"))
        changes["priority"] = supplied["priority"]
    
    if "assigned_to" in supplied:
        if not is_id_like(supplied["assigned_to"]):
            errors.append(field_error("assigned_to", "Assigned user must be a user id"))
        changes["assigned_to"] = supplied["assigned_to"]
    
    return changes, errors


def clamp_page(value: Optional[int], default: int) -> int:
    """Missing or zero falls back to ``default``; anything else is clamped to >= 1."""
    if not value:
        return default
    return max(1, int(value))
