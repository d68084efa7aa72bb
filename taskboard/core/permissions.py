"""
Access policy for tasks and users.

``decide`` is the only place that answers "may this actor do this?".
It is a pure function: no storage access, no logging, no exceptions.
Callers load the target first and turn a DENY into ForbiddenError.

Rules, first match wins:
    admin                -> ALLOW everything
    ReadTask             -> ALLOW iff the actor is the assignee
    UpdateTask(fields)   -> DENY if the patch reassigns the task,
                            else ALLOW iff the actor is the assignee
    DeleteTask           -> ALLOW iff the actor created the task
    ListTasks            -> ALLOW (the result set is scoped by the caller)
    CreateTask           -> ALLOW
    ManageUsers          -> DENY
Anything without an ALLOW rule is denied.

Update is keyed on the assignee while delete is keyed on the creator.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, Optional, Union
from uuid import UUID

from taskboard.models.user import UserRole


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class Actor:
    """The authenticated identity performing an operation."""
    
    id: UUID
    role: str
    
    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


@dataclass(frozen=True)
class CreateTask:
    pass


@dataclass(frozen=True)
class ReadTask:
    pass


@dataclass(frozen=True)
class UpdateTask:
    """Update carrying the names of the fields the patch would change."""
    
    fields: FrozenSet[str] = frozenset()
    
    @property
    def reassigns(self) -> bool:
        return "assigned_to" in self.fields


@dataclass(frozen=True)
class DeleteTask:
    pass


@dataclass(frozen=True)
class ListTasks:
    pass


@dataclass(frozen=True)
class ManageUsers:
    pass


Action = Union[CreateTask, ReadTask, UpdateTask, DeleteTask, ListTasks, ManageUsers]


def _same_id(left: Any, right: Any) -> bool:
    if left is None or right is None:
        return False
    return str(left) == str(right)


def _is_assignee(actor: Actor, target: Any) -> bool:
    return _same_id(getattr(target, "assigned_to_id", None), actor.id)


def _is_creator(actor: Actor, target: Any) -> bool:
    return _same_id(getattr(target, "created_by_id", None), actor.id)


def _allow_if(condition: bool) -> Decision:
    return Decision.ALLOW if condition else Decision.DENY


def decide(actor: Optional[Actor], action: Action, target: Any = None) -> Decision:
    """
    Decide whether ``actor`` may perform ``action`` on ``target``.
    
    Args:
        actor: Authenticated actor, or None when nobody is signed in
        action: One of the action variants defined in this module
        target: The task the action applies to (anything exposing
            ``assigned_to_id`` and ``created_by_id``), None for actions
            without a target
        
    Returns:
        Decision.ALLOW or Decision.DENY
    """
    if actor is None:
        return Decision.DENY
    
    if actor.is_admin:
        return Decision.ALLOW
    
    if isinstance(action, ReadTask):
        return _allow_if(_is_assignee(actor, target))
    
    if isinstance(action, UpdateTask):
        if action.reassigns:
            return Decision.DENY
        return _allow_if(_is_assignee(actor, target))
    
    if isinstance(action, DeleteTask):
        return _allow_if(_is_creator(actor, target))
    
    if isinstance(action, (ListTasks, CreateTask)):
        return Decision.ALLOW
    
    # ManageUsers and anything unknown
    return Decision.DENY


def is_allowed(actor: Optional[Actor], action: Action, target: Any = None) -> bool:
    """Boolean shorthand for ``decide(...) is Decision.ALLOW``."""
    return decide(actor, action, target) is Decision.ALLOW
