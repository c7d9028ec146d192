"""
Authorization policy for tasks.

All role checks for tasks live here. The policy is a capability lookup:

- admin: every operation on every task
- assignee: read, update, reassign, change status and delete on tasks whose
  `assigned_to` contains the actor
- anyone else: nothing

Non-admins may only ever assign a task to exactly themselves. Lists are scoped
with `visible_tasks()`, which adds the assignee filter to the queryset itself.
"""
import enum
from dataclasses import dataclass

from user.models import Role
from user.selectors import role_of
from .models import Task


class Operation(str, enum.Enum):
    CREATE = 'create'
    READ = 'read'
    UPDATE = 'update'
    REASSIGN = 'reassign'
    CHANGE_STATUS = 'change_status'
    DELETE = 'delete'


ADMIN_CAPABILITIES = frozenset(Operation)
ASSIGNEE_CAPABILITIES = frozenset({
    Operation.READ,
    Operation.UPDATE,
    Operation.REASSIGN,
    Operation.CHANGE_STATUS,
    Operation.DELETE,
})


@dataclass(frozen=True)
class Actor:
    """The caller identity every lifecycle and analytics call receives explicitly."""
    id: int
    role: str = Role.USER

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    @classmethod
    def from_user(cls, user):
        return cls(id=user.pk, role=role_of(user))


def assignee_ids(task):
    # Goes through .all() so a prefetch on assigned_to is reused.
    return {user.pk for user in task.assigned_to.all()}


def capabilities(actor, task):
    if actor.is_admin:
        return ADMIN_CAPABILITIES
    if actor.id in assignee_ids(task):
        return ASSIGNEE_CAPABILITIES
    return frozenset()


def can_access(actor, task, operation):
    operation = Operation(operation)
    if operation is Operation.CREATE:
        # Any authenticated actor may create; who they assign is checked by can_assign.
        return True
    return operation in capabilities(actor, task)


def can_assign(actor, user_ids):
    """Admins assign freely. Everyone else must assign exactly themselves."""
    if actor.is_admin:
        return True
    return set(user_ids) == {actor.id}


def visible_tasks(actor, queryset=None):
    if queryset is None:
        queryset = Task.objects.all()
    queryset = queryset.filter(is_deleted=False)
    if not actor.is_admin:
        queryset = queryset.filter(assigned_to__id=actor.id)
    return queryset
