"""
Task lifecycle: create, read, list, update, status change and delete.

Every call receives the acting user explicitly as an `Actor`. Input is
validated and the authorization policy consulted before anything is written,
and each mutation runs in a single transaction, so a failed call leaves no
partial write behind.
"""
import logging

from django.db import transaction
from django.db.models import Case, IntegerField, Prefetch, Value, When

from task.adapters.serializers.task_serializer import (
    TaskListQuerySerializer,
    TaskStatusSerializer,
    TaskWriteSerializer,
)
from task.filters import TaskFilter
from task.models import PRIORITY_RANK, Status, Task, TaskStatusHistory
from task.permission import Operation, can_access, can_assign, visible_tasks
from user.selectors import resolve_active_users
from utils.custom_paginator import CustomPaginator
from utils.exceptions import ForbiddenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('title', 'description', 'due_date', 'priority')

SORT_ORDERINGS = {
    'latest': ('-created_at', '-id'),
    'dueDate': ('due_date', 'created_at', 'id'),
    'priority': ('-priority_rank', 'created_at', 'id'),
}


def with_references(queryset):
    """Prefetch everything the read serializer resolves."""
    return queryset.select_related('created_by').prefetch_related(
        'assigned_to',
        Prefetch('status_history', queryset=TaskStatusHistory.objects.select_related('changed_by')),
    )


def validated(serializer):
    if not serializer.is_valid():
        raise ValidationError(serializer.errors)
    return serializer.validated_data


class TaskLifecycle:

    def __init__(self, actor):
        self.actor = actor

    # -- helpers -------------------------------------------------------------

    def _tasks(self, lock=False):
        queryset = Task.objects.filter(is_deleted=False)
        return queryset.select_for_update() if lock else queryset

    def _fetch(self, task_id, lock=False):
        task = self._tasks(lock).filter(pk=task_id).first() if str(task_id).isdigit() else None
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def _load(self, task_id):
        return with_references(Task.objects.filter(pk=task_id)).get()

    def _authorize(self, task, operation, message):
        if not can_access(self.actor, task, operation):
            logger.warning(f"Actor {self.actor.id} denied {operation.value} on task {task.id}")
            raise ForbiddenError(message)

    def _resolve_assignees(self, user_ids):
        user_ids = list(dict.fromkeys(user_ids))
        if not can_assign(self.actor, user_ids):
            logger.warning(f"Actor {self.actor.id} tried to assign users {user_ids}")
            raise ForbiddenError("You can only assign tasks to yourself")

        users, missing = resolve_active_users(user_ids)
        if missing:
            raise NotFoundError(f"Assigned users not found: {', '.join(str(i) for i in missing)}")
        return users

    # -- operations ----------------------------------------------------------

    def create(self, data):
        values = validated(TaskWriteSerializer(data=data))
        assignees = self._resolve_assignees(values['assigned_to'])

        with transaction.atomic():
            task = Task.objects.create(
                title=values['title'],
                description=values.get('description', ''),
                due_date=values['due_date'],
                priority=values['priority'],
                status=Status.PENDING,
                created_by_id=self.actor.id,
            )
            task.assigned_to.set(assignees)
            TaskStatusHistory.objects.append(task, Status.PENDING, self.actor.id)

        logger.info(f"Task {task.id} created by user {self.actor.id}")
        return self._load(task.pk)

    def get(self, task_id):
        task = self._fetch(task_id)
        self._authorize(task, Operation.READ, "Not authorized to access this task")
        return self._load(task.pk)

    def list(self, filters=None, page=1, limit=None, sort_by='latest'):
        params = {
            name: value
            for name, value in (('page', page), ('limit', limit), ('sortBy', sort_by))
            if value not in (None, '')
        }
        query = validated(TaskListQuerySerializer(data=params))

        task_filter = TaskFilter(data=filters or {}, queryset=visible_tasks(self.actor))
        if not task_filter.is_valid():
            raise ValidationError({field: list(errors) for field, errors in task_filter.errors.items()})

        queryset = task_filter.qs
        if query['sortBy'] == 'priority':
            queryset = queryset.annotate(priority_rank=Case(
                *[When(priority=priority, then=Value(rank)) for priority, rank in PRIORITY_RANK.items()],
                default=Value(0),
                output_field=IntegerField(),
            ))
        queryset = with_references(queryset.order_by(*SORT_ORDERINGS[query['sortBy']]))

        return CustomPaginator(page=query['page'], limit=query.get('limit')).paginate(queryset)

    def update(self, task_id, data):
        values = validated(TaskWriteSerializer(data=data, partial=True))

        with transaction.atomic():
            task = self._fetch(task_id, lock=True)
            self._authorize(task, Operation.UPDATE, "Not authorized to update this task")

            assignees = None
            if 'assigned_to' in values:
                self._authorize(task, Operation.REASSIGN, "Not authorized to reassign this task")
                assignees = self._resolve_assignees(values['assigned_to'])

            changed = [name for name in EDITABLE_FIELDS if name in values]
            for name in changed:
                setattr(task, name, values[name])
            if changed or assignees is not None:
                task.save(update_fields=changed + ['updated_at'])
            if assignees is not None:
                task.assigned_to.set(assignees)

        if assignees is not None:
            changed.append('assigned_to')
        logger.info(f"Task {task.id} updated by user {self.actor.id}: {changed}")
        return self._load(task.pk)

    def change_status(self, task_id, new_status):
        new_status = validated(TaskStatusSerializer(data={'status': new_status}))['status']

        with transaction.atomic():
            # The row lock serializes concurrent status changes on one task.
            task = self._fetch(task_id, lock=True)
            self._authorize(task, Operation.CHANGE_STATUS, "Not authorized to update this task")

            if task.status == new_status:
                logger.debug(f"Task {task.id} already {new_status}; no history entry")
            else:
                old_status = task.status
                task.status = new_status
                task.save(update_fields=['status', 'updated_at'])
                TaskStatusHistory.objects.append(task, new_status, self.actor.id)
                logger.info(f"Task {task.id} status {old_status} -> {new_status} by user {self.actor.id}")

        return self._load(task.pk)

    def delete(self, task_id):
        with transaction.atomic():
            task = self._fetch(task_id, lock=True)
            self._authorize(task, Operation.DELETE, "Not authorized to delete this task")
            pk = task.pk
            task.delete()

        logger.info(f"Task {pk} deleted by user {self.actor.id}")
