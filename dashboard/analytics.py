"""
Dashboard aggregates over the tasks an actor can see.

Scoping comes from `visible_tasks()`, the same queryset the task list uses, so
the distributions always add up to `totalTasks` for any actor.
"""
from django.db.models import Count, Q
from django.utils import timezone

from task.models import Priority, Status
from task.permission import visible_tasks


def _distribution(queryset, field, choices):
    counts = {
        row[field]: row['count']
        for row in queryset.order_by().values(field).annotate(count=Count('id'))
    }
    # Fixed order, zero-filled
    return [{'name': value, 'value': counts.get(value, 0)} for value in choices.values]


def completion_rate(completed, total):
    if not total:
        return 0
    return round(completed / total * 100)


def dashboard_stats(actor, today=None):
    today = today or timezone.localdate()
    queryset = visible_tasks(actor)

    totals = queryset.aggregate(
        total=Count('id'),
        completed=Count('id', filter=Q(status=Status.COMPLETED)),
        overdue=Count('id', filter=~Q(status=Status.COMPLETED) & Q(due_date__lt=today)),
    )

    return {
        'totalTasks': totals['total'],
        'completedTasks': totals['completed'],
        'completionRate': completion_rate(totals['completed'], totals['total']),
        'overdueTasks': totals['overdue'],
        'statusDistribution': _distribution(queryset, 'status', Status),
        'priorityDistribution': _distribution(queryset, 'priority', Priority),
    }
