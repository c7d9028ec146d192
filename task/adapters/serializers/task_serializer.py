from rest_framework import serializers
from task.models import Priority, Status, Task, TaskStatusHistory
from user.adapters.serializers.user_serializers import UserProjectionSerializer
from utils.dates import parse_iso_date

SORT_CHOICES = ('latest', 'dueDate', 'priority')


class IsoDateField(serializers.DateField):
    """Date input that also takes a full ISO 8601 datetime and keeps its date."""

    def to_internal_value(self, value):
        if isinstance(value, str):
            parsed = parse_iso_date(value)
            if parsed is not None:
                return parsed
        return super().to_internal_value(value)


class TaskStatusHistorySerializer(serializers.ModelSerializer):
    changedAt = serializers.DateTimeField(source='changed_at', read_only=True)
    changedBy = UserProjectionSerializer(source='changed_by', read_only=True)

    class Meta:
        model = TaskStatusHistory
        fields = ('id', 'status', 'changedAt', 'changedBy')


class TaskSerializer(serializers.ModelSerializer):
    """Read shape of a task with every user reference resolved to {id, name, email}."""
    dueDate = serializers.DateField(source='due_date', read_only=True)
    assignedTo = UserProjectionSerializer(source='assigned_to', many=True, read_only=True)
    createdBy = UserProjectionSerializer(source='created_by', read_only=True)
    statusHistory = TaskStatusHistorySerializer(source='status_history', many=True, read_only=True)
    isOverdue = serializers.BooleanField(source='is_overdue', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Task
        fields = (
            'id',
            'title',
            'description',
            'dueDate',
            'priority',
            'status',
            'assignedTo',
            'createdBy',
            'statusHistory',
            'isOverdue',
            'createdAt',
            'updatedAt',
        )


class TaskWriteSerializer(serializers.Serializer):
    """
    Input for create and update. Status is deliberately absent: it only changes
    through the status endpoint.
    """
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    dueDate = IsoDateField(source='due_date')
    priority = serializers.ChoiceField(choices=Priority.choices, default=Priority.MEDIUM)
    assignedTo = serializers.ListField(
        source='assigned_to',
        child=serializers.IntegerField(min_value=1),
        allow_empty=False,
        error_messages={'empty': 'Please assign the task to at least one user'},
    )


class TaskStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Status.choices)


class TaskListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False)
    sortBy = serializers.ChoiceField(choices=SORT_CHOICES, default='latest')
