from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone


class Status(models.TextChoices):
    PENDING = 'Pending', 'Pending'
    IN_PROGRESS = 'In Progress', 'In Progress'
    COMPLETED = 'Completed', 'Completed'


class Priority(models.TextChoices):
    LOW = 'Low', 'Low'
    MEDIUM = 'Medium', 'Medium'
    HIGH = 'High', 'High'


PRIORITY_RANK = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
}


class Task(models.Model):
    title = models.CharField(max_length=200)
    description = models.TextField(max_length=1000, blank=True, default='')
    due_date = models.DateField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)
    assigned_to = models.ManyToManyField(User, related_name='assigned_tasks')
    created_by = models.ForeignKey(User, on_delete=models.PROTECT, related_name='created_tasks')
    is_deleted = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title

    @property
    def is_overdue(self):
        return self.status != Status.COMPLETED and self.due_date < timezone.localdate()

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'is_deleted'], name='task_status_deleted_idx'),
            models.Index(fields=['priority', 'is_deleted'], name='task_priority_deleted_idx'),
            models.Index(fields=['due_date'], name='task_due_date_idx'),
        ]


class StatusHistoryManager(models.Manager):

    def append(self, task, status, changed_by_id):
        """
        Insert a new entry at the tail of the task's history.

        `changed_at` never goes backwards relative to the previous entry, even if
        the clock does.
        """
        now = timezone.now()
        last = self.filter(task=task).order_by('-changed_at', '-id').values_list('changed_at', flat=True).first()
        if last is not None and last > now:
            now = last
        return self.create(task=task, status=status, changed_by_id=changed_by_id, changed_at=now)


class TaskStatusHistory(models.Model):
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='status_history')
    status = models.CharField(max_length=20, choices=Status.choices)
    changed_at = models.DateTimeField(default=timezone.now)
    changed_by = models.ForeignKey(User, on_delete=models.PROTECT, related_name='status_changes')

    objects = StatusHistoryManager()

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Status history entries are append-only")
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.task_id}: {self.status} at {self.changed_at:%Y-%m-%d %H:%M}"

    class Meta:
        verbose_name_plural = "Task status history"
        ordering = ['changed_at', 'id']
