import django_filters
from django import forms

from utils.dates import parse_iso_date
from .models import Priority, Status, Task


class IsoDateFormField(forms.DateField):

    def to_python(self, value):
        if isinstance(value, str):
            parsed = parse_iso_date(value)
            if parsed is not None:
                return parsed
        return super().to_python(value)


class IsoDateFilter(django_filters.DateFilter):
    field_class = IsoDateFormField


class TaskFilter(django_filters.FilterSet):
    """Query-string filters for the task list. The due date range is inclusive."""
    priority = django_filters.ChoiceFilter(choices=Priority.choices)
    status = django_filters.ChoiceFilter(choices=Status.choices)
    startDate = IsoDateFilter(field_name='due_date', lookup_expr='gte')
    endDate = IsoDateFilter(field_name='due_date', lookup_expr='lte')

    class Meta:
        model = Task
        fields = ['priority', 'status']
