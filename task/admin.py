from django.contrib import admin

from .models import Task, TaskStatusHistory


class TaskStatusHistoryInline(admin.TabularInline):
    model = TaskStatusHistory
    extra = 0
    can_delete = False
    readonly_fields = ('status', 'changed_at', 'changed_by')

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ('title', 'due_date', 'status', 'priority', 'created_by', 'is_deleted')
    list_filter = ('status', 'priority', 'is_deleted')
    search_fields = ('title', 'description')
    filter_horizontal = ('assigned_to',)
    # Status only moves through the API so every change lands in the history.
    readonly_fields = ('status', 'created_by', 'created_at', 'updated_at')
    inlines = [TaskStatusHistoryInline]

    def has_add_permission(self, request):
        return False
