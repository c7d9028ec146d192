from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from task.permission import Actor
from task.services.task_lifecycle import TaskLifecycle
from utils.responses import success_response
from ..serializers.task_serializer import TaskSerializer, TaskStatusSerializer, TaskWriteSerializer


class TaskViewset(viewsets.ViewSet):
    """
    Tasks API. A thin HTTP layer: every call builds an `Actor` from the
    authenticated user and hands off to `TaskLifecycle`, which owns validation,
    authorization and persistence.

    PUT and PATCH on a task both apply a partial update.
    """
    permission_classes = [IsAuthenticated]
    serializer_class = TaskSerializer

    def get_lifecycle(self):
        return TaskLifecycle(Actor.from_user(self.request.user))

    @extend_schema(
        parameters=[
            OpenApiParameter('page', OpenApiTypes.INT),
            OpenApiParameter('limit', OpenApiTypes.INT),
            OpenApiParameter('priority', OpenApiTypes.STR, enum=['Low', 'Medium', 'High']),
            OpenApiParameter('status', OpenApiTypes.STR, enum=['Pending', 'In Progress', 'Completed']),
            OpenApiParameter('startDate', OpenApiTypes.DATE),
            OpenApiParameter('endDate', OpenApiTypes.DATE),
            OpenApiParameter('sortBy', OpenApiTypes.STR, enum=['latest', 'dueDate', 'priority']),
        ],
        responses={200: TaskSerializer(many=True)},
    )
    def list(self, request):
        params = request.query_params
        result = self.get_lifecycle().list(
            filters=params,
            page=params.get('page'),
            limit=params.get('limit'),
            sort_by=params.get('sortBy'),
        )
        return success_response(
            TaskSerializer(result.items, many=True).data,
            pagination=result.meta(),
        )

    def retrieve(self, request, pk=None):
        task = self.get_lifecycle().get(pk)
        return success_response(TaskSerializer(task).data)

    @extend_schema(request=TaskWriteSerializer, responses={201: TaskSerializer})
    def create(self, request):
        task = self.get_lifecycle().create(request.data)
        return success_response(TaskSerializer(task).data, status_code=status.HTTP_201_CREATED)

    @extend_schema(request=TaskWriteSerializer(partial=True), responses={200: TaskSerializer})
    def update(self, request, pk=None):
        task = self.get_lifecycle().update(pk, request.data)
        return success_response(TaskSerializer(task).data)

    @extend_schema(request=TaskWriteSerializer(partial=True), responses={200: TaskSerializer})
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(request=TaskStatusSerializer, responses={200: TaskSerializer})
    @action(detail=True, methods=['patch'], url_path='status')
    def change_status(self, request, pk=None):
        task = self.get_lifecycle().change_status(pk, request.data.get('status') if isinstance(request.data, dict) else None)
        return success_response(TaskSerializer(task).data)

    def destroy(self, request, pk=None):
        self.get_lifecycle().delete(pk)
        return success_response(message="Task deleted successfully")
