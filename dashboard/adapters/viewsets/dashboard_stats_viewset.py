from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from dashboard.analytics import dashboard_stats
from task.permission import Actor
from utils.responses import success_response

DistributionSerializer = inline_serializer(
    name='Distribution',
    fields={'name': serializers.CharField(), 'value': serializers.IntegerField()},
    many=True,
)


class DashboardStatsView(APIView):
    """
    Totals, completion rate, overdue count and status/priority distributions,
    scoped to the tasks the caller can see.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: inline_serializer(
        name='DashboardStats',
        fields={
            'totalTasks': serializers.IntegerField(),
            'completedTasks': serializers.IntegerField(),
            'completionRate': serializers.IntegerField(),
            'overdueTasks': serializers.IntegerField(),
            'statusDistribution': DistributionSerializer,
            'priorityDistribution': DistributionSerializer,
        },
    )})
    def get(self, request):
        return success_response(dashboard_stats(Actor.from_user(request.user)))
