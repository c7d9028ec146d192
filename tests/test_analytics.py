"""Dashboard aggregates: scoping, zero-fill, completion rate and overdue counting."""

import pytest

from dashboard.analytics import completion_rate, dashboard_stats
from task.permission import Actor


pytestmark = pytest.mark.django_db

STATS_URL = "/api/analytics/dashboard-stats/"


def total_of(distribution):
    return sum(entry["value"] for entry in distribution)


class TestDashboardStats:

    def test_empty_dashboard(self, admin_user):
        stats = dashboard_stats(Actor.from_user(admin_user))

        assert stats["totalTasks"] == 0
        assert stats["completionRate"] == 0
        assert stats["statusDistribution"] == [
            {"name": "Pending", "value": 0},
            {"name": "In Progress", "value": 0},
            {"name": "Completed", "value": 0},
        ]
        assert [entry["name"] for entry in stats["priorityDistribution"]] == ["Low", "Medium", "High"]

    def test_distributions_sum_to_total_for_every_role(
        self, make_task, lifecycle_for, admin_user, user_a, user_b, user_c
    ):
        make_task([user_a], priority="High")
        shared = make_task([user_a, user_b], priority="Low")
        make_task([user_b], priority="Low")
        lifecycle_for(user_b).change_status(shared.pk, "Completed")

        expected_totals = {admin_user: 3, user_a: 2, user_b: 2, user_c: 0}
        for user, expected in expected_totals.items():
            stats = dashboard_stats(Actor.from_user(user))
            assert stats["totalTasks"] == expected
            assert total_of(stats["statusDistribution"]) == expected
            assert total_of(stats["priorityDistribution"]) == expected

    def test_completion_rate_is_rounded_percentage(self, make_task, lifecycle_for, admin_user, user_a):
        tasks = [make_task([user_a]) for _ in range(3)]
        lifecycle_for(user_a).change_status(tasks[0].pk, "Completed")

        stats = dashboard_stats(Actor.from_user(user_a))
        assert stats["completedTasks"] == 1
        assert stats["completionRate"] == 33

    def test_overdue_excludes_completed(self, make_task, lifecycle_for, admin_user, user_a, yesterday):
        task = make_task([user_a], due_date=yesterday)
        make_task([user_a])

        assert dashboard_stats(Actor.from_user(admin_user))["overdueTasks"] == 1

        lifecycle_for(user_a).change_status(task.pk, "Completed")
        assert dashboard_stats(Actor.from_user(admin_user))["overdueTasks"] == 0

    def test_due_today_is_not_overdue(self, make_task, admin_user, user_a, yesterday):
        task = make_task([user_a], due_date=yesterday)
        assert dashboard_stats(Actor.from_user(admin_user), today=task.due_date)["overdueTasks"] == 0


@pytest.mark.parametrize("completed, total, expected", [
    (0, 0, 0),
    (1, 3, 33),
    (2, 3, 67),
    (3, 3, 100),
])
def test_completion_rate(completed, total, expected):
    assert completion_rate(completed, total) == expected


class TestDashboardEndpoint:

    def test_returns_envelope(self, make_task, client_for, user_a):
        make_task([user_a], priority="High")

        response = client_for(user_a).get(STATS_URL)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert set(body["data"]) == {
            "totalTasks", "completedTasks", "completionRate", "overdueTasks",
            "statusDistribution", "priorityDistribution",
        }
        assert {"name": "High", "value": 1} in body["data"]["priorityDistribution"]

    def test_requires_authentication(self, api_client):
        assert api_client.get(STATS_URL).status_code == 401
