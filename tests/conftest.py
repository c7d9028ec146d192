"""Shared fixtures: users in both roles, API clients and a task factory."""

from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from task.permission import Actor
from task.services.task_lifecycle import TaskLifecycle
from user.models import Role
from user.selectors import create_user


PASSWORD = "secret-pass"


@pytest.fixture(autouse=True)
def fast_password_hasher(settings):
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


@pytest.fixture
def admin_user(db):
    return create_user("Ada Admin", "admin@example.com", PASSWORD, role=Role.ADMIN)


@pytest.fixture
def user_a(db):
    return create_user("Alice", "alice@example.com", PASSWORD)


@pytest.fixture
def user_b(db):
    return create_user("Bob", "bob@example.com", PASSWORD)


@pytest.fixture
def user_c(db):
    return create_user("Carol", "carol@example.com", PASSWORD)


@pytest.fixture
def future_date():
    return timezone.localdate() + timedelta(days=7)


@pytest.fixture
def yesterday():
    return timezone.localdate() - timedelta(days=1)


@pytest.fixture
def lifecycle_for():
    def factory(user):
        return TaskLifecycle(Actor.from_user(user))

    return factory


@pytest.fixture
def make_task(admin_user, future_date, lifecycle_for):
    """Create a task through the lifecycle as admin unless another creator is given."""

    def factory(assignees, creator=None, **fields):
        data = {
            "title": fields.pop("title", "Write report"),
            "dueDate": fields.pop("due_date", future_date).isoformat(),
            "priority": fields.pop("priority", "Medium"),
            "assignedTo": [user.pk for user in assignees],
        }
        data.update(fields)
        return lifecycle_for(creator or admin_user).create(data)

    return factory


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    def factory(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return factory
