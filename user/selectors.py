"""
Identity store lookups.

Every lookup that feeds task assignment goes through `active_users()`, which
hides deactivated accounts and soft-deleted profiles. Users created outside the
API (e.g. `createsuperuser`) have no profile yet and count as active.
"""
import logging

from django.contrib.auth.models import User
from django.db import transaction
from django.db.models import Q

from .models import Role, UserProfile

logger = logging.getLogger(__name__)


def active_users():
    return User.objects.filter(is_active=True).exclude(profile__is_deleted=True)


def get_active_user(user_id):
    return active_users().filter(pk=user_id).select_related('profile').first()


def find_by_email(email):
    if not email:
        return None
    return active_users().filter(email__iexact=email.strip()).select_related('profile').first()


def email_taken(email):
    # Only non-deleted accounts reserve an address; deactivated ones still do.
    email = (email or '').strip()
    accounts = User.objects.exclude(profile__is_deleted=True)
    return accounts.filter(Q(email__iexact=email) | Q(username__iexact=email)).exists()


def resolve_active_users(user_ids):
    """
    Resolve ids to active users.

    Returns `(users, missing)` where `users` follows the order of `user_ids` and
    `missing` lists every id that did not resolve.
    """
    found = {user.pk: user for user in active_users().filter(pk__in=user_ids)}
    users = [found[user_id] for user_id in user_ids if user_id in found]
    missing = [user_id for user_id in user_ids if user_id not in found]
    return users, missing


def role_of(user):
    if user.is_superuser:
        return Role.ADMIN
    profile = getattr(user, 'profile', None)
    if profile is None:
        return Role.USER
    return profile.role


def display_name(user):
    return user.get_full_name() or user.username


@transaction.atomic
def create_user(name, email, password, role=Role.USER):
    email = email.strip().lower()
    user = User.objects.create_user(
        username=email,
        email=email,
        password=password,
        first_name=name.strip(),
    )
    UserProfile.objects.create(user=user, role=role)
    logger.info(f"User {user.id} created with role {role}")
    return user


@transaction.atomic
def soft_delete_user(user):
    profile, _ = UserProfile.objects.get_or_create(user=user)
    profile.is_deleted = True
    profile.save(update_fields=['is_deleted', 'updated_at'])

    # Deactivating the account is what makes existing tokens stop working.
    user.is_active = False
    # The username doubles as the login email; free it for a new account.
    # The email itself stays so history still shows who made each change.
    user.username = f"deleted-{user.pk}-{user.username}"[:150]
    user.save(update_fields=['is_active', 'username'])
    logger.info(f"User {user.id} soft-deleted")
