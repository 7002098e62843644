import logging
import secrets

from django.contrib.auth import get_user_model
from django.db import transaction

from clinic.models import ROLE_ADMIN, ROLE_USER

logger = logging.getLogger(__name__)

User = get_user_model()


def create_user(*, username: str, password: str, role: str):
    """Create a user holding the single ``role`` label.

    ``create_user`` on the manager hashes the password, so the raw
    credential never reaches the database.
    """
    with transaction.atomic():
        user = User.objects.create_user(username=username, password=password)
        user.roles = [role.upper()]
        user.save(update_fields=['roles'])
    logger.info('user created: %s roles=%s', username, user.roles)
    return user


def ensure_user(username: str, roles: list[str], *, password: str | None = None, reset: bool = False):
    """Create or correct a bootstrap account.

    Returns ``(user, created, password)`` where ``password`` is the
    plaintext that was set, or ``None`` when the stored one was kept.
    """
    user = User.objects.filter(username=username).first()
    created = user is None
    if created:
        user = User(username=username)
    if created or reset:
        password = password or secrets.token_urlsafe(12)
        user.set_password(password)
    else:
        password = None
    user.roles = list(roles)
    user.is_active = True
    user.is_staff = ROLE_ADMIN in roles
    user.save()
    return user, created, password


BOOTSTRAP_ACCOUNTS = (
    ('user', [ROLE_USER]),
    ('admin', [ROLE_USER, ROLE_ADMIN]),
)
