"""
Database models for the patient records site.

Three concepts are stored: the authenticated ``User`` carrying its
role labels, the ``Patient`` record managed through the HTML forms and
an ``AuditEvent`` trail of sensitive actions.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

ROLE_USER = 'USER'
ROLE_ADMIN = 'ADMIN'
ROLE_CHOICES = [
    (ROLE_USER, 'User'),
    (ROLE_ADMIN, 'Administrator'),
]
KNOWN_ROLES = frozenset(code for code, _ in ROLE_CHOICES)

# A role implies every role listed here as well
ROLE_IMPLIES = {
    ROLE_ADMIN: {ROLE_USER},
}


class User(AbstractUser):
    """Custom user model with a set of role labels.

    ``roles`` holds upper-case labels from :data:`ROLE_CHOICES`.  Role
    checks go through :meth:`has_role`, which honours the hierarchy in
    :data:`ROLE_IMPLIES` so that an administrator also passes ``USER``
    checks.
    """
    roles = models.JSONField(default=list, blank=True)

    def effective_roles(self) -> set[str]:
        granted = {str(r).upper() for r in (self.roles or [])}
        for role in list(granted):
            granted |= ROLE_IMPLIES.get(role, set())
        return granted

    def has_role(self, role: str) -> bool:
        return role.upper() in self.effective_roles()

    @property
    def is_user_role(self) -> bool:
        return self.has_role(ROLE_USER)

    @property
    def is_admin_role(self) -> bool:
        return self.has_role(ROLE_ADMIN)

    def __str__(self) -> str:
        return f"{self.username} ({', '.join(sorted(self.roles or [])) or 'no role'})"


def validate_not_in_future(value):
    if value and value > timezone.localdate():
        raise ValidationError('Date of birth cannot be in the future', code='future_date')


def validate_not_blank(value):
    if not (value or '').strip():
        raise ValidationError('Name is required', code='blank')


class Patient(models.Model):
    """A patient record.

    ``sick`` is the illness flag and ``score`` a non-negative clinical
    score.  Constraints are declared on the fields so that model forms
    and :meth:`full_clean` apply them on every write path.
    """
    name = models.CharField(
        max_length=100,
        validators=[validate_not_blank],
        error_messages={'blank': 'Name is required', 'required': 'Name is required'},
    )
    date_of_birth = models.DateField(
        validators=[validate_not_in_future],
        error_messages={'null': 'Date of birth is required', 'required': 'Date of birth is required'},
    )
    sick = models.BooleanField(
        error_messages={'null': 'Illness status is required', 'required': 'Illness status is required'},
    )
    score = models.IntegerField(
        default=0,
        validators=[MinValueValidator(0, message='Score must be positive or zero')],
    )

    class Meta:
        ordering = ['id']
        indexes = [
            models.Index(fields=['name'], name='clinic_patient_name_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.date_of_birth:%Y-%m-%d})"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='clinic_audit_action_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='clinic_audit_object_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
