"""
HTML forms for patients, users and login.
"""
from __future__ import annotations

import bleach
from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.contrib.auth.validators import UnicodeUsernameValidator

from .models import KNOWN_ROLES, Patient

User = get_user_model()

SICK_CHOICES = [('', '---'), ('true', 'Yes'), ('false', 'No')]


def _to_bool(value):
    return str(value).lower() in {'true', '1', 'yes', 'on'}


class PatientForm(forms.ModelForm):
    # A checkbox cannot tell "no" from "not answered", so the flag is a select
    sick = forms.TypedChoiceField(
        choices=SICK_CHOICES,
        coerce=_to_bool,
        empty_value=None,
        error_messages={'required': 'Illness status is required'},
        label='Sick',
    )

    class Meta:
        model = Patient
        fields = ['name', 'date_of_birth', 'sick', 'score']
        widgets = {
            'date_of_birth': forms.DateInput(attrs={'type': 'date'}, format='%Y-%m-%d'),
        }
        error_messages = {
            'name': {'required': 'Name is required'},
            'date_of_birth': {'required': 'Date of birth is required'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance and self.instance.pk and not self.is_bound:
            self.initial['sick'] = 'true' if self.instance.sick else 'false'

    def clean_name(self):
        # Stored verbatim; templates escape on output
        return (self.cleaned_data.get('name') or '').strip()


class LoginForm(forms.Form):
    username = forms.CharField(max_length=150)
    password = forms.CharField(widget=forms.PasswordInput)

    def clean_username(self):
        return (self.cleaned_data.get('username') or '').strip()


class UserCreateForm(forms.Form):
    username = forms.CharField(max_length=150, validators=[UnicodeUsernameValidator()])
    password = forms.CharField(widget=forms.PasswordInput)
    role = forms.CharField(max_length=32)

    def clean_username(self):
        v = bleach.clean((self.cleaned_data.get('username') or '').strip(), strip=True)
        if not v:
            raise forms.ValidationError('Username is required')
        if User.objects.filter(username__iexact=v).exists():
            raise forms.ValidationError('A user with that username already exists')
        return v

    def clean_role(self):
        v = (self.cleaned_data.get('role') or '').strip().upper()
        if v not in KNOWN_ROLES:
            raise forms.ValidationError(f"Unknown role '{v}', expected one of {', '.join(sorted(KNOWN_ROLES))}")
        return v

    def clean(self):
        cleaned = super().clean()
        password = cleaned.get('password')
        username = cleaned.get('username')
        if password:
            try:
                validate_password(password, user=User(username=username or ''))
            except forms.ValidationError as e:
                self.add_error('password', e)
        return cleaned
