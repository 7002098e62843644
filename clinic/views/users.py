"""
User administration.

``/admin/users/add`` answers with a bare inline form rather than a
template; a valid submission creates the account with its password
hashed and a single role label.
"""
from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.http import HttpResponse, HttpResponseBadRequest
from django.middleware.csrf import get_token
from django.shortcuts import render
from django.utils.html import escape, format_html
from django.views.decorators.http import require_GET, require_http_methods

from clinic.forms import UserCreateForm
from clinic.services.audit import log_action
from clinic.services.users import create_user

logger = logging.getLogger(__name__)

User = get_user_model()

ADD_USER_FORM = (
    "<form method='post'>"
    "<input type='hidden' name='csrfmiddlewaretoken' value='{}'/>"
    "Username: <input name='username'/><br>"
    "Password: <input name='password' type='password'/><br>"
    "Role: <input name='role'/><br>"
    "<button type='submit'>Add User</button>"
    "</form>"
)


@require_http_methods(['GET', 'POST'])
def add_user(request):
    if request.method == 'GET':
        return HttpResponse(format_html(ADD_USER_FORM, get_token(request)))

    form = UserCreateForm(request.POST)
    if not form.is_valid():
        errors = '; '.join(
            f"{field}: {' '.join(msgs)}" for field, msgs in form.errors.items()
        )
        logger.info('user creation rejected: %s', errors)
        return HttpResponseBadRequest(escape(errors))

    user = create_user(
        username=form.cleaned_data['username'],
        password=form.cleaned_data['password'],
        role=form.cleaned_data['role'],
    )
    log_action(user=request.user, action='user_create', object_type='user', object_id=user.id,
               detail={'username': user.username, 'roles': user.roles})
    return HttpResponse('User added!')


@require_GET
def user_list(request):
    users = User.objects.order_by('username')
    return render(request, 'clinic/users.html', {'users': users})
