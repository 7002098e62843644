"""
Form login, logout and the access-denied page.

A successful login always lands on ``LOGIN_REDIRECT_URL`` regardless
of any ``next`` parameter; a failed one goes back to the login page
with ``?error=true``.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.contrib.auth import authenticate, login, logout
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from clinic.forms import LoginForm
from clinic.services.audit import log_action

logger = logging.getLogger(__name__)


@require_http_methods(['GET', 'POST'])
def login_view(request):
    if request.method == 'GET':
        return render(request, 'clinic/login.html', {
            'form': LoginForm(),
            'error': 'error' in request.GET,
            'logged_out': 'logout' in request.GET,
        })

    form = LoginForm(request.POST)
    user = None
    username = ''
    if form.is_valid():
        username = form.cleaned_data['username']
        user = authenticate(request, username=username, password=form.cleaned_data['password'])
    if user is None:
        logger.info('login failed for %r', username)
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'username': username, 'ip': request.META.get('REMOTE_ADDR')})
        return redirect(settings.LOGIN_FAILURE_URL)

    login(request, user)
    logger.info('login ok for %s', user.username)
    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})
    return redirect(settings.LOGIN_REDIRECT_URL)


@require_http_methods(['GET', 'POST'])
def logout_view(request):
    if request.user.is_authenticated:
        logger.info('logout for %s', request.user.username)
    logout(request)
    return redirect(settings.LOGOUT_REDIRECT_URL)


def error_view(request, exception=None):
    """Access-denied page, also installed as ``handler403``."""
    return render(request, 'clinic/error.html', {
        'message': 'Access denied: you are not authorized to view this page.',
    }, status=403)
