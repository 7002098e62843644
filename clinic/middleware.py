import logging

from django.conf import settings
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect

from .access import DENY, LOGIN_REQUIRED, evaluate

logger = logging.getLogger(__name__)


class AccessRuleMiddleware:
    """Apply the URL access rules to every request.

    Anonymous visitors of a protected path are sent to the login page;
    authenticated users lacking the required role are sent to the
    access-denied page.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path_info or '/'
        decision = evaluate(path, getattr(request, 'user', None))
        if decision == LOGIN_REQUIRED:
            return redirect_to_login(request.get_full_path(), settings.LOGIN_URL)
        if decision == DENY:
            logger.warning('access denied: user=%s path=%s', request.user.get_username(), path)
            return redirect(settings.ACCESS_DENIED_URL)
        return self.get_response(request)
