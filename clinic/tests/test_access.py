import pytest
from django.contrib.auth.models import AnonymousUser

from clinic.access import (
    ACCESS_RULES, ALLOW, AUTHENTICATED, DENY, LOGIN_REQUIRED, PUBLIC,
    AccessRule, evaluate, match_rule, path_matches,
)
from clinic.models import User


@pytest.mark.parametrize('pattern,path,expected', [
    ('/login', '/login', True),
    ('/login', '/login/extra', False),
    ('/admin/**', '/admin', True),
    ('/admin/**', '/admin/users/add', True),
    ('/admin/**', '/administrator', False),
    ('/css/**', '/css/site/style.css', True),
    ('/user/*', '/user/formPatients', True),
    ('/user/*', '/user/editPatient/3', False),
    ('/**', '/', True),
    ('/**', '/index', True),
])
def test_path_matches(pattern, path, expected):
    assert path_matches(pattern, path) is expected


def test_rule_table_decisions_for_anonymous():
    anon = AnonymousUser()
    for path in ('/login', '/logout', '/error', '/healthz', '/webjars/jquery.js', '/css/style.css', '/static/css/style.css'):
        assert evaluate(path, anon) == ALLOW, path
    for path in ('/', '/index', '/user/formPatients', '/admin/users/add', '/deletePatient/1', '/metrics'):
        assert evaluate(path, anon) == LOGIN_REQUIRED, path


def test_user_role_cannot_reach_admin_paths():
    user = User(username='u', roles=['USER'])
    assert evaluate('/index', user) == ALLOW
    assert evaluate('/user/savePatient', user) == ALLOW
    assert evaluate('/admin/users/add', user) == DENY
    assert evaluate('/deletePatient/7', user) == DENY


def test_admin_role_implies_user_role():
    admin = User(username='a', roles=['ADMIN'])
    assert admin.has_role('USER')
    assert evaluate('/user/formPatients', admin) == ALLOW
    assert evaluate('/admin/users', admin) == ALLOW
    assert evaluate('/deletePatient/1', admin) == ALLOW


def test_user_without_roles_only_reaches_authenticated_paths():
    nobody = User(username='n', roles=[])
    assert evaluate('/index', nobody) == ALLOW
    assert evaluate('/user/formPatients', nobody) == DENY


def test_first_matching_rule_wins():
    assert match_rule('/login') is ACCESS_RULES[0]
    assert match_rule('/anything/else').access == AUTHENTICATED
    # Catch-all listed first would shadow the public exemption
    reordered = (AccessRule(('/**',), AUTHENTICATED), AccessRule(('/login',), PUBLIC))
    assert evaluate('/login', AnonymousUser(), rules=reordered) == LOGIN_REQUIRED


def test_unmatched_path_requires_authentication():
    rules = (AccessRule(('/open',), PUBLIC),)
    assert evaluate('/closed', AnonymousUser(), rules=rules) == LOGIN_REQUIRED
    assert evaluate('/closed', User(username='x'), rules=rules) == ALLOW
