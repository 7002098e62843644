"""
User administration and account bootstrap.
"""
from io import StringIO

import pytest
from django.core.management import call_command
from django.test import Client

from clinic.models import AuditEvent, User

pytestmark = pytest.mark.django_db

STRONG = 'Wh1te-Coat-Night'


def test_add_user_form_is_inline_html(admin_client):
    r = admin_client.get('/admin/users/add')
    assert r.status_code == 200
    body = r.content.decode()
    assert body.startswith("<form method='post'>")
    assert "name='csrfmiddlewaretoken'" in body
    assert "name='role'" in body


def test_add_user_hashes_password_and_sets_role(admin_client, admin_account):
    r = admin_client.post('/admin/users/add', {'username': 'resident1', 'password': STRONG, 'role': 'user'})
    assert r.status_code == 200
    assert r.content == b'User added!'
    u = User.objects.get(username='resident1')
    assert u.roles == ['USER']
    assert u.password != STRONG
    assert u.check_password(STRONG)
    assert AuditEvent.objects.filter(action='user_create', object_id=u.id, user=admin_account).exists()


def test_added_user_can_log_in(admin_client):
    admin_client.post('/admin/users/add', {'username': 'resident2', 'password': STRONG, 'role': 'ADMIN'})
    c = Client()
    r = c.post('/login', {'username': 'resident2', 'password': STRONG})
    assert r.url == '/index'
    assert c.get('/admin/users').status_code == 200


@pytest.mark.parametrize('role', ['SUPERUSER', 'root', ''])
def test_unknown_role_is_rejected(admin_client, role):
    r = admin_client.post('/admin/users/add', {'username': 'intruder', 'password': STRONG, 'role': role})
    assert r.status_code == 400
    assert not User.objects.filter(username='intruder').exists()


def test_duplicate_username_is_rejected(admin_client, user_account):
    r = admin_client.post('/admin/users/add', {'username': 'NURSE', 'password': STRONG, 'role': 'USER'})
    assert r.status_code == 400
    assert b'already exists' in r.content
    assert User.objects.filter(username__iexact='nurse').count() == 1


def test_weak_password_is_rejected(admin_client):
    r = admin_client.post('/admin/users/add', {'username': 'weak', 'password': '123', 'role': 'USER'})
    assert r.status_code == 400
    assert not User.objects.filter(username='weak').exists()


def test_user_list_shows_roles(admin_client, user_account):
    r = admin_client.get('/admin/users')
    assert r.status_code == 200
    assert b'nurse' in r.content
    assert b'USER, ADMIN' in r.content


def test_user_role_cannot_add_users(user_client):
    r = user_client.post('/admin/users/add', {'username': 'sneaky', 'password': STRONG, 'role': 'ADMIN'})
    assert r.status_code == 302 and r.url == '/error'
    assert not User.objects.filter(username='sneaky').exists()


# ---------------------------------------------------------------------
# bootstrap_users
# ---------------------------------------------------------------------
def test_bootstrap_users_creates_both_accounts():
    out = StringIO()
    call_command('bootstrap_users', user_password='Ward-Round-2024', admin_password='Chief-Of-Staff-2024', stdout=out)
    user = User.objects.get(username='user')
    admin = User.objects.get(username='admin')
    assert user.roles == ['USER'] and not user.is_staff
    assert admin.roles == ['USER', 'ADMIN'] and admin.is_staff
    assert user.check_password('Ward-Round-2024')
    assert admin.check_password('Chief-Of-Staff-2024')
    assert user.password != admin.password
    # Supplied passwords and hashes are never echoed
    assert 'Ward-Round-2024' not in out.getvalue()
    assert user.password not in out.getvalue()


def test_bootstrap_users_generates_distinct_passwords(monkeypatch):
    monkeypatch.delenv('BOOTSTRAP_USER_PASSWORD', raising=False)
    monkeypatch.delenv('BOOTSTRAP_ADMIN_PASSWORD', raising=False)
    out = StringIO()
    call_command('bootstrap_users', stdout=out)
    lines = [l for l in out.getvalue().splitlines() if 'initial password for' in l]
    assert len(lines) == 2
    generated = {l.split(': ', 1)[1] for l in lines}
    assert len(generated) == 2
    assert User.objects.get(username='admin').check_password(lines[1].split(': ', 1)[1])


def test_bootstrap_users_is_idempotent():
    call_command('bootstrap_users', user_password='Ward-Round-2024', admin_password='Chief-Of-Staff-2024', stdout=StringIO())
    admin = User.objects.get(username='admin')
    admin.roles = ['USER']
    admin.save()
    call_command('bootstrap_users', user_password='Other-Pass-2025', admin_password='Other-Pass-2026', stdout=StringIO())
    admin.refresh_from_db()
    assert admin.roles == ['USER', 'ADMIN']
    assert admin.check_password('Chief-Of-Staff-2024')
    assert User.objects.filter(username__in=['user', 'admin']).count() == 2


def test_bootstrap_users_reset():
    call_command('bootstrap_users', user_password='Ward-Round-2024', admin_password='Chief-Of-Staff-2024', stdout=StringIO())
    call_command('bootstrap_users', user_password='Night-Shift-2025', admin_password='Chief-Of-Staff-2025', reset=True, stdout=StringIO())
    assert User.objects.get(username='user').check_password('Night-Shift-2025')
