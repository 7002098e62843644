import pytest
from django.contrib.auth.hashers import check_password, make_password
from django.test import Client

from clinic.models import AuditEvent, Patient, User

pytestmark = pytest.mark.django_db


@pytest.mark.parametrize('path', ['/', '/index', '/user/formPatients', '/admin/users/add', '/user/api/patients'])
def test_anonymous_is_redirected_to_login(client, path):
    r = client.get(path)
    assert r.status_code == 302
    assert r.url.startswith('/login')


def test_public_pages_do_not_require_login(client):
    assert client.get('/login').status_code == 200
    assert client.get('/error').status_code == 403
    assert client.get('/healthz').json()['ok'] is True


def test_login_success_redirects_to_index(user_account, password):
    c = Client()
    r = c.post('/login', {'username': 'nurse', 'password': password})
    assert r.status_code == 302
    assert r.url == '/index'
    assert c.get('/index').status_code == 200


def test_login_ignores_next_parameter(user_account, password):
    c = Client()
    r = c.post('/login?next=/admin/users', {'username': 'nurse', 'password': password})
    assert r.url == '/index'


def test_login_failure_redirects_with_error_flag(user_account):
    c = Client()
    r = c.post('/login', {'username': 'nurse', 'password': 'wrong'})
    assert r.status_code == 302
    assert r.url == '/login?error=true'
    page = c.get(r.url)
    assert b'Invalid username or password' in page.content


def test_login_attempts_are_audited(user_account, password):
    c = Client()
    c.post('/login', {'username': 'nurse', 'password': 'wrong'})
    c.post('/login', {'username': 'nurse', 'password': password})
    results = [e.detail['result'] for e in AuditEvent.objects.filter(action='login').order_by('id')]
    assert results == ['fail', 'ok']
    assert AuditEvent.objects.filter(action='login', user=user_account).count() == 1


def test_logout_redirects_to_login(user_client):
    r = user_client.get('/logout')
    assert r.status_code == 302
    assert r.url == '/login?logout'
    assert user_client.get('/index').status_code == 302


@pytest.mark.parametrize('path', ['/admin/users', '/admin/users/add', '/admin'])
def test_user_role_is_denied_admin_paths(user_client, path):
    r = user_client.get(path)
    assert r.status_code == 302
    assert r.url == '/error'


def test_user_role_cannot_delete_patients(user_client, patients):
    r = user_client.post(f'/deletePatient/{patients[0].id}')
    assert r.status_code == 302
    assert r.url == '/error'
    assert Patient.objects.filter(id=patients[0].id).exists()


@pytest.mark.parametrize('path', ['/user/formPatients', '/user/api/patients', '/admin/users', '/admin/users/add'])
def test_admin_reaches_user_and_admin_paths(admin_client, path):
    assert admin_client.get(path).status_code == 200


def test_admin_only_role_still_holds_user_role(db, password):
    u = User.objects.create_user(username='boss', password=password, roles=['ADMIN'])
    c = Client()
    c.force_login(u)
    assert c.get('/user/formPatients').status_code == 200


def test_password_hash_is_salted():
    first = make_password('pswd123')
    second = make_password('pswd123')
    assert first != 'pswd123'
    assert first != second
    assert check_password('pswd123', first) and check_password('pswd123', second)


def test_stored_password_is_hashed(user_account, password):
    user_account.refresh_from_db()
    assert user_account.password != password
    assert user_account.password.startswith('bcrypt_sha256$')
    assert user_account.check_password(password)
