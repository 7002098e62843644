import datetime

import pytest
from django.test import Client
from rest_framework.test import APIClient

from clinic.models import Patient, User

PASSWORD = 'P@ssw0rd-Clinic1'


@pytest.fixture
def user_account(db):
    return User.objects.create_user(username='nurse', password=PASSWORD, roles=['USER'])


@pytest.fixture
def admin_account(db):
    return User.objects.create_user(username='chief', password=PASSWORD, roles=['USER', 'ADMIN'], is_staff=True)


@pytest.fixture
def user_client(user_account):
    c = Client()
    c.force_login(user_account)
    return c


@pytest.fixture
def admin_client(admin_account):
    c = Client()
    c.force_login(admin_account)
    return c


@pytest.fixture
def api_client(user_account):
    c = APIClient()
    c.force_login(user_account)
    return c


@pytest.fixture
def patients(db):
    return [
        Patient.objects.create(name='Mohamed Alaoui', date_of_birth=datetime.date(1980, 3, 2), sick=True, score=120),
        Patient.objects.create(name='Imane Tazi', date_of_birth=datetime.date(1995, 7, 14), sick=False, score=40),
        Patient.objects.create(name='Omar Idrissi', date_of_birth=datetime.date(2001, 1, 30), sick=False, score=0),
    ]


@pytest.fixture
def password():
    return PASSWORD
