"""
URL mappings for the patient records site.

Paths carry no trailing slash.  Which roles may reach each path is
decided by :mod:`clinic.access`, not here.
"""
from django.urls import path, include

from .views import api, health
from .views.auth import login_view, logout_view, error_view
from .views.patients import (
    home,
    patient_list,
    patient_form,
    patient_edit,
    patient_save,
    patient_delete,
)
from .views.users import add_user, user_list


urlpatterns = [
    # Prometheus exposition at /metrics
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Authentication
    path('login', login_view, name='login'),
    path('logout', logout_view, name='logout'),
    path('error', error_view, name='error'),
    # Patients
    path('', home, name='home'),
    path('index', patient_list, name='patient_list'),
    path('user/formPatients', patient_form, name='patient_form'),
    path('user/editPatient/<int:pk>', patient_edit, name='patient_edit'),
    path('user/savePatient', patient_save, name='patient_save'),
    path('deletePatient/<int:pk>', patient_delete, name='patient_delete'),
    # JSON API
    path('user/api/patients', api.patient_list_api, name='patient_list_api'),
    path('user/api/patients/<int:pk>', api.patient_detail_api, name='patient_detail_api'),
    # User administration
    path('admin/users', user_list, name='user_list'),
    path('admin/users/add', add_user, name='user_add'),
]
