"""
WSGI config for hospital project.

It exposes the WSGI callable as a module-level variable named ``application``.
Point gunicorn or any other WSGI server at ``hospital.wsgi:application``.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

# Set the default settings module for the 'django' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hospital.settings')

application = get_wsgi_application()
