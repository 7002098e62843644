"""
URL configuration for the hospital patient records project.

The site routes live in the clinic app.  Django's own admin site is
mounted under ``/admin/site/`` so that it falls under the ``ADMIN``
access rule together with the user administration screens.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/site/', admin.site.urls),
    path('', include('clinic.routers')),
]

handler403 = 'clinic.views.auth.error_view'
