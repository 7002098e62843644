"""
Django admin registrations for the clinic models.

The admin site is mounted at ``/admin/site/`` and is reachable only by
``ADMIN`` principals that are also Django staff.
"""

from django.contrib import admin

from .models import AuditEvent, Patient, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'roles', 'is_active', 'is_staff', 'last_login')
    list_filter = ('is_active', 'is_staff')
    search_fields = ('username', 'first_name', 'last_name')
    exclude = ('password',)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'date_of_birth', 'sick', 'score')
    list_filter = ('sick',)
    search_fields = ('name',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('user__username', 'action')
    readonly_fields = ('user', 'action', 'object_type', 'object_id', 'detail', 'created_at')
