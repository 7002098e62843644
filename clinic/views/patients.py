"""
Patient management views.

The list page is open to every authenticated user, the form and save
endpoints to the ``USER`` role and deletion to ``ADMIN``; the rules
themselves live in :mod:`clinic.access`.  Listing, editing and
deleting all carry the ``keyword`` and ``page`` of the list so that
the user returns to where they were.
"""
from __future__ import annotations

import logging
from urllib.parse import urlencode

from django.conf import settings
from django.core.paginator import Paginator
from django.db import transaction
from django.http import Http404
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_GET, require_POST

from clinic.forms import PatientForm
from clinic.models import Patient
from clinic.services.audit import log_action

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def _int_param(value, default: int | None, *, lo: int = 1, hi: int | None = None) -> int | None:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    if n < lo:
        return default
    if hi is not None and n > hi:
        return hi
    return n


def _list_url(keyword: str = '', page=None) -> str:
    params = {}
    if keyword:
        params['keyword'] = keyword
    if page:
        params['page'] = page
    return '/index' + (f'?{urlencode(params)}' if params else '')


def search_patients(keyword: str = ''):
    qs = Patient.objects.all()
    if keyword:
        qs = qs.filter(name__icontains=keyword)
    return qs.order_by('id')


@require_GET
def home(request):
    return redirect('/index')


@require_GET
def patient_list(request):
    keyword = (request.GET.get('keyword') or '').strip()
    size = _int_param(request.GET.get('size'), settings.PATIENT_PAGE_SIZE, hi=MAX_PAGE_SIZE)
    paginator = Paginator(search_patients(keyword), size)
    page_obj = paginator.get_page(request.GET.get('page'))
    return render(request, 'clinic/patients.html', {
        'page_obj': page_obj,
        'patients': page_obj.object_list,
        'keyword': keyword,
        'size': size,
    })


@require_GET
def patient_form(request):
    return render(request, 'clinic/patient_form.html', {
        'form': PatientForm(),
        'keyword': request.GET.get('keyword', ''),
        'page': request.GET.get('page', ''),
    })


@require_GET
def patient_edit(request, pk: int):
    patient = get_object_or_404(Patient, pk=pk)
    return render(request, 'clinic/patient_form.html', {
        'form': PatientForm(instance=patient),
        'patient': patient,
        'keyword': request.GET.get('keyword', ''),
        'page': request.GET.get('page', ''),
    })


@require_POST
def patient_save(request):
    """Create a patient, or update one when the form carries an ``id``."""
    keyword = request.POST.get('keyword', '')
    page = request.POST.get('page', '')
    raw_id = (request.POST.get('id') or '').strip()
    pk = _int_param(raw_id, None) if raw_id else None
    if raw_id and pk is None:
        raise Http404('No Patient matches the given query.')
    patient = get_object_or_404(Patient, pk=pk) if pk else None
    form = PatientForm(request.POST, instance=patient)
    if not form.is_valid():
        return render(request, 'clinic/patient_form.html', {
            'form': form,
            'patient': patient,
            'keyword': keyword,
            'page': page,
        })

    with transaction.atomic():
        saved = form.save()
    action = 'patient_update' if pk else 'patient_create'
    logger.info('%s id=%s by %s', action, saved.pk, request.user.username)
    log_action(user=request.user, action=action, object_type='patient', object_id=saved.pk,
               detail={'name': saved.name})
    return redirect(_list_url(keyword, page))


@require_POST
def patient_delete(request, pk: int):
    patient = get_object_or_404(Patient, pk=pk)
    name = patient.name
    patient.delete()
    logger.info('patient_delete id=%s by %s', pk, request.user.username)
    log_action(user=request.user, action='patient_delete', object_type='patient', object_id=pk,
               detail={'name': name})
    return redirect(_list_url(request.POST.get('keyword', ''), request.POST.get('page', '')))
