"""
Read-only JSON access to patient records.

Both endpoints accept the same ``keyword`` filter as the HTML list and
paginate with DRF's page-number pagination.
"""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.models import Patient
from clinic.permissions import IsUserRole
from clinic.serializers.patient import PatientListQuerySerializer, PatientSerializer
from clinic.views.patients import search_patients


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsUserRole])
def patient_list_api(request):
    q = PatientListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = search_patients(q.validated_data.get('keyword', ''))
    paginator = PageNumberPagination()
    page = paginator.paginate_queryset(qs, request)
    return paginator.get_paginated_response(PatientSerializer(page, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsUserRole])
def patient_detail_api(request, pk: int):
    patient = get_object_or_404(Patient, pk=pk)
    return Response(PatientSerializer(patient).data)
