from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from clinic.serializers.patient import ListQuerySerializer, PatientCreateSerializer
from clinic.services.patients import create_patient, list_patients

DEFAULT_LIMIT = 10


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def patients(request):
    """List recent patients with their latest department and room, or register one."""
    if request.method == 'GET':
        q = ListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        return Response(list_patients(limit=q.validated_data.get('limit') or DEFAULT_LIMIT))

    s = PatientCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    d = s.validated_data
    patient = create_patient(
        full_name=d['full_name'],
        patient_code=d.get('patient_code'),
        gender=d.get('gender'),
        status=d.get('status'),
        phone=d.get('phone'),
        dob=d.get('dob'),
    )
    return Response({'id': patient.id, 'patient_code': patient.patient_code}, status=status.HTTP_201_CREATED)
