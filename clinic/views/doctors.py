from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from clinic.serializers.doctor import DoctorCreateSerializer
from clinic.serializers.patient import ListQuerySerializer
from clinic.services.doctors import create_doctor, list_doctors

DEFAULT_LIMIT = 20


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def doctors(request):
    if request.method == 'GET':
        q = ListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        return Response(list_doctors(limit=q.validated_data.get('limit') or DEFAULT_LIMIT))

    s = DoctorCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    d = s.validated_data
    doctor = create_doctor(
        full_name=d['full_name'],
        department_id=d['department_id'],
        status=d.get('status'),
        specialty=d.get('specialty'),
        email=d.get('email'),
        phone=d.get('phone'),
    )
    return Response({'id': doctor.id}, status=status.HTTP_201_CREATED)
