"""
Read-only dashboard panels: health, headline stats, appointments,
departments, pharmacy stock and laboratory orders.
"""
from __future__ import annotations

from django.db import connections
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from clinic.exceptions import error_response
from clinic.services.kpi import dashboard_stats
from clinic.services.listings import list_appointments, list_departments, list_lab_tests, list_pharmacy_items


@api_view(['GET'])
@permission_classes([AllowAny])
def health(request):
    with connections['default'].cursor() as c:
        c.execute('SELECT 1')
        c.fetchone()
    return Response({'ok': True})


@api_view(['GET'])
@permission_classes([AllowAny])
def stats(request):
    return Response(dashboard_stats())


@api_view(['GET'])
@permission_classes([AllowAny])
def appointments(request):
    """Today's appointments by time; ``?day=all`` drops the date filter."""
    day = str(request.query_params.get('day') or 'today').strip().lower()
    return Response(list_appointments(day='all' if day == 'all' else 'today'))


@api_view(['GET'])
@permission_classes([AllowAny])
def departments(request):
    return Response(list_departments())


@api_view(['GET'])
@permission_classes([AllowAny])
def pharmacy(request):
    return Response(list_pharmacy_items())


@api_view(['GET'])
@permission_classes([AllowAny])
def laboratory(request):
    return Response(list_lab_tests())


@api_view(['GET', 'POST', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([AllowAny])
def api_not_found(request, *args, **kwargs):
    return error_response('Not found', 404)
