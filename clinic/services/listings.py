"""
Read-only projections behind the dashboard panels.

Each function turns stored rows into the display shape the panels render:
enumerated codes are paired with (or replaced by) their labels, missing
values become the placeholder and timestamps are formatted in the
configured time zone.
"""
from django.utils import timezone

from clinic.models import Appointment, Department, LabTest, PharmacyItem
from clinic.services.formatting import format_datetime, label_for, or_placeholder

APPOINTMENT_LIMIT = 20
PHARMACY_LIMIT = 50
LAB_LIMIT = 50


def list_appointments(day: str = 'today', today=None) -> list[dict]:
    qs = Appointment.objects.select_related('doctor', 'department')
    if day != 'all':
        qs = qs.filter(appt_date=today or timezone.localdate())
    qs = qs.order_by('appt_time', 'id')[:APPOINTMENT_LIMIT]
    return [{
        'time': a.appt_time.strftime('%H:%M'),
        'title': f"{a.department.name} Appointment",
        'meta': f"{a.doctor.full_name} • {or_placeholder(a.room)}",
        'status': label_for(Appointment.Status, a.status),
    } for a in qs]


def list_departments() -> list[dict]:
    return [{
        'id': d.id,
        'name': d.name,
        'location': or_placeholder(d.location),
        'phone': or_placeholder(d.phone),
    } for d in Department.objects.order_by('name')]


def list_pharmacy_items() -> list[dict]:
    qs = PharmacyItem.objects.order_by('-updated_at', '-id')[:PHARMACY_LIMIT]
    return [{
        'code': it.item_code,
        'name': it.name,
        'category': or_placeholder(it.category),
        'stock': it.stock_qty,
        'unit': it.unit,
        'status': it.status,
        'status_label': label_for(PharmacyItem.Status, it.status),
        'updated_at': format_datetime(it.updated_at),
    } for it in qs]


def list_lab_tests() -> list[dict]:
    qs = LabTest.objects.select_related('patient').order_by('-ordered_at', '-id')[:LAB_LIMIT]
    return [{
        'id': t.id,
        'patient_id': t.patient.patient_code,
        'patient': t.patient.full_name,
        'test_name': t.test_name,
        'priority': t.priority,
        'priority_label': label_for(LabTest.Priority, t.priority),
        'status': t.status,
        'status_label': label_for(LabTest.Status, t.status),
        'ordered_at': format_datetime(t.ordered_at),
        'result_at': format_datetime(t.result_at),
    } for t in qs]
