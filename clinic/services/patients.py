import logging
import secrets
from datetime import date
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import OuterRef, Subquery

from clinic.exceptions import Conflict
from clinic.models import Appointment, Patient
from clinic.services.formatting import label_for, or_placeholder

logger = logging.getLogger(__name__)

PATIENT_CODE_ATTEMPTS = 5


def generate_patient_code() -> str:
    return f"P-{10000 + secrets.randbelow(90000)}"


def create_patient(*, full_name: str, patient_code: Optional[str] = None, gender: Optional[str] = None,
                   status: Optional[str] = None, phone: Optional[str] = None, dob: Optional[date] = None) -> Patient:
    explicit_code = (patient_code or '').strip()
    attempts = 1 if explicit_code else PATIENT_CODE_ATTEMPTS
    for _ in range(attempts):
        code = explicit_code or generate_patient_code()
        try:
            with transaction.atomic():
                patient = Patient.objects.create(
                    patient_code=code,
                    full_name=full_name,
                    dob=dob,
                    gender=gender or None,
                    phone=phone or None,
                    status=status or Patient.Status.STABLE,
                )
        except IntegrityError:
            if not Patient.objects.filter(patient_code=code).exists():
                raise
            if explicit_code:
                raise Conflict('patient_code already exists')
            logger.warning('patient code %s already taken, retrying', code)
            continue
        logger.info('registered patient %s (id=%s)', patient.patient_code, patient.id)
        return patient
    raise Conflict('could not allocate a unique patient_code')


def list_patients(limit: int = 10) -> list[dict]:
    # department and room come from each patient's most recent appointment
    latest = Appointment.objects.filter(patient=OuterRef('pk')).order_by('-appt_date', '-appt_time', '-id')
    qs = (
        Patient.objects
        .annotate(
            latest_department=Subquery(latest.values('department__name')[:1]),
            latest_room=Subquery(latest.values('room')[:1]),
        )
        .order_by('-created_at', '-id')[:limit]
    )
    return [{
        'id': p.patient_code,
        'patientId': p.id,
        'name': p.full_name,
        'department': or_placeholder(p.latest_department),
        'status': label_for(Patient.Status, p.status),
        'room': or_placeholder(p.latest_room),
    } for p in qs]
