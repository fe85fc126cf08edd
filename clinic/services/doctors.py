import logging
import re
from typing import Optional

from django.db.models import Case, IntegerField, Value, When
from rest_framework.exceptions import ValidationError

from clinic.models import Department, Doctor
from clinic.services.formatting import label_for, or_placeholder

logger = logging.getLogger(__name__)

# Display order of the doctors panel: who can be reached right now first.
STATUS_ORDER = [
    Doctor.Status.ON_DUTY,
    Doctor.Status.AVAILABLE,
    Doctor.Status.ON_ROUNDS,
    Doctor.Status.OFF_DUTY,
]

_TITLE_RE = re.compile(r'^Dr\.?\s+', re.IGNORECASE)


def initials(full_name: Optional[str]) -> str:
    """``"Dr. Selim R."`` -> ``"SR"``; falls back to ``"DR"``."""
    words = _TITLE_RE.sub('', str(full_name or '')).split()
    letters = ''.join(w[0].upper() for w in words[:2])
    return (letters or 'DR')[:2]


def list_doctors(limit: int = 20) -> list[dict]:
    rank = Case(
        *[When(status=s, then=Value(i)) for i, s in enumerate(STATUS_ORDER)],
        default=Value(len(STATUS_ORDER)),
        output_field=IntegerField(),
    )
    qs = (
        Doctor.objects.select_related('department')
        .annotate(status_rank=rank)
        .order_by('status_rank', 'full_name', 'id')[:limit]
    )
    return [{
        'id': d.id,
        'initials': initials(d.full_name),
        'name': d.full_name,
        'department': or_placeholder(d.department.name),
        'availability': label_for(Doctor.Status, d.status),
    } for d in qs]


def create_doctor(*, full_name: str, department_id: int, status: Optional[str] = None,
                  specialty: Optional[str] = None, email: Optional[str] = None,
                  phone: Optional[str] = None) -> Doctor:
    department = Department.objects.filter(id=department_id).first()
    if department is None:
        raise ValidationError({'department_id': 'department_id does not reference an existing department'})
    doctor = Doctor.objects.create(
        department=department,
        full_name=full_name,
        specialty=specialty or None,
        email=email or None,
        phone=phone or None,
        status=status or Doctor.Status.AVAILABLE,
    )
    logger.info('added doctor %s to department %s', doctor.id, department.id)
    return doctor
