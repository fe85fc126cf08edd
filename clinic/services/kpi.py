from django.utils import timezone

from clinic.models import Appointment, Bed, Doctor, Patient


def dashboard_stats(today=None) -> dict:
    today = today or timezone.localdate()
    return {
        'totalPatients': Patient.objects.count(),
        'doctorsAvailable': Doctor.objects.filter(
            status__in=[Doctor.Status.AVAILABLE, Doctor.Status.ON_DUTY]
        ).count(),
        'appointmentsToday': Appointment.objects.filter(appt_date=today).count(),
        'availableBeds': Bed.objects.filter(is_available=True).count(),
    }
