import pytest
from rest_framework.test import APIClient

from clinic.models import Department, Doctor, Patient
from clinic.services.billing import create_bill


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def department(db):
    return Department.objects.create(name='Cardiology', location='Building B', phone='+213 00 00 00 01')


@pytest.fixture
def doctor(department):
    return Doctor.objects.create(department=department, full_name='Dr. Selim R.', status=Doctor.Status.ON_DUTY)


@pytest.fixture
def patient(db):
    return Patient.objects.create(patient_code='P-10942', full_name='Amina H.', gender=Patient.Gender.FEMALE)


@pytest.fixture
def bill(patient):
    return create_bill(patient_id=patient.id)
