"""
Integration tests for the dashboard API.

These tests drive every ``/api/`` endpoint through DRF's APIClient within
the APITestCase base class: the list panels, patient and doctor
registration and the billing flow (open a bill, append items, read the
recomputed total back).

To run the tests:

```
pytest -q clinic/tests
```
"""
import re
from datetime import time, timedelta
from decimal import Decimal

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from ..models import Appointment, Bed, Bill, BillingItem, Department, Doctor, LabTest, Patient, PharmacyItem


class DashboardAPITestBase(APITestCase):
    def setUp(self) -> None:
        self.cardio = Department.objects.create(name='Cardiology', location='Building B', phone='+213 00 00 00 01')
        self.ortho = Department.objects.create(name='Orthopedics')
        self.dr_selim = Doctor.objects.create(department=self.cardio, full_name='Dr. Selim R.', status=Doctor.Status.ON_DUTY)
        self.dr_meriem = Doctor.objects.create(department=self.ortho, full_name='Dr. Meriem A.', status=Doctor.Status.OFF_DUTY)
        self.amina = Patient.objects.create(patient_code='P-10942', full_name='Amina H.', gender=Patient.Gender.FEMALE)
        self.karim = Patient.objects.create(
            patient_code='P-10941', full_name='Karim S.', gender=Patient.Gender.MALE,
            status=Patient.Status.OBSERVATION,
        )


class BillingAPITests(DashboardAPITestBase):
    def create_bill(self, **payload):
        payload.setdefault('patient_id', self.amina.id)
        return self.client.post('/api/billing', payload, format='json')

    def test_create_bill(self):
        resp = self.create_bill(currency='dzd')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertRegex(resp.data['bill_no'], r'^BILL-\d{4}-\d{6}$')
        bill = Bill.objects.get(id=resp.data['id'])
        self.assertEqual(bill.currency, 'DZD')
        self.assertEqual(bill.status, Bill.Status.UNPAID)
        self.assertEqual(bill.total_amount, Decimal('0.00'))
        self.assertEqual(bill.bill_date, timezone.localdate())

    def test_create_bill_with_explicit_fields(self):
        resp = self.create_bill(bill_no='BILL-2026-0001', bill_date='2026-01-15', status='PAID')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['bill_no'], 'BILL-2026-0001')
        bill = Bill.objects.get(id=resp.data['id'])
        self.assertEqual(bill.status, Bill.Status.PAID)
        self.assertEqual(bill.bill_date.isoformat(), '2026-01-15')

    def test_create_bill_requires_patient(self):
        for payload in ({}, {'patient_id': 0}, {'patient_id': 'abc'}, {'patient_id': None}):
            resp = self.client.post('/api/billing', payload, format='json')
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(resp.data, {'error': 'patient_id is required'})
        self.assertEqual(Bill.objects.count(), 0)

    def test_create_bill_unknown_patient(self):
        resp = self.create_bill(patient_id=987654)
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data['error'], 'patient_id does not reference an existing patient')

    def test_create_bill_rejects_unknown_status(self):
        resp = self.create_bill(status='overdue')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data['error'], 'status must be one of: unpaid, paid, partially_paid, void')

    def test_duplicate_bill_no_conflicts(self):
        self.assertEqual(self.create_bill(bill_no='BILL-X').status_code, status.HTTP_201_CREATED)
        resp = self.create_bill(bill_no='BILL-X')
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data, {'error': 'bill_no already exists'})

    def test_two_bills_without_number_are_distinct(self):
        a = self.create_bill()
        b = self.create_bill()
        self.assertNotEqual(a.data['bill_no'], b.data['bill_no'])

    def test_add_items_recomputes_total(self):
        bill_id = self.create_bill().data['id']
        resp = self.client.post('/api/billing/items', {
            'bill_id': bill_id, 'description': 'Consultation fee', 'qty': 1, 'unit_price': 2500,
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['bill_id'], bill_id)
        self.assertEqual(resp.data['total_amount'], '2500.00')

        resp = self.client.post('/api/billing/items', {
            'bill_id': bill_id, 'description': 'ECG', 'unit_price': '1800.00',
        }, format='json')
        self.assertEqual(resp.data['total_amount'], '4300.00')
        self.assertEqual(Bill.objects.get(id=bill_id).total_amount, Decimal('4300.00'))

    def test_item_price_rounds_half_up(self):
        bill_id = self.create_bill().data['id']
        resp = self.client.post('/api/billing/items', {
            'bill_id': bill_id, 'description': 'Dressing', 'qty': 2, 'unit_price': 100.005,
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['total_amount'], '200.02')
        item = BillingItem.objects.get(id=resp.data['id'])
        self.assertEqual(item.unit_price, Decimal('100.01'))

    def test_item_qty_is_clamped_and_truncated(self):
        bill_id = self.create_bill().data['id']
        cases = [(0, 1), (-3, 1), (None, 1), ('4', 4), (2.9, 2), (500000, 100000)]
        for raw, expected in cases:
            resp = self.client.post('/api/billing/items', {
                'bill_id': bill_id, 'description': 'Gauze', 'qty': raw, 'unit_price': 0,
            }, format='json')
            self.assertEqual(resp.status_code, status.HTTP_201_CREATED, raw)
            self.assertEqual(BillingItem.objects.get(id=resp.data['id']).qty, expected, raw)

    def test_item_qty_must_be_numeric(self):
        bill_id = self.create_bill().data['id']
        resp = self.client.post('/api/billing/items', {
            'bill_id': bill_id, 'description': 'Gauze', 'qty': 'many',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data['error'], 'qty must be a number')

    def test_item_price_must_be_non_negative_and_finite(self):
        bill_id = self.create_bill().data['id']
        for price in (-1, '-0.01', 'abc', 'NaN', 'Infinity'):
            resp = self.client.post('/api/billing/items', {
                'bill_id': bill_id, 'description': 'Gauze', 'unit_price': price,
            }, format='json')
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, price)
            self.assertEqual(resp.data['error'], 'unit_price must be >= 0')
        self.assertFalse(BillingItem.objects.exists())

    def test_item_price_defaults_to_zero(self):
        bill_id = self.create_bill().data['id']
        resp = self.client.post('/api/billing/items', {'bill_id': bill_id, 'description': 'Waived'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['total_amount'], '0.00')

    def test_item_requires_description(self):
        bill_id = self.create_bill().data['id']
        for payload in ({'bill_id': bill_id}, {'bill_id': bill_id, 'description': '   '}):
            resp = self.client.post('/api/billing/items', payload, format='json')
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(resp.data['error'], 'description is required')

    def test_item_description_is_sanitized(self):
        bill_id = self.create_bill().data['id']
        resp = self.client.post('/api/billing/items', {
            'bill_id': bill_id, 'description': '<b>ECG</b>', 'unit_price': 1,
        }, format='json')
        self.assertEqual(BillingItem.objects.get(id=resp.data['id']).description, 'ECG')
        resp = self.client.post('/api/billing/items', {
            'bill_id': bill_id, 'description': '<a href="http://x">Lab panel</a>', 'unit_price': 1,
        }, format='json')
        self.assertEqual(BillingItem.objects.get(id=resp.data['id']).description, 'Lab panel')

    def test_item_description_of_only_markup_is_missing(self):
        bill_id = self.create_bill().data['id']
        resp = self.client.post('/api/billing/items', {'bill_id': bill_id, 'description': '<b></b>'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data, {'error': 'description is required'})
        self.assertFalse(BillingItem.objects.exists())

    def test_item_description_length_counts_escaped_text(self):
        bill_id = self.create_bill().data['id']
        resp = self.client.post('/api/billing/items', {'bill_id': bill_id, 'description': '&' * 150}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data, {'error': 'description must be at most 200 characters'})
        self.assertFalse(BillingItem.objects.exists())

    def test_item_total_cannot_overflow(self):
        bill_id = self.create_bill().data['id']
        resp = self.client.post('/api/billing/items', {
            'bill_id': bill_id, 'description': 'Implant', 'qty': 100000, 'unit_price': 1000,
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data, {'error': 'bill total would exceed 99999999.99'})
        self.assertFalse(BillingItem.objects.exists())

        resp = self.client.get('/api/billing')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data[0]['total_amount'], '0.00')

    def test_item_requires_existing_bill(self):
        resp = self.client.post('/api/billing/items', {'description': 'ECG'}, format='json')
        self.assertEqual(resp.data, {'error': 'bill_id is required'})
        resp = self.client.post('/api/billing/items', {'bill_id': 555, 'description': 'ECG'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data['error'], 'bill_id does not reference an existing bill')

    def test_list_items(self):
        bill_id = self.create_bill().data['id']
        self.client.post('/api/billing/items', {
            'bill_id': bill_id, 'description': 'Consultation fee', 'qty': 1, 'unit_price': 2500,
        }, format='json')
        self.client.post('/api/billing/items', {
            'bill_id': bill_id, 'description': 'Saline', 'qty': 3, 'unit_price': '12.335',
        }, format='json')

        resp = self.client.get('/api/billing/items', {'billId': bill_id})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([row['description'] for row in resp.data], ['Consultation fee', 'Saline'])
        self.assertEqual(resp.data[1]['unit_price'], '12.34')
        self.assertEqual(resp.data[1]['line_total'], '37.02')
        self.assertEqual(set(resp.data[0]), {'id', 'description', 'qty', 'unit_price', 'line_total'})

    def test_list_items_requires_bill_id(self):
        for params in ({}, {'billId': 0}, {'billId': 'x'}):
            resp = self.client.get('/api/billing/items', params)
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(resp.data, {'error': 'billId is required'})

    def test_list_items_for_unknown_bill_is_empty(self):
        resp = self.client.get('/api/billing/items', {'billId': 31337})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data, [])

    def test_list_bills(self):
        older = self.create_bill(bill_date='2026-01-01').data['id']
        newer = self.create_bill(bill_date='2026-02-01', status='partially_paid').data['id']
        self.client.post('/api/billing/items', {
            'bill_id': newer, 'description': 'ECG', 'unit_price': 1800,
        }, format='json')

        resp = self.client.get('/api/billing')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([row['id'] for row in resp.data], [newer, older])
        row = resp.data[0]
        self.assertEqual(row['patient_id'], 'P-10942')
        self.assertEqual(row['patient'], 'Amina H.')
        self.assertEqual(row['bill_date'], '2026-02-01')
        self.assertEqual(row['total_amount'], '1800.00')
        self.assertEqual(row['status'], 'partially_paid')
        self.assertEqual(row['status_label'], 'Partially paid')


class PatientAPITests(DashboardAPITestBase):
    def test_register_patient(self):
        resp = self.client.post('/api/patients', {
            'full_name': '  Sara B. ', 'gender': 'Female', 'status': 'critical', 'dob': '1990-05-04', 'phone': '',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertTrue(re.match(r'^P-\d{5}$', resp.data['patient_code']))
        patient = Patient.objects.get(id=resp.data['id'])
        self.assertEqual(patient.full_name, 'Sara B.')
        self.assertEqual(patient.gender, Patient.Gender.FEMALE)
        self.assertEqual(patient.status, Patient.Status.CRITICAL)
        self.assertIsNone(patient.phone)

    def test_register_patient_defaults(self):
        resp = self.client.post('/api/patients', {'full_name': 'Omar T.', 'patient_code': 'P-20001'}, format='json')
        self.assertEqual(resp.data['patient_code'], 'P-20001')
        patient = Patient.objects.get(id=resp.data['id'])
        self.assertEqual(patient.status, Patient.Status.STABLE)
        self.assertIsNone(patient.gender)

    def test_register_patient_requires_name(self):
        for payload in ({}, {'full_name': '   '}, {'full_name': '<i></i>'}):
            resp = self.client.post('/api/patients', payload, format='json')
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(resp.data, {'error': 'full_name is required'})

    def test_register_patient_rejects_unknown_enum(self):
        resp = self.client.post('/api/patients', {'full_name': 'Omar T.', 'gender': 'f'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data['error'], 'gender must be one of: female, male, other')

    def test_register_patient_duplicate_code(self):
        resp = self.client.post('/api/patients', {'full_name': 'Omar T.', 'patient_code': 'P-10942'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)

    def test_list_patients_uses_latest_appointment(self):
        today = timezone.localdate()
        Appointment.objects.create(
            patient=self.amina, doctor=self.dr_selim, department=self.cardio,
            appt_date=today - timedelta(days=3), appt_time=time(9, 0), room='B-12',
        )
        Appointment.objects.create(
            patient=self.amina, doctor=self.dr_meriem, department=self.ortho,
            appt_date=today, appt_time=time(8, 0), room='C-108',
        )

        resp = self.client.get('/api/patients')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        rows = {row['id']: row for row in resp.data}
        self.assertEqual(rows['P-10942']['department'], 'Orthopedics')
        self.assertEqual(rows['P-10942']['room'], 'C-108')
        self.assertEqual(rows['P-10942']['patientId'], self.amina.id)
        self.assertEqual(rows['P-10942']['status'], 'Stable')
        self.assertEqual(rows['P-10941']['department'], '—')
        self.assertEqual(rows['P-10941']['room'], '—')
        self.assertEqual(rows['P-10941']['status'], 'Observation')

    def test_list_patients_limit(self):
        self.assertEqual(len(self.client.get('/api/patients', {'limit': 1}).data), 1)
        self.assertEqual(len(self.client.get('/api/patients', {'limit': 1000}).data), 2)
        # zero and blank fall back to the default page
        self.assertEqual(len(self.client.get('/api/patients', {'limit': 0}).data), 2)
        self.assertEqual(len(self.client.get('/api/patients', {'limit': ''}).data), 2)


class DoctorAPITests(DashboardAPITestBase):
    def test_list_doctors_orders_by_availability(self):
        Doctor.objects.create(department=self.cardio, full_name='Dr. Amel B.', status=Doctor.Status.AVAILABLE)
        Doctor.objects.create(department=self.cardio, full_name='Dr. Yacine B.', status=Doctor.Status.ON_ROUNDS)

        resp = self.client.get('/api/doctors')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [row['name'] for row in resp.data],
            ['Dr. Selim R.', 'Dr. Amel B.', 'Dr. Yacine B.', 'Dr. Meriem A.'],
        )
        first = resp.data[0]
        self.assertEqual(first['initials'], 'SR')
        self.assertEqual(first['department'], 'Cardiology')
        self.assertEqual(first['availability'], 'On duty')
        self.assertEqual(resp.data[2]['availability'], 'In rounds')

    def test_list_doctors_limit_zero_uses_default(self):
        self.assertEqual(len(self.client.get('/api/doctors', {'limit': 0}).data), 2)
        self.assertEqual(len(self.client.get('/api/doctors', {'limit': 1}).data), 1)

    def test_create_doctor(self):
        resp = self.client.post('/api/doctors', {
            'full_name': 'Dr. Imene K.', 'department_id': self.cardio.id, 'status': 'on_rounds',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        doctor = Doctor.objects.get(id=resp.data['id'])
        self.assertEqual(doctor.status, Doctor.Status.ON_ROUNDS)
        self.assertEqual(doctor.department, self.cardio)

    def test_create_doctor_validation(self):
        resp = self.client.post('/api/doctors', {'department_id': self.cardio.id}, format='json')
        self.assertEqual(resp.data, {'error': 'full_name is required'})
        resp = self.client.post('/api/doctors', {'full_name': 'Dr. X'}, format='json')
        self.assertEqual(resp.data, {'error': 'department_id is required'})
        resp = self.client.post('/api/doctors', {'full_name': 'Dr. X', 'department_id': 999}, format='json')
        self.assertEqual(resp.data, {'error': 'department_id does not reference an existing department'})
        resp = self.client.post('/api/doctors', {
            'full_name': 'Dr. X', 'department_id': self.cardio.id, 'status': 'asleep',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data['error'], 'status must be one of: available, on_duty, off_duty, on_rounds')


class PanelAPITests(DashboardAPITestBase):
    def test_health(self):
        resp = self.client.get('/api/health')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data, {'ok': True})

    def test_stats(self):
        Bed.objects.create(bed_code='B-215', is_available=True)
        Bed.objects.create(bed_code='B-214', is_available=False)
        Appointment.objects.create(
            patient=self.amina, doctor=self.dr_selim, department=self.cardio,
            appt_date=timezone.localdate(), appt_time=time(9, 30),
        )
        Appointment.objects.create(
            patient=self.karim, doctor=self.dr_selim, department=self.cardio,
            appt_date=timezone.localdate() + timedelta(days=1), appt_time=time(9, 30),
        )

        resp = self.client.get('/api/stats')
        self.assertEqual(resp.data, {
            'totalPatients': 2,
            'doctorsAvailable': 1,
            'appointmentsToday': 1,
            'availableBeds': 1,
        })

    def test_appointments(self):
        today = timezone.localdate()
        Appointment.objects.create(
            patient=self.amina, doctor=self.dr_selim, department=self.cardio,
            appt_date=today, appt_time=time(14, 20), room=None, status=Appointment.Status.PENDING,
        )
        Appointment.objects.create(
            patient=self.karim, doctor=self.dr_meriem, department=self.ortho,
            appt_date=today, appt_time=time(9, 30), room='C-1', status=Appointment.Status.IN_PROGRESS,
        )
        Appointment.objects.create(
            patient=self.karim, doctor=self.dr_meriem, department=self.ortho,
            appt_date=today - timedelta(days=1), appt_time=time(8, 0),
        )

        resp = self.client.get('/api/appointments')
        self.assertEqual(resp.data, [
            {'time': '09:30', 'title': 'Orthopedics Appointment', 'meta': 'Dr. Meriem A. • C-1', 'status': 'In progress'},
            {'time': '14:20', 'title': 'Cardiology Appointment', 'meta': 'Dr. Selim R. • —', 'status': 'Pending'},
        ])
        self.assertEqual(len(self.client.get('/api/appointments', {'day': 'all'}).data), 3)

    def test_departments(self):
        resp = self.client.get('/api/departments')
        self.assertEqual(resp.data, [
            {'id': self.cardio.id, 'name': 'Cardiology', 'location': 'Building B', 'phone': '+213 00 00 00 01'},
            {'id': self.ortho.id, 'name': 'Orthopedics', 'location': '—', 'phone': '—'},
        ])

    def test_pharmacy(self):
        PharmacyItem.objects.create(item_code='MED-0002', name='Amoxicillin 500mg', stock_qty=42, unit='caps',
                                    status=PharmacyItem.Status.LOW_STOCK)
        resp = self.client.get('/api/pharmacy')
        row = resp.data[0]
        self.assertEqual(row['code'], 'MED-0002')
        self.assertEqual(row['category'], '—')
        self.assertEqual(row['stock'], 42)
        self.assertEqual(row['status'], 'low_stock')
        self.assertEqual(row['status_label'], 'Low stock')
        self.assertRegex(row['updated_at'], r'^\d{4}-\d{2}-\d{2} \d{2}:\d{2}$')

    def test_laboratory(self):
        LabTest.objects.create(patient=self.karim, test_name='Blood Gas Analysis', priority=LabTest.Priority.URGENT)
        resp = self.client.get('/api/laboratory')
        row = resp.data[0]
        self.assertEqual(row['patient_id'], 'P-10941')
        self.assertEqual(row['patient'], 'Karim S.')
        self.assertEqual(row['priority_label'], 'Urgent')
        self.assertEqual(row['status'], 'ordered')
        self.assertEqual(row['status_label'], 'Ordered')
        self.assertEqual(row['result_at'], '—')
