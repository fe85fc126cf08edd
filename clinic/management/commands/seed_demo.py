"""
Management command to load the dashboard demo data set.

Running it twice is harmless: rows are matched on their natural keys
(department name, patient code, bed code, ...) and only missing ones are
created.  Appointments are booked for today so the dashboard panels have
something to show.
"""
from datetime import time, timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from clinic.models import Appointment, Bed, Bill, Department, Doctor, LabTest, Patient, PharmacyItem
from clinic.services.billing import add_item

DEPARTMENTS = [
    ('Cardiology', 'Building B', '+213 00 00 00 01'),
    ('Orthopedics', 'Building C', '+213 00 00 00 02'),
    ('Laboratory', 'Lab Wing', '+213 00 00 00 03'),
    ('Emergency', 'Ground ER', '+213 00 00 00 04'),
    ('Pediatrics', 'Building A', '+213 00 00 00 05'),
    ('Pharmacy', 'Main Hall', '+213 00 00 00 06'),
]

DOCTORS = [
    ('Dr. Selim R.', 'Cardiology', 'Cardiology', 'selim.r@hospital.local', Doctor.Status.ON_DUTY),
    ('Dr. Imene K.', 'Laboratory', 'Pathology', 'imene.k@hospital.local', Doctor.Status.ON_DUTY),
    ('Dr. Yacine B.', 'Pediatrics', 'Pediatrics', 'yacine.b@hospital.local', Doctor.Status.ON_ROUNDS),
    ('Dr. Meriem A.', 'Orthopedics', 'Orthopedics', 'meriem.a@hospital.local', Doctor.Status.ON_DUTY),
]

PATIENTS = [
    ('P-10942', 'Amina H.', Patient.Gender.FEMALE, Patient.Status.STABLE),
    ('P-10941', 'Karim S.', Patient.Gender.MALE, Patient.Status.OBSERVATION),
    ('P-10940', 'Leila M.', Patient.Gender.FEMALE, Patient.Status.TESTING),
    ('P-10939', 'Youssef O.', Patient.Gender.MALE, Patient.Status.CRITICAL),
    ('P-10938', 'Nadia F.', Patient.Gender.FEMALE, Patient.Status.STABLE),
]

BEDS = [
    ('B-214', 'Cardiology', False, 'Assigned'),
    ('C-108', 'Orthopedics', False, 'Assigned'),
    ('ER-03', 'Emergency', False, 'Assigned'),
    ('A-012', 'Pediatrics', False, 'Assigned'),
    ('B-215', 'Cardiology', True, 'Available'),
    ('B-216', 'Cardiology', True, 'Available'),
]

PHARMACY = [
    ('MED-0001', 'Paracetamol 500mg', 'Analgesic', 240, 'tabs', PharmacyItem.Status.IN_STOCK),
    ('MED-0002', 'Amoxicillin 500mg', 'Antibiotic', 42, 'caps', PharmacyItem.Status.LOW_STOCK),
    ('MED-0003', 'Normal Saline 0.9% 500ml', 'IV Fluids', 120, 'bags', PharmacyItem.Status.IN_STOCK),
    ('MED-0004', 'Insulin (Regular)', 'Endocrine', 18, 'vials', PharmacyItem.Status.LOW_STOCK),
    ('MED-0005', 'Surgical Gloves (M)', 'Supplies', 0, 'boxes', PharmacyItem.Status.OUT_OF_STOCK),
]

# (patient code, doctor, department, time, room, status, notes)
APPOINTMENTS = [
    ('P-10942', 'Dr. Selim R.', 'Cardiology', time(9, 30), 'B-12', Appointment.Status.CONFIRMED, 'Routine consultation'),
    ('P-10940', 'Dr. Imene K.', 'Laboratory', time(10, 15), 'Lab 2', Appointment.Status.IN_PROGRESS, 'Results review'),
    ('P-10938', 'Dr. Yacine B.', 'Pediatrics', time(12, 0), 'A-04', Appointment.Status.CONFIRMED, 'Follow-up'),
    ('P-10941', 'Dr. Meriem A.', 'Orthopedics', time(14, 20), 'Radiology', Appointment.Status.PENDING, 'Imaging required'),
]

# (patient code, test, priority, status, ordered ago, has result, notes)
LAB_TESTS = [
    ('P-10942', 'ECG', LabTest.Priority.ROUTINE, LabTest.Status.COMPLETED, timedelta(days=2), True, 'Normal rhythm'),
    ('P-10940', 'CBC (Complete Blood Count)', LabTest.Priority.ROUTINE, LabTest.Status.IN_PROGRESS,
     timedelta(hours=3), False, 'Awaiting analyzer'),
    ('P-10939', 'Blood Gas Analysis', LabTest.Priority.URGENT, LabTest.Status.ORDERED,
     timedelta(minutes=40), False, 'ER request'),
    ('P-10941', 'X-Ray Review', LabTest.Priority.ROUTINE, LabTest.Status.COMPLETED, timedelta(days=1), True, 'No fracture'),
]

DEMO_BILL_NO = 'BILL-2026-0001'
DEMO_BILL_ITEMS = [
    ('Consultation fee', 1, Decimal('2500.00')),
    ('ECG', 1, Decimal('1800.00')),
]


class Command(BaseCommand):
    help = 'Load the dashboard demo data set (departments, staff, patients, stock, lab and billing)'

    @transaction.atomic
    def handle(self, *args, **options):
        now = timezone.now()
        today = timezone.localdate()

        departments = {}
        for name, location, phone in DEPARTMENTS:
            departments[name], _ = Department.objects.get_or_create(
                name=name, defaults={'location': location, 'phone': phone}
            )

        doctors = {}
        for full_name, dept, specialty, email, status in DOCTORS:
            doctors[full_name], _ = Doctor.objects.get_or_create(
                full_name=full_name,
                department=departments[dept],
                defaults={'specialty': specialty, 'email': email, 'status': status},
            )

        patients = {}
        for code, full_name, gender, status in PATIENTS:
            patients[code], _ = Patient.objects.get_or_create(
                patient_code=code, defaults={'full_name': full_name, 'gender': gender, 'status': status}
            )

        for code, ward, available, notes in BEDS:
            Bed.objects.get_or_create(bed_code=code, defaults={'ward': ward, 'is_available': available, 'notes': notes})

        for code, name, category, stock, unit, status in PHARMACY:
            PharmacyItem.objects.get_or_create(
                item_code=code,
                defaults={'name': name, 'category': category, 'stock_qty': stock, 'unit': unit, 'status': status},
            )

        for code, doctor, dept, at, room, status, notes in APPOINTMENTS:
            Appointment.objects.get_or_create(
                patient=patients[code],
                doctor=doctors[doctor],
                department=departments[dept],
                appt_date=today,
                appt_time=at,
                defaults={'room': room, 'status': status, 'notes': notes},
            )

        for code, test_name, priority, status, ago, has_result, notes in LAB_TESTS:
            if LabTest.objects.filter(patient=patients[code], test_name=test_name).exists():
                continue
            LabTest.objects.create(
                patient=patients[code],
                test_name=test_name,
                priority=priority,
                status=status,
                ordered_at=now - ago,
                result_at=(now - ago) if has_result else None,
                notes=notes,
            )

        bill, created = Bill.objects.get_or_create(
            bill_no=DEMO_BILL_NO,
            defaults={'patient': patients['P-10942'], 'bill_date': today, 'currency': 'DZD'},
        )
        if created:
            for description, qty, unit_price in DEMO_BILL_ITEMS:
                add_item(bill_id=bill.id, description=description, qty=qty, unit_price=unit_price)
            bill.refresh_from_db()

        self.stdout.write(self.style.SUCCESS(
            f'Demo data ready: {Department.objects.count()} departments, {Doctor.objects.count()} doctors, '
            f'{Patient.objects.count()} patients, bill {bill.bill_no} totals {bill.total_amount} {bill.currency}'
        ))
