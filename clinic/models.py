"""
Database models for the hospital operations dashboard.

The tables mirror the dashboard's relational schema (departments,
doctors, patients, beds, pharmacy inventory, appointments, lab tests and
billing) and keep the original table names so that an existing MySQL
import can be used as-is.  Every status column is backed by a
``TextChoices`` enumeration; values outside a domain are rejected by the
API serializers before anything reaches the database.
"""
from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.utils import timezone


class Department(models.Model):
    name = models.CharField(max_length=120, unique=True)
    location = models.CharField(max_length=120, blank=True, null=True)
    phone = models.CharField(max_length=40, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'departments'
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class Doctor(models.Model):
    """A clinician attached to exactly one department."""

    class Status(models.TextChoices):
        AVAILABLE = 'available', 'Available'
        ON_DUTY = 'on_duty', 'On duty'
        OFF_DUTY = 'off_duty', 'Off duty'
        ON_ROUNDS = 'on_rounds', 'In rounds'

    department = models.ForeignKey(Department, on_delete=models.PROTECT, related_name='doctors')
    full_name = models.CharField(max_length=120)
    specialty = models.CharField(max_length=120, blank=True, null=True)
    email = models.CharField(max_length=160, blank=True, null=True)
    phone = models.CharField(max_length=40, blank=True, null=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.AVAILABLE, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'doctors'

    def __str__(self) -> str:
        return f"{self.full_name} ({self.department_id})"


class Patient(models.Model):
    """A registered patient.

    ``patient_code`` is the human-facing identifier (e.g. ``P-10942``)
    shown on the dashboard; the surrogate ``id`` is what foreign keys and
    write requests use.
    """

    class Gender(models.TextChoices):
        FEMALE = 'female', 'Female'
        MALE = 'male', 'Male'
        OTHER = 'other', 'Other'

    class Status(models.TextChoices):
        STABLE = 'stable', 'Stable'
        OBSERVATION = 'observation', 'Observation'
        TESTING = 'testing', 'Testing'
        CRITICAL = 'critical', 'Critical'
        DISCHARGED = 'discharged', 'Discharged'

    patient_code = models.CharField(max_length=20, unique=True)
    full_name = models.CharField(max_length=120)
    dob = models.DateField(blank=True, null=True)
    gender = models.CharField(max_length=10, choices=Gender.choices, blank=True, null=True)
    phone = models.CharField(max_length=40, blank=True, null=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.STABLE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'patients'

    def __str__(self) -> str:
        return f"{self.full_name} ({self.patient_code})"


class Bed(models.Model):
    bed_code = models.CharField(max_length=20, unique=True)
    ward = models.CharField(max_length=80, blank=True, null=True)
    is_available = models.BooleanField(default=True, db_index=True)
    notes = models.CharField(max_length=255, blank=True, null=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'beds'

    def __str__(self) -> str:
        return self.bed_code


class PharmacyItem(models.Model):
    class Status(models.TextChoices):
        IN_STOCK = 'in_stock', 'In stock'
        LOW_STOCK = 'low_stock', 'Low stock'
        OUT_OF_STOCK = 'out_of_stock', 'Out of stock'

    item_code = models.CharField(max_length=40, unique=True)
    name = models.CharField(max_length=160)
    category = models.CharField(max_length=80, blank=True, null=True)
    stock_qty = models.IntegerField(default=0)
    unit = models.CharField(max_length=24, default='pcs')
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.IN_STOCK, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'pharmacy_items'

    def __str__(self) -> str:
        return f"{self.name} ({self.item_code})"


class Appointment(models.Model):
    class Status(models.TextChoices):
        SCHEDULED = 'scheduled', 'Scheduled'
        PENDING = 'pending', 'Pending'
        CONFIRMED = 'confirmed', 'Confirmed'
        IN_PROGRESS = 'in_progress', 'In progress'
        COMPLETED = 'completed', 'Completed'
        CANCELLED = 'cancelled', 'Cancelled'

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='appointments')
    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name='appointments')
    department = models.ForeignKey(Department, on_delete=models.PROTECT, related_name='appointments')
    appt_date = models.DateField(db_index=True)
    appt_time = models.TimeField()
    room = models.CharField(max_length=60, blank=True, null=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.CONFIRMED)
    notes = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'appointments'

    def __str__(self) -> str:
        return f"{self.patient_id} with {self.doctor_id} @ {self.appt_date} {self.appt_time}"


class LabTest(models.Model):
    class Priority(models.TextChoices):
        ROUTINE = 'routine', 'Routine'
        URGENT = 'urgent', 'Urgent'

    class Status(models.TextChoices):
        ORDERED = 'ordered', 'Ordered'
        IN_PROGRESS = 'in_progress', 'In progress'
        COMPLETED = 'completed', 'Completed'

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='lab_tests')
    test_name = models.CharField(max_length=160)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.ROUTINE)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.ORDERED, db_index=True)
    ordered_at = models.DateTimeField(default=timezone.now)
    result_at = models.DateTimeField(blank=True, null=True)
    notes = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        db_table = 'lab_tests'

    def __str__(self) -> str:
        return f"{self.test_name} for {self.patient_id}"


class Bill(models.Model):
    """A patient bill.

    ``total_amount`` is derived data: it always equals the rounded sum of
    ``qty * unit_price`` over the bill's items and is only written by
    :func:`clinic.services.billing.recompute_total`.
    """

    class Status(models.TextChoices):
        UNPAID = 'unpaid', 'Unpaid'
        PAID = 'paid', 'Paid'
        PARTIALLY_PAID = 'partially_paid', 'Partially paid'
        VOID = 'void', 'Void'

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='bills')
    bill_no = models.CharField(max_length=60, unique=True)
    bill_date = models.DateField()
    currency = models.CharField(max_length=3, default='DZD')
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.UNPAID)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'bills'

    def __str__(self) -> str:
        return f"{self.bill_no} ({self.total_amount} {self.currency})"


class BillingItem(models.Model):
    bill = models.ForeignKey(Bill, on_delete=models.CASCADE, related_name='items')
    description = models.CharField(max_length=200)
    qty = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))

    class Meta:
        db_table = 'billing_items'

    def __str__(self) -> str:
        return f"{self.description} x{self.qty} on {self.bill_id}"

    @property
    def line_total(self) -> Decimal:
        from .services.billing import round_money
        return round_money(self.qty * self.unit_price)
