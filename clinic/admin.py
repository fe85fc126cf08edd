"""
Django admin registrations for the clinic models.

Billing items are shown read-only: bill totals are derived from them and
only the API (or ``recompute_bill_totals``) keeps the two in step.
"""

from django.contrib import admin

from .models import (
    Appointment,
    Bed,
    Bill,
    BillingItem,
    Department,
    Doctor,
    LabTest,
    Patient,
    PharmacyItem,
)


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'location', 'phone', 'created_at')
    search_fields = ('name',)


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'department', 'specialty', 'status')
    list_filter = ('status', 'department')
    search_fields = ('full_name', 'email')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('patient_code', 'full_name', 'gender', 'status', 'created_at')
    list_filter = ('status', 'gender')
    search_fields = ('patient_code', 'full_name', 'phone')


@admin.register(Bed)
class BedAdmin(admin.ModelAdmin):
    list_display = ('bed_code', 'ward', 'is_available', 'updated_at')
    list_filter = ('is_available', 'ward')


@admin.register(PharmacyItem)
class PharmacyItemAdmin(admin.ModelAdmin):
    list_display = ('item_code', 'name', 'category', 'stock_qty', 'unit', 'status')
    list_filter = ('status', 'category')
    search_fields = ('item_code', 'name')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('appt_date', 'appt_time', 'patient', 'doctor', 'department', 'room', 'status')
    list_filter = ('status', 'department', 'appt_date')


@admin.register(LabTest)
class LabTestAdmin(admin.ModelAdmin):
    list_display = ('test_name', 'patient', 'priority', 'status', 'ordered_at', 'result_at')
    list_filter = ('status', 'priority')


class BillingItemInline(admin.TabularInline):
    model = BillingItem
    extra = 0
    can_delete = False
    readonly_fields = ('description', 'qty', 'unit_price', 'line_total')

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = ('bill_no', 'patient', 'bill_date', 'currency', 'total_amount', 'status')
    list_filter = ('status', 'currency')
    search_fields = ('bill_no', 'patient__patient_code', 'patient__full_name')
    readonly_fields = ('total_amount',)
    inlines = [BillingItemInline]


@admin.register(BillingItem)
class BillingItemAdmin(admin.ModelAdmin):
    list_display = ('bill', 'description', 'qty', 'unit_price', 'line_total')
    search_fields = ('bill__bill_no', 'description')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
