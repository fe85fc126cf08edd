"""
URL mappings for the dashboard JSON API.

Paths carry no trailing slash, matching what the dashboard front end
requests.  Anything else under ``/api/`` falls through to a JSON 404.
"""
from django.urls import path, re_path

from .views import billing, dashboard, doctors, patients

urlpatterns = [
    path('api/health', dashboard.health, name='api-health'),
    path('api/stats', dashboard.stats, name='api-stats'),
    path('api/patients', patients.patients, name='api-patients'),
    path('api/doctors', doctors.doctors, name='api-doctors'),
    path('api/appointments', dashboard.appointments, name='api-appointments'),
    path('api/departments', dashboard.departments, name='api-departments'),
    path('api/pharmacy', dashboard.pharmacy, name='api-pharmacy'),
    path('api/laboratory', dashboard.laboratory, name='api-laboratory'),
    path('api/billing', billing.bills, name='api-billing'),
    path('api/billing/items', billing.billing_items, name='api-billing-items'),
    re_path(r'^api/.*$', dashboard.api_not_found, name='api-not-found'),
]
