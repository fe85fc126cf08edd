"""
Re-derive every bill total from its billing items.

Needed after items were edited outside the API (admin imports, SQL
fixes); the API itself keeps totals current on every append.
"""
from django.core.management.base import BaseCommand

from clinic.models import Bill
from clinic.services.billing import recompute_all_totals


class Command(BaseCommand):
    help = 'Recompute Bill.total_amount from billing items for all bills'

    def handle(self, *args, **options):
        fixed = recompute_all_totals()
        self.stdout.write(self.style.SUCCESS(
            f'Checked {Bill.objects.count()} bills, corrected {fixed}'
        ))
