"""
Billing: bill creation, item appends and total recomputation.

``Bill.total_amount`` is derived from the bill's items.  It is written in
exactly one place, :func:`recompute_total`, which always re-sums every
item from the database.  :func:`add_item` locks the bill row, inserts the
item and recomputes inside a single transaction, so concurrent appends to
the same bill are serialized and none of them can persist a stale total.
Appends to different bills do not contend.
"""
from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from clinic.exceptions import Conflict
from clinic.models import Bill, BillingItem, Patient
from clinic.services.formatting import format_date, format_money, label_for, or_placeholder

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
QTY_MIN = 1
QTY_MAX = 100000
BILL_NO_ATTEMPTS = 5
BILL_LIST_LIMIT = 50
# largest value Bill.total_amount (DECIMAL(10,2)) can hold
BILL_TOTAL_MAX = Decimal('99999999.99')

_bill_no_lock = threading.Lock()
_last_bill_ms = 0


def round_money(value) -> Decimal:
    """Round to cents, halves away from zero (DECIMAL(10,2) semantics)."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def clamp_qty(qty: int) -> int:
    return max(QTY_MIN, min(QTY_MAX, int(qty)))


def normalize_currency(value: Optional[str]) -> str:
    code = (value or '').strip()[:3].upper()
    return code or settings.DEFAULT_CURRENCY


def generate_bill_no(now: Optional[datetime] = None) -> str:
    """Return ``BILL-<year>-<6 digits>`` built from the millisecond clock.

    The millisecond counter is forced to advance on every call, so two
    bills created within the same tick of this process still get distinct
    numbers.
    """
    global _last_bill_ms
    now = now or timezone.now()
    ms = int(now.timestamp() * 1000)
    with _bill_no_lock:
        if ms <= _last_bill_ms:
            ms = _last_bill_ms + 1
        _last_bill_ms = ms
    year = timezone.localtime(now).year if timezone.is_aware(now) else now.year
    return f"BILL-{year}-{ms % 1_000_000:06d}"


def create_bill(*, patient_id: int, currency: Optional[str] = None, status: Optional[str] = None,
                bill_no: Optional[str] = None, bill_date: Optional[date] = None) -> Bill:
    patient = Patient.objects.filter(id=patient_id).first()
    if patient is None:
        raise ValidationError({'patient_id': 'patient_id does not reference an existing patient'})

    explicit_no = (bill_no or '').strip()
    attempts = 1 if explicit_no else BILL_NO_ATTEMPTS
    for _ in range(attempts):
        number = explicit_no or generate_bill_no()
        try:
            with transaction.atomic():
                bill = Bill.objects.create(
                    patient=patient,
                    bill_no=number,
                    bill_date=bill_date or timezone.localdate(),
                    currency=normalize_currency(currency),
                    total_amount=Decimal('0.00'),
                    status=status or Bill.Status.UNPAID,
                )
        except IntegrityError:
            if not Bill.objects.filter(bill_no=number).exists():
                raise
            if explicit_no:
                raise Conflict('bill_no already exists')
            logger.warning('bill number %s already taken, retrying', number)
            continue
        logger.info('created bill %s (id=%s) for patient %s', bill.bill_no, bill.id, patient.id)
        return bill
    raise Conflict('could not allocate a unique bill_no')


def item_sum(bill: Bill) -> Decimal:
    rows = BillingItem.objects.filter(bill_id=bill.pk).values_list('qty', 'unit_price')
    return round_money(sum((Decimal(qty) * Decimal(price) for qty, price in rows), Decimal('0')))


def recompute_total(bill: Bill) -> Decimal:
    """Re-derive and persist ``bill.total_amount`` from all of its items.

    Must run inside the transaction that holds the bill row lock.
    """
    total = item_sum(bill)
    Bill.objects.filter(pk=bill.pk).update(total_amount=total)
    bill.total_amount = total
    return total


def _insert_item(bill: Bill, description: str, qty: int, unit_price: Decimal) -> BillingItem:
    return BillingItem.objects.create(
        bill=bill,
        description=description,
        qty=clamp_qty(qty),
        unit_price=round_money(unit_price),
    )


def add_item(*, bill_id: int, description: str, qty: int = 1, unit_price: Decimal = Decimal('0')) -> BillingItem:
    with transaction.atomic():
        bill = Bill.objects.select_for_update().filter(id=bill_id).first()
        if bill is None:
            raise ValidationError({'bill_id': 'bill_id does not reference an existing bill'})
        item = _insert_item(bill, description, qty, unit_price)
        # raising here rolls the insert back with the rest of the block
        if item_sum(bill) > BILL_TOTAL_MAX:
            raise ValidationError({'unit_price': f'bill total would exceed {BILL_TOTAL_MAX}'})
        total = recompute_total(bill)
    logger.info('bill %s: added item %s, total now %s', bill.id, item.id, total)
    return item


def recompute_all_totals() -> int:
    """Repair every bill whose stored total drifted from its items.

    Returns the number of bills that were corrected.
    """
    fixed = 0
    for bill_id in Bill.objects.order_by('id').values_list('id', flat=True):
        with transaction.atomic():
            bill = Bill.objects.select_for_update().filter(id=bill_id).first()
            if bill is None:
                continue
            before = bill.total_amount
            after = recompute_total(bill)
        if before != after:
            logger.info('bill %s total corrected %s -> %s', bill_id, before, after)
            fixed += 1
    return fixed


def list_bills(limit: int = BILL_LIST_LIMIT) -> list[dict]:
    qs = Bill.objects.select_related('patient').order_by('-bill_date', '-id')[:limit]
    return [{
        'id': b.id,
        'bill_no': b.bill_no,
        'bill_date': format_date(b.bill_date),
        'patient_id': b.patient.patient_code,
        'patient': or_placeholder(b.patient.full_name),
        'currency': b.currency,
        'total_amount': format_money(b.total_amount),
        'status': b.status,
        'status_label': label_for(Bill.Status, b.status),
    } for b in qs]


def list_items(bill_id: int) -> list[dict]:
    qs = BillingItem.objects.filter(bill_id=bill_id).order_by('id')
    return [{
        'id': it.id,
        'description': it.description,
        'qty': it.qty,
        'unit_price': format_money(it.unit_price),
        'line_total': format_money(it.line_total),
    } for it in qs]
