"""
Billing views.

Bills are created empty and grow by appending items; every append
recomputes the bill total from all of its items inside the same
transaction (see :mod:`clinic.services.billing`).
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from clinic.serializers.billing import BillCreateSerializer, BillingItemCreateSerializer, BillingItemsQuerySerializer
from clinic.services.billing import add_item, create_bill, list_bills, list_items
from clinic.services.formatting import format_money


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def bills(request):
    """``GET`` lists the latest bills; ``POST`` opens a new, empty bill."""
    if request.method == 'GET':
        return Response(list_bills())

    s = BillCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    d = s.validated_data
    bill = create_bill(
        patient_id=d['patient_id'],
        currency=d.get('currency'),
        status=d.get('status'),
        bill_no=d.get('bill_no'),
        bill_date=d.get('bill_date'),
    )
    return Response({'id': bill.id, 'bill_no': bill.bill_no}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def billing_items(request):
    """``GET ?billId=N`` lists a bill's items; ``POST`` appends one."""
    if request.method == 'GET':
        q = BillingItemsQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        return Response(list_items(q.validated_data['billId']))

    s = BillingItemCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    d = s.validated_data
    item = add_item(
        bill_id=d['bill_id'],
        description=d['description'],
        qty=d['qty'],
        unit_price=d['unit_price'],
    )
    return Response(
        {'id': item.id, 'bill_id': item.bill_id, 'total_amount': format_money(item.bill.total_amount)},
        status=status.HTTP_201_CREATED,
    )
