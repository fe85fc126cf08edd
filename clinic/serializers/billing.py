from decimal import Decimal

from rest_framework import serializers

from clinic.models import Bill
from clinic.serializers.fields import (
    ClampedIntegerField,
    EnumChoiceField,
    LenientDateField,
    MoneyField,
    clean_text,
    required_id,
)
from clinic.services.billing import QTY_MAX, QTY_MIN


class BillCreateSerializer(serializers.Serializer):
    patient_id = required_id('patient_id')
    currency = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=32)
    status = EnumChoiceField(Bill.Status, required=False)
    bill_no = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=60,
        error_messages={'max_length': 'bill_no must be at most 60 characters'},
    )
    bill_date = LenientDateField(required=False)


class BillingItemCreateSerializer(serializers.Serializer):
    bill_id = required_id('bill_id')
    description = serializers.CharField(
        max_length=200,
        error_messages={
            'required': 'description is required',
            'blank': 'description is required',
            'null': 'description is required',
            'invalid': 'description is required',
            'max_length': 'description must be at most 200 characters',
        },
    )
    qty = ClampedIntegerField(
        min_value=QTY_MIN, max_value=QTY_MAX, default=QTY_MIN,
        error_messages={'invalid': 'qty must be a number'},
    )
    unit_price = MoneyField(
        default=Decimal('0.00'),
        error_messages={
            'invalid': 'unit_price must be >= 0',
            'max_value': 'unit_price must be at most {max_value}',
        },
    )

    def validate_description(self, v):
        return clean_text(v, field_name='description', max_length=200, required=True)


class BillingItemsQuerySerializer(serializers.Serializer):
    billId = required_id('billId')
