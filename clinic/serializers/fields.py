"""
Lenient input fields for the dashboard API.

The dashboard forms post loosely typed JSON: numbers may arrive as
strings, optional values as ``""`` or ``null``, and enumerated codes in
any case.  These fields normalise such input instead of rejecting it,
and report failures with the field-specific messages the clients show.
"""
from decimal import Decimal, InvalidOperation

import bleach
from rest_framework import serializers
from rest_framework.fields import empty

from clinic.services.billing import round_money


def _is_blank(data) -> bool:
    return data is None or (isinstance(data, str) and not data.strip())


def _to_decimal(data):
    if isinstance(data, bool):
        return None
    try:
        number = Decimal(str(data).strip())
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def clean_text(value, *, field_name: str, max_length: int, required: bool = False) -> str:
    """Strip all markup, keeping only the text, and re-check the stored length.

    Escaping (``&`` -> ``&amp;``) can grow the text past the column width,
    so the limit applies to the cleaned value.
    """
    v = bleach.clean((value or '').strip(), tags=set(), attributes={}, strip=True).strip()
    if required and not v:
        raise serializers.ValidationError(f'{field_name} is required')
    if len(v) > max_length:
        raise serializers.ValidationError(f'{field_name} must be at most {max_length} characters')
    return v


def required_id(name: str, **kwargs) -> serializers.IntegerField:
    """A positive integer id; absent, zero or garbage all read as missing."""
    message = f'{name} is required'
    return serializers.IntegerField(
        min_value=1,
        error_messages={key: message for key in ('required', 'null', 'invalid', 'min_value', 'max_string_length')},
        **kwargs,
    )


class BlankAsAbsentMixin:
    """Treat ``null`` and blank strings as if the key had not been sent."""

    def run_validation(self, data=empty):
        if _is_blank(data):
            data = empty
        return super().run_validation(data)


class EnumChoiceField(BlankAsAbsentMixin, serializers.ChoiceField):
    """Case-insensitive choice over a ``TextChoices`` enumeration."""

    def __init__(self, enum, **kwargs):
        super().__init__(choices=enum.choices, **kwargs)

    def bind(self, field_name, parent):
        super().bind(field_name, parent)
        allowed = ', '.join(str(key) for key in self.choices)
        self.error_messages['invalid_choice'] = f'{field_name} must be one of: {allowed}'

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.strip().lower()
        return super().to_internal_value(data)


class LenientDateField(BlankAsAbsentMixin, serializers.DateField):
    def bind(self, field_name, parent):
        super().bind(field_name, parent)
        self.error_messages['invalid'] = f'{field_name} must be a date (YYYY-MM-DD)'


class ClampedIntegerField(serializers.Field):
    """An integer truncated toward zero and clamped into ``[min_value, max_value]``.

    ``null`` and blank input fall back to ``min_value``; anything that is
    not a finite number fails with ``invalid``.
    """

    default_error_messages = {
        'invalid': 'A number is required.',
    }

    def __init__(self, *, min_value: int, max_value: int, **kwargs):
        self.min_value = min_value
        self.max_value = max_value
        kwargs.setdefault('required', False)
        super().__init__(**kwargs)

    def run_validation(self, data=empty):
        if data is not empty and _is_blank(data):
            return self.min_value
        return super().run_validation(data)

    def to_internal_value(self, data):
        number = _to_decimal(data)
        if number is None:
            self.fail('invalid')
        if number >= self.max_value:
            return self.max_value
        return max(self.min_value, int(number))

    def to_representation(self, value):
        return int(value)


class MoneyField(serializers.Field):
    """A non-negative amount quantized to cents (half up).

    ``null`` and blank input read as zero.
    """

    default_error_messages = {
        'invalid': 'A non-negative amount is required.',
        'max_value': 'Amount must be at most {max_value}.',
    }

    def __init__(self, *, max_value: Decimal = Decimal('99999999.99'), **kwargs):
        self.max_value = max_value
        kwargs.setdefault('required', False)
        super().__init__(**kwargs)

    def run_validation(self, data=empty):
        if data is not empty and _is_blank(data):
            return Decimal('0.00')
        return super().run_validation(data)

    def to_internal_value(self, data):
        number = _to_decimal(data)
        if number is None or number < 0:
            self.fail('invalid')
        if number > self.max_value:
            self.fail('max_value', max_value=self.max_value)
        return min(round_money(number), self.max_value)

    def to_representation(self, value):
        return f"{value:.2f}"
