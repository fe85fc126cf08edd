from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Type

from django.db import models
from django.utils import timezone

PLACEHOLDER = '—'


def or_placeholder(value, placeholder: str = PLACEHOLDER):
    if value is None or value == '':
        return placeholder
    return value


def label_for(choices: Type[models.TextChoices], value: Optional[str]) -> str:
    """Map a stored status code to its display label.

    Unknown codes come back unchanged so that rows written outside the
    API still render; empty values become the placeholder.
    """
    raw = str(value or '')
    try:
        return str(choices(raw.lower()).label)
    except ValueError:
        return raw or PLACEHOLDER


def format_datetime(value: Optional[datetime]) -> str:
    if value is None:
        return PLACEHOLDER
    if timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.strftime('%Y-%m-%d %H:%M')


def format_date(value: Optional[date]) -> str:
    return value.isoformat() if value else PLACEHOLDER


def format_money(value: Optional[Decimal]) -> str:
    return f"{(value or Decimal('0')):.2f}"
