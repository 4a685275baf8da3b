"""
Guard clauses shared by all entity setters.

Each guard either returns the (possibly normalized) value to commit or
raises ValidationException naming the property. Guards never mutate
anything, so a setter that calls its guard before assigning leaves the
entity untouched on failure.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, TypeVar, Union

from easyfinance.config import get_settings
from easyfinance.validation.exceptions import ValidationException, ValidationMessages


T = TypeVar("T")

Numeric = Union[Decimal, int, float, str]

# Deliberately loose: the identity service does the real verification
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


def ensure_not_null_or_empty(value: Optional[str], property_name: str) -> str:
    """Text must be present and non-empty."""
    if value is None or value == "":
        raise ValidationException(
            ValidationMessages.PROPERTY_CANT_BE_NULL_OR_EMPTY.format(property_name),
            property_name,
        )
    return value


def ensure_not_null(value: Optional[T], property_name: str) -> T:
    """References and collections must be present. Empty collections are fine."""
    if value is None:
        raise ValidationException(
            ValidationMessages.PROPERTY_CANT_BE_NULL.format(property_name),
            property_name,
        )
    return value


def _invalid_value(property_name: str) -> ValidationException:
    return ValidationException(
        ValidationMessages.PROPERTY_HAS_INVALID_VALUE.format(property_name),
        property_name,
    )


def _to_decimal(value: Numeric, property_name: str) -> Decimal:
    if isinstance(value, bool):
        raise _invalid_value(property_name)
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, str)):
        try:
            amount = Decimal(value)
        except InvalidOperation:
            raise _invalid_value(property_name)
    elif isinstance(value, float):
        # Go through str so 0.1 stays 0.1
        amount = Decimal(str(value))
    else:
        raise _invalid_value(property_name)
    # NaN and infinities
    if not amount.is_finite():
        raise _invalid_value(property_name)
    return amount


def ensure_not_negative(value: Optional[Numeric], property_name: str) -> Decimal:
    """Numbers must be zero or positive. Returns the value as Decimal."""
    ensure_not_null(value, property_name)
    amount = _to_decimal(value, property_name)
    if amount < 0:
        raise ValidationException(
            ValidationMessages.PROPERTY_CANT_BE_LESS_THAN_ZERO.format(property_name),
            property_name,
        )
    return amount


def years_before(moment: date, years: int) -> date:
    """Same calendar position `years` earlier; Feb 29 falls back to Feb 28."""
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        return moment.replace(year=moment.year - years, day=28)


def ensure_valid_date(
    value: Optional[date],
    property_name: str = "Date",
    max_years_in_past: Optional[int] = None,
) -> date:
    """
    Dates must fall within (now - max_years_in_past, now].

    A plain date is compared with today. A datetime is compared with the
    current moment in its own timezone (naive stays naive).
    """
    ensure_not_null(value, property_name)

    if max_years_in_past is None:
        max_years_in_past = get_settings().app.max_years_in_past

    if isinstance(value, datetime):
        now = datetime.now(value.tzinfo)
    elif isinstance(value, date):
        now = date.today()
    else:
        raise ValidationException(ValidationMessages.INVALID_DATE, property_name)

    if value > now or value <= years_before(now, max_years_in_past):
        raise ValidationException(ValidationMessages.INVALID_DATE, property_name)

    return value


def ensure_valid_email(value: Optional[str], property_name: str = "Email") -> str:
    ensure_not_null_or_empty(value, property_name)
    if not EMAIL_PATTERN.match(value):
        raise ValidationException(ValidationMessages.INVALID_EMAIL, property_name)
    return value


def ensure_valid_currency(
    value: Optional[str],
    property_name: str = "PreferredCurrency",
) -> str:
    """Currency codes are three upper-case letters (ISO 4217 shape)."""
    ensure_not_null_or_empty(value, property_name)
    if not CURRENCY_PATTERN.match(value):
        raise ValidationException(ValidationMessages.INVALID_CURRENCY, property_name)
    return value
