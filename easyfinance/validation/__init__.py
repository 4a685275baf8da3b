"""
Validation package.

Guard clauses and errors used by entity setters. The collecting
FormValidator lives in easyfinance.validation.validator and is imported
from there, since it depends on the entity models.
"""

from easyfinance.validation.exceptions import ValidationException, ValidationMessages
from easyfinance.validation.guards import (
    ensure_not_negative,
    ensure_not_null,
    ensure_not_null_or_empty,
    ensure_valid_currency,
    ensure_valid_date,
    ensure_valid_email,
)
from easyfinance.validation.password import (
    PasswordStrength,
    check_password_strength,
    validate_password,
)

__all__ = [
    "ValidationException",
    "ValidationMessages",
    "ensure_not_negative",
    "ensure_not_null",
    "ensure_not_null_or_empty",
    "ensure_valid_currency",
    "ensure_valid_date",
    "ensure_valid_email",
    "PasswordStrength",
    "check_password_strength",
    "validate_password",
]
