"""
Password strength rules.

Mirrors the rules shown to the user when changing a password:
at least 8 characters, a lower-case letter, an upper-case letter,
a digit, a special character, and no spaces.
"""

import re
from typing import Optional

from pydantic import BaseModel

from easyfinance.validation.exceptions import ValidationException, ValidationMessages


STRONG_PASSWORD_PATTERN = re.compile(
    r"^(?=.*[0-9])(?=.*[a-z])(?=.*[A-Z])(?=.*[\W_])(?!.* ).{8,}$"
)


class PasswordStrength(BaseModel):
    """Per-rule flags, used to tick off requirements as the user types."""
    has_lower_case: bool
    has_upper_case: bool
    has_number: bool
    has_special: bool
    has_min_characters: bool
    has_no_spaces: bool

    @property
    def is_strong(self) -> bool:
        return all(self.model_dump().values())


def check_password_strength(password: str) -> PasswordStrength:
    return PasswordStrength(
        has_lower_case=bool(re.search(r"[a-z]", password)),
        has_upper_case=bool(re.search(r"[A-Z]", password)),
        has_number=bool(re.search(r"[0-9]", password)),
        has_special=bool(re.search(r"[\W_]", password)),
        has_min_characters=len(password) >= 8,
        has_no_spaces=" " not in password,
    )


def validate_password(password: Optional[str], confirmation: Optional[str] = None) -> str:
    """
    Raise ValidationException on a weak password or a mismatched confirmation.

    The confirmation is only checked when given.
    """
    if password is None or password == "":
        raise ValidationException(
            ValidationMessages.PROPERTY_CANT_BE_NULL_OR_EMPTY.format("Password"),
            "Password",
        )
    if not STRONG_PASSWORD_PATTERN.match(password):
        raise ValidationException(ValidationMessages.WEAK_PASSWORD, "Password")
    if confirmation is not None and confirmation != password:
        raise ValidationException(ValidationMessages.PASSWORDS_DONT_MATCH, "Password")
    return password
