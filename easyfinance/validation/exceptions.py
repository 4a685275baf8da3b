"""
Validation errors for domain entities.

Every field-level rule violation is reported as a ValidationException
carrying both a human-readable message and the name of the offending
property, so callers can attach the message to the right form field.
"""


class ValidationMessages:
    """
    Message templates for validation failures.

    Templates with a placeholder are formatted with the property name.
    """
    PROPERTY_CANT_BE_NULL_OR_EMPTY = "{} can't be null or empty"
    PROPERTY_CANT_BE_NULL = "{} can't be null"
    PROPERTY_CANT_BE_LESS_THAN_ZERO = "{} can't be less than zero"
    PROPERTY_HAS_INVALID_VALUE = "{} has an invalid value"
    INVALID_DATE = "Invalid date"
    INVALID_EMAIL = "Invalid email"
    INVALID_CURRENCY = "Invalid currency"
    WEAK_PASSWORD = "Password doesn't meet the strength requirements"
    PASSWORDS_DONT_MATCH = "Passwords don't match"


class ValidationException(Exception):
    """A single field-level invariant was violated."""

    def __init__(self, message: str, property_name: str):
        self.message = message
        self.property = property_name
        super().__init__(message)

    def __repr__(self) -> str:
        return f"ValidationException(message={self.message!r}, property={self.property!r})"
