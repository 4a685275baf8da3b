"""
User account entity.

The identity service owns credentials and sessions; this entity only
holds the profile fields the application edits.
"""

from typing import Optional
from uuid import UUID

from easyfinance.models.entity import Entity
from easyfinance.validation import (
    ensure_not_null_or_empty,
    ensure_valid_currency,
    ensure_valid_email,
)


class User(Entity):
    """Account owner. Referenced by incomes and expenses as their creator."""

    def __init__(self, entity_id: Optional[UUID] = None):
        super().__init__(entity_id)
        self._first_name: Optional[str] = None
        self._last_name: Optional[str] = None
        self._email: Optional[str] = None
        self._preferred_currency: Optional[str] = None

    @property
    def first_name(self) -> Optional[str]:
        return self._first_name

    @property
    def last_name(self) -> Optional[str]:
        return self._last_name

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self._first_name, self._last_name) if part)

    @property
    def email(self) -> Optional[str]:
        return self._email

    @property
    def preferred_currency(self) -> Optional[str]:
        return self._preferred_currency

    def set_first_name(self, first_name: Optional[str]) -> "User":
        self._first_name = ensure_not_null_or_empty(first_name, "FirstName")
        return self

    def set_last_name(self, last_name: Optional[str]) -> "User":
        self._last_name = ensure_not_null_or_empty(last_name, "LastName")
        return self

    def set_email(self, email: Optional[str]) -> "User":
        self._email = ensure_valid_email(email, "Email")
        return self

    def set_preferred_currency(self, currency: Optional[str]) -> "User":
        self._preferred_currency = ensure_valid_currency(currency, "PreferredCurrency")
        return self
