"""
Fluent builders for domain entities.

Each builder wraps a fresh draft entity and forwards every add_* call to
the matching setter, so an invalid value raises ValidationException at
the add_* call. Builders hold no rules of their own.

Usage:
    expense = (
        ExpenseBuilder()
        .add_name("Rent")
        .add_amount(Decimal("450"))
        .build()
    )
"""

from typing import Generic, Iterable, Optional, TypeVar

from easyfinance.models.entity import Entity
from easyfinance.models.financial import (
    Attachment,
    Category,
    Expense,
    ExpenseItem,
    Income,
)
from easyfinance.models.project import Project
from easyfinance.models.user import User


E = TypeVar("E", bound=Entity)


class Builder(Generic[E]):
    """Holds the draft; build() hands it over as is."""

    def __init__(self, draft: E):
        self._draft = draft

    def build(self) -> E:
        return self._draft


class UserBuilder(Builder[User]):
    def __init__(self):
        super().__init__(User())

    def add_first_name(self, first_name: Optional[str]) -> "UserBuilder":
        self._draft.set_first_name(first_name)
        return self

    def add_last_name(self, last_name: Optional[str]) -> "UserBuilder":
        self._draft.set_last_name(last_name)
        return self

    def add_email(self, email: Optional[str]) -> "UserBuilder":
        self._draft.set_email(email)
        return self

    def add_preferred_currency(self, currency: Optional[str]) -> "UserBuilder":
        self._draft.set_preferred_currency(currency)
        return self


class AttachmentBuilder(Builder[Attachment]):
    def __init__(self):
        super().__init__(Attachment())

    def add_name(self, name: Optional[str]) -> "AttachmentBuilder":
        self._draft.set_name(name)
        return self


class ExpenseItemBuilder(Builder[ExpenseItem]):
    def __init__(self):
        super().__init__(ExpenseItem())

    def add_attachments(self, attachments: Optional[Iterable[Attachment]]) -> "ExpenseItemBuilder":
        self._draft.set_attachments(attachments)
        return self

    def add_items(self, items: Optional[Iterable[ExpenseItem]]) -> "ExpenseItemBuilder":
        self._draft.set_items(items)
        return self


class ExpenseBuilder(Builder[Expense]):
    def __init__(self):
        super().__init__(Expense())

    def add_name(self, name: Optional[str]) -> "ExpenseBuilder":
        self._draft.set_name(name)
        return self

    def add_goal(self, goal) -> "ExpenseBuilder":
        self._draft.set_goal(goal)
        return self

    def add_amount(self, amount) -> "ExpenseBuilder":
        self._draft.set_amount(amount)
        return self

    def add_date(self, value) -> "ExpenseBuilder":
        self._draft.set_date(value)
        return self

    def add_created_by(self, created_by: Optional[User]) -> "ExpenseBuilder":
        self._draft.set_created_by(created_by)
        return self

    def add_items(self, items: Optional[Iterable[ExpenseItem]]) -> "ExpenseBuilder":
        self._draft.set_items(items)
        return self


class IncomeBuilder(Builder[Income]):
    def __init__(self):
        super().__init__(Income())

    def add_name(self, name: Optional[str]) -> "IncomeBuilder":
        self._draft.set_name(name)
        return self

    def add_amount(self, amount) -> "IncomeBuilder":
        self._draft.set_amount(amount)
        return self

    def add_date(self, value) -> "IncomeBuilder":
        self._draft.set_date(value)
        return self

    def add_created_by(self, created_by: Optional[User]) -> "IncomeBuilder":
        self._draft.set_created_by(created_by)
        return self


class CategoryBuilder(Builder[Category]):
    def __init__(self):
        super().__init__(Category())

    def add_name(self, name: Optional[str]) -> "CategoryBuilder":
        self._draft.set_name(name)
        return self

    def add_project(self, project: Optional[Project]) -> "CategoryBuilder":
        self._draft.set_project(project)
        return self

    def add_expenses(self, expenses: Optional[Iterable[Expense]]) -> "CategoryBuilder":
        self._draft.set_expenses(expenses)
        return self


class ProjectBuilder(Builder[Project]):
    def __init__(self):
        super().__init__(Project())

    def add_name(self, name: Optional[str]) -> "ProjectBuilder":
        self._draft.set_name(name)
        return self

    def add_type(self, project_type) -> "ProjectBuilder":
        self._draft.set_type(project_type)
        return self

    def add_categories(self, categories: Optional[Iterable[Category]]) -> "ProjectBuilder":
        self._draft.set_categories(categories)
        return self

    def add_incomes(self, incomes: Optional[Iterable[Income]]) -> "ProjectBuilder":
        self._draft.set_incomes(incomes)
        return self
