"""
Financial entities: categories, incomes, expenses and their items.

Every attribute is changed through a set_* method that validates the
candidate value first and only then commits it. A rejected value raises
ValidationException and leaves the previous value in place. Rules are
per field; no setter looks at another field.

Ownership is a tree:
    Project -> Category -> Expense -> ExpenseItem -> Attachment
                                                \\-> ExpenseItem (nested)

A category belongs to one project at a time, and an expense item never
contains itself.
"""

import datetime as dt
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional
from uuid import UUID

from easyfinance.models.entity import Entity
from easyfinance.models.user import User
from easyfinance.validation import (
    ValidationException,
    ValidationMessages,
    ensure_not_negative,
    ensure_not_null,
    ensure_not_null_or_empty,
    ensure_valid_date,
)

if TYPE_CHECKING:  # pragma: no cover
    from easyfinance.models.project import Project


class Attachment(Entity):
    """A file attached to an expense item (receipt, invoice...)."""

    def __init__(self, entity_id: Optional[UUID] = None):
        super().__init__(entity_id)
        self._name: Optional[str] = None

    @property
    def name(self) -> Optional[str]:
        return self._name

    def set_name(self, name: Optional[str]) -> "Attachment":
        self._name = ensure_not_null_or_empty(name, "Name")
        return self


class ExpenseItem(Entity):
    """
    A line of an expense.

    Both collections are required but may be empty.
    """

    def __init__(self, entity_id: Optional[UUID] = None):
        super().__init__(entity_id)
        self._attachments: list[Attachment] = []
        self._items: list[ExpenseItem] = []

    @property
    def attachments(self) -> list[Attachment]:
        return list(self._attachments)

    @property
    def items(self) -> list["ExpenseItem"]:
        return list(self._items)

    def set_attachments(self, attachments: Optional[Iterable[Attachment]]) -> "ExpenseItem":
        self._attachments = list(ensure_not_null(attachments, "Attachments"))
        return self

    def set_items(self, items: Optional[Iterable["ExpenseItem"]]) -> "ExpenseItem":
        candidates = list(ensure_not_null(items, "Items"))
        for item in candidates:
            if item is None or item is self or item.contains(self):
                raise ValidationException(
                    ValidationMessages.PROPERTY_HAS_INVALID_VALUE.format("Items"),
                    "Items",
                )
        self._items = candidates
        return self

    def contains(self, item: "ExpenseItem") -> bool:
        """True when item is nested anywhere below this one."""
        return any(child is item or child.contains(item) for child in self._items)


class Expense(Entity):
    """
    Money spent (or planned) within a category.

    goal is the planned amount, amount the actual one. They are validated
    independently; an expense may exceed its goal.
    """

    def __init__(self, entity_id: Optional[UUID] = None):
        super().__init__(entity_id)
        self._name: Optional[str] = None
        self._goal: Decimal = Decimal("0")
        self._amount: Decimal = Decimal("0")
        self._date: Optional[dt.date] = None
        self._created_by: Optional[User] = None
        self._items: list[ExpenseItem] = []

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def goal(self) -> Decimal:
        return self._goal

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def date(self) -> Optional[dt.date]:
        return self._date

    @property
    def created_by(self) -> Optional[User]:
        return self._created_by

    @property
    def items(self) -> list[ExpenseItem]:
        return list(self._items)

    def set_name(self, name: Optional[str]) -> "Expense":
        self._name = ensure_not_null_or_empty(name, "Name")
        return self

    def set_goal(self, goal) -> "Expense":
        self._goal = ensure_not_negative(goal, "Goal")
        return self

    def set_amount(self, amount) -> "Expense":
        self._amount = ensure_not_negative(amount, "Amount")
        return self

    def set_date(self, value: Optional[dt.date]) -> "Expense":
        self._date = ensure_valid_date(value, "Date")
        return self

    def set_created_by(self, created_by: Optional[User]) -> "Expense":
        self._created_by = ensure_not_null(created_by, "CreatedBy")
        return self

    def set_items(self, items: Optional[Iterable[ExpenseItem]]) -> "Expense":
        self._items = list(ensure_not_null(items, "Items"))
        return self


class Income(Entity):
    """Money received by a project."""

    def __init__(self, entity_id: Optional[UUID] = None):
        super().__init__(entity_id)
        self._name: Optional[str] = None
        self._amount: Decimal = Decimal("0")
        self._date: Optional[dt.date] = None
        self._created_by: Optional[User] = None

    @property
    def name(self) -> Optional[str]:
        """Short description of the income (salary, refund...)."""
        return self._name

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def date(self) -> Optional[dt.date]:
        return self._date

    @property
    def created_by(self) -> Optional[User]:
        return self._created_by

    def set_name(self, name: Optional[str]) -> "Income":
        self._name = ensure_not_null_or_empty(name, "Name")
        return self

    def set_amount(self, amount) -> "Income":
        self._amount = ensure_not_negative(amount, "Amount")
        return self

    def set_date(self, value: Optional[dt.date]) -> "Income":
        self._date = ensure_valid_date(value, "Date")
        return self

    def set_created_by(self, created_by: Optional[User]) -> "Income":
        self._created_by = ensure_not_null(created_by, "CreatedBy")
        return self


class Category(Entity):
    """Groups the expenses of one project (rent, groceries...)."""

    def __init__(self, entity_id: Optional[UUID] = None):
        super().__init__(entity_id)
        self._name: Optional[str] = None
        self._project: Optional["Project"] = None
        self._expenses: list[Expense] = []

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def project(self) -> Optional["Project"]:
        return self._project

    @property
    def expenses(self) -> list[Expense]:
        return list(self._expenses)

    def set_name(self, name: Optional[str]) -> "Category":
        self._name = ensure_not_null_or_empty(name, "Name")
        return self

    def set_project(self, project: Optional["Project"]) -> "Category":
        """Move the category under project, out of any project it was in."""
        ensure_not_null(project, "Project")
        project.add_category(self)
        return self

    def _link_project(self, project: "Project") -> None:
        self._project = project

    def _unlink_project(self) -> None:
        self._project = None

    def set_expenses(self, expenses: Optional[Iterable[Expense]]) -> "Category":
        self._expenses = list(ensure_not_null(expenses, "Expenses"))
        return self

    def add_expense(self, expense: Optional[Expense]) -> "Category":
        self._expenses.append(ensure_not_null(expense, "Expense"))
        return self

    def remove_expense(self, expense_id: UUID) -> bool:
        before = len(self._expenses)
        self._expenses = [e for e in self._expenses if e.id != expense_id]
        return len(self._expenses) != before
