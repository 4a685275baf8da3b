"""
Financial project entity.

A project is the root of the ownership tree: it holds categories (which
hold expenses) and incomes.
"""

from enum import Enum
from typing import Iterable, Optional
from uuid import UUID

from easyfinance.models.entity import Entity
from easyfinance.models.financial import Category, Income
from easyfinance.validation import (
    ValidationException,
    ValidationMessages,
    ensure_not_null,
    ensure_not_null_or_empty,
)


class ProjectType(str, Enum):
    """Kinds of project a user can track."""
    PERSONAL = "Personal"
    FAMILY = "Family"
    BUSINESS = "Business"
    OTHER = "Other"


class Project(Entity):
    """
    Root aggregate for a user's finances.

    categories behaves as a set (no category twice), incomes keep the
    order they were recorded in.
    """

    def __init__(self, entity_id: Optional[UUID] = None):
        super().__init__(entity_id)
        self._name: Optional[str] = None
        self._type: ProjectType = ProjectType.PERSONAL
        self._categories: list[Category] = []
        self._incomes: list[Income] = []

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def type(self) -> ProjectType:
        return self._type

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    @property
    def incomes(self) -> list[Income]:
        return list(self._incomes)

    def set_name(self, name: Optional[str]) -> "Project":
        self._name = ensure_not_null_or_empty(name, "Name")
        return self

    def set_type(self, project_type) -> "Project":
        ensure_not_null(project_type, "Type")
        # Accepts the enum or its value ("Business")
        try:
            self._type = ProjectType(project_type)
        except ValueError:
            raise ValidationException(
                ValidationMessages.PROPERTY_HAS_INVALID_VALUE.format("Type"),
                "Type",
            )
        return self

    def set_categories(self, categories: Optional[Iterable[Category]]) -> "Project":
        """
        Replace the categories. Each one is moved under this project, and
        categories that are dropped lose their link to it.
        """
        ensure_not_null(categories, "Categories")
        unique: list[Category] = []
        for category in categories:
            ensure_not_null(category, "Categories")
            if category not in unique:
                unique.append(category)

        for category in self._categories:
            if category not in unique:
                category._unlink_project()
        self._categories = []
        for category in unique:
            self._adopt(category)
        return self

    def set_incomes(self, incomes: Optional[Iterable[Income]]) -> "Project":
        self._incomes = list(ensure_not_null(incomes, "Incomes"))
        return self

    def add_category(self, category: Optional[Category]) -> "Project":
        ensure_not_null(category, "Category")
        self._adopt(category)
        return self

    def _adopt(self, category: Category) -> None:
        owner = category.project
        if owner is not None and owner is not self:
            owner._categories = [c for c in owner._categories if c is not category]
        category._link_project(self)
        if category not in self._categories:
            self._categories.append(category)

    def add_income(self, income: Optional[Income]) -> "Project":
        self._incomes.append(ensure_not_null(income, "Income"))
        return self

    def get_category(self, category_id: UUID) -> Optional[Category]:
        for category in self._categories:
            if category.id == category_id:
                return category
        return None
