"""
API Schemas

Request and response bodies exchanged with the EasyFinance API.

DESIGN DECISION: Requests are deliberately permissive (every field is
optional). Field rules are enforced by the entity setters, so the same
messages reach the user whether a value came from a form or from code.
Responses are built from entities and serialize with camelCase keys,
matching the API's JSON.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from easyfinance.models.financial import Category, Expense, ExpenseItem, Income
from easyfinance.models.project import Project, ProjectType
from easyfinance.models.user import User


class ApiModel(BaseModel):
    """Base for all API bodies: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# =============================================================================
# REQUESTS
# =============================================================================

class ProjectRequest(ApiModel):
    # Unknown type names pass through; Project.set_type rejects them
    name: Optional[str] = None
    type: Optional[Union[ProjectType, str]] = ProjectType.PERSONAL


class CategoryRequest(ApiModel):
    name: Optional[str] = None


class IncomeRequest(ApiModel):
    name: Optional[str] = None
    amount: Optional[Decimal] = None
    date: Optional[dt.date] = None


class ExpenseRequest(ApiModel):
    name: Optional[str] = None
    goal: Optional[Decimal] = Decimal("0")
    amount: Optional[Decimal] = None
    date: Optional[dt.date] = None


class PatchOperation(ApiModel):
    """
    One entry of a JSON-patch document.

    Only replace/add on top-level project fields are applied by the
    service; the full set of ops is accepted here so the error can name
    the unsupported one.
    """
    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str = Field(..., pattern=r"^/")
    value: Any = None
    from_: Optional[str] = Field(default=None, alias="from")


class Credentials(ApiModel):
    email: str
    password: str


class UserInfoRequest(ApiModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    preferred_currency: Optional[str] = None


class ManageInfoRequest(ApiModel):
    """Email or password change. Unset fields are left out of the body."""
    new_email: Optional[str] = None
    new_password: Optional[str] = None
    old_password: Optional[str] = None


# =============================================================================
# RESPONSES
# =============================================================================

class IncomeResponse(ApiModel):
    id: UUID
    name: Optional[str] = None
    amount: Decimal = Decimal("0")
    date: Optional[dt.date] = None

    @classmethod
    def from_entity(cls, income: Income) -> "IncomeResponse":
        return cls(id=income.id, name=income.name, amount=income.amount, date=income.date)


class ExpenseItemResponse(ApiModel):
    id: UUID
    attachments: list[str] = Field(default_factory=list)
    items: list["ExpenseItemResponse"] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, item: ExpenseItem) -> "ExpenseItemResponse":
        return cls(
            id=item.id,
            attachments=[a.name for a in item.attachments if a.name],
            items=[cls.from_entity(child) for child in item.items],
        )


class ExpenseResponse(ApiModel):
    id: UUID
    name: Optional[str] = None
    goal: Decimal = Decimal("0")
    amount: Decimal = Decimal("0")
    date: Optional[dt.date] = None
    created_by: Optional[UUID] = None
    items: list[ExpenseItemResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, expense: Expense) -> "ExpenseResponse":
        return cls(
            id=expense.id,
            name=expense.name,
            goal=expense.goal,
            amount=expense.amount,
            date=expense.date,
            created_by=expense.created_by.id if expense.created_by else None,
            items=[ExpenseItemResponse.from_entity(i) for i in expense.items],
        )


class CategoryResponse(ApiModel):
    id: UUID
    name: Optional[str] = None
    expenses: list[ExpenseResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryResponse":
        return cls(
            id=category.id,
            name=category.name,
            expenses=[ExpenseResponse.from_entity(e) for e in category.expenses],
        )


class ProjectResponse(ApiModel):
    id: Optional[UUID] = None
    name: Optional[str] = None
    type: ProjectType = ProjectType.PERSONAL
    categories: list[CategoryResponse] = Field(default_factory=list)
    incomes: list[IncomeResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            name=project.name,
            type=project.type,
            categories=[CategoryResponse.from_entity(c) for c in project.categories],
            incomes=[IncomeResponse.from_entity(i) for i in project.incomes],
        )


class UserInfo(ApiModel):
    id: Optional[UUID] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    preferred_currency: Optional[str] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            preferred_currency=user.preferred_currency,
        )


class DeleteUserResponse(ApiModel):
    """
    Outcome of a delete-account call.

    The first call usually comes back with a token and a message to show
    the user; the second call, carrying the token, comes back deleted.
    """
    confirmation_token: Optional[str] = None
    confirmation_message: Optional[str] = None
    deleted: bool = False

    @property
    def requires_confirmation(self) -> bool:
        return bool(self.confirmation_token) and not self.deleted


class ApiErrorResponse(ApiModel):
    """Problem-details style error body with per-field messages."""
    title: Optional[str] = None
    status: Optional[int] = None
    errors: dict[str, list[str]] = Field(default_factory=dict)
