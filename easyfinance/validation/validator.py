"""
Form Validation

Entity setters stop at the first bad value, which is right for code but
wrong for a form: the user should see every problem at once.

FormValidator runs each field of a request through the matching setter
on a scratch entity and collects every ValidationException as an issue.
Fields are checked independently, so one failure never hides another.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for the user to correct.
"""

from typing import Callable, Optional

from pydantic import BaseModel, Field

from easyfinance.models.financial import Category, Expense, Income
from easyfinance.models.project import Project
from easyfinance.models.schemas import (
    CategoryRequest,
    ExpenseRequest,
    IncomeRequest,
    ProjectRequest,
    UserInfoRequest,
)
from easyfinance.models.user import User
from easyfinance.validation.exceptions import ValidationException
from easyfinance.validation.password import validate_password


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Property with the issue (e.g. 'Amount')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """All issues found in one request."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def field_errors(self) -> dict[str, list[str]]:
        """Messages grouped by field, the same shape the API returns."""
        errors: dict[str, list[str]] = {}
        for issue in self.issues:
            errors.setdefault(issue.field, []).append(issue.message)
        return errors


Check = Callable[[], object]


class FormValidator:
    """Collects every field-level failure of a request."""

    def _run_checks(self, checks: list[Check]) -> ValidationResult:
        issues = []
        for check in checks:
            try:
                check()
            except ValidationException as e:
                issues.append(ValidationIssue(field=e.property, message=e.message))
        return ValidationResult(issues=issues)

    def validate_project(self, request: ProjectRequest) -> ValidationResult:
        scratch = Project()
        return self._run_checks([
            lambda: scratch.set_name(request.name),
            lambda: scratch.set_type(request.type),
        ])

    def validate_category(self, request: CategoryRequest) -> ValidationResult:
        scratch = Category()
        return self._run_checks([
            lambda: scratch.set_name(request.name),
        ])

    def validate_income(
        self,
        request: IncomeRequest,
        created_by: Optional[User],
    ) -> ValidationResult:
        """created_by is required; passing None reports a CreatedBy issue."""
        scratch = Income()
        return self._run_checks([
            lambda: scratch.set_name(request.name),
            lambda: scratch.set_amount(request.amount),
            lambda: scratch.set_date(request.date),
            lambda: scratch.set_created_by(created_by),
        ])

    def validate_expense(
        self,
        request: ExpenseRequest,
        created_by: Optional[User],
    ) -> ValidationResult:
        """created_by is required; passing None reports a CreatedBy issue."""
        scratch = Expense()
        return self._run_checks([
            lambda: scratch.set_name(request.name),
            lambda: scratch.set_goal(request.goal),
            lambda: scratch.set_amount(request.amount),
            lambda: scratch.set_date(request.date),
            lambda: scratch.set_created_by(created_by),
        ])

    def validate_user_info(self, request: UserInfoRequest) -> ValidationResult:
        scratch = User()
        return self._run_checks([
            lambda: scratch.set_first_name(request.first_name),
            lambda: scratch.set_last_name(request.last_name),
            lambda: scratch.set_preferred_currency(request.preferred_currency),
        ])

    def validate_password_change(
        self,
        old_password: Optional[str],
        new_password: Optional[str],
        confirmation: Optional[str],
    ) -> ValidationResult:
        result = self._run_checks([
            lambda: validate_password(new_password, confirmation),
        ])
        if not old_password:
            result.issues.append(ValidationIssue(
                field="OldPassword",
                message="Current password is required",
            ))
        return result

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Plain-text summary for places without per-field error slots."""
        if result.is_valid:
            return "All fields are valid."

        lines = ["Please fix the following:"]
        for field, messages in result.field_errors.items():
            for message in messages:
                lines.append(f"   • {field}: {message}")
        return "\n".join(lines)
