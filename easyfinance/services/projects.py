"""
Project Service

Create, read, update and delete projects and the entities they own.

DESIGN DECISION: The service never assigns entity fields directly. Every
value goes through the entity's setter, so the service enforces exactly
the same rules as code that builds entities by hand. Rejected input is
audited and the ValidationException is re-raised to the caller, which
decides how to show it.
"""

from typing import Callable, Iterable, Optional, TypeVar, Union
from uuid import UUID

import structlog

from easyfinance.audit import AuditLogger, create_correlation_id
from easyfinance.models.entity import Entity
from easyfinance.models.financial import Category, Expense, Income
from easyfinance.models.project import Project
from easyfinance.models.schemas import (
    CategoryRequest,
    ExpenseRequest,
    IncomeRequest,
    PatchOperation,
    ProjectRequest,
)
from easyfinance.models.user import User
from easyfinance.services.storage import NotFoundError, RepositoryInterface, StorageError
from easyfinance.validation import ValidationException


logger = structlog.get_logger(__name__)

T = TypeVar("T")

# JSON-patch path -> Project setter
PATCHABLE_PATHS = {
    "/name": "set_name",
    "/type": "set_type",
}
SUPPORTED_PATCH_OPS = {"replace", "add"}


class PatchError(Exception):
    """A patch operation can't be applied to a project."""

    def __init__(self, operation: PatchOperation, message: str):
        self.operation = operation
        super().__init__(message)


class ProjectService:
    """
    Project operations backed by a repository.

    Projects are the aggregate root: categories, incomes and expenses are
    stored as part of their project.
    """

    def __init__(
        self,
        repository: RepositoryInterface[Project],
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._repository = repository
        self._audit_logger = audit_logger or AuditLogger()

    async def _build(
        self,
        entity_type: str,
        factory: Callable[[], T],
        correlation_id: Optional[UUID] = None,
    ) -> T:
        """Run factory; audit and re-raise a validation failure."""
        try:
            return factory()
        except ValidationException as e:
            await self._audit_logger.log_validation_failed(
                entity_type=entity_type,
                property_name=e.property,
                message=e.message,
                correlation_id=correlation_id,
            )
            raise

    async def _save(
        self,
        project: Project,
        correlation_id: Optional[UUID] = None,
        touched: Iterable[tuple[Entity, dict]] = (),
    ) -> None:
        """
        Persist project. If storage fails, every entity in touched is put
        back to its snapshot before the error is re-raised.
        """
        try:
            await self._repository.save(project)
        except StorageError as e:
            for entity, state in touched:
                entity.restore(state)
            await self._audit_logger.log_error(
                error_type="storage_error",
                error_message=str(e),
                details={"project_id": str(project.id)},
                correlation_id=correlation_id,
            )
            raise

    async def create_project(
        self,
        request: ProjectRequest,
        correlation_id: Optional[UUID] = None,
    ) -> Project:
        project = await self._build(
            "project",
            lambda: Project().set_name(request.name).set_type(request.type),
            correlation_id,
        )
        await self._save(project, correlation_id)

        await self._audit_logger.log_project_created(
            project_id=project.id,
            name=project.name,
            project_type=project.type.value,
            correlation_id=correlation_id,
        )
        return project

    async def get_project(self, project_id: UUID) -> Project:
        project = await self._repository.find(project_id)
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")
        return project

    async def list_projects(self, limit: int = 100, offset: int = 0) -> list[Project]:
        return await self._repository.list(limit=limit, offset=offset)

    def _resolve_setter(self, operation: PatchOperation) -> str:
        if operation.op not in SUPPORTED_PATCH_OPS:
            raise PatchError(operation, f"Unsupported patch operation: {operation.op}")
        setter = PATCHABLE_PATHS.get(operation.path.lower())
        if setter is None:
            raise PatchError(operation, f"Path can't be patched: {operation.path}")
        return setter

    async def update_project(
        self,
        project_id: UUID,
        operations: Iterable[Union[PatchOperation, dict]],
        correlation_id: Optional[UUID] = None,
    ) -> Project:
        """
        Apply a JSON-patch document to a project.

        All operations are checked on a scratch project first; the stored
        project is only touched when every operation is valid.
        """
        correlation_id = correlation_id or create_correlation_id()
        project = await self.get_project(project_id)

        ops = [
            op if isinstance(op, PatchOperation) else PatchOperation.model_validate(op)
            for op in operations
        ]
        changes = [(self._resolve_setter(op), op.value) for op in ops]

        def dry_run() -> None:
            scratch = Project()
            for setter, value in changes:
                getattr(scratch, setter)(value)

        await self._build("project", dry_run, correlation_id)

        before = project.snapshot()
        for setter, value in changes:
            getattr(project, setter)(value)
        await self._save(project, correlation_id, [(project, before)])

        await self._audit_logger.log_project_updated(
            project_id=project.id,
            paths=[op.path for op in ops],
            correlation_id=correlation_id,
        )
        return project

    async def delete_project(
        self,
        project_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        deleted = await self._repository.delete(project_id)
        if deleted:
            await self._audit_logger.log_project_deleted(
                project_id=project_id,
                correlation_id=correlation_id,
            )
        else:
            logger.info("project_delete_unknown_id", project_id=str(project_id))
        return deleted

    async def add_category(
        self,
        project_id: UUID,
        request: CategoryRequest,
        correlation_id: Optional[UUID] = None,
    ) -> Category:
        project = await self.get_project(project_id)
        category = await self._build(
            "category",
            lambda: Category().set_name(request.name),
            correlation_id,
        )
        before = project.snapshot()
        project.add_category(category)
        await self._save(project, correlation_id, [(project, before)])

        await self._audit_logger.log_category_added(
            project_id=project.id,
            category_id=category.id,
            name=category.name,
            correlation_id=correlation_id,
        )
        return category

    async def add_income(
        self,
        project_id: UUID,
        request: IncomeRequest,
        created_by: Optional[User],
        correlation_id: Optional[UUID] = None,
    ) -> Income:
        project = await self.get_project(project_id)
        income = await self._build(
            "income",
            lambda: (
                Income()
                .set_name(request.name)
                .set_amount(request.amount)
                .set_date(request.date)
                .set_created_by(created_by)
            ),
            correlation_id,
        )
        before = project.snapshot()
        project.add_income(income)
        await self._save(project, correlation_id, [(project, before)])

        await self._audit_logger.log_income_recorded(
            project_id=project.id,
            income_id=income.id,
            amount=str(income.amount),
            correlation_id=correlation_id,
        )
        return income

    async def add_expense(
        self,
        project_id: UUID,
        category_id: UUID,
        request: ExpenseRequest,
        created_by: Optional[User],
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        project = await self.get_project(project_id)
        category = project.get_category(category_id)
        if category is None:
            raise NotFoundError(f"Category not found: {category_id}")

        expense = await self._build(
            "expense",
            lambda: (
                Expense()
                .set_name(request.name)
                .set_goal(request.goal)
                .set_amount(request.amount)
                .set_date(request.date)
                .set_created_by(created_by)
            ),
            correlation_id,
        )
        before = category.snapshot()
        category.add_expense(expense)
        await self._save(project, correlation_id, [(category, before)])

        await self._audit_logger.log_expense_recorded(
            category_id=category.id,
            expense_id=expense.id,
            name=expense.name,
            amount=str(expense.amount),
            correlation_id=correlation_id,
        )
        return expense
