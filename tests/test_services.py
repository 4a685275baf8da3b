"""
Tests for ProjectService and in-memory storage.

All storage is in-memory; audit events are captured in an
InMemoryAuditStorage so tests can assert on them.
"""

from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from easyfinance.audit import AuditLogger
from easyfinance.builders import UserBuilder
from easyfinance.models import AuditEventBuilder, AuditEventType, Project, ProjectType
from easyfinance.models.schemas import (
    CategoryRequest,
    ExpenseRequest,
    IncomeRequest,
    PatchOperation,
    ProjectRequest,
    ProjectResponse,
)
from easyfinance.services.projects import PatchError, ProjectService
from easyfinance.services.storage import (
    DuplicateError,
    InMemoryAuditStorage,
    InMemoryRepository,
    NotFoundError,
    StorageError,
)
from easyfinance.validation import ValidationException


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage()


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository[Project]()


@pytest.fixture
def service(repository, audit_storage) -> ProjectService:
    return ProjectService(repository, AuditLogger(audit_storage))


@pytest.fixture
def owner():
    return UserBuilder().add_first_name("Ana").add_email("ana@example.com").build()


async def event_types(audit_storage: InMemoryAuditStorage) -> list[AuditEventType]:
    events = await audit_storage.get_recent_events()
    return [e.event_type for e in reversed(events)]


class TestInMemoryRepository:

    @pytest.mark.asyncio
    async def test_save_find_delete(self, repository):
        project = Project().set_name("Home")

        await repository.save(project)
        assert await repository.find(project.id) is project
        assert len(repository) == 1

        assert await repository.delete(project.id) is True
        assert await repository.delete(project.id) is False
        assert await repository.find(project.id) is None

    @pytest.mark.asyncio
    async def test_add_rejects_duplicates(self, repository):
        project = Project().set_name("Home")
        await repository.add(project)
        with pytest.raises(DuplicateError):
            await repository.add(project)

    @pytest.mark.asyncio
    async def test_list_paging(self, repository):
        projects = [Project().set_name(f"P{i}") for i in range(5)]
        for project in projects:
            await repository.save(project)

        assert await repository.list(limit=2, offset=1) == projects[1:3]


class TestProjectService:

    @pytest.mark.asyncio
    async def test_create_project(self, service, audit_storage):
        project = await service.create_project(
            ProjectRequest(name="Family budget", type=ProjectType.FAMILY)
        )

        assert project.name == "Family budget"
        assert project.type == ProjectType.FAMILY
        assert await service.get_project(project.id) is project
        assert await event_types(audit_storage) == [AuditEventType.PROJECT_CREATED]

    @pytest.mark.asyncio
    async def test_create_project_invalid_is_audited_and_raised(self, service, repository, audit_storage):
        with pytest.raises(ValidationException) as exc_info:
            await service.create_project(ProjectRequest(name=""))

        assert exc_info.value.property == "Name"
        assert len(repository) == 0

        events = await audit_storage.get_recent_events()
        assert events[0].event_type == AuditEventType.VALIDATION_FAILED
        assert events[0].details == {"property": "Name"}

    @pytest.mark.asyncio
    async def test_get_unknown_project(self, service):
        with pytest.raises(NotFoundError):
            await service.get_project(uuid4())

    @pytest.mark.asyncio
    async def test_update_project_with_patch(self, service):
        project = await service.create_project(ProjectRequest(name="Home"))

        updated = await service.update_project(project.id, [
            {"op": "replace", "path": "/name", "value": "House"},
            PatchOperation(op="replace", path="/type", value="Business"),
        ])

        assert updated.name == "House"
        assert updated.type == ProjectType.BUSINESS

    @pytest.mark.asyncio
    async def test_update_project_is_all_or_nothing(self, service):
        project = await service.create_project(ProjectRequest(name="Home"))

        with pytest.raises(ValidationException):
            await service.update_project(project.id, [
                {"op": "replace", "path": "/name", "value": "House"},
                {"op": "replace", "path": "/type", "value": "Hobby"},
            ])

        assert project.name == "Home"
        assert project.type == ProjectType.PERSONAL

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", [
        {"op": "remove", "path": "/name"},
        {"op": "replace", "path": "/categories", "value": []},
    ])
    async def test_update_project_unsupported_patch(self, service, operation):
        project = await service.create_project(ProjectRequest(name="Home"))
        with pytest.raises(PatchError):
            await service.update_project(project.id, [operation])

    @pytest.mark.asyncio
    async def test_update_project_events_are_correlated(self, service, audit_storage):
        project = await service.create_project(ProjectRequest(name="Home"))
        await service.update_project(project.id, [{"op": "replace", "path": "/Name", "value": "House"}])

        events = await audit_storage.get_events_by_entity("project", project.id)
        assert [e.event_type for e in events] == [
            AuditEventType.PROJECT_CREATED,
            AuditEventType.PROJECT_UPDATED,
        ]
        assert events[1].correlation_id is not None
        assert events[1].details == {"paths": ["/Name"]}

    @pytest.mark.asyncio
    async def test_storage_failure_is_audited(self, audit_storage):
        class FullRepository(InMemoryRepository):
            async def save(self, entity):
                raise StorageError("repository is read-only")

        service = ProjectService(FullRepository(), AuditLogger(audit_storage))

        with pytest.raises(StorageError):
            await service.create_project(ProjectRequest(name="Home"))

        events = await audit_storage.get_recent_events()
        assert events[0].event_type == AuditEventType.SYSTEM_ERROR
        assert events[0].error_message == "repository is read-only"

    @pytest.mark.asyncio
    async def test_failed_save_leaves_stored_project_unchanged(self, owner):
        class SaveOnceRepository(InMemoryRepository):
            saves = 0

            async def save(self, entity):
                self.saves += 1
                if self.saves > 1:
                    raise StorageError("connection lost")
                return await super().save(entity)

        repository = SaveOnceRepository()
        service = ProjectService(repository, AuditLogger(InMemoryAuditStorage()))
        project = await service.create_project(ProjectRequest(name="Home"))
        stored = await repository.find(project.id)

        with pytest.raises(StorageError):
            await service.update_project(project.id, [{"op": "replace", "path": "/name", "value": "House"}])
        with pytest.raises(StorageError):
            await service.add_category(project.id, CategoryRequest(name="Rent"))
        with pytest.raises(StorageError):
            await service.add_income(
                project.id,
                IncomeRequest(name="Salary", amount=Decimal("10"), date=date.today()),
                created_by=owner,
            )

        assert (stored.name, len(stored.categories), len(stored.incomes)) == ("Home", 0, 0)

    @pytest.mark.asyncio
    async def test_failed_save_drops_new_expense(self, repository, owner):
        service = ProjectService(repository, AuditLogger(InMemoryAuditStorage()))
        project = await service.create_project(ProjectRequest(name="Home"))
        category = await service.add_category(project.id, CategoryRequest(name="Rent"))

        async def failing_save(entity):
            raise StorageError("connection lost")

        repository.save = failing_save

        with pytest.raises(StorageError):
            await service.add_expense(
                project.id,
                category.id,
                ExpenseRequest(name="Rent", amount=Decimal("450"), date=date.today()),
                created_by=owner,
            )

        assert category.expenses == []

    @pytest.mark.asyncio
    async def test_create_project_unknown_type(self, service):
        with pytest.raises(ValidationException) as exc_info:
            await service.create_project(ProjectRequest(name="Home", type="Hobby"))
        assert exc_info.value.message == "Type has an invalid value"

    @pytest.mark.asyncio
    async def test_delete_project(self, service, audit_storage):
        project = await service.create_project(ProjectRequest(name="Home"))

        assert await service.delete_project(project.id) is True
        assert await service.delete_project(project.id) is False
        assert await service.list_projects() == []
        assert (await event_types(audit_storage))[-1] == AuditEventType.PROJECT_DELETED

    @pytest.mark.asyncio
    async def test_add_category_income_and_expense(self, service, owner, audit_storage):
        project = await service.create_project(ProjectRequest(name="Home"))

        category = await service.add_category(project.id, CategoryRequest(name="Housing"))
        income = await service.add_income(
            project.id,
            IncomeRequest(name="Salary", amount=Decimal("3000"), date=date.today()),
            created_by=owner,
        )
        expense = await service.add_expense(
            project.id,
            category.id,
            ExpenseRequest(name="Rent", goal=Decimal("500"), amount=Decimal("450"), date=date.today()),
            created_by=owner,
        )

        assert category.project is project
        assert project.incomes == [income]
        assert category.expenses == [expense]
        assert expense.created_by is owner
        assert await event_types(audit_storage) == [
            AuditEventType.PROJECT_CREATED,
            AuditEventType.CATEGORY_ADDED,
            AuditEventType.INCOME_RECORDED,
            AuditEventType.EXPENSE_RECORDED,
        ]

        response = ProjectResponse.from_entity(project)
        body = response.model_dump(mode="json", by_alias=True)
        assert body["categories"][0]["expenses"][0]["createdBy"] == str(owner.id)

    @pytest.mark.asyncio
    async def test_add_expense_rejects_future_date(self, service, owner):
        project = await service.create_project(ProjectRequest(name="Home"))
        category = await service.add_category(project.id, CategoryRequest(name="Housing"))

        with pytest.raises(ValidationException) as exc_info:
            await service.add_expense(
                project.id,
                category.id,
                ExpenseRequest(name="Rent", amount=Decimal("450"), date=date.today() + timedelta(days=2)),
                created_by=owner,
            )

        assert exc_info.value.property == "Date"
        assert category.expenses == []

    @pytest.mark.asyncio
    async def test_add_expense_unknown_category(self, service, owner):
        project = await service.create_project(ProjectRequest(name="Home"))
        with pytest.raises(NotFoundError):
            await service.add_expense(
                project.id,
                uuid4(),
                ExpenseRequest(name="Rent", amount=Decimal("1"), date=date.today()),
                created_by=owner,
            )

    @pytest.mark.asyncio
    async def test_add_income_requires_creator(self, service):
        project = await service.create_project(ProjectRequest(name="Home"))
        with pytest.raises(ValidationException) as exc_info:
            await service.add_income(
                project.id,
                IncomeRequest(name="Salary", amount=Decimal("10"), date=date.today()),
                created_by=None,
            )
        assert exc_info.value.property == "CreatedBy"


class TestAuditLogger:

    @pytest.mark.asyncio
    async def test_storage_failure_does_not_raise(self):
        class BrokenStorage(InMemoryAuditStorage):
            async def append_event(self, event):
                raise RuntimeError("disk full")

        logger = AuditLogger(BrokenStorage())

        ok = await logger.log(AuditEventBuilder.project_deleted(project_id=uuid4()))
        assert ok is False

    @pytest.mark.asyncio
    async def test_local_only_logger(self):
        assert await AuditLogger().log(AuditEventBuilder.user_signed_out()) is True
