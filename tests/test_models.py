"""
Tests for EasyFinance domain entities

Test strategy:
1. Every setter rejects bad values with the right message and property
2. A rejected value never replaces the previous one
3. Builders pass values straight through to the setters
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from easyfinance.builders import (
    AttachmentBuilder,
    CategoryBuilder,
    ExpenseBuilder,
    ExpenseItemBuilder,
    IncomeBuilder,
    ProjectBuilder,
    UserBuilder,
)
from easyfinance.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    Category,
    Expense,
    Income,
    Project,
    ProjectType,
    User,
)
from easyfinance.validation import ValidationException, ValidationMessages
from easyfinance.validation.guards import years_before


@pytest.fixture
def valid_user() -> User:
    return (
        UserBuilder()
        .add_first_name("Ana")
        .add_last_name("Silva")
        .add_email("ana@example.com")
        .add_preferred_currency("BRL")
        .build()
    )


INVALID_DATES = [
    pytest.param(lambda: datetime.now() + timedelta(days=1), id="tomorrow"),
    pytest.param(lambda: date.today() + timedelta(days=1), id="tomorrow-date"),
    pytest.param(lambda: years_before(datetime.now(), 200), id="200-years-ago"),
    pytest.param(lambda: years_before(date.today(), 250), id="250-years-ago"),
]

VALID_DATES = [
    pytest.param(lambda: date.today(), id="today"),
    pytest.param(lambda: datetime.now() - timedelta(minutes=1), id="a-minute-ago"),
    pytest.param(lambda: years_before(date.today(), 200) + timedelta(days=1), id="just-inside"),
]


class TestExpense:
    """Tests for Expense validation."""

    @pytest.mark.parametrize("goal", [-1, -250, Decimal("-0.01")])
    def test_add_goal_negative_raises(self, goal):
        with pytest.raises(ValidationException) as exc_info:
            ExpenseBuilder().add_goal(goal).build()

        assert exc_info.value.message == ValidationMessages.PROPERTY_CANT_BE_LESS_THAN_ZERO.format("Goal")
        assert exc_info.value.property == "Goal"

    @pytest.mark.parametrize("amount", [-1, -250, -0.5])
    def test_add_amount_negative_raises(self, amount):
        with pytest.raises(ValidationException) as exc_info:
            ExpenseBuilder().add_amount(amount).build()

        assert str(exc_info.value) == "Amount can't be less than zero"
        assert exc_info.value.property == "Amount"

    @pytest.mark.parametrize("value", [0, Decimal("0.00"), 1, Decimal("500.75")])
    def test_zero_and_positive_amounts_are_accepted(self, value):
        expense = ExpenseBuilder().add_goal(value).add_amount(value).build()
        assert expense.goal == Decimal(value)
        assert expense.amount == Decimal(value)

    def test_float_amount_keeps_its_decimal_value(self):
        expense = Expense().set_amount(0.1)
        assert expense.amount == Decimal("0.1")

    @pytest.mark.parametrize("name", [None, ""])
    def test_add_name_null_or_empty_raises(self, name):
        with pytest.raises(ValidationException) as exc_info:
            ExpenseBuilder().add_name(name).build()

        assert exc_info.value.message == "Name can't be null or empty"
        assert exc_info.value.property == "Name"

    @pytest.mark.parametrize("make_date", INVALID_DATES)
    def test_add_date_invalid_raises(self, make_date):
        with pytest.raises(ValidationException) as exc_info:
            ExpenseBuilder().add_date(make_date()).build()

        assert exc_info.value.message == ValidationMessages.INVALID_DATE
        assert exc_info.value.property == "Date"

    @pytest.mark.parametrize("make_date", VALID_DATES)
    def test_add_date_within_range_is_accepted(self, make_date):
        value = make_date()
        expense = ExpenseBuilder().add_date(value).build()
        assert expense.date == value

    def test_add_created_by_null_raises(self):
        with pytest.raises(ValidationException) as exc_info:
            ExpenseBuilder().add_created_by(None).build()

        assert exc_info.value.message == "CreatedBy can't be null"
        assert exc_info.value.property == "CreatedBy"

    def test_add_items_null_raises(self):
        with pytest.raises(ValidationException) as exc_info:
            ExpenseBuilder().add_items(None).build()
        assert exc_info.value.property == "Items"

    def test_failed_setter_keeps_previous_value(self):
        expense = Expense().set_name("Rent").set_amount(Decimal("450"))

        with pytest.raises(ValidationException):
            expense.set_name("")
        with pytest.raises(ValidationException):
            expense.set_amount(-1)

        assert expense.name == "Rent"
        assert expense.amount == Decimal("450")

    def test_round_trip(self, valid_user):
        today = date.today()
        expense = (
            ExpenseBuilder()
            .add_name("Rent")
            .add_goal(Decimal("500"))
            .add_amount(Decimal("450"))
            .add_date(today)
            .add_created_by(valid_user)
            .build()
        )

        assert expense.name == "Rent"
        assert expense.goal == Decimal("500")
        assert expense.amount == Decimal("450")
        assert expense.date == today
        assert expense.created_by is valid_user
        assert expense.items == []

    def test_goal_and_amount_are_independent(self):
        expense = Expense().set_goal(100).set_amount(900)
        assert expense.amount > expense.goal

    def test_same_setter_twice_is_idempotent(self, valid_user):
        once = Expense().set_name("Rent").set_amount(Decimal("450"))
        twice = Expense().set_name("Rent").set_name("Rent")
        twice.set_amount(Decimal("450")).set_amount(Decimal("450"))

        assert (once.name, once.amount) == (twice.name, twice.amount)


class TestExpenseItem:
    """Tests for ExpenseItem validation."""

    def test_add_attachments_null_raises(self):
        with pytest.raises(ValidationException) as exc_info:
            ExpenseItemBuilder().add_attachments(None).build()

        assert exc_info.value.message == ValidationMessages.PROPERTY_CANT_BE_NULL.format("Attachments")
        assert exc_info.value.property == "Attachments"

    def test_add_items_null_raises(self):
        with pytest.raises(ValidationException) as exc_info:
            ExpenseItemBuilder().add_items(None).build()

        assert exc_info.value.message == "Items can't be null"
        assert exc_info.value.property == "Items"

    def test_empty_collections_are_accepted(self):
        item = ExpenseItemBuilder().add_attachments([]).add_items([]).build()
        assert item.attachments == []
        assert item.items == []

    def test_nested_items_and_attachments(self):
        receipt = AttachmentBuilder().add_name("receipt.pdf").build()
        child = ExpenseItemBuilder().add_attachments([receipt]).build()
        parent = ExpenseItemBuilder().add_items([child]).build()

        assert parent.items == [child]
        assert parent.items[0].attachments[0].name == "receipt.pdf"

    def test_item_cannot_contain_itself(self):
        item = ExpenseItemBuilder().build()
        with pytest.raises(ValidationException) as exc_info:
            item.set_items([item])
        assert exc_info.value.message == "Items has an invalid value"
        assert item.items == []

    def test_item_cannot_contain_its_ancestor(self):
        leaf = ExpenseItemBuilder().build()
        middle = ExpenseItemBuilder().add_items([leaf]).build()
        root = ExpenseItemBuilder().add_items([middle]).build()

        with pytest.raises(ValidationException):
            leaf.set_items([root])

        assert root.contains(leaf) is True
        assert leaf.items == []

    def test_returned_collection_is_a_copy(self):
        item = ExpenseItemBuilder().add_items([]).build()
        item.items.append(ExpenseItemBuilder().build())
        assert item.items == []

    def test_attachment_name_required(self):
        with pytest.raises(ValidationException) as exc_info:
            AttachmentBuilder().add_name("").build()
        assert exc_info.value.property == "Name"


class TestIncome:
    """Tests for Income validation."""

    def test_negative_amount_raises(self):
        with pytest.raises(ValidationException) as exc_info:
            IncomeBuilder().add_amount(-10).build()
        assert exc_info.value.property == "Amount"

    def test_null_amount_raises_cant_be_null(self):
        with pytest.raises(ValidationException) as exc_info:
            IncomeBuilder().add_amount(None).build()
        assert exc_info.value.message == "Amount can't be null"

    def test_future_date_raises(self):
        with pytest.raises(ValidationException) as exc_info:
            IncomeBuilder().add_date(date.today() + timedelta(days=3)).build()
        assert exc_info.value.message == "Invalid date"

    def test_valid_income(self, valid_user):
        income = (
            IncomeBuilder()
            .add_name("Salary")
            .add_amount(Decimal("3200"))
            .add_date(date.today())
            .add_created_by(valid_user)
            .build()
        )
        assert income.name == "Salary"
        assert income.amount == Decimal("3200")
        assert income.created_by == valid_user


class TestProjectAndCategory:
    """Tests for Project and Category validation."""

    @pytest.mark.parametrize("name", [None, ""])
    def test_project_name_required(self, name):
        with pytest.raises(ValidationException) as exc_info:
            ProjectBuilder().add_name(name).build()
        assert exc_info.value.message == "Name can't be null or empty"
        assert exc_info.value.property == "Name"

    def test_project_type_accepts_enum_and_value(self):
        assert ProjectBuilder().add_type(ProjectType.BUSINESS).build().type == ProjectType.BUSINESS
        assert ProjectBuilder().add_type("Family").build().type == ProjectType.FAMILY

    def test_project_type_unknown_value_raises(self):
        with pytest.raises(ValidationException) as exc_info:
            ProjectBuilder().add_type("Hobby").build()
        assert exc_info.value.property == "Type"

    @pytest.mark.parametrize("setter,prop", [
        ("add_categories", "Categories"),
        ("add_incomes", "Incomes"),
    ])
    def test_project_collections_required(self, setter, prop):
        with pytest.raises(ValidationException) as exc_info:
            getattr(ProjectBuilder(), setter)(None)
        assert exc_info.value.property == prop

    def test_project_categories_are_unique(self):
        groceries = CategoryBuilder().add_name("Groceries").build()
        project = ProjectBuilder().add_categories([groceries, groceries]).build()
        assert project.categories == [groceries]

    def test_project_incomes_keep_order(self):
        first, second = Income(), Income()
        project = ProjectBuilder().add_incomes([first, second]).build()
        assert project.incomes == [first, second]

    def test_add_category_links_project(self):
        project = ProjectBuilder().add_name("Home").build()
        category = Category().set_name("Rent")

        project.add_category(category)

        assert category.project is project
        assert project.get_category(category.id) is category

    def test_category_moves_between_projects(self):
        home = ProjectBuilder().add_name("Home").build()
        shop = ProjectBuilder().add_name("Shop").build()
        category = Category().set_name("Rent")

        home.add_category(category)
        shop.add_category(category)

        assert category.project is shop
        assert shop.categories == [category]
        assert home.categories == []

    def test_set_project_moves_category(self):
        home = ProjectBuilder().add_name("Home").build()
        shop = ProjectBuilder().add_name("Shop").build()
        category = CategoryBuilder().add_name("Rent").add_project(home).build()

        category.set_project(shop)

        assert home.categories == []
        assert shop.categories == [category]

    def test_set_categories_links_each_category(self):
        home = ProjectBuilder().add_name("Home").build()
        rent = Category().set_name("Rent")
        home.add_category(rent)
        groceries = Category().set_name("Groceries")

        shop = ProjectBuilder().add_categories([rent, groceries]).build()

        assert rent.project is shop
        assert groceries.project is shop
        assert home.categories == []

    def test_set_categories_unlinks_dropped_categories(self):
        rent = Category().set_name("Rent")
        groceries = Category().set_name("Groceries")
        project = ProjectBuilder().add_categories([rent, groceries]).build()

        project.set_categories([groceries])

        assert rent.project is None
        assert project.categories == [groceries]

    def test_set_categories_rejects_null_entry_and_keeps_previous(self):
        rent = Category().set_name("Rent")
        project = ProjectBuilder().add_categories([rent]).build()

        with pytest.raises(ValidationException) as exc_info:
            project.set_categories([Category(), None])

        assert exc_info.value.property == "Categories"
        assert project.categories == [rent]
        assert rent.project is project

    @pytest.mark.parametrize("name", [None, ""])
    def test_category_name_required(self, name):
        with pytest.raises(ValidationException) as exc_info:
            CategoryBuilder().add_name(name).build()
        assert exc_info.value.property == "Name"

    def test_category_project_required(self):
        with pytest.raises(ValidationException) as exc_info:
            CategoryBuilder().add_project(None).build()
        assert exc_info.value.message == "Project can't be null"

    def test_category_remove_expense(self):
        expense = Expense().set_name("Water")
        category = CategoryBuilder().add_expenses([expense]).build()

        assert category.remove_expense(expense.id) is True
        assert category.remove_expense(expense.id) is False
        assert category.expenses == []

    def test_entities_compare_by_id(self):
        project = Project()
        assert project == project
        assert project != Project()
        assert project != Category(project.id)


class TestUser:
    """Tests for User validation."""

    def test_valid_user(self, valid_user):
        assert valid_user.full_name == "Ana Silva"
        assert valid_user.preferred_currency == "BRL"

    @pytest.mark.parametrize("email", ["", "not-an-email", "a@b", "a b@c.com"])
    def test_invalid_email_raises(self, email):
        with pytest.raises(ValidationException) as exc_info:
            UserBuilder().add_email(email).build()
        assert exc_info.value.property == "Email"

    @pytest.mark.parametrize("currency", ["usd", "EURO", "E1R"])
    def test_invalid_currency_raises(self, currency):
        with pytest.raises(ValidationException) as exc_info:
            UserBuilder().add_preferred_currency(currency).build()
        assert exc_info.value.message == ValidationMessages.INVALID_CURRENCY
        assert exc_info.value.property == "PreferredCurrency"

    def test_first_name_required(self):
        with pytest.raises(ValidationException) as exc_info:
            UserBuilder().add_first_name(None).build()
        assert exc_info.value.property == "FirstName"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.PROJECT_CREATED,
            description="Project created",
        )
        assert event.event_type == AuditEventType.PROJECT_CREATED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        event = AuditEventBuilder.validation_failed(
            entity_type="expense",
            property_name="Amount",
            message="Amount can't be less than zero",
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "validation_failed"
        assert log_dict["severity"] == "warning"
        assert log_dict["details"]["property"] == "Amount"
        assert log_dict["error_message"] == "Amount can't be less than zero"

    def test_audit_event_builder_project_created(self):
        project = ProjectBuilder().add_name("Home").build()

        event = AuditEventBuilder.project_created(
            project_id=project.id,
            name=project.name,
            project_type=project.type.value,
        )

        assert event.entity_id == project.id
        assert event.entity_type == "project"
        assert event.is_user_action is True
