from datetime import datetime, timezone

from budget_tracker.db.storage import JsonFileRepository
from budget_tracker.models.transaction import SortField, SortOrder, TransactionCreate, TransactionType
from budget_tracker.services.finance import FinanceService

INCOME, EXPENSE, SAVINGS = TransactionType.INCOME, TransactionType.EXPENSE, TransactionType.SAVINGS


def fields(tx_type, amount, category, when):
    return TransactionCreate(type=tx_type, amount=amount, category=category, description="entry", date=when)


def build_service(tmp_path):
    service = FinanceService(JsonFileRepository(tmp_path / "store.json"))
    service.load()
    return service


def test_monthly_scenario(tmp_path):
    service = build_service(tmp_path)
    service.add_transaction(fields(INCOME, 1000.0, "Salary", datetime(2024, 1, 5, tzinfo=timezone.utc)))
    service.add_transaction(fields(EXPENSE, 200.0, "Food", datetime(2024, 1, 10, tzinfo=timezone.utc)))
    service.add_transaction(fields(EXPENSE, 300.0, "Housing", datetime(2024, 2, 2, tzinfo=timezone.utc)))

    buckets = service.get_monthly_data()
    assert [(b.label, b.income_sum, b.expense_sum, b.savings_sum) for b in buckets] == [
        ("Feb", 0.0, 300.0, 0.0),
        ("Jan", 1000.0, 200.0, 0.0),
    ]
    assert len(service.get_monthly_data(limit=1)) == 1


def test_removed_transaction_leaves_every_aggregate(tmp_path):
    service = build_service(tmp_path)
    service.add_transaction(fields(EXPENSE, 80.0, "Food", datetime(2024, 3, 1, tzinfo=timezone.utc)))
    added = service.add_transaction(fields(EXPENSE, 20.0, "Shopping", datetime(2024, 4, 1, tzinfo=timezone.utc)))
    tx_id = added.transaction.id

    assert service.delete_transaction(tx_id).removed is True
    assert all(tx.id != tx_id for tx in service.snapshot())
    assert service.get_total(EXPENSE) == 80.0
    assert service.get_category_totals(EXPENSE) == {"Food": 80.0}
    assert [b.month for b in service.get_monthly_data()] == [3]

    assert service.delete_transaction(tx_id).removed is False
    assert service.get_total(EXPENSE) == 80.0


def test_state_survives_restart(tmp_path):
    service = build_service(tmp_path)
    service.add_transaction(fields(SAVINGS, 150.0, "Boat", datetime(2024, 5, 1, tzinfo=timezone.utc)))

    restarted = build_service(tmp_path)
    assert restarted.get_total(SAVINGS) == 150.0
    assert "Boat" in restarted.categories.categories(SAVINGS)


def test_new_category_is_registered_for_its_type(tmp_path):
    service = build_service(tmp_path)
    service.add_transaction(fields(INCOME, 75.0, "Tutoring", datetime(2024, 5, 1, tzinfo=timezone.utc)))
    assert "Tutoring" in service.categories.categories(INCOME)
    assert "Tutoring" not in service.categories.categories(EXPENSE)


def test_list_transactions_filters_and_sorts(tmp_path):
    service = build_service(tmp_path)
    service.add_transaction(fields(EXPENSE, 5.0, "Food", datetime(2024, 5, 1, tzinfo=timezone.utc)))
    service.add_transaction(fields(INCOME, 500.0, "Salary", datetime(2024, 5, 2, tzinfo=timezone.utc)))
    service.add_transaction(fields(EXPENSE, 50.0, "Food", datetime(2024, 5, 3, tzinfo=timezone.utc)))

    assert [tx.amount for tx in service.list_transactions()] == [5.0, 500.0, 50.0]
    expenses = service.list_transactions(EXPENSE, SortField.AMOUNT, SortOrder.DESC)
    assert [tx.amount for tx in expenses] == [50.0, 5.0]


def test_dashboard(tmp_path):
    now = datetime(2024, 3, 20, tzinfo=timezone.utc)
    service = build_service(tmp_path)
    service.add_transaction(fields(INCOME, 1000.0, "Salary", datetime(2024, 2, 1, tzinfo=timezone.utc)))
    service.add_transaction(fields(INCOME, 1500.0, "Salary", datetime(2024, 3, 1, tzinfo=timezone.utc)))
    service.add_transaction(fields(EXPENSE, 500.0, "Housing", datetime(2024, 3, 2, tzinfo=timezone.utc)))
    service.add_transaction(fields(SAVINGS, 100.0, "Retirement", datetime(2024, 3, 3, tzinfo=timezone.utc)))

    summary = service.dashboard(now=now)
    assert summary.totals == {"income": 2500.0, "expense": 500.0, "savings": 100.0}
    assert summary.balance == 2000.0
    assert summary.trends["income"].percentage_change == 50.0
    assert summary.trends["income"].is_increase is True
    assert summary.trends["expense"].percentage_change == 100.0
    assert summary.balance_trend.current_total == 1000.0
    assert summary.balance_trend.previous_total == 1000.0
    assert summary.balance_trend.percentage_change == 0.0
