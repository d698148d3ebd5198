"""Tests for account commands."""

from datetime import date

from ledgerbook.cli.main import cli


def test_account_create(cli_runner, temp_db):
    """Test creating an account with a type and description."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "create", "Cash", "--type", "asset",
         "--description", "Petty cash"],
    )

    assert result.exit_code == 0
    assert "Created Asset account 'Cash'" in result.output
    assert "ID:" in result.output


def test_account_create_requires_type(cli_runner, temp_db):
    """Test that --type is mandatory."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "Cash"]
    )

    assert result.exit_code != 0
    assert "--type" in result.output


def test_account_create_rejects_unknown_type(cli_runner, temp_db):
    """Test that account types outside the chart are refused."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "Cash", "--type", "Savings"]
    )

    assert result.exit_code != 0
    assert "Savings" in result.output


def test_account_create_duplicate(cli_runner, temp_db):
    """Test creating an account with a name that already exists."""
    args = ["--db-path", temp_db.database_path, "account", "create", "Cash", "--type", "Asset"]
    result1 = cli_runner.invoke(cli, args)
    assert result1.exit_code == 0

    result2 = cli_runner.invoke(cli, args)
    assert result2.exit_code == 1
    assert "Error: Account with name 'Cash' already exists" in result2.output


def test_account_list_empty(cli_runner, temp_db):
    """Test listing accounts when none exist."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "list"]
    )

    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_account_list_with_data(cli_runner, temp_db, chart):
    """Test listing accounts with data."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "list"]
    )

    assert result.exit_code == 0
    for name in chart:
        assert name in result.output
    assert "Product sales" in result.output
    # Grouped by type: assets come before revenue accounts
    assert result.output.index("Cash") < result.output.index("Sales")


def test_account_list_filters(cli_runner, temp_db, chart):
    """Test --search and --type filters."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "list", "--search", "LOAN"]
    )
    assert result.exit_code == 0
    assert "Loan" in result.output
    assert "Cash" not in result.output

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "list", "--type", "Expense"]
    )
    assert result.exit_code == 0
    assert "Rent" in result.output
    assert "Equipment" not in result.output


def test_account_update_by_name(cli_runner, temp_db, chart, account_service):
    """Test renaming an account addressed by name."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "update", "Cash", "--name", "Petty Cash"],
    )

    assert result.exit_code == 0
    assert "Updated account 'Petty Cash' (Asset)" in result.output
    updated = account_service.get_account(chart["Cash"].id)
    assert updated.name == "Petty Cash"
    # Unspecified fields keep their value
    assert updated.description == "Checking and petty cash"


def test_account_update_by_id_clears_description(cli_runner, temp_db, chart, account_service):
    """Test updating type and clearing description by account ID."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "update", str(chart["Loan"].id),
         "--type", "Equity", "--description", ""],
    )

    assert result.exit_code == 0
    updated = account_service.get_account(chart["Loan"].id)
    assert updated.account_type.value == "Equity"
    assert updated.description is None


def test_account_update_unknown_account(cli_runner, temp_db):
    """Test updating an account that does not exist."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "update", "Nope", "--name", "X"]
    )

    assert result.exit_code == 1
    assert "Error: Account 'Nope' not found" in result.output


def test_account_delete_unused(cli_runner, temp_db, chart, account_service):
    """Test deleting an account with no postings."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", "Equipment", "--yes"]
    )

    assert result.exit_code == 0
    assert "Deleted account 'Equipment'" in result.output
    assert account_service.get_account(chart["Equipment"].id) is None


def test_account_delete_cancelled(cli_runner, temp_db, chart, account_service):
    """Test answering no at the confirmation prompt."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", "Equipment"], input="n\n"
    )

    assert result.exit_code == 0
    assert "Deletion cancelled." in result.output
    assert account_service.get_account(chart["Equipment"].id) is not None


def test_account_delete_in_use(cli_runner, temp_db, chart, post_transaction, account_service):
    """Test that an account with postings cannot be deleted."""
    post_transaction(date(2024, 1, 1), "Sale", {"Cash": 100}, {"Sales": 100})

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", "Cash", "--yes"]
    )

    assert result.exit_code == 1
    assert "Cannot delete account" in result.output
    assert account_service.get_account(chart["Cash"].id) is not None
