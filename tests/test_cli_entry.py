"""Tests for entry commands."""

from decimal import Decimal

from loanledger.cli.main import cli


def invoke(cli_runner, temp_db, *args, input=None):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], input=input)


def reload(temp_db, loan_id):
    """Fetch a loan through a fresh session so CLI writes are visible."""
    temp_db.disconnect()
    return temp_db.fetch_loan_transaction(loan_id)


def test_entry_add(cli_runner, temp_db, sample_loan):
    """Test adding a manual deduction."""
    result = invoke(
        cli_runner, temp_db, "entry", "add", str(sample_loan.id),
        "--account", "Service Fee", "--amount", "250", "--name", "Insurance",
    )

    assert result.exit_code == 0
    assert "Entry added" in result.output
    loan = reload(temp_db, sample_loan.id)
    assert loan.entries[-1].name == "Insurance"
    assert loan.entries[0].credit == Decimal("9400")


def test_entry_add_invalid_amount(cli_runner, temp_db, sample_loan):
    """Test adding an entry with an unparseable amount."""
    result = invoke(
        cli_runner, temp_db, "entry", "add", str(sample_loan.id), "--account", "Service Fee", "--amount", "abc"
    )

    assert result.exit_code == 1
    assert "Invalid amount format" in result.output


def test_entry_add_zero_amount(cli_runner, temp_db, sample_loan):
    """Test adding an entry with a zero amount."""
    result = invoke(
        cli_runner, temp_db, "entry", "add", str(sample_loan.id), "--account", "Service Fee", "--amount", "0"
    )

    assert result.exit_code == 1
    assert "Deduction amount must be greater than 0" in result.output


def test_entry_edit(cli_runner, temp_db, sample_loan):
    """Test editing the amount of an automatic deduction."""
    service_fee = sample_loan.entries[2]
    result = invoke(cli_runner, temp_db, "entry", "edit", str(service_fee.id), "--amount", "250")

    assert result.exit_code == 0
    assert "Entry updated" in result.output
    loan = reload(temp_db, sample_loan.id)
    assert loan.get_entry(service_fee.id).credit == Decimal("250")
    assert loan.get_entry(service_fee.id).name == "Service Fee"


def test_entry_edit_static(cli_runner, temp_db, sample_loan):
    """Test editing the cash entry is refused."""
    result = invoke(cli_runner, temp_db, "entry", "edit", str(sample_loan.entries[0].id), "--amount", "1")

    assert result.exit_code == 1
    assert "Entry Cash on Hand not editable" in result.output


def test_entry_remove_and_restore(cli_runner, temp_db, sample_loan):
    """Test soft-deleting and restoring an automatic deduction."""
    service_fee = sample_loan.entries[2]

    result = invoke(cli_runner, temp_db, "entry", "remove", str(service_fee.id), input="y\n")
    assert result.exit_code == 0
    assert "Are you sure you want to remove entry?" in result.output
    assert "Entry removed" in result.output
    assert reload(temp_db, sample_loan.id).get_entry(service_fee.id).is_automatic_loan_deduction_deleted

    result = invoke(cli_runner, temp_db, "entry", "restore", str(service_fee.id))
    assert result.exit_code == 0
    assert "Entry restored" in result.output
    assert not reload(temp_db, sample_loan.id).get_entry(service_fee.id).is_automatic_loan_deduction_deleted


def test_entry_remove_cancelled(cli_runner, temp_db, sample_loan):
    """Test declining the removal."""
    result = invoke(cli_runner, temp_db, "entry", "remove", str(sample_loan.entries[2].id), input="n\n")

    assert result.exit_code == 0
    assert "Removal cancelled" in result.output


def test_entry_remove_static(cli_runner, temp_db, sample_loan):
    """Test removing the loan entry is refused."""
    result = invoke(cli_runner, temp_db, "entry", "remove", str(sample_loan.entries[1].id), "--yes")

    assert result.exit_code == 1
    assert "Entry Loans Receivable not removable" in result.output


def test_entry_restore_not_deleted(cli_runner, temp_db, sample_loan):
    """Test restoring an entry that was never deleted."""
    result = invoke(cli_runner, temp_db, "entry", "restore", str(sample_loan.entries[2].id))

    assert result.exit_code == 1
    assert "is not deleted" in result.output


def test_entry_unknown(cli_runner, temp_db, sample_loan):
    """Test commands on an unknown entry."""
    result = invoke(cli_runner, temp_db, "entry", "remove", "999", "--yes")

    assert result.exit_code == 1
    assert "Loan transaction entry 999 not found" in result.output
