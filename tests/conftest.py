"""Shared pytest fixtures for loanledger tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from loanledger.database.factories import create_sqlite_database
from loanledger.domain.account import AccountService
from loanledger.domain.coordinator import LoanLedgerCoordinator
from loanledger.domain.entities import AccountType, LoanTransactionPayload
from loanledger.domain.ports import ConfirmationPort, Notifier


class RecordingNotifier(Notifier):
    """Notifier that keeps every notice for assertions."""

    def __init__(self):
        self.notices = []

    def notify(self, level, message):
        self.notices.append((level, message))

    def messages(self, level=None):
        return [message for lvl, message in self.notices if level is None or lvl == level]


class StubConfirmation(ConfirmationPort):
    """Confirmation port answering with a preset decision.

    on_confirm, if set, is called with the request before answering so tests
    can observe state while the decision is pending.
    """

    def __init__(self, answer=True, on_confirm=None):
        self.answer = answer
        self.on_confirm = on_confirm
        self.requests = []

    def confirm(self, request):
        self.requests.append(request)
        if self.on_confirm is not None:
            self.on_confirm(request)
        return self.answer


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def cash_account(account_service):
    """Create the default cash account."""
    account_id = account_service.create_account(name="Cash on Hand", account_type=AccountType.CASH)
    return account_service.get_account(account_id)


@pytest.fixture
def bank_account(account_service):
    """Create a second cash account."""
    account_id = account_service.create_account(name="Bank - Checking", account_type=AccountType.CASH)
    return account_service.get_account(account_id)


@pytest.fixture
def loan_account(account_service):
    """Create the loan receivable account."""
    account_id = account_service.create_account(name="Loans Receivable", account_type=AccountType.LOAN)
    return account_service.get_account(account_id)


@pytest.fixture
def fee_account(account_service):
    """Create an account for deductions."""
    account_id = account_service.create_account(name="Service Fee", account_type=AccountType.DEDUCTION)
    return account_service.get_account(account_id)


@pytest.fixture
def deduction_rules(account_service, fee_account):
    """Create a rate-based and a fixed automatic deduction rule."""
    service_fee = account_service.create_automatic_deduction(
        name="Service Fee", account_id=fee_account.id, rate=Decimal("0.02")
    )
    notarial_fee = account_service.create_automatic_deduction(
        name="Notarial Fee", account_id=fee_account.id, amount=Decimal("150")
    )
    return service_fee, notarial_fee


@pytest.fixture
def loan_payload(loan_account, cash_account):
    """Form values for a 10,000 standard loan over 12 months."""
    return LoanTransactionPayload(
        account_id=loan_account.id,
        applied_1=Decimal("10000"),
        terms=12,
        cash_account_id=cash_account.id,
    )


@pytest.fixture
def sample_loan(temp_db, loan_payload, deduction_rules):
    """Create a draft loan with the two automatic deductions.

    Entries: cash 9,650 credit, loan 10,000 debit, service fee 200 credit,
    notarial fee 150 credit.
    """
    return temp_db.create_loan_transaction(loan_payload)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def confirmation():
    return StubConfirmation(answer=True)


@pytest.fixture
def coordinator(temp_db, confirmation, notifier, sample_loan):
    """Create a coordinator holding the sample loan."""
    coordinator = LoanLedgerCoordinator(temp_db, confirmation, notifier)
    coordinator.load(sample_loan.id)
    return coordinator


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
