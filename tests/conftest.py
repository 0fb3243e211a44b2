"""Shared pytest fixtures for flockledger tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from flockledger.database.factories import create_sqlite_store
from flockledger.domain.account import AccountService
from flockledger.domain.backup import BackupService
from flockledger.domain.book import Book
from flockledger.domain.customer import CustomerService
from flockledger.domain.farm import FarmService
from flockledger.domain.receivable import ReceivableService
from flockledger.domain.report import ReportService
from flockledger.domain.sale import SaleService


@pytest.fixture
def temp_store():
    """Create a temporary SQLite state store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def book(temp_store):
    """Create a Book persisted to the temporary store."""
    return Book(store=temp_store)


@pytest.fixture
def customer_service(book):
    return CustomerService(book)


@pytest.fixture
def farm_service(book):
    return FarmService(book)


@pytest.fixture
def account_service(book):
    return AccountService(book)


@pytest.fixture
def sale_service(book):
    return SaleService(book)


@pytest.fixture
def receivable_service(book):
    return ReceivableService(book)


@pytest.fixture
def report_service(book):
    return ReportService(book)


@pytest.fixture
def backup_service(book):
    return BackupService(book)


@pytest.fixture
def sample_customer(customer_service):
    """Create a sample customer for testing."""
    customer_id = customer_service.create_customer(name="Ali Traders", phone="0300-1234567")
    return customer_service.get_customer(customer_id)


@pytest.fixture
def sample_farm(farm_service):
    """Create a sample farm for testing."""
    farm_id = farm_service.create_farm(name="North Shed", initial_stock=5000)
    return farm_service.get_farm(farm_id)


@pytest.fixture
def sample_sale(sale_service, sample_customer, sample_farm):
    """Record a sale of 400 birds, 800 kg at 300 (total 240,000)."""
    sale, _ = sale_service.create_sale(
        date=date(2024, 3, 1),
        customer_id=sample_customer.id,
        farm_id=sample_farm.id,
        chickens=400,
        weight=Decimal("800"),
        rate=Decimal("300"),
        vehicle_number="LES-1234",
    )
    return sale


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
