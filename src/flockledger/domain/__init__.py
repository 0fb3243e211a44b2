"""Domain layer for flockledger application."""

from flockledger.domain.book import Book
from flockledger.domain.customer import CustomerService
from flockledger.domain.farm import FarmService
from flockledger.domain.account import AccountService
from flockledger.domain.sale import SaleService
from flockledger.domain.receivable import ReceivableService
from flockledger.domain.report import ReportService
from flockledger.domain.backup import BackupService

__all__ = [
    "Book",
    "CustomerService",
    "FarmService",
    "AccountService",
    "SaleService",
    "ReceivableService",
    "ReportService",
    "BackupService",
]
