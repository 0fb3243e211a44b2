"""Domain model entities for flockledger.

These are pure data classes representing business concepts, independent of
the storage schema. The aggregate ``State`` holds every collection the
ledger works on; it is replaced as a whole on each mutation rather than
edited in place.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


CASH_IN_HAND = "Cash in Hand"
BANK_ACCOUNT = "Bank Account"


class AccountType(str, Enum):
    """Kind of money account."""

    CASH = "cash"
    BANK = "bank"
    OTHER = "other"


class RelatedType(str, Enum):
    """Kind of transaction a voucher was derived from."""

    SALE = "sale"
    RECEIVABLE = "receivable"


@dataclass(frozen=True)
class Customer:
    """Customer (buyer) domain entity."""

    id: int
    name: str
    phone: str = ""
    address: str = ""


@dataclass(frozen=True)
class Farm:
    """Farm domain entity. Stock is counted in birds."""

    id: int
    name: str
    initial_stock: int


@dataclass(frozen=True)
class Account:
    """Money account (cash box, bank account, ...)."""

    id: int
    name: str
    type: AccountType
    initial_balance: Decimal


@dataclass(frozen=True)
class Sale:
    """Sale of birds from a farm to a customer.

    ``total`` is always ``weight * rate``; it is computed by the ledger and
    never taken from callers.
    """

    id: int
    date: date
    customer_id: int
    farm_id: int
    chickens: int
    weight: Decimal
    rate: Decimal
    total: Decimal
    vehicle_number: Optional[str] = None
    crates: Optional[int] = None


@dataclass(frozen=True)
class Receivable:
    """Cash receipt from a customer, optionally deposited into an account."""

    id: int
    date: date
    customer_id: int
    amount: Decimal
    account_id: Optional[int] = None


@dataclass(frozen=True)
class Voucher:
    """Journal entry. Vouchers without ``related_type`` are manual entries."""

    id: int
    date: date
    description: str
    debit_account: str
    credit_account: str
    amount: Decimal
    related_id: Optional[int] = None
    related_type: Optional[RelatedType] = None


@dataclass(frozen=True)
class SaleDraft:
    """Input for recording a new sale."""

    date: date
    customer_id: int
    farm_id: int
    chickens: int
    weight: Decimal
    rate: Decimal
    vehicle_number: Optional[str] = None
    crates: Optional[int] = None


@dataclass(frozen=True)
class ReceivableDraft:
    """Input for recording a new receipt."""

    date: date
    customer_id: int
    amount: Decimal
    account_id: Optional[int] = None


def default_accounts() -> dict[int, Account]:
    """Return the seed accounts every book starts with."""
    return {
        1: Account(id=1, name=CASH_IN_HAND, type=AccountType.CASH, initial_balance=Decimal("0")),
        2: Account(id=2, name=BANK_ACCOUNT, type=AccountType.BANK, initial_balance=Decimal("0")),
    }


@dataclass(frozen=True)
class State:
    """All bookkeeping collections, keyed by id in insertion order."""

    customers: dict[int, Customer] = field(default_factory=dict)
    farms: dict[int, Farm] = field(default_factory=dict)
    accounts: dict[int, Account] = field(default_factory=dict)
    sales: dict[int, Sale] = field(default_factory=dict)
    receivables: dict[int, Receivable] = field(default_factory=dict)
    vouchers: dict[int, Voucher] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "State":
        """Empty book with the seed accounts."""
        return cls(accounts=default_accounts())


@dataclass(frozen=True)
class PeriodTotals:
    """Aggregated quantities over a set of sales."""

    count: int
    chickens: int
    weight: Decimal
    total: Decimal


@dataclass(frozen=True)
class AgingBuckets:
    """Outstanding debt split by age of the open invoice."""

    days_0_15: Decimal = Decimal("0")
    days_16_30: Decimal = Decimal("0")
    days_31_60: Decimal = Decimal("0")
    days_60_plus: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.days_0_15 + self.days_16_30 + self.days_31_60 + self.days_60_plus


@dataclass(frozen=True)
class AgingRow:
    """One customer's line in the receivables aging report."""

    customer: Customer
    total_due: Decimal
    buckets: AgingBuckets
    last_payment: Optional[Receivable]


class LedgerLineType(str, Enum):
    """Kind of line in a customer statement."""

    SALE = "SALE"
    RECEIPT = "RECEIPT"


@dataclass(frozen=True)
class LedgerLine:
    """Customer statement line with the balance after it."""

    id: int
    date: date
    type: LedgerLineType
    description: str
    debit: Decimal
    credit: Decimal
    balance: Decimal


@dataclass(frozen=True)
class CustomerLedger:
    """Customer statement over a period."""

    customer: Customer
    start_date: Optional[date]
    end_date: Optional[date]
    opening_balance: Decimal
    lines: tuple[LedgerLine, ...]
    closing_balance: Decimal


@dataclass(frozen=True)
class FarmPerformance:
    """Farm sales over a period plus the all-time remaining stock."""

    farm: Farm
    period: PeriodTotals
    remaining_stock: int


@dataclass(frozen=True)
class SalesSummary:
    """Sales in a period, newest first, with totals."""

    start_date: Optional[date]
    end_date: Optional[date]
    sales: tuple[Sale, ...]
    totals: PeriodTotals


@dataclass(frozen=True)
class MonthlyFigures:
    """Sales and receipts booked in one calendar month (``YYYY-MM``)."""

    month: str
    sales: Decimal
    received: Decimal


@dataclass(frozen=True)
class DashboardTotals:
    """Headline figures across the whole book."""

    total_sales: Decimal
    total_received: Decimal
    outstanding: Decimal
    customer_count: int
    farm_count: int
    birds_initial: int
    birds_sold: int
    birds_left: int
