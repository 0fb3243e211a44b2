"""Backup export, import and reset.

Backups are JSON documents holding all six collections with camelCase
keys, ISO dates and plain numbers, e.g.::

    {"customers": [{"id": 1, "name": "Ali", "phone": "", "address": ""}],
     "farms": [{"id": 1, "name": "North", "initialStock": 5000}],
     "accounts": [...], "sales": [...], "receivables": [...], "vouchers": [...]}

A document is accepted when ``customers`` and ``farms`` are lists. Missing
``sales``, ``receivables`` and ``vouchers`` are treated as empty, and a
missing or empty ``accounts`` list gets the seed accounts.
"""

import json
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional, Union

from flockledger.domain.book import Book
from flockledger.domain.entities import (
    Account,
    AccountType,
    Customer,
    Farm,
    Receivable,
    RelatedType,
    Sale,
    State,
    Voucher,
    default_accounts,
)
from flockledger.domain.errors import ImportFormatError
from flockledger.domain.ledger import round_measure

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "poultry-erp-backup"


def backup_filename(today: date) -> str:
    """File name for a backup taken on ``today``."""
    return f"{BACKUP_PREFIX}-{today.isoformat()}.json"


# Export

def _number(value: Decimal) -> Union[int, float]:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _optional(record: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        record[key] = value


def export_document(state: State) -> dict[str, list[dict[str, Any]]]:
    """Serialize every collection of ``state`` into a JSON-ready document."""
    sales = []
    for s in state.sales.values():
        record = {
            "id": s.id,
            "date": s.date.isoformat(),
            "customerId": s.customer_id,
            "farmId": s.farm_id,
            "chickens": s.chickens,
            "weight": _number(s.weight),
            "rate": _number(s.rate),
            "total": _number(s.total),
        }
        _optional(record, "vehicleNumber", s.vehicle_number)
        _optional(record, "crates", s.crates)
        sales.append(record)

    receivables = []
    for r in state.receivables.values():
        record = {
            "id": r.id,
            "date": r.date.isoformat(),
            "customerId": r.customer_id,
            "amount": _number(r.amount),
        }
        _optional(record, "accountId", r.account_id)
        receivables.append(record)

    vouchers = []
    for v in state.vouchers.values():
        record = {
            "id": v.id,
            "date": v.date.isoformat(),
            "description": v.description,
            "debitAccount": v.debit_account,
            "creditAccount": v.credit_account,
            "amount": _number(v.amount),
        }
        _optional(record, "relatedId", v.related_id)
        _optional(record, "relatedType", v.related_type.value if v.related_type else None)
        vouchers.append(record)

    return {
        "customers": [
            {"id": c.id, "name": c.name, "phone": c.phone, "address": c.address}
            for c in state.customers.values()
        ],
        "farms": [
            {"id": f.id, "name": f.name, "initialStock": f.initial_stock}
            for f in state.farms.values()
        ],
        "accounts": [
            {
                "id": a.id,
                "name": a.name,
                "type": a.type.value,
                "initialBalance": _number(a.initial_balance),
            }
            for a in state.accounts.values()
        ],
        "sales": sales,
        "receivables": receivables,
        "vouchers": vouchers,
    }


# Import

def _decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"expected a number, got {value!r}")


def _int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    number = _decimal(value)
    if number != number.to_integral_value():
        raise ValueError(f"expected an integer, got {value!r}")
    return int(number)


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return _int(value)


def _date(value: Any) -> date:
    if not isinstance(value, str):
        raise ValueError(f"expected an ISO date, got {value!r}")
    return date.fromisoformat(value[:10])


def _customer(record: dict) -> Customer:
    return Customer(
        id=_int(record["id"]),
        name=str(record["name"]),
        phone=str(record.get("phone") or ""),
        address=str(record.get("address") or ""),
    )


def _farm(record: dict) -> Farm:
    return Farm(
        id=_int(record["id"]),
        name=str(record["name"]),
        initial_stock=_int(record.get("initialStock", 0)),
    )


def _account(record: dict) -> Account:
    return Account(
        id=_int(record["id"]),
        name=str(record["name"]),
        type=AccountType(record.get("type", AccountType.OTHER.value)),
        initial_balance=_decimal(record.get("initialBalance", 0)),
    )


def _sale(record: dict) -> Sale:
    # A stored total is ignored; it always follows weight and rate.
    weight = round_measure(_decimal(record["weight"]))
    rate = round_measure(_decimal(record["rate"]))
    total = weight * rate
    return Sale(
        id=_int(record["id"]),
        date=_date(record["date"]),
        customer_id=_int(record["customerId"]),
        farm_id=_int(record["farmId"]),
        chickens=_int(record["chickens"]),
        weight=weight,
        rate=rate,
        total=total,
        vehicle_number=record.get("vehicleNumber") or None,
        crates=_optional_int(record.get("crates")),
    )


def _receivable(record: dict) -> Receivable:
    return Receivable(
        id=_int(record["id"]),
        date=_date(record["date"]),
        customer_id=_int(record["customerId"]),
        amount=_decimal(record["amount"]),
        account_id=_optional_int(record.get("accountId")),
    )


def _voucher(record: dict) -> Voucher:
    related_type = record.get("relatedType")
    return Voucher(
        id=_int(record["id"]),
        date=_date(record["date"]),
        description=str(record.get("description") or ""),
        debit_account=str(record["debitAccount"]),
        credit_account=str(record["creditAccount"]),
        amount=_decimal(record["amount"]),
        related_id=_optional_int(record.get("relatedId")),
        related_type=RelatedType(related_type) if related_type else None,
    )


def _collection(document: dict, key: str, parse) -> dict:
    records = document.get(key)
    if records is None:
        return {}
    if not isinstance(records, list):
        raise ImportFormatError(f"Invalid file format: '{key}' must be a list")

    result = {}
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise ImportFormatError(f"Invalid file format: {key}[{index}] is not an object")
        try:
            entity = parse(record)
        except KeyError as e:
            raise ImportFormatError(f"Invalid file format: {key}[{index}] is missing {e}") from e
        except (TypeError, ValueError) as e:
            raise ImportFormatError(f"Invalid file format: {key}[{index}]: {e}") from e
        if entity.id in result:
            raise ImportFormatError(f"Invalid file format: duplicate id {entity.id} in {key}")
        result[entity.id] = entity
    return result


def parse_document(document: Any) -> State:
    """Build a State from a parsed backup document.

    Raises:
        ImportFormatError: If the document lacks ``customers`` or ``farms``
            lists, or a record cannot be read
    """
    if not isinstance(document, dict) or not (
        isinstance(document.get("customers"), list) and isinstance(document.get("farms"), list)
    ):
        raise ImportFormatError("Invalid file format: Missing customers or farms data.")

    accounts = _collection(document, "accounts", _account)
    return State(
        customers=_collection(document, "customers", _customer),
        farms=_collection(document, "farms", _farm),
        accounts=accounts or default_accounts(),
        sales=_collection(document, "sales", _sale),
        receivables=_collection(document, "receivables", _receivable),
        vouchers=_collection(document, "vouchers", _voucher),
    )


class BackupService:
    """Service for whole-book export, import and reset."""

    def __init__(self, book: Book):
        """Initialize backup service.

        Args:
            book: Book holding the current state
        """
        self.book = book

    def export_document(self) -> dict[str, list[dict[str, Any]]]:
        return export_document(self.book.state)

    def export_to_file(self, directory: Union[str, Path] = ".", today: Optional[date] = None) -> Path:
        """Write a backup file named after the export date.

        Args:
            directory: Directory to write into
            today: Export date used in the file name (defaults to today)

        Returns:
            Path of the written file
        """
        path = Path(directory) / backup_filename(today or date.today())
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.export_document(), f, indent=2)
        logger.info("Exported backup to %s", path)
        return path

    def import_document(self, document: Any) -> State:
        """Replace the whole book with the contents of ``document``.

        Raises:
            ImportFormatError: If the document is invalid; the book is unchanged
        """
        state = parse_document(document)
        self.book.replace_state(state)
        logger.info(
            "Imported %d customers, %d farms, %d sales, %d receipts",
            len(state.customers),
            len(state.farms),
            len(state.sales),
            len(state.receivables),
        )
        return state

    def import_from_file(self, file_path: Union[str, Path]) -> State:
        """Read a backup file and replace the book with it.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ImportFormatError: If the file is not a valid backup
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Backup file not found: {file_path}")

        with open(path, "r", encoding="utf-8") as f:
            try:
                document = json.load(f, parse_float=Decimal)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise ImportFormatError(f"Error parsing file: {e}") from e
        return self.import_document(document)

    def reset(self) -> State:
        """Clear all data, keeping only the seed accounts."""
        state = State.default()
        self.book.replace_state(state)
        logger.info("Book reset to defaults")
        return state
