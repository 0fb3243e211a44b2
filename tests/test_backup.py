"""Tests for backup export, import and reset."""

import json
from datetime import date
from decimal import Decimal

import pytest

from flockledger.domain.backup import backup_filename, export_document, parse_document
from flockledger.domain.entities import RelatedType, State
from flockledger.domain.errors import ImportFormatError


def _minimal_document(**extra):
    document = {
        "customers": [{"id": 1, "name": "Ali", "phone": "", "address": ""}],
        "farms": [{"id": 1, "name": "North", "initialStock": 500}],
    }
    document.update(extra)
    return document


def test_backup_filename():
    assert backup_filename(date(2024, 3, 9)) == "poultry-erp-backup-2024-03-09.json"


def test_export_document_uses_camel_case(book, sample_sale):
    document = export_document(book.state)

    assert set(document) == {"customers", "farms", "accounts", "sales", "receivables", "vouchers"}
    sale = document["sales"][0]
    assert sale == {
        "id": 1,
        "date": "2024-03-01",
        "customerId": 1,
        "farmId": 1,
        "chickens": 400,
        "weight": 800,
        "rate": 300,
        "total": 240000,
        "vehicleNumber": "LES-1234",
    }
    assert document["farms"][0] == {"id": 1, "name": "North Shed", "initialStock": 5000}
    assert document["vouchers"][0]["relatedType"] == "sale"
    assert document["accounts"][0]["initialBalance"] == 0


def test_export_fractional_amounts_as_numbers(book, sale_service, sample_customer, sample_farm):
    sale_service.create_sale(
        date=date(2024, 3, 2),
        customer_id=sample_customer.id,
        farm_id=sample_farm.id,
        chickens=10,
        weight=Decimal("20.5"),
        rate=Decimal("300"),
    )
    sale = export_document(book.state)["sales"][0]
    assert sale["weight"] == 20.5
    assert "crates" not in sale


def test_export_import_round_trip(book, backup_service, receivable_service, sample_sale, sample_customer):
    receivable_service.create_receivable(
        date=date(2024, 3, 4), customer_id=sample_customer.id, amount=Decimal("1250.75"), account_id=2
    )
    before = book.state
    text = json.dumps(backup_service.export_document())

    backup_service.reset()
    assert book.state == State.default()

    backup_service.import_document(json.loads(text, parse_float=Decimal))
    assert book.state == before


def test_parse_document_requires_customers_and_farms():
    with pytest.raises(ImportFormatError, match="Missing customers or farms data"):
        parse_document({"customers": []})
    with pytest.raises(ImportFormatError):
        parse_document([])


def test_import_rejects_missing_farms_and_keeps_state(book, backup_service, sample_sale):
    before = book.state
    with pytest.raises(ImportFormatError):
        backup_service.import_document({"customers": [], "sales": []})
    assert book.state is before


def test_parse_document_defaults():
    state = parse_document(_minimal_document())

    assert list(state.customers) == [1]
    assert [a.name for a in state.accounts.values()] == ["Cash in Hand", "Bank Account"]
    assert state.sales == {} and state.receivables == {} and state.vouchers == {}


def test_parse_document_computes_missing_total():
    document = _minimal_document(
        sales=[
            {
                "id": 3,
                "date": "2024-03-01T00:00:00.000Z",
                "customerId": 1,
                "farmId": 1,
                "chickens": 10,
                "weight": 12.5,
                "rate": 200,
            }
        ]
    )
    sale = parse_document(document).sales[3]
    assert sale.date == date(2024, 3, 1)
    assert sale.total == Decimal("2500.0")


def test_parse_document_reads_voucher_links():
    document = _minimal_document(
        vouchers=[
            {
                "id": 1,
                "date": "2024-03-01",
                "description": "Sale #1 - Ali",
                "debitAccount": "Customer - Ali",
                "creditAccount": "Sales - North",
                "amount": 100,
                "relatedId": 1,
                "relatedType": "sale",
            },
            {
                "id": 2,
                "date": "2024-03-02",
                "description": "Opening cash",
                "debitAccount": "Cash in Hand",
                "creditAccount": "Capital",
                "amount": 50,
            },
        ]
    )
    vouchers = parse_document(document).vouchers
    assert vouchers[1].related_type == RelatedType.SALE
    assert vouchers[2].related_type is None
    assert vouchers[2].related_id is None


@pytest.mark.parametrize(
    "sales",
    [
        "not a list",
        ["not an object"],
        [{"id": 1, "date": "2024-03-01"}],
        [{"id": 1, "date": "March", "customerId": 1, "farmId": 1, "chickens": 1, "weight": 1, "rate": 1}],
        [{"id": True, "date": "2024-03-01", "customerId": 1, "farmId": 1, "chickens": 1, "weight": 1, "rate": 1}],
    ],
)
def test_parse_document_rejects_bad_records(sales):
    with pytest.raises(ImportFormatError):
        parse_document(_minimal_document(sales=sales))


def test_parse_document_rejects_duplicate_ids():
    document = _minimal_document()
    document["customers"].append({"id": 1, "name": "Copy"})
    with pytest.raises(ImportFormatError, match="duplicate id 1"):
        parse_document(document)


def test_export_to_file_and_import(tmp_path, book, backup_service, sample_sale):
    before = book.state
    path = backup_service.export_to_file(tmp_path, today=date(2024, 5, 1))

    assert path == tmp_path / "poultry-erp-backup-2024-05-01.json"
    assert json.loads(path.read_text())["sales"][0]["id"] == sample_sale.id

    backup_service.reset()
    backup_service.import_from_file(path)
    assert book.state == before


def test_import_from_missing_file(tmp_path, backup_service):
    with pytest.raises(FileNotFoundError):
        backup_service.import_from_file(tmp_path / "nope.json")


def test_import_from_invalid_json(tmp_path, book, backup_service):
    path = tmp_path / "broken.json"
    path.write_text("{ not json")
    with pytest.raises(ImportFormatError, match="Error parsing file"):
        backup_service.import_from_file(path)
    assert book.state == State.default()


def test_reset_persists(temp_store, backup_service, sample_sale):
    backup_service.reset()
    assert temp_store.load() == State.default()


def test_parse_document_recomputes_stored_total():
    document = _minimal_document(
        sales=[
            {
                "id": 1,
                "date": "2024-03-01",
                "customerId": 1,
                "farmId": 1,
                "chickens": 10,
                "weight": Decimal("1.0015"),
                "rate": 200,
                "total": 9999,
            }
        ]
    )
    sale = parse_document(document).sales[1]
    assert sale.weight == Decimal("1.002")
    assert sale.total == Decimal("200.4")


def test_import_from_non_utf8_file(tmp_path, book, backup_service, sample_sale):
    before = book.state
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"customers": [], "farms": [], "x": "\xff\xfe"}')

    with pytest.raises(ImportFormatError, match="Error parsing file"):
        backup_service.import_from_file(path)
    assert book.state is before
