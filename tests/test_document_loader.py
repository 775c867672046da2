"""Loading documents and company profiles from mappings and files."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

import pytest

from billpress.document.loader import load_company, load_document, read_company, read_document
from billpress.document.models import Estimate, PaymentMode, Transaction, TransactionVariant
from billpress.utils.errors import DocumentValidationError

_ITEMS = [{"description": "Paint", "quantity": 2, "unit_price": 40}]


def test_load_transaction() -> None:
    doc = load_document(
        {
            "kind": "transaction",
            "number": " INV-1 ",
            "variant": "Invoice",
            "issue_date": "2024-01-31",
            "payment_mode": "Bank Transfer",
            "items": _ITEMS,
        }
    )
    assert isinstance(doc, Transaction)
    assert doc.number == "INV-1"
    assert doc.variant is TransactionVariant.INVOICE
    assert doc.payment_mode is PaymentMode.BANK_TRANSFER
    assert doc.items[0].line_total == Decimal("80")


def test_load_estimate_defaults() -> None:
    doc = load_document({"kind": "estimate", "number": "Q-1", "items": _ITEMS})
    assert isinstance(doc, Estimate)
    assert doc.tax_percentage == Decimal(0)
    assert doc.discount == Decimal(0)
    assert doc.client.name == ""


@pytest.mark.parametrize(
    "data",
    [
        {"number": "Q-1", "items": _ITEMS},
        {"kind": "memo", "number": "Q-1", "items": _ITEMS},
        {"kind": "estimate", "number": "  ", "items": _ITEMS},
        {"kind": "estimate", "number": "Q-1", "items": [{"quantity": 0, "unit_price": 1}]},
        {"kind": "estimate", "number": "Q-1", "items": [{"quantity": 1, "unit_price": -1}]},
        {"kind": "estimate", "number": "Q-1", "items": _ITEMS, "discount": -5},
        {"kind": "estimate", "number": "Q-1", "items": _ITEMS, "variant": "Bill"},
        {"kind": "transaction", "number": "B-1", "items": _ITEMS},
    ],
)
def test_invalid_documents(data: dict[str, object]) -> None:
    with pytest.raises(DocumentValidationError):
        load_document(data)


def test_invalid_company() -> None:
    with pytest.raises(DocumentValidationError):
        load_company({"name": "Acme", "colour": "red"})


def test_read_from_files(tmp_path: Path) -> None:
    doc_path = tmp_path / "bill.json"
    doc_path.write_text(
        json.dumps({"kind": "transaction", "variant": "Bill", "number": "B-1", "items": _ITEMS}),
        encoding="utf-8",
    )
    company_path = tmp_path / "company.yml"
    company_path.write_text("name: Acme\nsignatory:\n  name: R. Rao\n", encoding="utf-8")
    assert read_document(doc_path).number == "B-1"
    assert read_company(company_path).signatory.name == "R. Rao"


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(DocumentValidationError):
        read_document(path)
