"""Shared fixtures: a company profile and sample documents."""

from __future__ import annotations

from decimal import Decimal

import pytest

from billpress.config import ConfigModel, load_config
from billpress.document.models import (
    ClientContact,
    CompanyProfile,
    CustomerContact,
    Estimate,
    LineItem,
    PaymentMode,
    Signatory,
    Transaction,
    TransactionVariant,
)

# 1x1 transparent PNG
_PNG_DATA_URL = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def png_data_url() -> str:
    return _PNG_DATA_URL


@pytest.fixture
def cfg() -> ConfigModel:
    return load_config(env={})


@pytest.fixture
def company() -> CompanyProfile:
    return CompanyProfile(
        name="Acme Interiors",
        tax_id="29ABCDE1234F1Z5",
        address="12 MG Road, Bengaluru 560001",
        phone="+91 98450 00000",
        email="hello@acme.example",
        website="acme.example",
        signatory=Signatory(name="R. Rao", title="Proprietor"),
    )


@pytest.fixture
def estimate() -> Estimate:
    return Estimate(
        number="Q-100",
        issue_date="2024-03-05",
        valid_until="2024-04-05",
        client=ClientContact(
            name="Globex Ltd",
            contact_person="M. Iyer",
            address="4 Residency Road, Bengaluru",
            phone="080 1234 5678",
            email="accounts@globex.example",
        ),
        project_description="Supply and installation of modular shelving.",
        items=[LineItem(description="Shelf unit", quantity=2, unit_price=Decimal("100"))],
        tax_percentage=Decimal("18"),
        terms_and_conditions="50% advance. Balance on delivery.",
        closing_note="Thank you for the opportunity.",
    )


@pytest.fixture
def bill() -> Transaction:
    return Transaction(
        number="B-7",
        issue_date="2024-03-06",
        variant=TransactionVariant.BILL,
        customer=CustomerContact(name="Walk-in", phone="99000 11111"),
        items=[
            LineItem(description="Paint", quantity=1, unit_price=Decimal("50")),
            LineItem(description="Brush", quantity=1, unit_price=Decimal("30")),
        ],
        discount=Decimal("5"),
        payment_mode=PaymentMode.UPI,
        payment_reference="UPI-REF-42",
        bottom_message="Goods once sold will not be taken back.",
    )


@pytest.fixture
def long_estimate() -> Estimate:
    """An estimate whose item table needs several pages."""

    items = [
        LineItem(description=f"Item number {i}", quantity=1, unit_price=Decimal("10"))
        for i in range(1, 81)
    ]
    return Estimate(
        number="Q-LONG",
        issue_date="2024-03-05",
        items=items,
        tax_percentage=Decimal("18"),
        terms_and_conditions="Prices are valid for thirty days.",
    )

