"""Semantic document model.

A :data:`Document` is a tagged union of :class:`Estimate` (a quotation) and
:class:`Transaction` (an invoice, receipt or bill).  The ``kind`` field is the
discriminator; fields that only make sense for one shape live only on that
shape so that renderers cannot read a field the active variant lacks.

All models are frozen.  Line totals are derived, never stored.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, condecimal, constr

Money = condecimal(gt=Decimal(0))
NonNegative = condecimal(ge=Decimal(0))


class TransactionVariant(str, Enum):
    """Post-sale document flavours sharing the :class:`Transaction` shape."""

    INVOICE = "Invoice"
    RECEIPT = "Receipt"
    BILL = "Bill"


class PaymentMode(str, Enum):
    """How a transaction was settled."""

    CASH = "Cash"
    UPI = "UPI"
    BANK_TRANSFER = "Bank Transfer"


class LineItem(BaseModel):
    """A single priced row of a document."""

    id: int | str | None = None
    description: str = ""
    quantity: PositiveInt
    unit_price: Money

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def line_total(self) -> Decimal:
        """Return ``quantity * unit_price`` without rounding."""

        return Decimal(self.quantity) * self.unit_price


class ClientContact(BaseModel):
    """Recipient block of a quotation."""

    name: str = ""
    contact_person: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)


class CustomerContact(BaseModel):
    """Recipient block of an invoice, receipt or bill."""

    name: str = ""
    phone: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)


class _DocumentBase(BaseModel):
    number: constr(strip_whitespace=True, min_length=1)
    issue_date: date | None = None
    items: list[LineItem]
    discount: NonNegative = Decimal(0)

    model_config = ConfigDict(extra="forbid", frozen=True)


class Estimate(_DocumentBase):
    """Pre-sale quotation with validity date, tax line and terms."""

    kind: Literal["estimate"] = "estimate"
    valid_until: date | None = None
    client: ClientContact = ClientContact()
    project_description: str = ""
    tax_percentage: NonNegative = Decimal(0)
    terms_and_conditions: str = ""
    closing_note: str = ""


class Transaction(_DocumentBase):
    """Invoice, receipt or bill; no tax line."""

    kind: Literal["transaction"] = "transaction"
    variant: TransactionVariant
    customer: CustomerContact = CustomerContact()
    payment_mode: PaymentMode = PaymentMode.CASH
    payment_reference: str = ""
    bottom_message: str = ""


Document = Annotated[Union[Estimate, Transaction], Field(discriminator="kind")]


class Signatory(BaseModel):
    """Person who signs on behalf of the company."""

    name: str = ""
    title: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)


class CompanyProfile(BaseModel):
    """Issuing company.  Images are embedded data URLs or bare base64."""

    name: str = ""
    logo: str | None = None
    tax_id: str | None = None
    address: str | None = None
    phone: str = ""
    email: str = ""
    website: str | None = None
    upi_id: str | None = None
    signatory: Signatory = Signatory()
    signature: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


__all__ = [
    "ClientContact",
    "CompanyProfile",
    "CustomerContact",
    "Document",
    "Estimate",
    "LineItem",
    "PaymentMode",
    "Signatory",
    "Transaction",
    "TransactionVariant",
]
