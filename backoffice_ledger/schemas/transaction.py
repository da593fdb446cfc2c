"""
Pydantic schemas for source transactions.

Invoices, purchase orders and payments share one request shape;
payment_method is ignored for documents that are not payments.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class TransactionCreate(BaseModel):
    party_id: int
    reference_no: str = Field(min_length=1, max_length=50)
    transaction_date: date
    amount: Decimal = Field(gt=0, decimal_places=4)
    payment_method: str | None = Field(default=None, max_length=30)
    notes: str | None = Field(default=None, max_length=255)


class TransactionResponse(BaseModel):
    id: int
    party_id: int
    reference_no: str
    transaction_date: date
    amount: Decimal
    payment_method: str | None = None
    previous_balance: Decimal | None
    final_balance: Decimal | None
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class TransactionDeleteResponse(BaseModel):
    id: int
    party_id: int
    party_balance: Decimal
