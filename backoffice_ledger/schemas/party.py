"""
Pydantic schemas for customers and suppliers.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class PartyCreate(BaseModel):
    """Register a customer or supplier, optionally with an opening balance."""
    name: str = Field(min_length=1, max_length=150)
    mobile_no: str | None = Field(default=None, max_length=30)
    # Signed as debit - credit for both party types. Positive: the
    # party owes us. Negative: we owe the party, so a supplier payable
    # of 250 is opened as -250.
    opening_balance: Decimal = Field(default=Decimal("0"), decimal_places=4)
    opening_date: date | None = None


class PartyResponse(BaseModel):
    id: int
    name: str
    mobile_no: str | None
    current_balance: Decimal
    created_at: datetime

    model_config = {"from_attributes": True}
