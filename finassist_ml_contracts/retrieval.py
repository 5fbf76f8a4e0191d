"""Retrieval corpus sources and search results."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

# -----------------------------------------------------------------------------
# Corpus sources
# -----------------------------------------------------------------------------


class KnowledgeArticle(BaseModel):
    """Static financial-knowledge article."""

    id: str = Field(..., min_length=1)
    title: str
    content: str
    category: str | None = None
    keywords: list[str] = Field(default_factory=list)


class AccountSnapshot(BaseModel):
    """Point-in-time view of a linked account, as stored by the app."""

    account_id: str = Field(..., min_length=1)
    name: str
    official_name: str | None = None
    type: str
    subtype: str | None = None
    current_balance: Decimal | None = None
    available_balance: Decimal | None = None
    credit_limit: Decimal | None = None
    currency: str = "USD"


class TransactionSnapshot(BaseModel):
    """Point-in-time view of a stored transaction."""

    transaction_id: str = Field(..., min_length=1)
    name: str
    merchant_name: str | None = None
    amount: Decimal
    booking_date: date | None = None
    category: str | None = None
    account_name: str | None = None


# -----------------------------------------------------------------------------
# Search output
# -----------------------------------------------------------------------------


class SearchHit(BaseModel):
    """Document summary returned for prompt augmentation."""

    title: str
    content: str
