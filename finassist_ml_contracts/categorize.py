"""Categorization request/response models."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionInput(BaseModel):
    """Transaction data for categorization.

    Amounts follow the aggregator convention: positive values are money
    leaving the account, negative values are money coming in.
    """

    # Records from the ingestion layer carry many more fields; keep them so
    # annotated records can be handed back unchanged.
    model_config = ConfigDict(extra="allow")

    name: str = ""
    merchant_name: str | None = None
    description: str | None = None
    amount: Decimal = Decimal("0")

    @field_validator("name", mode="before")
    @classmethod
    def none_name_to_empty(cls, v: str | None) -> str:
        return v or ""


class CategorizedTransaction(TransactionInput):
    """Transaction annotated with its assigned category."""

    category: str = Field(..., min_length=1)
