"""Assistant core contracts.

Plain data models exchanged between the application layer (transaction
ingestion, chat controller) and the categorization / retrieval core.
"""

from finassist_ml_contracts.categorize import (
    CategorizedTransaction,
    TransactionInput,
)
from finassist_ml_contracts.retrieval import (
    AccountSnapshot,
    KnowledgeArticle,
    SearchHit,
    TransactionSnapshot,
)

__all__ = [
    # Categorization
    "TransactionInput",
    "CategorizedTransaction",
    # Retrieval corpus sources
    "KnowledgeArticle",
    "AccountSnapshot",
    "TransactionSnapshot",
    # Retrieval output
    "SearchHit",
]
