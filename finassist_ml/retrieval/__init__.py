"""Document retrieval over knowledge articles and account snapshots."""

from .context import format_context
from .documents import (
    Corpus,
    Document,
    DocumentType,
    document_from_account,
    document_from_article,
    document_from_transaction,
    load_knowledge_articles,
)
from .engine import IndexState, RetrievalEngine, compute_index_version
from .keyword_scorer import keyword_search, rank_documents, score_document
from .keywords import STOP_WORDS, extract_keywords

__all__ = [
    "STOP_WORDS",
    "Corpus",
    "Document",
    "DocumentType",
    "IndexState",
    "RetrievalEngine",
    "compute_index_version",
    "document_from_account",
    "document_from_article",
    "document_from_transaction",
    "extract_keywords",
    "format_context",
    "keyword_search",
    "load_knowledge_articles",
    "rank_documents",
    "score_document",
]
