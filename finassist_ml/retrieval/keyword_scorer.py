"""Deterministic keyword scorer used when the vector index is unavailable."""

from __future__ import annotations

from collections.abc import Iterable

from finassist_ml_contracts import SearchHit

from .documents import Document

TITLE_MATCH = 10
CONTENT_MATCH = 5
KEYWORD_MATCH = 3
TOKEN_OVERLAP = 1
CATEGORY_MATCH = 2

# Query tokens must be longer than this to earn the overlap or stem bonus
_MIN_TOKEN_LENGTH = 3


def _stem(keyword: str) -> str:
    """Keyword without its last letter, e.g. "emergenc" for "emergency"."""
    return keyword[:-1] if len(keyword) > 4 else keyword


def score_document(query: str, document: Document) -> int:
    """Score one document against a query.

    Parameters
    ----------
    query
        Free-text query; compared case-insensitively.
    document
        Candidate document.

    Returns
    -------
    int
        Non-negative relevance score. Zero means no match.
    """
    q = query.lower()
    tokens = [t for t in q.split() if len(t) > _MIN_TOKEN_LENGTH]
    score = 0

    if q in document.title.lower():
        score += TITLE_MATCH
    if q in document.content.lower():
        score += CONTENT_MATCH

    for keyword in document.keywords:
        kw = keyword.lower()
        # Inflected query words ("emergencies") still hit the keyword
        stem = _stem(kw)
        if kw in q or any(token.startswith(stem) for token in tokens):
            score += KEYWORD_MATCH
        score += TOKEN_OVERLAP * sum(1 for token in tokens if token in kw)

    if document.category and document.category.lower() in q:
        score += CATEGORY_MATCH

    return score


def rank_documents(query: str, documents: Iterable[Document]) -> list[tuple[Document, int]]:
    """All matching documents with their scores, best first.

    The sort is stable, so equal scores keep their input order.
    """
    scored = [(doc, score_document(query, doc)) for doc in documents]
    matched = [pair for pair in scored if pair[1] > 0]
    matched.sort(key=lambda pair: pair[1], reverse=True)
    return matched


def keyword_search(query: str, documents: Iterable[Document], top_k: int) -> list[SearchHit]:
    """Top-K keyword matches as search hits. Blank queries match nothing."""
    if top_k <= 0 or not query or not query.strip():
        return []
    return [
        SearchHit(title=doc.title, content=doc.content)
        for doc, _ in rank_documents(query, documents)[:top_k]
    ]
