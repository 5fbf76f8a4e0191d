"""Prompt context formatting for retrieved snippets."""

from collections.abc import Iterable

from finassist_ml_contracts import SearchHit


def format_context(hits: Iterable[SearchHit]) -> str:
    """Join hits as ``title: content`` blocks separated by blank lines."""
    return "\n\n".join(f"{hit.title}: {hit.content}" for hit in hits)
