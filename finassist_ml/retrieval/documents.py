"""Retrievable documents and the immutable corpus they form."""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from importlib import resources
from pathlib import Path

from finassist_ml_contracts import AccountSnapshot, KnowledgeArticle, TransactionSnapshot
from pydantic import TypeAdapter

from .keywords import extract_keywords

logger = logging.getLogger(__name__)

_ARTICLES = TypeAdapter(list[KnowledgeArticle])


class DocumentType(str, Enum):
    KNOWLEDGE = "knowledge"
    ACCOUNT = "account"
    TRANSACTION = "transaction"


@dataclass(frozen=True)
class Document:
    """A unit of retrievable text with its metadata."""

    id: str
    title: str
    content: str
    type: DocumentType
    category: str | None = None
    keywords: frozenset[str] = field(default_factory=frozenset)

    def embedding_text(self) -> str:
        """Text fed to the encoder for this document."""
        parts = [self.title, self.content]
        if self.keywords:
            parts.append(" ".join(sorted(self.keywords)))
        return "\n".join(parts)


def _keywords(words: Iterable[str | None]) -> frozenset[str]:
    return frozenset(w.strip().lower() for w in words if w and w.strip())


def _category(value: str | None) -> str | None:
    """Categories are stored lower-cased so lookups ignore casing."""
    if value is None or not value.strip():
        return None
    return value.strip().lower()


def _money(value: Decimal | None, currency: str = "USD") -> str:
    if value is None:
        return "n/a"
    symbol = "$" if currency == "USD" else f"{currency} "
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


# -----------------------------------------------------------------------------
# Converters
# -----------------------------------------------------------------------------


def document_from_article(article: KnowledgeArticle) -> Document:
    return Document(
        id=article.id,
        title=article.title,
        content=article.content,
        type=DocumentType.KNOWLEDGE,
        category=_category(article.category),
        keywords=_keywords(article.keywords),
    )


def document_from_account(account: AccountSnapshot) -> Document:
    kind = " ".join(p for p in (account.subtype, account.type) if p)
    title = f"{account.name} ({kind})"

    parts = [
        f"{account.official_name or account.name} is a {kind} account.",
        f"Current balance: {_money(account.current_balance, account.currency)}.",
    ]
    if account.available_balance is not None:
        parts.append(
            f"Available balance: {_money(account.available_balance, account.currency)}."
        )
    if account.credit_limit is not None:
        parts.append(f"Credit limit: {_money(account.credit_limit, account.currency)}.")
    content = " ".join(parts)

    return Document(
        id=f"account:{account.account_id}",
        title=title,
        content=content,
        type=DocumentType.ACCOUNT,
        category="accounts",
        keywords=_keywords(
            [account.type, account.subtype, "account", "balance", *extract_keywords(title)]
        ),
    )


def document_from_transaction(txn: TransactionSnapshot) -> Document:
    # Aggregator convention: negative amount = money in
    direction = "received" if txn.amount < 0 else "spent"
    title = f"{txn.name} {_money(abs(txn.amount))}"

    parts = [f"{_money(abs(txn.amount))} {direction}"]
    if txn.merchant_name and txn.merchant_name != txn.name:
        parts.append(f"at {txn.merchant_name} ({txn.name})")
    else:
        parts.append(f"at {txn.name}")
    if txn.booking_date is not None:
        parts.append(f"on {txn.booking_date.isoformat()}")
    if txn.account_name:
        parts.append(f"from {txn.account_name}")
    content = " ".join(parts) + "."
    if txn.category:
        content += f" Category: {txn.category}."

    return Document(
        id=f"transaction:{txn.transaction_id}",
        title=title,
        content=content,
        type=DocumentType.TRANSACTION,
        category=_category(txn.category),
        keywords=_keywords(
            [
                txn.category,
                txn.merchant_name,
                "transaction",
                *extract_keywords(f"{txn.name} {txn.merchant_name or ''}"),
            ]
        ),
    )


# -----------------------------------------------------------------------------
# Corpus
# -----------------------------------------------------------------------------


class Corpus:
    """Immutable ordered collection of documents.

    Order is knowledge articles, then accounts, then transactions, each in
    the order supplied. Ranking ties resolve to this order.
    """

    def __init__(self, documents: Iterable[Document]):
        self._documents: tuple[Document, ...] = tuple(documents)
        self._by_id: dict[str, Document] = {}
        for doc in self._documents:
            if doc.id in self._by_id:
                msg = f"Duplicate document id: {doc.id}"
                raise ValueError(msg)
            self._by_id[doc.id] = doc
        self._version: str | None = None

    @classmethod
    def build(
        cls,
        knowledge: Iterable[KnowledgeArticle] = (),
        accounts: Iterable[AccountSnapshot] = (),
        transactions: Iterable[TransactionSnapshot] = (),
    ) -> Corpus:
        documents = [document_from_article(a) for a in knowledge]
        documents.extend(document_from_account(a) for a in accounts)
        documents.extend(document_from_transaction(t) for t in transactions)
        corpus = cls(documents)
        logger.info(
            "Corpus built: %d documents (%s)",
            len(corpus),
            ", ".join(f"{t.value}={n}" for t, n in corpus.type_counts().items()),
        )
        return corpus

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    @property
    def version(self) -> str:
        """Content digest; changes whenever any document changes."""
        if self._version is None:
            digest = hashlib.sha256()
            for doc in self._documents:
                keywords = " ".join(sorted(doc.keywords))
                for part in (doc.id, doc.title, doc.content, keywords):
                    digest.update(part.encode("utf-8"))
                    digest.update(b"\x1f")
                digest.update(b"\x1e")
            self._version = digest.hexdigest()
        return self._version

    def get_by_id(self, document_id: str) -> Document | None:
        return self._by_id.get(document_id)

    def get_by_category(self, category: str) -> list[Document]:
        """Documents of a category, compared case-insensitively."""
        wanted = _category(category)
        if wanted is None:
            return []
        return [doc for doc in self._documents if doc.category == wanted]

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(d.category for d in self._documents if d.category))

    def type_counts(self) -> dict[DocumentType, int]:
        counts = {t: 0 for t in DocumentType}
        for doc in self._documents:
            counts[doc.type] += 1
        return counts


def load_knowledge_articles(path: Path | None = None) -> list[KnowledgeArticle]:
    """Load knowledge articles from ``path`` or the packaged default file."""
    if path is None:
        raw = (
            resources.files("finassist_ml.data")
            .joinpath("financial_knowledge.json")
            .read_text(encoding="utf-8")
        )
    else:
        raw = path.read_text(encoding="utf-8")
    articles = _ARTICLES.validate_python(json.loads(raw))
    logger.debug("Loaded %d knowledge articles from %s", len(articles), path or "package")
    return articles
