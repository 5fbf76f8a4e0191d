"""Test fixtures for the assistant core."""

import os
from collections.abc import AsyncGenerator, Generator
from decimal import Decimal

import pytest
import pytest_asyncio
from finassist_ml.categorization import Categorizer
from finassist_ml.config.settings import Settings, get_settings
from finassist_ml.retrieval import Corpus
from finassist_ml.storage.sqlalchemy import create_engine
from finassist_ml_contracts import AccountSnapshot, KnowledgeArticle, TransactionSnapshot
from sqlalchemy.ext.asyncio import AsyncEngine


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop FINASSIST_* variables and the cached settings around every test."""
    for key in list(os.environ):
        if key.startswith("FINASSIST_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings without .env file: hashed encoder, no vector index."""
    return Settings(_env_file=None)


@pytest.fixture
def categorizer() -> Categorizer:
    return Categorizer()


@pytest.fixture
def knowledge_articles() -> list[KnowledgeArticle]:
    return [
        KnowledgeArticle(
            id="kb-emergency",
            title="Emergency Fund 101",
            content="Save 3-6 months of expenses",
            category="savings",
            keywords=["emergency", "savings"],
        ),
        KnowledgeArticle(
            id="kb-budget",
            title="Budget Basics",
            content="Track spending by category every week",
            category="budgeting",
            keywords=["budget", "spending"],
        ),
        KnowledgeArticle(
            id="kb-credit",
            title="Credit Card Utilization",
            content="Keep balances below thirty percent of the limit",
            category="credit",
            keywords=["credit", "utilization"],
        ),
    ]


@pytest.fixture
def account_snapshots() -> list[AccountSnapshot]:
    return [
        AccountSnapshot(
            account_id="acc-1",
            name="Student Checking",
            type="depository",
            subtype="checking",
            current_balance=Decimal("842.15"),
            available_balance=Decimal("800.00"),
        ),
    ]


@pytest.fixture
def transaction_snapshots() -> list[TransactionSnapshot]:
    return [
        TransactionSnapshot(
            transaction_id="txn-1",
            name="STARBUCKS #4521",
            merchant_name="Starbucks",
            amount=Decimal("5.75"),
            category="Dining",
            account_name="Student Checking",
        ),
        TransactionSnapshot(
            transaction_id="txn-2",
            name="Payroll Deposit",
            amount=Decimal("-1200.00"),
            category="Income",
        ),
    ]


@pytest.fixture
def corpus(
    knowledge_articles: list[KnowledgeArticle],
    account_snapshots: list[AccountSnapshot],
    transaction_snapshots: list[TransactionSnapshot],
) -> Corpus:
    return Corpus.build(knowledge_articles, account_snapshots, transaction_snapshots)


@pytest_asyncio.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine shared by all sessions of one test."""
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    yield engine
    await engine.dispose()
