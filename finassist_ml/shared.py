"""Process-scoped infrastructure for the assistant core.

Resources here are created once at startup and closed at shutdown. Per-user
account and transaction snapshots go into the corpus at creation time; new
snapshots mean a new infrastructure (or at least a new corpus and engine).
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from finassist_ml.categorization import Categorizer, create_categorizer
from finassist_ml.config.logging_setup import log_settings
from finassist_ml.config.settings import get_settings
from finassist_ml.inference import create_encoder
from finassist_ml.retrieval import Corpus, RetrievalEngine, load_knowledge_articles
from finassist_ml.storage import create_vector_index

if TYPE_CHECKING:
    from finassist_ml_contracts import AccountSnapshot, KnowledgeArticle, TransactionSnapshot

    from finassist_ml.config.settings import Settings
    from finassist_ml.inference import Encoder
    from finassist_ml.storage import VectorIndex

logger = logging.getLogger(__name__)


@dataclass
class AssistantInfrastructure:
    """Resources shared by every request of the process.

    - categorizer: keyword categorizer (stateless)
    - encoder: remote provider or hashed fallback
    - vector_index: persistent index, None when no database is configured
    - corpus / engine: retrieval over knowledge and snapshot documents
    """

    settings: Settings
    categorizer: Categorizer
    encoder: Encoder
    corpus: Corpus
    engine: RetrievalEngine
    vector_index: VectorIndex | None = None

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        accounts: Iterable[AccountSnapshot] = (),
        transactions: Iterable[TransactionSnapshot] = (),
        knowledge: Iterable[KnowledgeArticle] | None = None,
    ) -> AssistantInfrastructure:
        """Create infrastructure from settings.

        Parameters
        ----------
        settings
            Application settings; defaults to the cached environment settings.
        accounts, transactions
            Snapshots serialized into the retrieval corpus.
        knowledge
            Knowledge articles; defaults to ``settings.knowledge_path`` or the
            packaged article file.

        Raises
        ------
        CategoryRulesError
            If a configured category rules file is malformed.
        """
        settings = settings or get_settings()

        categorizer = create_categorizer(settings)

        if knowledge is None:
            knowledge = load_knowledge_articles(settings.knowledge_path)
        corpus = Corpus.build(knowledge, accounts, transactions)

        encoder = create_encoder(settings)
        vector_index = create_vector_index(settings)
        engine = RetrievalEngine(
            corpus,
            encoder=encoder,
            index=vector_index,
            default_top_k=settings.search_top_k,
        )
        logger.info(
            "Assistant core ready: %d categories, %d documents, retrieval=%s",
            len(categorizer.categories),
            len(corpus),
            engine.mode,
        )

        return cls(
            settings=settings,
            categorizer=categorizer,
            encoder=encoder,
            corpus=corpus,
            engine=engine,
            vector_index=vector_index,
        )

    async def aclose(self) -> None:
        """Release the index connections and the provider client."""
        if self.vector_index is not None:
            await self.vector_index.close()
        close = getattr(self.encoder, "close", None)
        if callable(close):
            close()
        logger.debug("Assistant core closed")


@asynccontextmanager
async def open_infrastructure(
    settings: Settings | None = None,
    accounts: Iterable[AccountSnapshot] = (),
    transactions: Iterable[TransactionSnapshot] = (),
    knowledge: Iterable[KnowledgeArticle] | None = None,
    warmup: bool = False,
) -> AsyncGenerator[AssistantInfrastructure, None]:
    """Create infrastructure at startup and close it at shutdown."""
    settings = settings or get_settings()
    log_settings(settings)
    infra = AssistantInfrastructure.create(
        settings, accounts=accounts, transactions=transactions, knowledge=knowledge
    )
    try:
        if warmup:
            await infra.engine.warmup()
        yield infra
    finally:
        await infra.aclose()
