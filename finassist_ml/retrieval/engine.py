"""Retrieval engine: vector search with a keyword fallback."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import time
from enum import Enum
from typing import TYPE_CHECKING

from finassist_ml_contracts import SearchHit

from .keyword_scorer import keyword_search

if TYPE_CHECKING:
    from finassist_ml.inference import Encoder
    from finassist_ml.storage.protocols import VectorIndex

    from .documents import Corpus

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 3


class IndexState(str, Enum):
    UNINITIALIZED = "uninitialized"
    BUILDING = "building"
    READY = "ready"


def compute_index_version(corpus_version: str, model_name: str, dimension: int) -> str:
    """Identity of an embedding set: corpus content plus encoder identity."""
    key = f"{corpus_version}|{model_name}|{dimension}"
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


class RetrievalEngine:
    """Rank corpus documents against free-text queries.

    Uses the vector index when both an encoder and an index are configured.
    The index is built lazily on first use and shared by concurrent callers.
    Any failure on the vector path invalidates the build and the call is
    answered by the keyword scorer instead, so ``search`` never raises.
    """

    def __init__(
        self,
        corpus: Corpus,
        encoder: Encoder | None = None,
        index: VectorIndex | None = None,
        default_top_k: int = DEFAULT_TOP_K,
    ):
        self._corpus = corpus
        self._encoder = encoder
        self._index = index
        self._default_top_k = default_top_k
        self._build_task: asyncio.Task[None] | None = None

    @property
    def corpus(self) -> Corpus:
        return self._corpus

    @property
    def mode(self) -> str:
        """``"vector"`` when an encoder and an index are configured, else ``"keyword"``."""
        if self._encoder is not None and self._index is not None:
            return "vector"
        return "keyword"

    @property
    def state(self) -> IndexState:
        task = self._build_task
        if task is None:
            return IndexState.UNINITIALIZED
        if not task.done():
            return IndexState.BUILDING
        if task.cancelled() or task.exception() is not None:
            return IndexState.UNINITIALIZED
        return IndexState.READY

    @property
    def index_version(self) -> str | None:
        if self._encoder is None:
            return None
        return compute_index_version(
            self._corpus.version, self._encoder.model_name, self._encoder.dimension
        )

    async def search(self, query: str, top_k: int | None = None) -> list[SearchHit]:
        """Return at most ``top_k`` snippets relevant to ``query``.

        Parameters
        ----------
        query
            Free-text query, typically the user's chat message.
        top_k
            Maximum number of hits. Defaults to the configured value.

        Returns
        -------
        list[SearchHit]
            Best match first. Empty for blank queries or ``top_k <= 0``.
        """
        k = self._default_top_k if top_k is None else top_k
        if k <= 0 or not query or not query.strip() or len(self._corpus) == 0:
            return []

        if self.mode == "vector":
            try:
                return await self._vector_search(query, k)
            except Exception as e:
                logger.warning(
                    "Vector index unavailable (%s: %s), using keyword search",
                    type(e).__name__,
                    e,
                )

        return self.keyword_search(query, k)

    def keyword_search(self, query: str, top_k: int | None = None) -> list[SearchHit]:
        k = self._default_top_k if top_k is None else top_k
        return keyword_search(query, self._corpus, k)

    async def warmup(self) -> bool:
        """Build the vector index eagerly. Returns True when it is ready."""
        if self.mode != "vector":
            logger.info("Retrieval engine in keyword mode, nothing to warm up")
            return False
        task: asyncio.Task[None] | None = None
        try:
            task = self._get_build_task()
            await asyncio.shield(task)
        except Exception as e:
            logger.warning("Index warmup failed (%s: %s)", type(e).__name__, e)
            if task is not None:
                self._discard(task)
            return False
        return True

    def invalidate(self) -> None:
        """Forget the current index build so the next search rebuilds it."""
        if self._build_task is not None:
            logger.info("Vector index invalidated")
        self._build_task = None

    # -------------------------------------------------------------------------
    # Vector path
    # -------------------------------------------------------------------------

    def _get_build_task(self) -> asyncio.Task[None]:
        if self._build_task is None:
            self._build_task = asyncio.create_task(self._build_index())
        return self._build_task

    def _discard(self, task: asyncio.Task[None]) -> None:
        # A newer build may already have replaced the failed one
        if self._build_task is task:
            self._build_task = None

    async def _vector_search(self, query: str, top_k: int) -> list[SearchHit]:
        assert self._encoder is not None and self._index is not None
        task = self._get_build_task()
        try:
            await asyncio.shield(task)
            embeddings = await asyncio.to_thread(self._encoder.encode, [query])
            ranked = await self._index.query(self.index_version, embeddings[0], top_k)
        except Exception:
            self._discard(task)
            raise

        hits = []
        for document_id, score in ranked:
            # No shared terms with the query
            if score <= 0:
                continue
            doc = self._corpus.get_by_id(document_id)
            if doc is not None:
                hits.append(SearchHit(title=doc.title, content=doc.content))
        return hits

    async def _build_index(self) -> None:
        assert self._encoder is not None and self._index is not None
        version = self.index_version
        n_docs = len(self._corpus)

        existing = await self._index.count(version)
        if existing == n_docs:
            logger.info("Reusing vector index %s (%d documents)", version[:12], n_docs)
            return

        start = time.perf_counter()
        texts = [doc.embedding_text() for doc in self._corpus]
        embeddings = await asyncio.to_thread(self._encoder.encode, texts)
        await self._index.build(version, [doc.id for doc in self._corpus], embeddings)
        logger.info(
            "Built vector index %s: %d documents, dim=%d, model=%s in %.1fms",
            version[:12],
            n_docs,
            self._encoder.dimension,
            self._encoder.model_name,
            (time.perf_counter() - start) * 1000,
        )
