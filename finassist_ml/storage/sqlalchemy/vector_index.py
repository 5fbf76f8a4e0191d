"""SQL-backed persistent vector index."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from finassist_ml.exceptions import IndexUnavailableError

from .base import Base
from .engine import create_session_maker
from .tables import DocumentEmbeddingTable

logger = logging.getLogger(__name__)


class SqlVectorIndex:
    """Vector index storing float32 embeddings as binary rows.

    Vectors are expected to be L2-normalized, so the inner product with the
    query is the cosine similarity. Ranking loads the whole matrix for a
    version, which is fine for corpora of a few thousand documents.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        session_maker: async_sessionmaker[AsyncSession] | None = None,
    ):
        self._engine = engine
        self._session_maker = session_maker or create_session_maker(engine)
        self._schema_ready = False
        self._schema_lock = asyncio.Lock()

    async def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        async with self._schema_lock:
            if self._schema_ready:
                return
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            self._schema_ready = True
            logger.debug("Vector index schema ready")

    async def count(self, version: str) -> int:
        """Count stored vectors for an index version."""
        await self._ensure_schema()
        stmt = (
            select(func.count())
            .select_from(DocumentEmbeddingTable)
            .where(DocumentEmbeddingTable.index_version == version)
        )
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            return result.scalar() or 0

    async def build(
        self,
        version: str,
        document_ids: Sequence[str],
        embeddings: NDArray[np.float32],
    ) -> None:
        """Store the vectors of ``version`` in a single transaction.

        Earlier rows of ``version`` are replaced and rows of every other
        version are pruned, so the table holds one corpus at a time.
        """
        if embeddings.ndim != 2 or embeddings.shape[0] != len(document_ids):
            msg = (
                f"Embedding matrix shape {embeddings.shape} does not match "
                f"{len(document_ids)} documents"
            )
            raise IndexUnavailableError(msg)

        await self._ensure_schema()
        dimension = int(embeddings.shape[1])
        rows = [
            DocumentEmbeddingTable(
                index_version=version,
                position=position,
                document_id=document_id,
                embedding=vector.astype(np.float32).tobytes(),
                dimension=dimension,
            )
            for position, (document_id, vector) in enumerate(
                zip(document_ids, embeddings, strict=True)
            )
        ]

        async with self._session_maker() as session, session.begin():
            # Only the newest corpus version is kept
            result = await session.execute(
                delete(DocumentEmbeddingTable).where(
                    DocumentEmbeddingTable.index_version != version
                )
            )
            if result.rowcount > 0:
                logger.info(
                    "Pruned %d vectors of stale index versions", result.rowcount
                )
            await session.execute(
                delete(DocumentEmbeddingTable).where(
                    DocumentEmbeddingTable.index_version == version
                )
            )
            session.add_all(rows)

        logger.debug("Stored %d vectors for index %s", len(rows), version[:12])

    async def get_embeddings_matrix(
        self, version: str
    ) -> tuple[NDArray[np.float32], list[str]]:
        """Load all vectors of a version as a matrix ordered by position.

        Returns
        -------
        tuple[NDArray[np.float32], list[str]]
            The (n, dimension) matrix and the document ids of its rows.

        Raises
        ------
        IndexUnavailableError
            If the version holds no vectors or rows disagree on dimension.
        """
        await self._ensure_schema()
        stmt = (
            select(DocumentEmbeddingTable)
            .where(DocumentEmbeddingTable.index_version == version)
            .order_by(DocumentEmbeddingTable.position)
        )
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            rows = result.scalars().all()

        if not rows:
            msg = f"No vectors stored for index {version[:12]}"
            raise IndexUnavailableError(msg)

        dimensions = {row.dimension for row in rows}
        if len(dimensions) != 1:
            msg = f"Index {version[:12]} mixes dimensions {sorted(dimensions)}"
            raise IndexUnavailableError(msg)

        matrix = np.vstack([np.frombuffer(row.embedding, dtype=np.float32) for row in rows])
        return matrix, [row.document_id for row in rows]

    async def query(
        self,
        version: str,
        embedding: NDArray[np.float32],
        top_k: int,
    ) -> list[tuple[str, float]]:
        """Rank stored vectors by cosine similarity to ``embedding``.

        Ties keep corpus order.
        """
        if top_k <= 0:
            return []

        matrix, document_ids = await self.get_embeddings_matrix(version)
        query = np.asarray(embedding, dtype=np.float32).reshape(-1)
        if query.shape[0] != matrix.shape[1]:
            msg = (
                f"Query dimension {query.shape[0]} does not match "
                f"index dimension {matrix.shape[1]}"
            )
            raise IndexUnavailableError(msg)

        scores = matrix @ query
        order = np.argsort(-scores, kind="stable")[:top_k]
        return [(document_ids[i], float(scores[i])) for i in order]

    async def close(self) -> None:
        await self._engine.dispose()
