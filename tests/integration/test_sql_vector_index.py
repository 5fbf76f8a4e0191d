"""Integration tests for the SQL vector index on in-memory SQLite."""

import numpy as np
import pytest
from finassist_ml.exceptions import IndexUnavailableError
from finassist_ml.inference import HashedEmbeddingEncoder
from finassist_ml.retrieval import Corpus, IndexState, RetrievalEngine
from finassist_ml.storage import SqlVectorIndex
from sqlalchemy.ext.asyncio import AsyncEngine


def _unit(*values: float) -> np.ndarray:
    vector = np.asarray(values, dtype=np.float32)
    return vector / np.linalg.norm(vector)


@pytest.fixture
def index(sqlite_engine: AsyncEngine) -> SqlVectorIndex:
    return SqlVectorIndex(sqlite_engine)


class TestSqlVectorIndex:
    """Tests for storage and ranking."""

    async def test_round_trip(self, index: SqlVectorIndex) -> None:
        """Stored vectors rank by cosine similarity."""
        embeddings = np.vstack([_unit(1, 0, 0), _unit(0, 1, 0), _unit(1, 1, 0)])
        await index.build("v1", ["a", "b", "c"], embeddings)

        assert await index.count("v1") == 3
        ranked = await index.query("v1", _unit(1, 0.1, 0), top_k=2)

        assert [doc_id for doc_id, _ in ranked] == ["a", "c"]
        assert ranked[0][1] == pytest.approx(float(_unit(1, 0, 0) @ _unit(1, 0.1, 0)))

    async def test_matrix_keeps_position_order(self, index: SqlVectorIndex) -> None:
        """Rows come back in corpus order with their exact values."""
        embeddings = np.vstack([_unit(0, 0, 1), _unit(1, 0, 0)])
        await index.build("v1", ["z", "y"], embeddings)

        matrix, ids = await index.get_embeddings_matrix("v1")

        assert ids == ["z", "y"]
        np.testing.assert_array_equal(matrix, embeddings)

    async def test_ties_keep_corpus_order(self, index: SqlVectorIndex) -> None:
        """Equal similarity resolves to the earlier position."""
        same = _unit(1, 1, 0)
        await index.build("v1", ["first", "second", "third"], np.vstack([same, same, same]))

        ranked = await index.query("v1", same, top_k=3)

        assert [doc_id for doc_id, _ in ranked] == ["first", "second", "third"]

    async def test_rebuild_replaces_version(self, index: SqlVectorIndex) -> None:
        """Building a version again replaces its rows."""
        await index.build("v1", ["a", "b"], np.vstack([_unit(1, 0), _unit(0, 1)]))
        await index.build("v1", ["d"], np.vstack([_unit(1, 0)]))

        assert await index.count("v1") == 1
        assert await index.query("v1", _unit(1, 0), top_k=5) == [("d", pytest.approx(1.0))]

    async def test_build_prunes_other_versions(self, index: SqlVectorIndex) -> None:
        """Only the most recently built version stays stored."""
        for i in range(5):
            await index.build(f"v{i}", ["a", "b"], np.vstack([_unit(1, 0), _unit(0, 1)]))

        assert [await index.count(f"v{i}") for i in range(5)] == [0, 0, 0, 0, 2]
        with pytest.raises(IndexUnavailableError):
            await index.query("v0", _unit(1, 0), top_k=1)

    async def test_unknown_version_raises(self, index: SqlVectorIndex) -> None:
        """Querying an empty version is an index failure."""
        assert await index.count("missing") == 0
        with pytest.raises(IndexUnavailableError):
            await index.query("missing", _unit(1, 0), top_k=1)

    async def test_dimension_mismatch_raises(self, index: SqlVectorIndex) -> None:
        """Query width must match the stored width."""
        await index.build("v1", ["a"], np.vstack([_unit(1, 0, 0)]))
        with pytest.raises(IndexUnavailableError):
            await index.query("v1", _unit(1, 0), top_k=1)

    async def test_shape_mismatch_on_build_raises(self, index: SqlVectorIndex) -> None:
        """One row per document id."""
        with pytest.raises(IndexUnavailableError):
            await index.build("v1", ["a", "b"], np.vstack([_unit(1, 0)]))


class TestEngineWithSqlIndex:
    """End-to-end retrieval over the SQL index."""

    async def test_search_and_reuse(
        self, corpus: Corpus, sqlite_engine: AsyncEngine
    ) -> None:
        """A second engine reuses the stored vectors of the same corpus."""
        encoder = HashedEmbeddingEncoder()
        first = RetrievalEngine(corpus, encoder=encoder, index=SqlVectorIndex(sqlite_engine))

        hits = await first.search("credit card utilization limit", top_k=1)

        assert [h.title for h in hits] == ["Credit Card Utilization"]
        assert first.state is IndexState.READY

        index = SqlVectorIndex(sqlite_engine)
        assert await index.count(first.index_version) == len(corpus)
        second = RetrievalEngine(corpus, encoder=encoder, index=index)
        assert await second.warmup() is True
        assert await index.count(first.index_version) == len(corpus)
