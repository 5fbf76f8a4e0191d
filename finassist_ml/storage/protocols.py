"""Storage layer protocols."""

from collections.abc import Sequence
from typing import Protocol

import numpy as np
from numpy.typing import NDArray


class VectorIndex(Protocol):
    """Persistent store of document embeddings, keyed by index version."""

    async def count(self, version: str) -> int:
        """Number of vectors stored for ``version``."""
        ...

    async def build(
        self,
        version: str,
        document_ids: Sequence[str],
        embeddings: NDArray[np.float32],
    ) -> None:
        """Replace all vectors for ``version``; row i belongs to document_ids[i]."""
        ...

    async def query(
        self,
        version: str,
        embedding: NDArray[np.float32],
        top_k: int,
    ) -> list[tuple[str, float]]:
        """Return (document_id, cosine similarity) pairs, best first."""
        ...

    async def close(self) -> None:
        """Release connections."""
        ...
