"""Vector index storage.

This module provides:
- `VectorIndex`: the protocol the retrieval engine depends on
- `sqlalchemy`: SQL persistence (tables, engine helpers, `SqlVectorIndex`)
"""

from .factory import create_vector_index
from .protocols import VectorIndex
from .sqlalchemy import DocumentEmbeddingTable, SqlVectorIndex

__all__ = [
    "DocumentEmbeddingTable",
    "SqlVectorIndex",
    "VectorIndex",
    "create_vector_index",
]
