"""SQLAlchemy persistence layer for the vector index."""

from .base import Base
from .engine import create_engine, create_session_maker
from .tables import DocumentEmbeddingTable
from .vector_index import SqlVectorIndex

__all__ = [
    # Engine
    "create_engine",
    "create_session_maker",
    # Tables
    "Base",
    "DocumentEmbeddingTable",
    # Index
    "SqlVectorIndex",
]
