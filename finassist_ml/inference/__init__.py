"""Text embedding models."""

from ._models import (
    Encoder,
    HashedEmbeddingEncoder,
    RemoteEmbeddingEncoder,
    create_encoder,
)

__all__ = [
    "Encoder",
    "HashedEmbeddingEncoder",
    "RemoteEmbeddingEncoder",
    "create_encoder",
]
