"""Encoder module for text embeddings.

Two interchangeable backends behind one protocol:
- Remote provider (OpenAI-compatible ``/embeddings`` API), used when an API
  key is configured
- Hashed bag-of-words, deterministic and dependency-free, used otherwise

Usage:
    from finassist_ml.inference._models import create_encoder

    encoder = create_encoder(settings)
    embeddings = encoder.encode(["text1", "text2"])
"""

from .factory import create_encoder
from .hashed import HashedEmbeddingEncoder
from .protocol import Encoder
from .remote import RemoteEmbeddingEncoder

__all__ = [
    "Encoder",
    "HashedEmbeddingEncoder",
    "RemoteEmbeddingEncoder",
    "create_encoder",
]
