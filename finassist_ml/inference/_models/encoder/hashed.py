"""Hashed bag-of-words encoder.

Stands in for a real embedding model when no provider is configured. Each
token is hashed into one of ``dimension`` buckets and the bucket counts are
L2-normalized. Output depends only on the text, so it is reproducible across
processes and machines.
"""

from __future__ import annotations

import hashlib
import logging
import re

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

DEFAULT_DIMENSION = 384

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def tokenize(text: str) -> list[str]:
    """Lower-case alphanumeric tokens; punctuation splits words."""
    return _NON_ALNUM.sub(" ", (text or "").lower()).split()


def token_bucket(token: str, dimension: int) -> int:
    """Bucket index for a token: first 32 bits of its MD5, modulo dimension."""
    digest = hashlib.md5(token.encode("utf-8"), usedforsecurity=False).hexdigest()
    return int(digest[:8], 16) % dimension


class HashedEmbeddingEncoder:
    """Deterministic bag-of-words encoder using the hashing trick."""

    def __init__(self, dimension: int = DEFAULT_DIMENSION):
        if dimension <= 0:
            msg = f"Embedding dimension must be positive, got {dimension}"
            raise ValueError(msg)
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimension

    @property
    def model_name(self) -> str:
        """Return the model identifier."""
        return f"hashed-bow-md5-{self._dimension}"

    def encode_one(self, text: str) -> NDArray[np.float32]:
        """Encode a single text to a normalized vector."""
        vector = np.zeros(self._dimension, dtype=np.float32)
        for token in tokenize(text):
            vector[token_bucket(token, self._dimension)] += 1.0

        # Zero vector (no tokens) stays zero
        magnitude = float(np.linalg.norm(vector)) or 1.0
        return vector / np.float32(magnitude)

    def encode(self, texts: list[str]) -> NDArray[np.float32]:
        """Encode texts to embeddings.

        Parameters
        ----------
        texts
            List of texts to encode.

        Returns
        -------
        NDArray[np.float32]
            Embeddings with shape (n_texts, dimension).
        """
        if not texts:
            return np.zeros((0, self._dimension), dtype=np.float32)
        return np.vstack([self.encode_one(text) for text in texts])

    def warmup(self) -> None:
        """Nothing to load; kept for protocol compatibility."""
        logger.debug("Hashed encoder ready (dim=%d)", self._dimension)
