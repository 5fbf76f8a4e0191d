"""Encoder protocol definition."""

from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray


@runtime_checkable
class Encoder(Protocol):
    """Protocol for text embedding encoders.

    Implementations must return L2-normalized rows so that an inner product
    between two embeddings is their cosine similarity.
    """

    @property
    def dimension(self) -> int:
        """Vector width; fixed for the lifetime of the encoder."""
        ...

    @property
    def model_name(self) -> str:
        """Identifier that becomes part of the index version."""
        ...

    def encode(self, texts: list[str]) -> NDArray[np.float32]:
        """Embed a batch of texts.

        Parameters
        ----------
        texts
            Document or query texts, possibly empty.

        Returns
        -------
        NDArray[np.float32]
            One normalized row per text, shape (len(texts), dimension).
        """
        ...

    def warmup(self) -> None:
        """Make the first real request fast (load state, open connections)."""
        ...
