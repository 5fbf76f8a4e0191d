"""Remote embedding provider (OpenAI-compatible API)."""

from __future__ import annotations

import logging
from typing import Any

import httpx
import numpy as np
from numpy.typing import NDArray

from finassist_ml.exceptions import EmbeddingProviderError

logger = logging.getLogger(__name__)


class RemoteEmbeddingEncoder:
    """Encoder calling an OpenAI-compatible ``POST /embeddings`` endpoint.

    The provider is asked for ``dimension``-sized vectors so that the index
    layout does not change with the embedding mode. Rows are L2-normalized
    locally; providers usually do this already, but the index relies on it.

    HTTP and transport errors are not caught here; callers decide how to
    degrade.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "text-embedding-3-small",
        dimension: int = 384,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._model_name = model_name
        self._dimension = dimension
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimension

    @property
    def model_name(self) -> str:
        """Return the model identifier."""
        return self._model_name

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

        Raises
        ------
        EmbeddingProviderError
            If the response is malformed or has the wrong shape.
        httpx.HTTPError
            On transport failures, timeouts and non-2xx responses.
        """
        if not texts:
            return np.zeros((0, self._dimension), dtype=np.float32)

        response = self._client.post(
            "/embeddings",
            json={
                "model": self._model_name,
                "input": texts,
                "dimensions": self._dimension,
            },
        )
        response.raise_for_status()
        embeddings = self._parse_response(response.json(), expected=len(texts))

        norms = np.linalg.norm(embeddings, axis=1, keepdims=True)
        norms[norms == 0] = 1.0
        return (embeddings / norms).astype(np.float32)

    def _parse_response(self, payload: Any, expected: int) -> NDArray[np.float32]:
        try:
            items = sorted(payload["data"], key=lambda item: item["index"])
            vectors = [item["embedding"] for item in items]
        except (KeyError, TypeError) as e:
            msg = f"Malformed embedding response: missing {e}"
            raise EmbeddingProviderError(msg) from e

        if len(vectors) != expected:
            msg = f"Expected {expected} embeddings, provider returned {len(vectors)}"
            raise EmbeddingProviderError(msg)

        try:
            embeddings = np.asarray(vectors, dtype=np.float32)
        except (ValueError, TypeError) as e:
            msg = f"Embedding vectors are not numeric or not rectangular: {e}"
            raise EmbeddingProviderError(msg) from e

        if embeddings.ndim != 2 or embeddings.shape[1] != self._dimension:
            msg = (
                f"Expected embeddings of dimension {self._dimension}, "
                f"got shape {embeddings.shape}"
            )
            raise EmbeddingProviderError(msg)
        return embeddings

    def warmup(self) -> None:
        """Perform warmup inference."""
        _ = self.encode(["warmup"])
        logger.debug("Remote encoder warmed up (model=%s)", self._model_name)

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self._client.close()
