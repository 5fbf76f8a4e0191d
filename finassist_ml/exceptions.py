"""Retrieval exceptions.

These never reach callers of ``RetrievalEngine.search``: the engine catches
them, invalidates its index and answers from the keyword scorer instead.
"""


class IndexUnavailableError(Exception):
    """Raised when the vector index cannot be built or queried."""

    def __init__(self, message: str = "Vector index unavailable"):
        self.message = message
        super().__init__(self.message)


class EmbeddingProviderError(IndexUnavailableError):
    """Raised when the embedding provider returns an unusable response."""

    def __init__(self, message: str = "Embedding provider returned an invalid response"):
        super().__init__(message)
