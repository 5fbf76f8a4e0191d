"""Encoder factory for creating encoder instances based on configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .hashed import HashedEmbeddingEncoder
from .protocol import Encoder
from .remote import RemoteEmbeddingEncoder

if TYPE_CHECKING:
    from finassist_ml.config.settings import Settings

logger = logging.getLogger(__name__)


def create_encoder(settings: Settings) -> Encoder:
    """Create an encoder based on settings.

    Parameters
    ----------
    settings
        Application settings containing encoder configuration.

    Returns
    -------
    Encoder
        Remote provider encoder when an API key is configured, otherwise the
        hashed bag-of-words encoder.
    """
    if settings.embedding_api_key is not None:
        logger.info(
            "Creating encoder: backend=remote, model=%s, dim=%d",
            settings.embedding_model,
            settings.embedding_dimension,
        )
        return RemoteEmbeddingEncoder(
            api_key=settings.embedding_api_key.get_secret_value(),
            model_name=settings.embedding_model,
            dimension=settings.embedding_dimension,
            base_url=settings.embedding_base_url,
            timeout=settings.embedding_timeout,
        )

    logger.info(
        "Creating encoder: backend=hashed, dim=%d (no embedding API key)",
        settings.embedding_dimension,
    )
    return HashedEmbeddingEncoder(dimension=settings.embedding_dimension)
