"""Vector index factory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .sqlalchemy import SqlVectorIndex, create_engine

if TYPE_CHECKING:
    from finassist_ml.config.settings import Settings

    from .protocols import VectorIndex

logger = logging.getLogger(__name__)


def create_vector_index(settings: Settings) -> VectorIndex | None:
    """Create the persistent vector index, or None when no database is configured."""
    if settings.index_database_url is None:
        logger.info("No index database configured, retrieval uses keyword search")
        return None

    url = settings.index_database_url
    display = url.split("@")[-1] if "@" in url else url
    logger.info("Creating vector index: database=%s", display)
    engine = create_engine(url, echo=settings.index_database_echo)
    return SqlVectorIndex(engine)
