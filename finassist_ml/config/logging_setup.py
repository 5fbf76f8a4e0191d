"""Logging configuration for the assistant core."""

import logging

from .settings import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging and quiet noisy third-party libraries."""
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Set level for our package specifically
    logging.getLogger("finassist_ml").setLevel(log_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def log_settings(settings: Settings | None = None) -> None:
    """Log current settings for debugging."""
    settings = settings or get_settings()
    logger = logging.getLogger("finassist_ml")

    logger.info("=" * 60)
    logger.info("Assistant Core Configuration")
    logger.info("=" * 60)
    logger.info("  Log level: %s", settings.log_level)
    logger.info("  Embeddings:")
    if settings.embeddings_enabled:
        logger.info("    Provider: %s", settings.embedding_base_url)
        logger.info("    Model: %s", settings.embedding_model)
        logger.info("    Timeout: %.1fs", settings.embedding_timeout)
    else:
        logger.info("    Provider: hashed bag-of-words (no API key)")
    logger.info("    Dimension: %d", settings.embedding_dimension)
    logger.info("  Vector index:")
    if settings.index_enabled:
        # Hide credentials in the URL
        logger.info("    Database: %s", str(settings.index_database_url).split("@")[-1])
    else:
        logger.info("    Disabled (keyword search only)")
    logger.info("  Knowledge file: %s", settings.knowledge_path or "<packaged>")
    logger.info("  Category rules: %s", settings.category_rules_path or "<default>")
    logger.info("  Search top-k: %d", settings.search_top_k)
    logger.info("=" * 60)
