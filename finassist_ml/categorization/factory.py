"""Categorizer factory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from finassist_ml.config.categories import DEFAULT_CATEGORY_RULES, load_category_rules

from .categorizer import Categorizer

if TYPE_CHECKING:
    from finassist_ml.config.settings import Settings

logger = logging.getLogger(__name__)


def create_categorizer(settings: Settings) -> Categorizer:
    """Create a categorizer with the configured rule table.

    Raises
    ------
    CategoryRulesError
        If ``settings.category_rules_path`` points at a malformed file.
    """
    if settings.category_rules_path is None:
        return Categorizer(DEFAULT_CATEGORY_RULES)

    rules = load_category_rules(settings.category_rules_path)
    logger.info(
        "Loaded %d category rules from %s", len(rules), settings.category_rules_path
    )
    return Categorizer(rules)
