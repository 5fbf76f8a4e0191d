"""Transaction categorization."""

from .categorizer import Categorizer, build_search_text, is_inflow
from .factory import create_categorizer

__all__ = ["Categorizer", "build_search_text", "create_categorizer", "is_inflow"]
