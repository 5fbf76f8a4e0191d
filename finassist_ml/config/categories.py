"""Spending categories and their keywords.

Order matters: the categorizer walks categories top to bottom and stops at
the first keyword hit, so a keyword listed under an earlier category shadows
the same text under a later one.
"""

import json
from dataclasses import dataclass
from pathlib import Path

INCOME_CATEGORY = "Income"
DEFAULT_CATEGORY = "Shopping"
DEFAULT_SUGGESTIONS: tuple[str, ...] = ("Shopping", "Dining", "Entertainment")


class CategoryRulesError(ValueError):
    """Invalid category rules file."""


@dataclass(frozen=True)
class CategoryRule:
    """Category and the keywords that select it."""

    category: str
    keywords: tuple[str, ...]

    def first_hit(self, search_text: str) -> str | None:
        """Return the first keyword contained in ``search_text`` (lower-cased)."""
        for keyword in self.keywords:
            if keyword.lower() in search_text:
                return keyword
        return None


CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Groceries": (
        "whole foods",
        "trader joe",
        "safeway",
        "kroger",
        "walmart",
        "target",
        "costco",
        "grocery",
        "market",
        "food lion",
        "publix",
    ),
    "Transportation": (
        "uber",
        "lyft",
        "shell",
        "chevron",
        "exxon",
        "gas",
        "metro",
        "mta",
        "transit",
        "parking",
        "subway",
        "train",
        "bus",
    ),
    "Dining": (
        "restaurant",
        "starbucks",
        "dunkin",
        "chipotle",
        "mcdonalds",
        "burger",
        "pizza",
        "cafe",
        "coffee",
        "bar",
        "grill",
        "diner",
        "kitchen",
    ),
    "Entertainment": (
        "netflix",
        "spotify",
        "hulu",
        "disney",
        "hbo",
        "cinema",
        "movie",
        "theater",
        "concert",
        "ticket",
        "gaming",
        "steam",
    ),
    "Shopping": (
        "amazon",
        "ebay",
        "best buy",
        "apple store",
        "mall",
        "clothing",
        "fashion",
        "store",
    ),
    "Utilities": (
        "electric",
        "water",
        "gas bill",
        "internet",
        "phone",
        "verizon",
        "att",
        "t-mobile",
        "comcast",
        "spectrum",
        "coned",
        "conedison",
    ),
    "Healthcare": (
        "cvs",
        "walgreens",
        "pharmacy",
        "hospital",
        "medical",
        "doctor",
        "dentist",
        "health",
        "clinic",
        "gym",
        "fitness",
    ),
    "Insurance": (
        "insurance",
        "geico",
        "state farm",
        "progressive",
        "allstate",
    ),
    "Rent/Mortgage": (
        "rent",
        "mortgage",
        "landlord",
        "property",
        "housing",
    ),
    "Subscriptions": (
        "subscription",
        "monthly",
        "membership",
    ),
    "Travel": (
        "airline",
        "delta",
        "american airlines",
        "united",
        "hotel",
        "airbnb",
        "booking",
        "expedia",
        "travel",
    ),
    INCOME_CATEGORY: (
        "payroll",
        "salary",
        "deposit",
        "interest",
        "dividend",
    ),
}


def rules_from_mapping(
    mapping: dict[str, list[str] | tuple[str, ...]],
) -> tuple[CategoryRule, ...]:
    """Build rules from an ordered ``{category: keywords}`` mapping."""
    return tuple(
        CategoryRule(category=category, keywords=tuple(keywords))
        for category, keywords in mapping.items()
    )


DEFAULT_CATEGORY_RULES: tuple[CategoryRule, ...] = rules_from_mapping(CATEGORY_KEYWORDS)


def load_category_rules(path: Path) -> tuple[CategoryRule, ...]:
    """Load rules from a JSON object of ``{category: [keyword, ...]}``.

    JSON object order is kept, so the file defines match precedence.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot read category rules from {path}: {e}"
        raise CategoryRulesError(msg) from e

    if not isinstance(data, dict) or not data:
        msg = f"Category rules in {path} must be a non-empty JSON object"
        raise CategoryRulesError(msg)

    mapping: dict[str, list[str]] = {}
    for category, keywords in data.items():
        if not category.strip():
            msg = f"Empty category name in {path}"
            raise CategoryRulesError(msg)
        if not isinstance(keywords, list) or not all(
            isinstance(k, str) and k.strip() for k in keywords
        ):
            msg = f"Keywords for '{category}' must be a list of non-empty strings"
            raise CategoryRulesError(msg)
        mapping[category] = keywords

    return rules_from_mapping(mapping)
