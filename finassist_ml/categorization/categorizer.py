"""Keyword categorizer for transactions.

Three steps, first one that applies wins:
1. Inflow (negative amount) -> Income
2. First keyword hit, walking categories and keywords in declared order
3. Default category
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from finassist_ml_contracts import CategorizedTransaction, TransactionInput

from finassist_ml.config.categories import (
    DEFAULT_CATEGORY,
    DEFAULT_CATEGORY_RULES,
    DEFAULT_SUGGESTIONS,
    INCOME_CATEGORY,
    CategoryRule,
)

logger = logging.getLogger(__name__)


def is_inflow(amount: Decimal) -> bool:
    """Aggregator sign convention: negative amounts are money coming in."""
    return amount < 0


def build_search_text(txn: TransactionInput) -> str:
    """Lower-cased ``name merchant_name description``, missing parts empty."""
    return f"{txn.name or ''} {txn.merchant_name or ''} {txn.description or ''}".lower()


class Categorizer:
    """Assigns exactly one spending category to a transaction.

    Stateless after construction; safe to share between tasks and threads.
    """

    def __init__(
        self,
        rules: Iterable[CategoryRule] = DEFAULT_CATEGORY_RULES,
        income_category: str = INCOME_CATEGORY,
        default_category: str = DEFAULT_CATEGORY,
        default_suggestions: Iterable[str] = DEFAULT_SUGGESTIONS,
    ):
        self._rules: tuple[CategoryRule, ...] = tuple(rules)
        self._income_category = income_category
        self._default_category = default_category
        self._default_suggestions: tuple[str, ...] = tuple(default_suggestions)

    @property
    def rules(self) -> tuple[CategoryRule, ...]:
        return self._rules

    @property
    def categories(self) -> list[str]:
        """Every label this categorizer can return, in declaration order."""
        labels = [rule.category for rule in self._rules]
        labels.extend([self._income_category, self._default_category])
        return list(dict.fromkeys(labels))

    def categorize(self, txn: TransactionInput) -> str:
        """Return the category for a single transaction."""
        if is_inflow(txn.amount):
            logger.debug("Inflow %s -> %s", txn.amount, self._income_category)
            return self._income_category

        search_text = build_search_text(txn)
        for rule in self._rules:
            keyword = rule.first_hit(search_text)
            if keyword is not None:
                logger.debug(
                    "Keyword %r in %r -> %s", keyword, search_text.strip(), rule.category
                )
                return rule.category

        logger.debug("No keyword in %r -> %s", search_text.strip(), self._default_category)
        return self._default_category

    def categorize_all(
        self, transactions: Iterable[TransactionInput]
    ) -> list[CategorizedTransaction]:
        """Annotate every transaction with its category, preserving order."""
        return [
            CategorizedTransaction.model_validate(
                {**txn.model_dump(), "category": self.categorize(txn)}
            )
            for txn in transactions
        ]

    def suggest_categories(self, merchant_name: str | None) -> list[str]:
        """All categories with at least one keyword in ``merchant_name``.

        Falls back to a fixed shortlist when nothing matches.
        """
        search_text = (merchant_name or "").lower()
        suggestions: list[str] = []
        for rule in self._rules:
            if rule.category in suggestions:
                continue
            if rule.first_hit(search_text) is not None:
                suggestions.append(rule.category)

        return suggestions or list(self._default_suggestions)
