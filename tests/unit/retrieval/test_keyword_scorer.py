"""Tests for the keyword fallback scorer."""

from finassist_ml.retrieval import (
    Corpus,
    Document,
    DocumentType,
    keyword_search,
    rank_documents,
    score_document,
)
from finassist_ml_contracts import KnowledgeArticle, SearchHit


def _doc(
    doc_id: str,
    title: str,
    content: str = "",
    keywords: tuple[str, ...] = (),
    category: str | None = None,
) -> Document:
    return Document(
        id=doc_id,
        title=title,
        content=content,
        type=DocumentType.KNOWLEDGE,
        category=category,
        keywords=frozenset(keywords),
    )


class TestScoreDocument:
    """Tests for per-document scoring."""

    def test_title_keyword_and_token_bonus(self) -> None:
        """Title hit 10, keyword contained in query 3, token overlap 1."""
        doc = _doc("b", "Budget Basics", "Track spending", ("budget",), "budgeting")
        assert score_document("budget", doc) == 14

    def test_category_bonus(self) -> None:
        """Category contained in the query adds 2."""
        doc = _doc("b", "Budget Basics", "Track spending", ("budget",), "budgeting")
        # keyword "budget" is inside "budgeting" (3), category matches (2)
        assert score_document("budgeting", doc) == 5

    def test_content_match(self) -> None:
        """Query inside the content adds 5."""
        doc = _doc("c", "Credit", "Keep balances low")
        assert score_document("BALANCES", doc) == 5

    def test_short_tokens_do_not_earn_overlap(self) -> None:
        """Only query tokens longer than three characters count."""
        doc = _doc("d", "Debt", keywords=("debt payoff",))
        assert score_document("pay off it", doc) == 0
        assert score_document("payoff now", doc) == 1

    def test_inflected_token_earns_keyword_bonus(self) -> None:
        """A query word starting with the keyword stem counts as a keyword hit."""
        doc = _doc("e", "Fund", keywords=("emergency", "savings"))
        # "emergencies" shares "emergenc"; "save" is not inside "savings"
        assert score_document("save for emergencies", doc) == 3
        assert score_document("emergency", doc) == 4

    def test_stem_needs_long_token(self) -> None:
        """Short query words never earn the stem bonus."""
        doc = _doc("r", "Housing", keywords=("rent",))
        assert score_document("rentals", doc) == 3
        assert score_document("ren", doc) == 0

    def test_case_insensitive(self) -> None:
        """Scoring ignores case on both sides."""
        doc = _doc("e", "Emergency Fund", keywords=("Emergency",))
        assert score_document("EMERGENCY FUND", doc) == score_document("emergency fund", doc)

    def test_no_match(self) -> None:
        """Unrelated queries score zero."""
        doc = _doc("b", "Budget Basics", "Track spending", ("budget",), "budgeting")
        assert score_document("mortgage rates", doc) == 0


class TestRanking:
    """Tests for ranking and search."""

    def test_emergency_fund_scenario(self) -> None:
        """Saving question finds the emergency fund article."""
        corpus = Corpus.build(
            [
                KnowledgeArticle(
                    id="kb-1",
                    title="Emergency Fund 101",
                    content="Save 3-6 months of expenses",
                    keywords=["emergency", "savings"],
                )
            ]
        )

        hits = keyword_search("how much should I save for emergencies", corpus, 3)

        assert hits == [
            SearchHit(title="Emergency Fund 101", content="Save 3-6 months of expenses")
        ]

    def test_zero_scores_dropped(self, corpus: Corpus) -> None:
        """Documents without any match never appear."""
        ranked = rank_documents("utilization", corpus)
        assert [doc.id for doc, _ in ranked] == ["kb-credit"]

    def test_descending_score(self, corpus: Corpus) -> None:
        """Higher scores come first."""
        ranked = rank_documents("budget spending", corpus)
        scores = [score for _, score in ranked]
        assert scores == sorted(scores, reverse=True)
        assert ranked[0][0].id == "kb-budget"

    def test_ties_keep_corpus_order(self) -> None:
        """Equal scores keep insertion order."""
        docs = [
            _doc("first", "A", keywords=("rent",)),
            _doc("second", "B", keywords=("rent",)),
            _doc("third", "C", keywords=("rent",)),
        ]
        ranked = rank_documents("rent", docs)
        assert [doc.id for doc, _ in ranked] == ["first", "second", "third"]

    def test_top_k_truncates(self) -> None:
        """At most top_k hits."""
        docs = [_doc(str(i), f"Doc {i}", keywords=("rent",)) for i in range(5)]
        assert len(keyword_search("rent", docs, 2)) == 2

    def test_blank_query_and_non_positive_k(self, corpus: Corpus) -> None:
        """Nothing to search for, nothing returned."""
        assert keyword_search("", corpus, 3) == []
        assert keyword_search("   ", corpus, 3) == []
        assert keyword_search("budget", corpus, 0) == []
        assert keyword_search("budget", corpus, -1) == []

    def test_deterministic(self, corpus: Corpus) -> None:
        """Same query and corpus, same ranking and scores."""
        first = [(doc.id, score) for doc, score in rank_documents("checking balance", corpus)]
        again = [(doc.id, score) for doc, score in rank_documents("checking balance", corpus)]
        assert first == again
        assert first[0][0] == "account:acc-1"
