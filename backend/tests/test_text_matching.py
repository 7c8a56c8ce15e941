import pytest

from models.schemas.verdict import Category
from services import lexicon
from services.text_matching import (
    GroupMatcher,
    contains_term,
    count_term,
    group_matcher,
    term_pattern,
    whole_word_pattern,
    word_pattern,
)

FAV = Category.FAVORABLE
PART = Category.PARTIAL
UNFAV = Category.UNFAVORABLE


class TestTermMatching:
    def test_english_word_boundaries(self):
        assert contains_term("the fine is correct", "correct")
        assert not contains_term("the fine is incorrect", "correct")

    def test_hebrew_substring(self):
        assert contains_term("מומלץ ולערער", "לערער")

    def test_flexible_whitespace(self):
        assert contains_term("grounds   to\ncontest", "grounds to contest")

    def test_case_insensitive(self):
        assert contains_term("Grounds To Contest", "grounds to contest")

    def test_word_start_mode(self):
        assert contains_term("we suggest contesting it", "contest", whole_word=False)
        assert not contains_term("we suggest contesting it", "contest")
        assert not contains_term("the ticket is invalid", "valid", whole_word=False)

    def test_term_pattern_right_edge(self):
        assert term_pattern("dismiss") == r"\bdismiss\b"
        assert term_pattern("dismiss", whole_word=False) == r"\bdismiss"

    def test_count_term(self):
        assert count_term("appeal, appeal and appealing", "appeal") == 2


class TestGroupMatcher:
    def test_longest_hit_wins(self):
        matcher = GroupMatcher({FAV: ["in favor"], UNFAV: ["not in favor"]})
        hits = matcher.hits("not in favor of the driver")
        assert len(hits) == 1
        assert hits[0].category == UNFAV
        assert matcher.first_category("not in favor of the driver")[0] == UNFAV

    def test_priority_order(self):
        matcher = GroupMatcher({FAV: ["appeal"], UNFAV: ["pay"], PART: ["reduce"]})
        category, hit = matcher.first_category("pay or reduce or appeal")
        assert category == FAV
        assert hit.term == "appeal"

    def test_counts(self):
        matcher = GroupMatcher({FAV: ["appeal"], UNFAV: ["pay"], PART: ["reduce"]})
        assert matcher.counts("pay, pay, reduce") == {FAV: 0, UNFAV: 2, PART: 1}

    def test_no_hit(self):
        matcher = GroupMatcher({FAV: ["appeal"]})
        assert matcher.first_category("nothing here") is None

    def test_hits_in_text_order(self):
        matcher = GroupMatcher({FAV: ["appeal"], UNFAV: ["pay"]})
        assert [h.term for h in matcher.hits("pay then appeal")] == ["pay", "appeal"]

    def test_contained_hits_are_dropped(self):
        matcher = GroupMatcher({FAV: ["grounds", "to contest"], UNFAV: ["no grounds to contest"]})
        hits = matcher.hits("no grounds to contest, but grounds to contest later")
        assert [(h.category, h.term) for h in hits] == [
            (UNFAV, "no grounds to contest"),
            (FAV, "grounds"),
            (FAV, "to contest"),
        ]

    def test_many_overlapping_hits(self):
        matcher = GroupMatcher({FAV: ["in favor"], UNFAV: ["not in favor"]})
        assert matcher.counts("not in favor " * 2000) == {FAV: 0, UNFAV: 2000, PART: 0}

    def test_word_start_groups(self):
        matcher = GroupMatcher({FAV: ["dismiss"]}, whole_word=False)
        assert matcher.first_category("the fine was dismissed")[0] == FAV
        assert GroupMatcher({FAV: ["dismiss"]}).first_category("the fine was dismissed") is None

    def test_cached_per_table_and_locale(self):
        assert group_matcher("TAIL_KEYWORDS", "en") is group_matcher("TAIL_KEYWORDS", "en")
        assert group_matcher("TAIL_KEYWORDS", "en") is not group_matcher("TAIL_KEYWORDS", "he")


def test_whole_word_pattern_hebrew():
    negation = whole_word_pattern("NEGATION_WORDS", "he")
    assert negation.search("זה לא נכון")
    assert negation.search("כביש לאומי") is None


def test_word_pattern_recommendation_cues():
    cues = word_pattern("RECOMMENDATION_CUES", "en")
    assert cues.search("We recommend an appeal")
    assert cues.search("מומלץ לערער")
    assert cues.search("a recommendable option") is None


class TestLexicon:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, "en"),
            ("", "en"),
            ("he", "he"),
            ("HE", "he"),
            ("he-IL", "he"),
            ("iw", "he"),
            ("en_US", "en"),
            ("fr", "en"),
        ],
    )
    def test_normalize_locale(self, raw, expected):
        assert lexicon.normalize_locale(raw) == expected

    def test_locale_chain(self):
        assert lexicon.locale_chain("he") == ["he", "en"]
        assert lexicon.locale_chain("en") == ["en", "he"]

    @pytest.mark.parametrize(
        "table",
        [
            lexicon.SECTION_LABELS,
            lexicon.RESULT_LABELS,
            lexicon.TERMINAL_KEYWORDS,
            lexicon.LABEL_KEYWORDS,
            lexicon.TAIL_KEYWORDS,
            lexicon.SECTION_KEYWORDS,
            lexicon.SECTION_SCORE_WORDS,
            lexicon.PHRASE_LIBRARY,
            lexicon.WEIGHTED_TERMS,
            lexicon.NEGATION_WORDS,
            lexicon.QUALIFIER_WORDS,
            lexicon.NEUTRAL_CONTEXTS,
            lexicon.RECOMMENDATION_CUES,
            lexicon.DEFAULT_RECOMMENDATION,
            lexicon.FALLBACK_ANALYSIS,
        ],
    )
    def test_every_table_covers_every_locale(self, table):
        assert set(table) == set(lexicon.SUPPORTED_LOCALES)

    @pytest.mark.parametrize("locale", ["en", "he"])
    def test_keyword_groups_cover_every_category(self, locale):
        for table in (lexicon.LABEL_KEYWORDS, lexicon.TAIL_KEYWORDS, lexicon.PHRASE_LIBRARY):
            assert set(table[locale]) == set(Category)

    def test_weights_are_in_range(self):
        for polarities in lexicon.WEIGHTED_TERMS.values():
            for terms in polarities.values():
                assert all(1 <= weight <= 3 for _, weight in terms)

    def test_merged_weighted_strongest_first(self):
        weights = [w for _, w in lexicon.merged_weighted("he", "positive")]
        assert weights == sorted(weights, reverse=True)
        assert lexicon.merged_weighted("he", "positive")[0] == ("עילה חזקה", 3)

    def test_merged_groups_requested_locale_first(self):
        merged = lexicon.merged_groups(lexicon.LABEL_KEYWORDS, "he")
        assert merged[FAV][0] == "נכון"
        assert "correct" in merged[FAV]

    def test_terminal_keywords_merge(self):
        keywords = lexicon.terminal_keywords("he")
        assert keywords["לא נכון"] == UNFAV
        assert keywords["correct"] == FAV

    def test_section_labels(self):
        assert lexicon.section_labels("en", "result")[0] == "result"
        assert "תוצאה" in lexicon.section_labels("en", "result")
        assert "המלצה" in lexicon.all_section_labels("en")
