from services import lexicon
from services.section_extractor import (
    clean_point,
    extract_key_points,
    extract_recommendation,
    extract_summary,
    find_recommendation,
    find_section,
    split_paragraphs,
)


SAMPLE_ANALYSIS = """### Summary
The radar reading was taken 40 meters past the speed limit sign.

The municipality did not publish the calibration record.

### Key Points
1. Reading taken past the sign
2. **Calibration** record not published
3. Officer details were
   left blank on the ticket

### Recommendation
Our advice:

File an appeal within 30 days and request the calibration record.

### Result
partially"""


def test_find_section_heading_spans_paragraphs():
    summary = find_section(SAMPLE_ANALYSIS, "summary")
    assert summary == (
        "The radar reading was taken 40 meters past the speed limit sign.\n\n"
        "The municipality did not publish the calibration record."
    )


def test_find_section_label_stops_at_blank_line():
    text = "Recommendation: Pay the fine.\n\nOther text."
    assert find_section(text, "recommendation") == "Pay the fine."


def test_find_section_bold_label():
    text = "**Recommendation:** Contest the fine in court."
    assert find_section(text, "recommendation") == "Contest the fine in court."


def test_find_section_label_stops_at_other_label():
    text = "Key Points:\n- Sign was hidden\nRecommendation: Pay."
    assert find_section(text, "key_points") == "- Sign was hidden"


def test_find_section_heading_needs_whole_label():
    assert find_section("### Resultsoverview\nText", "result") is None


def test_find_section_missing():
    assert find_section("Plain text only.", "key_points") is None
    assert find_section("", "key_points") is None


def test_extract_key_points_from_heading():
    points = extract_key_points(SAMPLE_ANALYSIS)
    assert points == [
        "Reading taken past the sign",
        "Calibration record not published",
        "Officer details were left blank on the ticket",
    ]


def test_extract_key_points_label_with_blank_lines_between_items():
    text = "Key Points:\n\n- First\n\n- Second\n\nClosing remark."
    assert extract_key_points(text) == ["First", "Second"]


def test_extract_key_points_section_without_list():
    text = "Key Points:\nThe sign was hidden.\nNo photo was taken."
    assert extract_key_points(text) == ["The sign was hidden.", "No photo was taken."]


def test_extract_key_points_fallback_first_list():
    text = (
        "The analysis follows.\n\n"
        "- First issue\n"
        "- Second issue\n\n"
        "Some prose.\n\n"
        "- Unrelated item"
    )
    assert extract_key_points(text) == ["First issue", "Second issue"]


def test_extract_key_points_bullet_markers():
    text = "• Dot bullet\n* Star bullet\n2) Paren number"
    assert extract_key_points(text) == ["Dot bullet", "Star bullet", "Paren number"]


def test_extract_key_points_none():
    assert extract_key_points("No lists in this text at all.") == []
    assert extract_key_points("") == []


def test_extract_key_points_hebrew():
    text = (
        "### נקודות מפתח\n"
        "1. המהירות נמדדה בצורה תקינה\n"
        "2. השלט היה מוסתר\n\n"
        "### המלצה\n"
        "מומלץ לערער על הדוח."
    )
    assert extract_key_points(text, "he") == ["המהירות נמדדה בצורה תקינה", "השלט היה מוסתר"]
    assert extract_recommendation(text, "he") == "מומלץ לערער על הדוח."


def test_recommendation_joins_short_lead_in():
    assert extract_recommendation(SAMPLE_ANALYSIS) == (
        "Our advice: File an appeal within 30 days and request the calibration record."
    )


def test_recommendation_long_first_paragraph():
    text = (
        "Recommendation:\n"
        "Request a hearing and bring the photos of the hidden sign with you.\n\n"
        "Second paragraph is ignored."
    )
    assert extract_recommendation(text) == (
        "Request a hearing and bring the photos of the hidden sign with you."
    )


def test_recommendation_from_closing_lines():
    text = (
        "The fine lists the wrong street.\n"
        "The photo is blurry.\n"
        "We recommend filing an appeal."
    )
    assert find_recommendation(text) == (
        "The fine lists the wrong street. The photo is blurry. We recommend filing an appeal."
    )


def test_recommendation_closing_lines_limited():
    text = "Line one.\nLine two.\nLine three.\nLine four.\nYou are advised to appeal."
    assert find_recommendation(text) == "Line three. Line four. You are advised to appeal."


def test_recommendation_default_placeholder():
    text = "The fine lists the wrong street."
    assert find_recommendation(text) is None
    assert extract_recommendation(text) == lexicon.default_recommendation("en")
    assert extract_recommendation(text, "he") == lexicon.default_recommendation("he")


def test_extract_summary():
    assert extract_summary("Summary: Short case.\n\nMore.") == "Short case."
    assert extract_summary("  Unlabelled text.  ") == "Unlabelled text."
    assert extract_summary("") == ""


def test_split_paragraphs():
    assert split_paragraphs("a\n\nb\n  \nc\n\n\n") == ["a", "b", "c"]


def test_clean_point():
    assert clean_point("  **Bold** and __under__ ") == "Bold and under"
