from models.schemas.fine_report import FineReport
from services.prompt_builder import (
    ANALYSIS_SYSTEM,
    CANCELLATION_SYSTEM,
    build_analysis_prompt,
    build_cancellation_prompt,
)

REPORT = FineReport(
    report_number="TLV-2291",
    date="2024-03-02",
    location="Ibn Gabirol St, Tel Aviv",
    violation="Speeding 72 km/h in a 50 km/h zone",
    amount="750 ILS",
    description="The speed sign was hidden behind a tree.",
)


def test_analysis_prompt_english():
    system, prompt = build_analysis_prompt(REPORT, "en")
    assert system == ANALYSIS_SYSTEM["en"]
    assert "Fine Report #TLV-2291" in prompt
    assert "Ibn Gabirol St, Tel Aviv" in prompt
    assert "The speed sign was hidden behind a tree." in prompt
    assert "Officer Name: Not specified" in prompt
    assert '"correct", "partially", or "incorrect"' in prompt


def test_analysis_prompt_hebrew():
    system, prompt = build_analysis_prompt(REPORT, "he")
    assert system == ANALYSIS_SYSTEM["he"]
    assert "דוח קנס מספר TLV-2291" in prompt
    assert "שם השוטר: לא צוין" in prompt
    assert "יש להשיב בעברית בלבד" in prompt


def test_analysis_prompt_without_description():
    report = REPORT.model_copy(update={"description": ""})
    _, prompt = build_analysis_prompt(report, "en")
    assert "No additional description provided" in prompt


def test_analysis_prompt_unknown_locale_uses_english():
    system, _ = build_analysis_prompt(REPORT, "fr")
    assert system == ANALYSIS_SYSTEM["en"]


def test_cancellation_prompt_full_letter():
    system, prompt = build_cancellation_prompt(REPORT, "I was not driving that day.", True, "en")
    assert system == CANCELLATION_SYSTEM["en"]
    assert "Additional Information Provided by the Recipient:\nI was not driving that day." in prompt
    assert "space for signature" in prompt
    assert "bullet points" not in prompt


def test_cancellation_prompt_bullet_points():
    _, prompt = build_cancellation_prompt(REPORT, "   ", False, "en")
    assert "bullet points of strong arguments" in prompt
    assert "Additional Information" not in prompt


def test_cancellation_prompt_hebrew():
    system, prompt = build_cancellation_prompt(REPORT, "", True, "he")
    assert system == CANCELLATION_SYSTEM["he"]
    assert "צור מכתב בקשת ביטול מלא" in prompt


def test_report_accepts_camel_case():
    report = FineReport.model_validate({"reportNumber": "A1", "dueDate": "2024-04-01"})
    assert report.report_number == "A1"
    assert report.due_date == "2024-04-01"
