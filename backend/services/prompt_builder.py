"""All prompt templates for Gemini API calls, in English and Hebrew."""

from models.schemas.fine_report import FineReport
from services.lexicon import normalize_locale

ANALYSIS_SYSTEM: dict[str, str] = {
    "en": (
        "You are a legal assistant specializing in traffic violations and fines. "
        "Your task is to analyze traffic fine reports and provide insights on their "
        "validity and recommend actions based on the details provided."
    ),
    "he": (
        "אתה עוזר משפטי המתמחה בעבירות תנועה וקנסות. תפקידך הוא לנתח דוחות קנסות "
        "תעבורה ולספק תובנות לגבי תקפותם ולהמליץ על פעולות בהתבסס על הפרטים שסופקו. "
        "חשוב מאוד שכל התשובה שלך תהיה בעברית."
    ),
}

CANCELLATION_SYSTEM: dict[str, str] = {
    "en": (
        "You are a legal assistant specializing in writing effective fine cancellation "
        "requests. Your task is to generate professional, persuasive, and legally sound "
        "cancellation requests based on the details provided."
    ),
    "he": (
        "אתה עוזר משפטי המתמחה בכתיבת בקשות ביטול קנסות יעילות. תפקידך הוא ליצור "
        "בקשות ביטול מקצועיות, משכנעות ומבוססות משפטית על סמך הפרטים שסופקו. "
        "התשובה שלך חייבת להיות בעברית."
    ),
}

_NOT_SPECIFIED = {"en": "Not specified", "he": "לא צוין"}


def _fine_details(report: FineReport, locale: str) -> str:
    missing = _NOT_SPECIFIED[locale]
    if locale == "he":
        return f"""דוח קנס מספר {report.report_number}
תאריך: {report.date}
מיקום: {report.location}
סוג העבירה: {report.violation}
סכום: {report.amount}
תאריך יעד לתשלום: {report.due_date or missing}
שם השוטר: {report.officer_name or missing}
מספר תג: {report.badge_number or missing}"""
    return f"""Fine Report #{report.report_number}
Date: {report.date}
Location: {report.location}
Violation: {report.violation}
Amount: {report.amount}
Due Date: {report.due_date or missing}
Officer Name: {report.officer_name or missing}
Badge Number: {report.badge_number or missing}"""


def build_analysis_prompt(report: FineReport, locale: str | None = None) -> tuple[str, str]:
    """Return (system_instruction, prompt) for the fine analysis call."""
    loc = normalize_locale(locale)
    details = _fine_details(report, loc)

    if loc == "he":
        description = report.description or "לא סופק תיאור נוסף"
        prompt = f"""אנא נתח את דוח הקנס הזה וספק הערכה מפורטת:

{details}

תיאור נוסף מהמקבל:
{description}

בהתבסס על כל הפרטים האלה, אנא ספק:
1. הערכה מסכמת של תקפות הקנס הזה
2. נקודות מפתח לשקול לגבי הקנס
3. המלצה על איזו פעולה על המקבל לנקוט
4. קביעה האם הקנס נראה "נכון", "חלקית נכון", או "לא נכון"

הערה: "נכון" משמעותו שלמקבל יש עילות תקפות לערער על הקנס. "חלקית" משמעותו שיתכן ויש עילות מסוימות לערעור או להפחתת הקנס. "לא נכון" משמעותו שהקנס נראה תקף וכנראה אין עילות לערעור עליו.

חשוב: גם אם חסרים פרטים מסוימים (כמו שם השוטר או מספר תג), יש להניח שהמידע הנחוץ לניתוח קיים ולהמשיך בניתוח מלא של המקרה. מחסור בפרטים מסוימים אינו בהכרח עילה לערעור על הקנס.

פרמט את התשובה שלך עם חלקים ברורים של סיכום, נקודות מפתח, המלצה, ושדה תוצאה עם אחד מהערכים האלה בלבד: "correct", "partially", או "incorrect".

חשוב מאוד: יש להשיב בעברית בלבד."""
    else:
        description = report.description or "No additional description provided"
        prompt = f"""Please analyze this traffic fine report and provide a detailed assessment:

{details}

Additional Description from the recipient:
{description}

Based on all these details, please provide:
1. A summary assessment of the validity of this fine
2. Key points to consider about the fine
3. A recommendation on what action the recipient should take
4. A determination of whether the fine appears "correct", "partially correct", or "incorrect"

Note: "correct" means the recipient has valid grounds to contest the fine. "partially" means there may be some grounds to contest or reduce the fine. "incorrect" means the fine appears valid and there are likely no grounds to contest it.

Important: Even if certain details are missing (such as officer name or badge number), assume the necessary information for analysis exists and proceed with a full analysis of the case. Missing certain details is not necessarily grounds for contesting the fine.

Format your response with clear sections for Summary, Key Points, Recommendation, and a Result field with only one of these values: "correct", "partially", or "incorrect".

Important: Please respond in English only."""

    return ANALYSIS_SYSTEM[loc], prompt


def build_cancellation_prompt(
    report: FineReport,
    additional_info: str = "",
    full_auto: bool = True,
    locale: str | None = None,
) -> tuple[str, str]:
    """Return (system_instruction, prompt) for a cancellation letter or argument list."""
    loc = normalize_locale(locale)
    details = _fine_details(report, loc)
    extra = additional_info.strip()

    if loc == "he":
        parts = [f"צור מכתב רשמי המבקש ביטול או הפחתה של דוח התנועה הבא:\n\n{details}"]
        if extra:
            parts.append(f"מידע נוסף שסופק על ידי המקבל:\n{extra}")
        if full_auto:
            parts.append(
                "צור מכתב בקשת ביטול מלא, רשמי ומקצועי עם כל המרכיבים הדרושים כולל כתובת, "
                "תאריך, שורת נושא, פנייה נאותה, פסקאות גוף, סיום, ומקום לחתימה."
            )
        else:
            parts.append(
                "ספק נקודות מרכזיות של טיעונים חזקים בהם אני יכול להשתמש כדי לערער על קנס זה, "
                "תוך התמקדות בהיבטים טכניים ופרוצדורליים ולא בנסיבות אישיות."
            )
    else:
        parts = [
            "Generate a formal letter requesting the cancellation or reduction of the "
            f"following traffic fine:\n\n{details}"
        ]
        if extra:
            parts.append(f"Additional Information Provided by the Recipient:\n{extra}")
        if full_auto:
            parts.append(
                "Generate a complete, formal and professional cancellation request letter "
                "with all necessary components including address, date, subject line, proper "
                "salutation, body paragraphs, closing, and space for signature."
            )
        else:
            parts.append(
                "Provide bullet points of strong arguments I can use to contest this fine, "
                "focusing on technical and procedural aspects rather than personal circumstances."
            )

    return CANCELLATION_SYSTEM[loc], "\n\n".join(parts)
