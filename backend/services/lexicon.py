"""Bilingual keyword, phrase and weighted-term tables for the result classifier.

Every table is keyed by locale first. The classifier consults the
requested locale and then every other registered locale, since LLM
output often mixes languages (an English value under a Hebrew label).
Adding a language means adding one entry to each table below.
"""

from models.schemas.verdict import Category

FAV = Category.FAVORABLE
PART = Category.PARTIAL
UNFAV = Category.UNFAVORABLE

# Order in which keyword groups are tested when the first hit wins
CATEGORY_ORDER: tuple[Category, ...] = (FAV, UNFAV, PART)

# ---------------------------------------------------------------------------
# Section labels: "### Result", "Result:", "## תוצאה", "תוצאה:" ...
# ---------------------------------------------------------------------------
SECTION_LABELS: dict[str, dict[str, list[str]]] = {
    "en": {
        "result": ["result", "verdict", "determination"],
        "key_points": ["key points", "key considerations"],
        "recommendation": ["recommendations", "recommendation", "recommended action"],
        "summary": ["summary", "summary assessment"],
    },
    "he": {
        "result": ["תוצאה", "קביעה"],
        "key_points": ["נקודות מפתח", "נקודות עיקריות"],
        "recommendation": ["המלצות", "המלצה"],
        "summary": ["סיכום", "הערכה מסכמת"],
    },
}

# Only the label forms of "result" trigger the explicit-label pass
RESULT_LABELS: dict[str, list[str]] = {
    "en": ["result"],
    "he": ["תוצאה"],
}

# A final paragraph consisting of exactly one of these decides the outcome
TERMINAL_KEYWORDS: dict[str, dict[str, Category]] = {
    "en": {"correct": FAV, "partially": PART, "incorrect": UNFAV},
    "he": {"נכון": FAV, "חלקית": PART, "לא נכון": UNFAV},
}

# ---------------------------------------------------------------------------
# Keyword groups for the value after an explicit "Result:" label
# ---------------------------------------------------------------------------
LABEL_KEYWORDS: dict[str, dict[Category, list[str]]] = {
    "en": {
        FAV: [
            "correct", "in favor", "in your favor", "favorable", "grounds",
            "appeal", "should contest", "recommend contesting", "successful appeal",
            "cancel", "dismiss", "overturn", "valid grounds", "legitimate grounds",
            "not valid", "invalid",
        ],
        UNFAV: [
            "incorrect", "not correct", "not in favor", "unfavorable", "valid",
            "legitimate", "should pay", "recommend paying", "uphold", "no grounds",
            "unlikely to succeed",
        ],
        PART: [
            "partially", "partial", "partially correct", "some merit",
            "compromise", "limited grounds", "reduce", "reduction", "negotiate",
        ],
    },
    "he": {
        FAV: ["נכון", "לטובת", "עילה", "ערעור", "לערער"],
        UNFAV: ["לא נכון", "לא לטובת", "אין עילה", "תקף", "חוקי", "לשלם"],
        PART: ["חלקית", "חלקי", "חלקית נכון", "עילה חלקית", "פשרה", "הפחתה"],
    },
}

# ---------------------------------------------------------------------------
# Keyword groups counted over the last lines of the document
# ---------------------------------------------------------------------------
TAIL_KEYWORDS: dict[str, dict[Category, list[str]]] = {
    "en": {
        FAV: [
            "correct", "in favor", "in your favor", "favorable", "approve", "cancel",
            "dismiss", "overturn", "should contest", "recommend contesting", "successful appeal",
            "grounds to contest", "grounds to appeal", "valid grounds", "valid reason",
            "valid grounds to contest", "valid grounds to appeal",
            "legitimate grounds", "not valid", "invalid",
        ],
        UNFAV: [
            "incorrect", "not in favor", "unfavorable", "uphold", "maintain", "valid",
            "proper", "legitimate", "should pay", "recommend paying",
            "unlikely to succeed", "no grounds", "no grounds to contest",
            "no grounds to appeal", "no valid reason",
        ],
        PART: [
            "partially", "partial", "some merit", "compromise", "reduce", "reduction",
            "negotiate", "limited grounds",
        ],
    },
    "he": {
        FAV: ["מומלץ לערער", "כדאי לערער", "לבטל את הקנס", "לטובתך"],
        UNFAV: ["מומלץ לשלם", "כדאי לשלם", "הדוח תקף", "אין עילה"],
        PART: ["עילה חלקית", "להפחית את הקנס", "הפחתה", "פשרה"],
    },
}

# ---------------------------------------------------------------------------
# Keyword groups and fallback word lists for a "### Result" section body
# ---------------------------------------------------------------------------
SECTION_KEYWORDS: dict[str, dict[Category, list[str]]] = {
    "en": {
        FAV: [
            "correct", "in favor", "in your favor", "grounds", "should contest",
            "appeal", "appealing",
        ],
        UNFAV: [
            "incorrect", "not in favor", "valid fine", "legitimate", "lawful",
            "no grounds", "not correct",
        ],
        PART: ["partially", "partial", "some merit", "compromise", "limited grounds"],
    },
    "he": {
        FAV: ["לטובת", "עילה", "ערעור", "נכון"],
        UNFAV: ["תקף", "חוקי", "לא לטובת", "אין עילה", "לא נכון"],
        PART: ["חלקית", "עילה חלקית"],
    },
}

SECTION_SCORE_WORDS: dict[str, dict[str, list[str]]] = {
    "en": {
        "positive": ["recommend", "appeal", "contest", "grounds", "argue"],
        "negative": ["pay", "valid", "legitimate", "properly"],
    },
    "he": {
        "positive": ["לערער", "עילה", "לטעון"],
        "negative": ["לשלם", "תקף", "חוקי"],
    },
}

# ---------------------------------------------------------------------------
# Whole-document phrase library
# ---------------------------------------------------------------------------
PHRASE_LIBRARY: dict[str, dict[Category, list[str]]] = {
    "en": {
        FAV: [
            "grounds to contest", "appears to be incorrectly issued", "strong case",
            "valid grounds", "strong grounds", "good chance", "likely to succeed",
            "improperly issued", "incorrectly issued", "procedural error",
            "technical error", "recommend appealing", "recommendable to appeal",
            "recommend contesting", "overturned", "cancelled", "canceled", "refunded",
            "dismiss", "dismissal", "overruled", "incorrect citation",
            "wrong citation", "error in citation", "error in fine",
            "mistake on ticket", "citation error", "dismiss the fine",
            "grounds for dismissal", "grounds to dismiss", "grounds to overturn",
            "technical issue", "factual issue",
        ],
        UNFAV: [
            "appears to be valid", "unlikely to succeed",
            "evidence supports the violation", "properly issued", "valid ticket",
            "legitimate fine", "evidence clearly shows", "no legal basis",
            "no justification", "no merit", "no valid reason", "fine is proper",
            "fine is correct", "pay the fine", "accept the penalty",
            "accept the fine", "valid citation", "evidence confirms",
            "evidence supports", "evidence validates", "no grounds to contest",
            "no valid grounds",
        ],
        PART: [
            "partial grounds", "some merit", "could argue", "might have a case",
            "may have grounds", "uncertain outcome", "mixed evidence",
            "limited options", "possible but unlikely", "minor issues",
            "reduce the fine", "negotiate a settlement",
        ],
    },
    "he": {
        FAV: [
            "יש לך עילה", "טעות בדוח", "יש בסיס לערעור", "לטובתך",
            "יש מקום לבחון את תקפות הקנס", "לבטל את הקנס", "עילה לערעור",
            "סיכוי גבוה", "לערער", "מומלץ לערער", "בסיס לביטול", "ניתן לבטל",
            "טעות בדו״ח", "טעות ברישום", "ביטול הדוח", "כדאי לערער",
            "סיבה מוצדקת לערעור",
        ],
        UNFAV: [
            "הדוח תקף", "אין עילה", "הראיות תומכות", "סיכוי נמוך",
            "לשלם את הקנס", "אין סיבה לערער", "אין הצדקה", "אין בסיס",
            "הדוח תקין", "אין טעות", "אין בסיס לערעור", "אין עילה לערעור", "ראיות מאששות",
            "קנס תקף",
        ],
        PART: [
            "עילה חלקית", "אפשרות מסוימת", "סיכוי בינוני", "יש אפשרות",
            "להפחית את הקנס", "ראיות מעורבות", "תוצאה לא ודאית", "סיכוי מוגבל",
        ],
    },
}

# ---------------------------------------------------------------------------
# Weighted sentence terms: (term, weight). Strongest first; only the first
# matching term per sentence counts.
# ---------------------------------------------------------------------------
WEIGHTED_TERMS: dict[str, dict[str, list[tuple[str, int]]]] = {
    "en": {
        "positive": [
            ("strong grounds", 3), ("clear error", 3), ("definitely contest", 3),
            ("clear violation", 3), ("recommend contesting", 3), ("should contest", 3),
            ("grounds to appeal", 3), ("successful appeal", 3), ("high likelihood", 3),
            ("grounds", 2), ("appeal", 2), ("contest", 2), ("error in", 2),
            ("mistake in", 2), ("may succeed", 2), ("can argue", 2),
            ("justify contesting", 2), ("valid reason", 2),
            ("possible", 1), ("challenge", 1), ("argue", 1),
            ("consider appealing", 1), ("option to contest", 1),
        ],
        "negative": [
            ("no grounds", 3), ("clearly valid", 3), ("no basis", 3),
            ("properly issued", 3), ("correctly issued", 3), ("no error", 3),
            ("no mistake", 3), ("should pay", 3), ("pay the fine", 3),
            ("will not succeed", 3),
            ("unlikely", 2), ("valid", 2), ("legitimate", 2), ("lawful", 2),
            ("properly", 2), ("correctly", 2), ("limited chance", 2),
            ("difficult", 1), ("challenging", 1),
        ],
    },
    "he": {
        "positive": [
            ("עילה חזקה", 3), ("מומלץ לערער", 3), ("סיכוי גבוה", 3), ("טעות ברורה", 3),
            ("עילה", 2), ("ערעור", 2), ("כדאי לערער", 2), ("אפשר לערער", 2),
            ("לטובתך", 2),
            ("אפשרי", 1), ("אפשרות", 1), ("לבחון", 1), ("לשקול", 1), ("ניתן לנסות", 1),
        ],
        "negative": [
            ("אין עילה", 3), ("הדוח תקף", 3), ("אין טעות", 3), ("מומלץ לשלם", 3),
            ("אין סיכוי", 3),
            ("תקף", 2), ("חוקי", 2), ("כדאי לשלם", 2), ("סיכוי נמוך", 2),
            ("קטן הסיכוי", 2),
            ("תשלום", 1), ("קשה", 1), ("מאתגר", 1),
        ],
    },
}

NEGATION_WORDS: dict[str, list[str]] = {
    "en": ["not", "no", "isn't", "don't", "wouldn't", "couldn't", "won't", "can't", "never"],
    "he": ["אין", "לא", "אינו", "אל"],
}

QUALIFIER_WORDS: dict[str, list[str]] = {
    "en": ["may", "might", "perhaps", "possibly", "sometimes"],
    "he": ["אולי", "יתכן", "ייתכן", "לפעמים"],
}

# Sentences containing both terms of a pair are administrative commentary
NEUTRAL_CONTEXTS: dict[str, list[tuple[str, str]]] = {
    "en": [
        ("officer", "name"), ("officer", "badge"), ("badge", "number"),
        ("missing", "information"), ("details", "missing"),
        ("fine", "number"), ("date", "issue"),
        ("appeal process", "procedure"),
    ],
    "he": [
        ("השוטר", "שם"), ("השוטר", "פרטי"), ("תג", "מספר"), ("חסרים", "פרטים"),
        ("מספר", "דוח"), ("תאריך", "הנפקה"),
        ("הגשת ערעור", "תהליך"),
    ],
}

RECOMMENDATION_CUES: dict[str, list[str]] = {
    "en": ["recommend", "recommended", "recommendation", "suggest", "suggestion", "advised", "advise"],
    "he": ["המלצה", "מומלץ", "כדאי", "ממליץ", "ממליצים"],
}

DEFAULT_RECOMMENDATION: dict[str, str] = {
    "en": "Please review the details of your fine.",
    "he": "אנא עיין בפרטי הקנס שלך.",
}

FALLBACK_ANALYSIS: dict[str, dict[str, object]] = {
    "en": {
        "summary": (
            "Unable to connect to analysis service. "
            "Please check your connection and try again."
        ),
        "keyPoints": ["Analysis service unavailable", "Using offline fallback analysis"],
        "recommendation": "Consider reviewing the fine manually or try again later.",
    },
    "he": {
        "summary": "לא ניתן להתחבר לשירות הניתוח. אנא בדוק את החיבור ונסה שוב.",
        "keyPoints": ["שירות הניתוח אינו זמין", "מוצג ניתוח חלופי במצב לא מקוון"],
        "recommendation": "מומלץ לבחון את הקנס באופן ידני או לנסות שוב מאוחר יותר.",
    },
}

SUPPORTED_LOCALES: tuple[str, ...] = tuple(DEFAULT_RECOMMENDATION)


def normalize_locale(locale: str | None) -> str:
    """Return a supported locale code; unknown or empty locales map to 'en'."""
    if not locale:
        return "en"
    code = locale.strip().lower().replace("_", "-").split("-")[0]
    if code == "iw":  # legacy Hebrew code still sent by older Android builds
        code = "he"
    return code if code in SUPPORTED_LOCALES else "en"


def locale_chain(locale: str | None) -> list[str]:
    """Requested locale first, then every other registered locale."""
    primary = normalize_locale(locale)
    return [primary] + [code for code in SUPPORTED_LOCALES if code != primary]


def merged_groups(
    table: dict[str, dict[Category, list[str]]], locale: str | None
) -> dict[Category, list[str]]:
    """Merge a locale -> category -> terms table along the locale chain."""
    merged: dict[Category, list[str]] = {cat: [] for cat in CATEGORY_ORDER}
    for code in locale_chain(locale):
        for cat, terms in table.get(code, {}).items():
            merged[cat].extend(t for t in terms if t not in merged[cat])
    return merged


def merged_words(table: dict[str, list], locale: str | None) -> list:
    """Merge a locale -> list table along the locale chain, keeping order."""
    merged: list = []
    for code in locale_chain(locale):
        merged.extend(w for w in table.get(code, []) if w not in merged)
    return merged


def merged_weighted(locale: str | None, polarity: str) -> list[tuple[str, int]]:
    """Weighted terms of one polarity across locales, strongest first."""
    terms = merged_words({c: WEIGHTED_TERMS[c][polarity] for c in WEIGHTED_TERMS}, locale)
    # stable sort keeps table order within a weight
    return sorted(terms, key=lambda item: -item[1])


def terminal_keywords(locale: str | None) -> dict[str, Category]:
    merged: dict[str, Category] = {}
    for code in locale_chain(locale):
        for word, cat in TERMINAL_KEYWORDS.get(code, {}).items():
            merged.setdefault(word, cat)
    return merged


def section_labels(locale: str | None, section: str) -> list[str]:
    return merged_words({c: SECTION_LABELS[c].get(section, []) for c in SECTION_LABELS}, locale)


def all_section_labels(locale: str | None) -> list[str]:
    """Every known section label, used to detect where a section ends."""
    labels: list[str] = []
    for section in ("result", "key_points", "recommendation", "summary"):
        labels.extend(lbl for lbl in section_labels(locale, section) if lbl not in labels)
    return labels


def default_recommendation(locale: str | None) -> str:
    return DEFAULT_RECOMMENDATION[normalize_locale(locale)]
