"""
Compliance Pattern Banks

Ordered regular-expression banks used by the compliance rules. Within a bank
the first matching pattern wins, so ORDER MATTERS: it decides which text is
reported as matched_text.
"""
import re
from typing import List, Optional, Pattern, Sequence


def _compile(*patterns: str) -> List[Pattern[str]]:
    return [re.compile(p, re.IGNORECASE) for p in patterns]


def first_match(patterns: Sequence[Pattern[str]], content: str) -> Optional[str]:
    """Return the text matched by the first pattern that matches, else None."""
    for pattern in patterns:
        match = pattern.search(content)
        if match:
            return match.group(0)
    return None


def any_match(patterns: Sequence[Pattern[str]], content: str) -> bool:
    return first_match(patterns, content) is not None


# =============================================================================
# MINI-MIRANDA (15 U.S.C. § 1692e(11))
# =============================================================================

DEBT_COLLECTOR_ID_PATTERNS = _compile(
    r"this\s+is\s+an?\s+attempt\s+to\s+collect\s+a\s+debt",
    r"this\s+communication\s+is\s+from\s+a\s+debt\s+collector",
    r"we\s+are\s+(?:a\s+)?debt\s+collectors?",
    r"acting\s+as\s+(?:a\s+)?debt\s+collector",
)

INFORMATION_PURPOSE_PATTERNS = _compile(
    r"any\s+information\s+(?:obtained|received|provided)\s+will\s+be\s+used\s+for\s+that\s+purpose",
    r"information\s+(?:obtained|collected)\s+(?:will\s+be|may\s+be)\s+used\s+(?:for|in)\s+"
    r"(?:that\s+purpose|debt\s+collection)",
)


# =============================================================================
# VALIDATION NOTICE (12 CFR § 1006.34)
# =============================================================================

THIRTY_DAY_WINDOW_PATTERNS = _compile(
    r"within\s+(?:the\s+)?(?:30|thirty)\s*(?:\((?:30|thirty)\))?\s*days?",
    r"(?:30|thirty)\s*(?:\((?:30|thirty)\))?\s*[\-–]?\s*day\s+(?:period|window|time(?:frame)?)",
    r"(?:30|thirty)\s*(?:\((?:30|thirty)\))?\s*days?\s+(?:from|after|of)",
)

DISPUTE_RIGHTS_PATTERNS = _compile(
    r"dispute\s+(?:the\s+)?(?:debt|validity|accuracy)",
    r"right\s+to\s+(?:dispute|contest|challenge)",
    r"may\s+(?:dispute|contest)\s+(?:this\s+|the\s+)?debt",
)

VERIFICATION_RIGHTS_PATTERNS = _compile(
    r"verification\s+of\s+(?:the\s+)?debt",
    r"request\s+(?:verification|validation)",
    r"provide\s+(?:verification|validation|proof)",
    r"obtain\s+verification",
)

ORIGINAL_CREDITOR_PATTERNS = _compile(
    r"name\s+(?:and\s+address\s+)?of\s+(?:the\s+)?original\s+creditor",
    r"original\s+creditor(?:'s)?\s+(?:name|information|identity)",
    r"(?:provide|disclose)\s+(?:the\s+)?original\s+creditor",
)


# =============================================================================
# DEBT AMOUNT (15 U.S.C. § 1692g(a)(1))
# =============================================================================

CURRENCY_PATTERN = re.compile(r"\$\d[\d,]*(?:\.\d{2})?")

AMOUNT_CONTEXT_PATTERNS = _compile(
    r"(?:amount|balance|total|sum)\s+(?:owed|due|of)\s*(?:is\s+)?:?\s*\$?\d[\d,]*(?:\.\d{2})?",
    r"you\s+owe\s*\$?\d[\d,]*(?:\.\d{2})?",
    r"debt\s+(?:amount|balance|total)\s*(?:is\s+)?:?\s*\$?\d[\d,]*(?:\.\d{2})?",
    r"\$\d[\d,]*(?:\.\d{2})?\s+(?:is\s+)?(?:owed|due)",
    r"(?:principal|interest|fees?)\s*:?\s*\$?\d[\d,]*(?:\.\d{2})?",
)

# Loose references to the debt; qualify an exact total match as a debt amount
DEBT_REFERENCE_PATTERNS = _compile(
    r"\b(?:debt|balance|owed?|owing|due|amount|account|payable)\b",
)

ITEMIZATION_PRINCIPAL = re.compile(r"principal", re.IGNORECASE)
ITEMIZATION_INTEREST = re.compile(r"interest", re.IGNORECASE)
ITEMIZATION_FEES = re.compile(r"fees?", re.IGNORECASE)


# =============================================================================
# CREDITOR IDENTIFICATION (15 U.S.C. § 1692g(a)(2))
# =============================================================================

CREDITOR_RELATIONSHIP_PATTERN = re.compile(
    r"(?:creditor|owed\s+to|debt\s+(?:is\s+)?(?:owed\s+)?to|behalf\s+of)",
    re.IGNORECASE,
)


# =============================================================================
# TIME-BARRED DEBT (state-specific)
# =============================================================================

TIME_BARRED_PATTERNS = _compile(
    r"(?:law\s+)?limits\s+how\s+long\s+(?:you\s+)?can\s+(?:be\s+)?sued",
    r"statute\s+of\s+limitations",
    r"time[\-\s]?barred",
    r"too\s+old\s+(?:for\s+you\s+)?(?:to\s+)?(?:be\s+)?(?:sue|sued|enforce)",
    r"(?:will\s+)?not\s+sue\s+(?:you\s+)?(?:for|on)\s+(?:this|it)",
    r"debt\s+(?:is\s+)?(?:beyond|past|outside)\s+(?:the\s+)?(?:legal|statute)",
    r"cannot\s+(?:legally\s+)?sue",
    r"legal\s+time\s+(?:limit|period)\s+(?:has\s+)?(?:expired|passed)",
)

REVIVAL_WARNING_PATTERNS = _compile(
    r"(?:paying|payment|promise)\s+(?:may|could|will)\s+(?:restart|revive|renew)",
    r"(?:may\s+)?become\s+enforceable(?:\s+again)?",
    r"reset\s+(?:the\s+)?(?:clock|limitation)",
)


# =============================================================================
# DISPUTE RIGHTS (15 U.S.C. § 1692g(a)(3)-(5)) - advisory
# =============================================================================

DISPUTE_WINDOW_PATTERNS = _compile(
    r"within\s+(?:the\s+)?(?:30|thirty)\s*(?:\((?:30|thirty)\))?\s*days?",
    r"(?:30|thirty)\s*(?:\((?:30|thirty)\))?\s*[\-–]?\s*day",
)

ASSUME_VALID_PATTERNS = _compile(
    r"(?:assumed|presumed|considered)\s+(?:to\s+be\s+)?valid",
    r"debt\s+(?:will\s+be\s+)?(?:assumed|presumed)\s+valid",
    r"not\s+disputed.*(?:valid|owed)",
)

VERIFICATION_PROVISION_PATTERNS = _compile(
    r"(?:obtain|provide|mail|send)\s+(?:you\s+)?(?:a\s+)?(?:verification|validation)",
    r"verification.*(?:mailed|sent|provided)",
    r"(?:copy|proof)\s+of\s+(?:the\s+)?(?:debt|judgment)",
)

WRITTEN_REQUEST_PATTERNS = _compile(
    r"written\s+request",
    r"request\s+in\s+writing",
    r"write\s+(?:to\s+)?us",
)
