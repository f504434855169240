"""Regular expressions and word lists shared by the resume analyzers."""

import re
from typing import Final

EMAIL_RE: Final = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE: Final = re.compile(r"(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
LINKEDIN_RE: Final = re.compile(r"linkedin\.com/in/[A-Za-z0-9_-]+", re.IGNORECASE)
YEAR_RE: Final = re.compile(r"\b(?:19|20)\d{2}\b")
DATE_RANGE_RE: Final = re.compile(
    r"\b(?:19|20)\d{2}\s*(?:-|–|to)\s*(?:(?:19|20)\d{2}|present|current|now)\b",
    re.IGNORECASE,
)
METRIC_RE: Final = re.compile(
    r"\d+(?:[.,]\d+)?\s*(?:%|percent\b|k\b|m\b|x\b)|\$\s?\d"
    r"|\b\d+\+?\s+(?:people|users|clients|customers|engineers|projects|team members)\b",
    re.IGNORECASE,
)
LOCATION_RE: Final = re.compile(
    r",\s*[A-Z]{2}\b|\b(?:street|avenue|road|drive|city|state|zip|remote)\b",
    re.IGNORECASE,
)
DEGREE_RE: Final = re.compile(
    r"\b(?:bachelor|master|b\.?sc|m\.?sc|b\.?a|b\.?s|m\.?s|mba|ph\.?d|doctorate|associate|"
    r"diploma|degree|university|college|institute|school|academy)\b",
    re.IGNORECASE,
)

STANDARD_BULLET_RE: Final = re.compile(r"^\s*[-*•·]\s+")
NONSTANDARD_BULLETS: Final = frozenset("➢➤►▶▸◆◇❖✓✔✗★☆➔→⇒■□▪▫●○◦♦")
TABLE_ROW_RE: Final = re.compile(r"\S\s*(?:\||\t)\s*\S.*(?:\||\t)")
CLICK_HERE_RE: Final = re.compile(r"\bclick here\b|\[link\]", re.IGNORECASE)
SENTENCE_SPLIT_RE: Final = re.compile(r"[.!?]+")
WORD_RE: Final = re.compile(r"[A-Za-z][A-Za-z'+#.-]*")
GERUND_OR_PAST_RE: Final = re.compile(r"\b[a-z]{3,}(?:ed|ing)\b", re.IGNORECASE)

ACTION_VERBS: Final = frozenset(
    {
        "achieved", "managed", "led", "developed", "created", "implemented",
        "improved", "increased", "reduced", "organized", "coordinated",
        "established", "executed", "launched", "delivered", "streamlined",
        "built", "designed", "drove", "owned", "shipped", "mentored",
    }
)
COMMON_VERBS: Final = frozenset(
    {
        "am", "is", "are", "was", "were", "have", "has", "bring", "bringing",
        "build", "builds", "deliver", "delivers", "lead", "leads", "manage",
        "manages", "help", "helps", "drive", "drives", "design", "designs",
        "develop", "develops", "create", "creates", "specialize", "specializes",
        "seek", "seeking", "love", "enjoy", "focus", "focuses", "work", "works",
    }
)
JARGON_WORDS: Final = frozenset(
    {
        "synergize", "leverage", "paradigm", "holistic", "utilize", "facilitate",
        "streamline", "optimize", "revolutionize",
    }
)


def words(text: str) -> list[str]:
    return WORD_RE.findall(text)


def count_action_verbs(text: str) -> int:
    return sum(1 for word in words(text) if word.lower() in ACTION_VERBS)


def has_verb(text: str) -> bool:
    lowered = [word.lower() for word in words(text)]
    if any(word in ACTION_VERBS or word in COMMON_VERBS for word in lowered):
        return True
    return GERUND_OR_PAST_RE.search(text) is not None


def average_sentence_length(text: str) -> float:
    sentences = [s for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]
    if not sentences:
        return 0.0
    return sum(len(s.split()) for s in sentences) / len(sentences)
