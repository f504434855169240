"""Heading-driven segmentation of resume text into typed sections.

A line is a heading when, once normalized, it equals a known alias for a
section type (confidence 0.95), or starts with an alias followed by a colon
and inline content (0.8). Multi-word aliases embedded in a short line, or any
alias on an all-caps line, are accepted with 0.65. Text above the first
heading is treated as the contact block (0.7 when it carries an email or
phone number, 0.4 otherwise).
"""

import re
from dataclasses import dataclass, field
from typing import Final

from resume_intake.extraction import patterns
from resume_intake.extraction.models import ExtractedSection, SectionType

EXACT_HEADING_CONFIDENCE: Final = 0.95
INLINE_HEADING_CONFIDENCE: Final = 0.8
EMBEDDED_HEADING_CONFIDENCE: Final = 0.65
INFERRED_CONTACT_CONFIDENCE: Final = 0.7
WEAK_CONTACT_CONFIDENCE: Final = 0.4

HEADING_ALIASES: Final[dict[SectionType, tuple[str, ...]]] = {
    SectionType.CONTACT: (
        "contact", "contact information", "contact info", "contact details",
        "personal information", "personal details",
    ),
    SectionType.SUMMARY: (
        "summary", "professional summary", "career summary", "executive summary",
        "profile", "professional profile", "objective", "career objective", "about me",
    ),
    SectionType.EXPERIENCE: (
        "experience", "work experience", "professional experience", "relevant experience",
        "employment", "employment history", "work history", "career history",
    ),
    SectionType.EDUCATION: (
        "education", "academic background", "academic history",
        "education and training", "academic qualifications",
    ),
    SectionType.SKILLS: (
        "skills", "technical skills", "core skills", "key skills", "core competencies",
        "competencies", "technologies", "skills and abilities", "areas of expertise",
    ),
    SectionType.PROJECTS: (
        "projects", "personal projects", "key projects", "selected projects", "side projects",
    ),
    SectionType.CERTIFICATIONS: (
        "certifications", "certificates", "licenses", "licenses and certifications",
        "certifications and licenses",
    ),
    SectionType.AWARDS: (
        "awards", "honors", "honours", "awards and honors", "achievements", "accomplishments",
    ),
    SectionType.LANGUAGES: ("languages", "language skills"),
    SectionType.REFERENCES: ("references", "referees"),
}

DEFAULT_TITLES: Final[dict[SectionType, str]] = {
    SectionType.CONTACT: "Contact Information",
    SectionType.SUMMARY: "Professional Summary",
    SectionType.EXPERIENCE: "Work Experience",
    SectionType.EDUCATION: "Education",
    SectionType.SKILLS: "Skills",
    SectionType.PROJECTS: "Projects",
    SectionType.CERTIFICATIONS: "Certifications",
    SectionType.AWARDS: "Awards",
    SectionType.LANGUAGES: "Languages",
    SectionType.REFERENCES: "References",
}

_ALIAS_LOOKUP: Final[dict[str, SectionType]] = {
    alias: section_type
    for section_type, aliases in HEADING_ALIASES.items()
    for alias in aliases
}
_DECORATION_RE: Final = re.compile(r"^[\s#=*_\-•:|]+|[\s#=*_\-•:|]+$")
_SKILL_SPLIT_RE: Final = re.compile(r"[,;|•·\n\t]|\s+-\s+")
_MAX_HEADING_WORDS: Final = 5


@dataclass(frozen=True)
class HeadingMatch:
    section_type: SectionType
    title: str
    confidence: float
    inline_content: str = ""


@dataclass
class _SectionDraft:
    section_type: SectionType
    title: str
    confidence: float
    start_line: int
    lines: list[str] = field(default_factory=list)


def normalize_heading(line: str) -> str:
    cleaned = _DECORATION_RE.sub("", line).lower().replace("&", "and")
    return " ".join(cleaned.split())


def match_heading(line: str) -> HeadingMatch | None:
    """Decide whether a single line opens a section."""
    stripped = line.strip()
    if not stripped:
        return None

    if ":" in stripped:
        head, _, rest = stripped.partition(":")
        section_type = _ALIAS_LOOKUP.get(normalize_heading(head))
        if section_type is not None and rest.strip():
            return HeadingMatch(
                section_type, head.strip(), INLINE_HEADING_CONFIDENCE, rest.strip()
            )

    normalized = normalize_heading(stripped)
    section_type = _ALIAS_LOOKUP.get(normalized)
    if section_type is not None:
        return HeadingMatch(
            section_type, stripped.rstrip(":").strip(), EXACT_HEADING_CONFIDENCE
        )

    word_count = len(normalized.split())
    if word_count == 0 or word_count > _MAX_HEADING_WORDS or stripped.endswith("."):
        return None
    is_caps = stripped.isupper()
    for alias, alias_type in _ALIAS_LOOKUP.items():
        if " " not in alias and not is_caps:
            continue
        if re.search(rf"\b{re.escape(alias)}\b", normalized):
            return HeadingMatch(alias_type, stripped.rstrip(":").strip(), EMBEDDED_HEADING_CONFIDENCE)
    return None


def split_skill_items(content: str) -> list[str]:
    items = []
    for raw in _SKILL_SPLIT_RE.split(content):
        item = patterns.STANDARD_BULLET_RE.sub("", raw).strip(" .")
        if item:
            items.append(item)
    return items


def segment(text: str) -> list[ExtractedSection]:
    """Split resume text into sections in document order."""
    lines = text.splitlines()
    drafts: list[_SectionDraft] = []
    preamble: list[str] = []
    current: _SectionDraft | None = None

    for index, line in enumerate(lines):
        heading = match_heading(line)
        if heading is not None:
            current = _find_or_open(drafts, heading, index)
            if heading.inline_content:
                current.lines.append(heading.inline_content)
            continue
        if current is None:
            if line.strip():
                preamble.append(line.strip())
        else:
            current.lines.append(line)

    if preamble:
        contact = next((d for d in drafts if d.section_type == SectionType.CONTACT), None)
        if contact is None:
            preamble_text = "\n".join(preamble)
            has_signal = bool(
                patterns.EMAIL_RE.search(preamble_text) or patterns.PHONE_RE.search(preamble_text)
            )
            drafts.insert(
                0,
                _SectionDraft(
                    SectionType.CONTACT,
                    DEFAULT_TITLES[SectionType.CONTACT],
                    INFERRED_CONTACT_CONFIDENCE if has_signal else WEAK_CONTACT_CONFIDENCE,
                    start_line=-1,
                    lines=preamble,
                ),
            )
        else:
            contact.lines = preamble + contact.lines

    return [_finalize(draft) for draft in drafts]


def _find_or_open(drafts: list[_SectionDraft], heading: HeadingMatch, index: int) -> _SectionDraft:
    for draft in drafts:
        if draft.section_type == heading.section_type:
            draft.confidence = max(draft.confidence, heading.confidence)
            return draft
    draft = _SectionDraft(heading.section_type, heading.title, heading.confidence, index)
    drafts.append(draft)
    return draft


def _finalize(draft: _SectionDraft) -> ExtractedSection:
    content = "\n".join(line.rstrip() for line in draft.lines).strip()
    complete, suggestions = assess(draft.section_type, content)
    return ExtractedSection(
        id=f"{draft.section_type.value}-1",
        type=draft.section_type,
        title=draft.title,
        content=content,
        confidence=round(draft.confidence, 2),
        suggestions=suggestions,
        is_complete=complete,
    )


def assess(section_type: SectionType, content: str) -> tuple[bool, list[str]]:
    """Return (is_complete, suggestions) for one section's content."""
    if section_type == SectionType.CONTACT:
        return _assess_contact(content)
    if section_type == SectionType.SUMMARY:
        return _assess_summary(content)
    if section_type == SectionType.EXPERIENCE:
        return _assess_experience(content)
    if section_type == SectionType.EDUCATION:
        return _assess_education(content)
    if section_type == SectionType.SKILLS:
        return _assess_skills(content)
    complete = len(content.split()) >= 3
    suggestions = [] if complete else [f"Add detail to the {DEFAULT_TITLES[section_type]} section"]
    return complete, suggestions


def _assess_contact(content: str) -> tuple[bool, list[str]]:
    has_email = patterns.EMAIL_RE.search(content) is not None
    has_phone = patterns.PHONE_RE.search(content) is not None
    suggestions = []
    if not has_email:
        suggestions.append("Add a professional email address")
    if not has_phone:
        suggestions.append("Add a phone number")
    if not patterns.LINKEDIN_RE.search(content):
        suggestions.append("Add LinkedIn profile")
    if not patterns.LOCATION_RE.search(content):
        suggestions.append("Include location")
    return has_email or has_phone, suggestions


def _assess_summary(content: str) -> tuple[bool, list[str]]:
    complete = patterns.has_verb(content)
    suggestions = []
    if not complete:
        suggestions.append("Describe what you do with action verbs")
    if not re.search(r"\d", content):
        suggestions.append("Add quantifiable achievements")
    if len(content.split()) < 25:
        suggestions.append("Include key technologies")
    return complete, suggestions


def _assess_experience(content: str) -> tuple[bool, list[str]]:
    complete = bool(patterns.YEAR_RE.search(content) or patterns.DATE_RANGE_RE.search(content))
    suggestions = []
    if not complete:
        suggestions.append("Add employment dates")
    bullets = sum(1 for line in content.splitlines() if patterns.STANDARD_BULLET_RE.match(line))
    if bullets < 3:
        suggestions.append("Add more bullet points")
    if not patterns.METRIC_RE.search(content):
        suggestions.append("Include impact metrics")
    return complete, suggestions


def _assess_education(content: str) -> tuple[bool, list[str]]:
    complete = patterns.DEGREE_RE.search(content) is not None
    suggestions = []
    if not complete:
        suggestions.append("Name the degree and institution")
    if not patterns.YEAR_RE.search(content):
        suggestions.append("Include graduation year")
    return complete, suggestions


def _assess_skills(content: str) -> tuple[bool, list[str]]:
    items = split_skill_items(content)
    complete = len(items) >= 3
    suggestions = []
    if not complete:
        suggestions.append("List at least three relevant skills")
    elif len(items) > 30:
        suggestions.append("Trim the list to the most relevant skills")
    return complete, suggestions
