"""ATS compatibility checks over extracted text and layout signals."""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Final

from resume_intake.extraction import patterns
from resume_intake.extraction.models import (
    ATSCompatibilityResult,
    ATSIssue,
    ATSRecommendation,
    DocumentText,
    ExtractedSection,
    FormatCompliance,
    SectionType,
    Severity,
)
from resume_intake.extraction.sections import INLINE_HEADING_CONFIDENCE

SEVERITY_PENALTY: Final[dict[Severity, float]] = {
    Severity.LOW: 0.05,
    Severity.MEDIUM: 0.10,
    Severity.HIGH: 0.15,
    Severity.CRITICAL: 0.25,
}
PREFERRED_ORDER: Final = (
    SectionType.CONTACT,
    SectionType.SUMMARY,
    SectionType.EXPERIENCE,
    SectionType.EDUCATION,
    SectionType.SKILLS,
)

_PRIVATE_USE_RE: Final = re.compile("[\ue000-\uf8ff\ufffd]")
_COLUMN_GAP_RE: Final = re.compile(r"\S {5,}\S")
_BLANK_RUN_RE: Final = re.compile(r"\n[ \t]*\n[ \t]*\n[ \t]*\n")
_LONG_LINE_CHARS: Final = 150
_MIN_EXPLICIT_HEADINGS: Final = 3


@dataclass(frozen=True)
class ChecklistItem:
    flag: str
    issue_type: str
    severity: Severity
    description: str
    fix: str
    recommendation: str
    effort: str


CHECKLIST: Final[tuple[ChecklistItem, ...]] = (
    ChecklistItem(
        "fonts", "format", Severity.HIGH,
        "Unreadable glyphs found; a symbol or decorative font may not parse",
        "Use a standard font such as Arial, Calibri or Times New Roman",
        "Use standard fonts", "low",
    ),
    ChecklistItem(
        "spacing", "format", Severity.MEDIUM,
        "Irregular spacing suggests a multi-column layout",
        "Use a single-column layout with consistent spacing",
        "Simplify the layout", "medium",
    ),
    ChecklistItem(
        "margins", "format", Severity.LOW,
        "Many lines run past the usual text width",
        "Keep standard margins between 0.5 and 1 inch",
        "Adjust page margins", "low",
    ),
    ChecklistItem(
        "headers", "structure", Severity.HIGH,
        "Too few standard section headings were recognized",
        "Use standard section headings such as Experience, Education and Skills",
        "Use standard section headings", "low",
    ),
    ChecklistItem(
        "bullets", "format", Severity.MEDIUM,
        "Non-standard bullet symbols may be dropped or garbled",
        "Use simple round bullets or hyphens",
        "Use simple bullet points", "low",
    ),
    ChecklistItem(
        "tables", "format", Severity.MEDIUM,
        "Complex table formatting may not parse correctly",
        "Use simple bullet points instead of tables",
        "Replace tables with plain text", "medium",
    ),
    ChecklistItem(
        "images", "format", Severity.HIGH,
        "Images or graphics were found; ATS cannot read text inside them",
        "Remove images and graphics, keeping all information as text",
        "Remove images", "low",
    ),
    ChecklistItem(
        "links", "content", Severity.LOW,
        "Link text hides the destination URL",
        "Write out full URLs instead of hyperlinked text",
        "Show full URLs", "low",
    ),
)


def check_compliance(
    document: DocumentText,
    sections: Sequence[ExtractedSection],
) -> FormatCompliance:
    """Evaluate the fixed formatting checklist; True means the item passes."""
    text = document.text
    lines = [line for line in text.splitlines() if line.strip()]
    long_lines = sum(1 for line in lines if len(line) > _LONG_LINE_CHARS)
    gapped_lines = sum(1 for line in lines if _COLUMN_GAP_RE.search(line))
    explicit_headings = sum(1 for s in sections if s.confidence >= INLINE_HEADING_CONFIDENCE)
    table_rows = sum(1 for line in lines if patterns.TABLE_ROW_RE.search(line))
    return FormatCompliance(
        fonts=_PRIVATE_USE_RE.search(text) is None,
        spacing=_BLANK_RUN_RE.search(text) is None and gapped_lines <= 3,
        margins=not lines or long_lines / len(lines) <= 0.25,
        headers=explicit_headings >= _MIN_EXPLICIT_HEADINGS,
        bullets=not any(_starts_with_nonstandard_bullet(line) for line in lines),
        tables=document.table_count == 0 and table_rows < 2,
        images=document.image_count == 0,
        links=patterns.CLICK_HERE_RE.search(text) is None,
    )


def sections_in_order(sections: Sequence[ExtractedSection]) -> bool:
    ranks = [PREFERRED_ORDER.index(s.type) for s in sections if s.type in PREFERRED_ORDER]
    return ranks == sorted(ranks)


def assess_ats(
    document: DocumentText,
    sections: Sequence[ExtractedSection],
) -> ATSCompatibilityResult:
    """Turn every failed checklist item into an issue and a recommendation."""
    compliance = check_compliance(document, sections)
    issues: list[ATSIssue] = []
    recommendations: list[ATSRecommendation] = []

    for item in CHECKLIST:
        if getattr(compliance, item.flag):
            continue
        issues.append(
            ATSIssue(
                type=item.issue_type,
                severity=item.severity,
                description=item.description,
                location=_locate(item.flag, sections),
                fix=item.fix,
            )
        )
        recommendations.append(
            ATSRecommendation(
                title=item.recommendation,
                description=item.fix,
                impact=round(SEVERITY_PENALTY[item.severity] * 100),
                effort=item.effort,
                category="Format" if item.issue_type == "format" else item.issue_type.title(),
            )
        )

    if not sections_in_order(sections):
        issues.append(
            ATSIssue(
                type="structure",
                severity=Severity.LOW,
                description="Sections not in optimal order for ATS parsing",
                location="Document",
                fix="Reorder sections: Contact, Summary, Experience, Education, Skills",
            )
        )
        recommendations.append(
            ATSRecommendation(
                title="Reorder sections",
                description="Place Contact, Summary, Experience, Education and Skills in that order",
                impact=round(SEVERITY_PENALTY[Severity.LOW] * 100),
                effort="low",
                category="Structure",
            )
        )

    penalty = sum(SEVERITY_PENALTY[issue.severity] for issue in issues)
    return ATSCompatibilityResult(
        score=round(max(0.0, min(1.0, 1.0 - penalty)), 3),
        issues=issues,
        recommendations=recommendations,
        format_compliance=compliance,
    )


def _starts_with_nonstandard_bullet(line: str) -> bool:
    stripped = line.lstrip()
    return bool(stripped) and stripped[0] in patterns.NONSTANDARD_BULLETS


def _locate(flag: str, sections: Sequence[ExtractedSection]) -> str:
    predicates: dict[str, Callable[[str], bool]] = {
        "bullets": lambda content: any(
            _starts_with_nonstandard_bullet(line) for line in content.splitlines()
        ),
        "tables": lambda content: any(
            patterns.TABLE_ROW_RE.search(line) for line in content.splitlines()
        ),
        "links": lambda content: patterns.CLICK_HERE_RE.search(content) is not None,
    }
    predicate = predicates.get(flag)
    if predicate is not None:
        for section in sections:
            if predicate(section.content):
                return f"{section.title} section"
    return "Document"
