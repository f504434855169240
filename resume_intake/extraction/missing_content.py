from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from resume_intake.extraction.models import (
    ExtractedSection,
    Importance,
    MissingContentAlert,
    SectionType,
)


@dataclass(frozen=True)
class ExpectedSection:
    section: SectionType
    importance: Importance
    description: str
    examples: tuple[str, ...]
    impact: float


EXPECTED_SECTIONS: Final[tuple[ExpectedSection, ...]] = (
    ExpectedSection(
        SectionType.CONTACT,
        Importance.REQUIRED,
        "Contact information is missing",
        ("Email address", "Phone number", "LinkedIn profile"),
        20,
    ),
    ExpectedSection(
        SectionType.EXPERIENCE,
        Importance.REQUIRED,
        "Work experience section is missing",
        ("Job title", "Company", "Dates", "Achievements"),
        20,
    ),
    ExpectedSection(
        SectionType.SKILLS,
        Importance.REQUIRED,
        "Technical skills section is missing",
        ("Programming languages", "Frameworks", "Tools"),
        15,
    ),
    ExpectedSection(
        SectionType.SUMMARY,
        Importance.RECOMMENDED,
        "A professional summary helps recruiters scan your profile",
        ("Years of experience", "Core expertise", "Career goal"),
        10,
    ),
    ExpectedSection(
        SectionType.EDUCATION,
        Importance.RECOMMENDED,
        "Education background would strengthen your profile",
        ("Degree", "University", "Graduation year"),
        8,
    ),
)


def find_missing_content(
    sections: Sequence[ExtractedSection],
    expected: Sequence[ExpectedSection] = EXPECTED_SECTIONS,
) -> list[MissingContentAlert]:
    """Alert on every required or recommended section absent from the document."""
    present = {section.type for section in sections}
    return [
        MissingContentAlert(
            section=item.section,
            importance=item.importance,
            description=item.description,
            examples=list(item.examples),
            impact=item.impact,
        )
        for item in expected
        if item.section not in present and item.importance != Importance.OPTIONAL
    ]
