from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class SectionType(str, Enum):
    CONTACT = "contact"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    AWARDS = "awards"
    LANGUAGES = "languages"
    REFERENCES = "references"


class Importance(str, Enum):
    OPTIONAL = "optional"
    RECOMMENDED = "recommended"
    REQUIRED = "required"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class DocumentText:
    """Raw output of a text reader, before any resume-specific analysis."""

    text: str
    page_count: int = 1
    table_count: int = 0
    image_count: int = 0
    author: str | None = None
    created_date: datetime | None = None


@dataclass(frozen=True)
class ExtractedSection:
    id: str
    type: SectionType
    title: str
    content: str
    confidence: float
    suggestions: list[str] = field(default_factory=list)
    is_complete: bool = True


@dataclass(frozen=True)
class MissingContentAlert:
    section: SectionType
    importance: Importance
    description: str
    examples: list[str] = field(default_factory=list)
    impact: float = 0.0


@dataclass(frozen=True)
class ATSIssue:
    type: str  # format | content | structure | keyword
    severity: Severity
    description: str
    location: str
    fix: str


@dataclass(frozen=True)
class ATSRecommendation:
    title: str
    description: str
    impact: float
    effort: str  # low | medium | high
    category: str


@dataclass(frozen=True)
class FormatCompliance:
    fonts: bool = True
    spacing: bool = True
    margins: bool = True
    headers: bool = True
    bullets: bool = True
    tables: bool = True
    images: bool = True
    links: bool = True


@dataclass(frozen=True)
class ATSCompatibilityResult:
    score: float
    issues: list[ATSIssue] = field(default_factory=list)
    recommendations: list[ATSRecommendation] = field(default_factory=list)
    format_compliance: FormatCompliance = field(default_factory=FormatCompliance)


@dataclass(frozen=True)
class DocumentMetadata:
    file_name: str
    file_size: int
    file_type: str
    page_count: int
    word_count: int
    character_count: int
    modified_date: datetime
    created_date: datetime | None = None
    author: str | None = None
    language: str = "en"


@dataclass(frozen=True)
class ContentSuggestion:
    id: str
    type: str  # format | content | structure | keyword
    priority: str  # low | medium | high | critical
    title: str
    description: str
    section: SectionType
    impact: float
    auto_applicable: bool = False


@dataclass(frozen=True)
class ExtractedContent:
    """Everything the extraction stage learned about one document."""

    sections: list[ExtractedSection]
    metadata: DocumentMetadata
    suggestions: list[ContentSuggestion] = field(default_factory=list)
    missing_content: list[MissingContentAlert] = field(default_factory=list)
    ats_compatibility: ATSCompatibilityResult = field(
        default_factory=lambda: ATSCompatibilityResult(score=1.0)
    )
    text: str = ""

    def section(self, section_type: SectionType) -> ExtractedSection | None:
        for section in self.sections:
            if section.type == section_type:
                return section
        return None
