import io

import pytest
from docx import Document
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from resume_intake.validation.models import DOCX_MIME_TYPE, RawInput

RESUME_LINES = [
    "Jane Doe",
    "jane.doe@example.com",
    "(555) 123-4567",
    "Austin, TX",
    "linkedin.com/in/janedoe",
    "Summary",
    "Backend engineer who builds reliable data platforms for 8 years.",
    "Experience",
    "Senior Engineer, Acme Corp 2019 - 2024",
    "- Led migration of 40 services, cutting costs by 30%",
    "- Built an ingestion pipeline handling 2M events per day",
    "- Mentored 5 engineers and delivered quarterly releases",
    "Education",
    "B.Sc. Computer Science, State University 2015",
    "Skills",
    "Python, SQL, Docker, Kubernetes, AWS",
]

RESUME_LINES_WITHOUT_SKILLS = RESUME_LINES[:-2]


def _pdf_from_lines(lines: list[str]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    y = 740
    for line in lines:
        c.drawString(72, y, line)
        y -= 18
    c.save()
    return buf.getvalue()


def _make_raw(name: str, content: bytes, mime_type: str | None = None) -> RawInput:
    """Build a RawInput with a fixed timestamp so file ids are stable."""
    return RawInput.from_bytes(name, content, mime_type=mime_type, last_modified_ms=1700000000000)


@pytest.fixture()
def resume_text() -> str:
    return "\n".join(RESUME_LINES)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _pdf_from_lines(["Hello PDF World"])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def resume_pdf_bytes() -> bytes:
    """Generate a one-page resume PDF with every core section."""
    return _pdf_from_lines(RESUME_LINES)


@pytest.fixture()
def resume_pdf_without_skills_bytes() -> bytes:
    """Generate a one-page resume PDF with no skills content anywhere."""
    return _pdf_from_lines(RESUME_LINES_WITHOUT_SKILLS)


@pytest.fixture()
def resume_docx_bytes() -> bytes:
    """Generate a DOCX resume with a two-column skills table."""
    document = Document()
    document.core_properties.author = "Jane Doe"
    for line in RESUME_LINES[:-1]:
        document.add_paragraph(line)
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Python"
    table.rows[0].cells[1].text = "Docker"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (20, 20), color=(255, 255, 255)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def resume_pdf_input(resume_pdf_bytes: bytes) -> RawInput:
    return _make_raw("resume.pdf", resume_pdf_bytes)


@pytest.fixture()
def resume_docx_input(resume_docx_bytes: bytes) -> RawInput:
    return _make_raw("resume.docx", resume_docx_bytes, DOCX_MIME_TYPE)
