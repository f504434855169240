"""Best-effort text recovery for Word 97-2003 (.doc) binaries.

The WordDocument stream stores text either as 8-bit cp1252 or UTF-16LE, so
the adapter scans the OLE container for printable runs in both encodings and
keeps the encoding that yields more prose.
"""

import re

from resume_intake.extraction.exceptions import ExtractionError
from resume_intake.extraction.models import DocumentText
from resume_intake.extraction.readers.base import BaseTextReader

OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

_ANSI_RUN_RE = re.compile(rb"[\x20-\x7e\t\r\n]{8,}")
_UTF16_RUN_RE = re.compile(rb"(?:[\x20-\x7e\t\r\n]\x00){8,}")
_PROSE_RE = re.compile(r"[A-Za-z]{2,}\s+[A-Za-z]{2,}")


class LegacyDocAdapter(BaseTextReader):
    """Recovers readable text runs from legacy Word documents."""

    def read(self, content: bytes) -> DocumentText:
        if not content.startswith(OLE_SIGNATURE):
            raise ExtractionError("legacy .doc extraction failed: not an OLE2 Word document")
        ansi_runs = [m.group().decode("cp1252") for m in _ANSI_RUN_RE.finditer(content)]
        utf16_runs = [m.group().decode("utf-16-le") for m in _UTF16_RUN_RE.finditer(content)]
        ansi = self._prose(ansi_runs)
        utf16 = self._prose(utf16_runs)
        text = utf16 if len(utf16) >= len(ansi) else ansi
        return DocumentText(text=text.strip())

    @staticmethod
    def _prose(runs: list[str]) -> str:
        lines: list[str] = []
        for run in runs:
            for line in run.replace("\r", "\n").split("\n"):
                line = line.strip()
                if line and _PROSE_RE.search(line):
                    lines.append(line)
        return "\n".join(lines)
