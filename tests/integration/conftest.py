import os
from collections.abc import Callable
from pathlib import Path

import pytest

from resume_intake.config.settings import Settings
from resume_intake.orchestrator.callbacks import UploadCallbacks


def _test_settings() -> Settings:
    os.environ.setdefault("SUGGESTIONS_PROVIDER", "rules")
    return Settings(stage_timeout_seconds=60.0)


class EventLog:
    """Records every callback payload, keyed by event name."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def callbacks(self) -> UploadCallbacks:
        def record(name: str) -> Callable[[object], None]:
            return lambda payload: self.events.append((name, payload))

        return UploadCallbacks(
            on_upload_progress=record("on_upload_progress"),
            on_content_extracted=record("on_content_extracted"),
            on_content_analysis=record("on_content_analysis"),
            on_analysis_ready=record("on_analysis_ready"),
            on_upload_complete=record("on_upload_complete"),
            on_error=record("on_error"),
            on_live_preview=record("on_live_preview"),
        )

    def of(self, name: str) -> list:
        return [payload for event, payload in self.events if event == name]


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def resume_pdf_on_disk(files_root: Path, resume_pdf_bytes: bytes) -> Path:
    path = files_root / "resume.pdf"
    path.write_bytes(resume_pdf_bytes)
    return path


@pytest.fixture
def resume_docx_on_disk(files_root: Path, resume_docx_bytes: bytes) -> Path:
    path = files_root / "resume.docx"
    path.write_bytes(resume_docx_bytes)
    return path
