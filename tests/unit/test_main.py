import json
from collections.abc import Iterator
from pathlib import Path

import pytest

from resume_intake.logging.logger import Log
from resume_intake.main import main, parse_args


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("SUGGESTIONS_PROVIDER", "rules")
    handlers = list(Log._logger.handlers)
    level = Log._logger.level
    yield
    for handler in Log._logger.handlers[len(handlers):]:
        Log._logger.removeHandler(handler)
    Log._logger.setLevel(level)


def _write(tmp_path: Path, name: str, content: bytes) -> Path:
    path = tmp_path / name
    path.write_bytes(content)
    return path


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_args(["cv.pdf"])
        assert args.files == [Path("cv.pdf")]
        assert args.single is False
        assert args.max_size_mb is None
        assert args.json is False

    def test_flags(self) -> None:
        args = parse_args(["a.pdf", "b.docx", "--single", "--max-size-mb", "2.5", "--json"])
        assert len(args.files) == 2
        assert args.single is True
        assert args.max_size_mb == 2.5
        assert args.json is True


class TestMain:
    def test_processes_a_resume(
        self, tmp_path: Path, resume_text: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "resume.txt", resume_text.encode())

        assert main([str(path)]) == 0

        out = capsys.readouterr().out
        assert "complete" in out
        assert "overall score" in out

    def test_json_report(
        self, tmp_path: Path, resume_text: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "resume.txt", resume_text.encode())

        assert main([str(path), "--json"]) == 0

        report = json.loads(capsys.readouterr().out)
        assert len(report["completed"]) == 1
        assert report["failed"] == []
        assert report["batch_error"] is None

    def test_missing_file_exits_with_2(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([str(tmp_path / "nope.pdf")]) == 2
        assert "File not found" in capsys.readouterr().err

    def test_invalid_file_exits_with_1(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "photo.gif", b"GIF89a")

        assert main([str(path)]) == 1

        err = capsys.readouterr().err
        assert "INVALID_FILE_TYPE" in err
        assert "  * Convert to PDF or DOCX" in err

    def test_single_mode_rejects_batches(
        self, tmp_path: Path, resume_text: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        first = _write(tmp_path, "a.txt", resume_text.encode())
        second = _write(tmp_path, "b.txt", resume_text.encode())

        assert main([str(first), str(second), "--single"]) == 1

        captured = capsys.readouterr()
        assert "MULTIPLE_FILES_NOT_ALLOWED" in captured.err
        assert "complete" not in captured.out

    def test_max_size_override(
        self, tmp_path: Path, resume_text: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "resume.txt", resume_text.encode())

        assert main([str(path), "--max-size-mb", "0.0001"]) == 1
        assert "FILE_TOO_LARGE" in capsys.readouterr().err
