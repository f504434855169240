import pytest

from resume_intake.orchestrator.exceptions import InvalidTransitionError
from resume_intake.orchestrator.models import BatchReport, UploadProgress, UploadResult, UploadStatus
from resume_intake.validation.models import UploadError


def _make_progress(status: UploadStatus = UploadStatus.PENDING, progress: float = 0.0) -> UploadProgress:
    return UploadProgress(file_id="cv.pdf-10-1", file_name="cv.pdf", progress=progress, status=status)


class TestUploadProgress:
    def test_happy_path_transitions(self) -> None:
        snapshot = _make_progress()
        for status, value in (
            (UploadStatus.UPLOADING, 10.0),
            (UploadStatus.PROCESSING, 40.0),
            (UploadStatus.ANALYZING, 70.0),
            (UploadStatus.COMPLETE, 100.0),
        ):
            snapshot = snapshot.advance(status, value)
        assert snapshot.status == UploadStatus.COMPLETE
        assert snapshot.is_terminal is True

    @pytest.mark.parametrize(
        "status",
        [UploadStatus.PENDING, UploadStatus.UPLOADING, UploadStatus.PROCESSING, UploadStatus.ANALYZING],
    )
    def test_any_active_status_may_fail(self, status: UploadStatus) -> None:
        failed = _make_progress(status).advance(UploadStatus.ERROR, 0.0, error="boom")
        assert failed.status == UploadStatus.ERROR
        assert failed.error == "boom"

    def test_cannot_skip_stages(self) -> None:
        with pytest.raises(InvalidTransitionError, match="pending to analyzing"):
            _make_progress().advance(UploadStatus.ANALYZING, 50.0)

    def test_cannot_go_backwards(self) -> None:
        with pytest.raises(InvalidTransitionError):
            _make_progress(UploadStatus.PROCESSING).advance(UploadStatus.UPLOADING, 50.0)

    @pytest.mark.parametrize("status", [UploadStatus.COMPLETE, UploadStatus.ERROR])
    def test_terminal_states_are_final(self, status: UploadStatus) -> None:
        snapshot = _make_progress(status, 100.0)
        with pytest.raises(InvalidTransitionError):
            snapshot.advance(status, 100.0)
        with pytest.raises(InvalidTransitionError):
            snapshot.advance(UploadStatus.UPLOADING, 100.0)

    def test_same_status_update_is_allowed_while_active(self) -> None:
        snapshot = _make_progress(UploadStatus.UPLOADING, 5.0).advance(UploadStatus.UPLOADING, 20.0, 900)
        assert snapshot.progress == 20.0
        assert snapshot.estimated_time_remaining_ms == 900

    def test_advance_returns_a_new_snapshot(self) -> None:
        original = _make_progress()
        advanced = original.advance(UploadStatus.UPLOADING, 1.0)
        assert original.status == UploadStatus.PENDING
        assert advanced is not original


class TestBatchReport:
    def test_errors_include_every_kind(self) -> None:
        validation = UploadError(code="EMPTY_FILE", message="empty")
        batch = UploadError(code="MULTIPLE_FILES_NOT_ALLOWED", message="one only")
        failed = UploadError(code="UPLOAD_FAILED", message="broken")
        report = BatchReport(validation_errors=[validation], batch_error=batch, failed=[failed])
        assert report.errors == [validation, batch, failed]

    def test_clean_report_has_no_errors(self) -> None:
        report = BatchReport(completed=[UploadResult("id", "analysis-1", 80.0, 12)])
        assert report.errors == []
