"""Progress bookkeeping: the only code that writes UploadProgress snapshots.

Each of the three active stages owns an equal slice of 0..100. Snapshots are
published only when the value strictly increases or the status changes, so
every subscriber sees non-decreasing progress per file.
"""

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from resume_intake.config.settings import MEGABYTE
from resume_intake.orchestrator.callbacks import CallbackNotifier
from resume_intake.orchestrator.models import UploadProgress, UploadStatus
from resume_intake.validation.models import RawInput

BASE_ESTIMATE_MS = 5000
ESTIMATE_MS_PER_MB = 2000


def initial_estimate_ms(size_bytes: int) -> int:
    return int(BASE_ESTIMATE_MS + size_bytes / MEGABYTE * ESTIMATE_MS_PER_MB)


def overall_progress(stage_index: int, stage_count: int, intra: float) -> float:
    intra = max(0.0, min(100.0, intra))
    return round(stage_index / stage_count * 100 + intra / stage_count, 2)


def remaining_ms(stage_index: int, intra: float, durations_ms: Sequence[int]) -> int:
    """Remaining stages at the average duration plus what is left of this one."""
    average = sum(durations_ms) / len(durations_ms)
    remaining_stages = len(durations_ms) - stage_index - 1
    left_in_stage = (1 - max(0.0, min(100.0, intra)) / 100) * durations_ms[stage_index]
    return int(remaining_stages * average + left_in_stage)


class ProgressTracker:
    def __init__(self, stage_durations_ms: Sequence[int], notifier: CallbackNotifier) -> None:
        self._durations = list(stage_durations_ms)
        self._notifier = notifier
        self._snapshots: dict[str, UploadProgress] = {}

    @property
    def snapshots(self) -> Mapping[str, UploadProgress]:
        return MappingProxyType(self._snapshots)

    def get(self, file_id: str) -> UploadProgress | None:
        return self._snapshots.get(file_id)

    def is_active(self, file_id: str) -> bool:
        snapshot = self._snapshots.get(file_id)
        return snapshot is not None and not snapshot.is_terminal

    def pending(self, raw: RawInput) -> UploadProgress:
        """Open a new progress series; replaces any finished series for the file."""
        snapshot = UploadProgress(
            file_id=raw.file_id,
            file_name=raw.name,
            progress=0.0,
            status=UploadStatus.PENDING,
            estimated_time_remaining_ms=initial_estimate_ms(raw.size_bytes),
        )
        self._snapshots[raw.file_id] = snapshot
        self._notifier.notify("on_upload_progress", snapshot)
        return snapshot

    def stage(self, file_id: str, status: UploadStatus, stage_index: int, intra: float) -> UploadProgress:
        current = self._snapshots[file_id]
        value = max(current.progress, overall_progress(stage_index, len(self._durations), intra))
        if status == current.status and value <= current.progress:
            return current
        return self._publish(
            current.advance(status, value, remaining_ms(stage_index, intra, self._durations))
        )

    def complete(self, file_id: str) -> UploadProgress:
        current = self._snapshots[file_id]
        return self._publish(current.advance(UploadStatus.COMPLETE, 100.0, 0))

    def fail(self, file_id: str, message: str) -> UploadProgress:
        current = self._snapshots[file_id]
        return self._publish(current.advance(UploadStatus.ERROR, current.progress, error=message))

    def _publish(self, snapshot: UploadProgress) -> UploadProgress:
        self._snapshots[snapshot.file_id] = snapshot
        self._notifier.notify("on_upload_progress", snapshot)
        return snapshot
