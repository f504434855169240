from collections.abc import Callable
from dataclasses import dataclass, fields
from typing import Any

from resume_intake.extraction.models import ExtractedContent
from resume_intake.logging.logger import Log
from resume_intake.orchestrator.models import ContentAnalysis, UploadProgress, UploadResult
from resume_intake.preview.models import LivePreview
from resume_intake.scoring.models import EnhancedAnalysisResult
from resume_intake.validation.models import UploadError


@dataclass(frozen=True)
class UploadCallbacks:
    """One subscriber's set of notifications; any subset may be None."""

    on_upload_progress: Callable[[UploadProgress], Any] | None = None
    on_content_extracted: Callable[[ExtractedContent], Any] | None = None
    on_content_analysis: Callable[[ContentAnalysis], Any] | None = None
    on_analysis_ready: Callable[[EnhancedAnalysisResult], Any] | None = None
    on_upload_complete: Callable[[UploadResult], Any] | None = None
    on_error: Callable[[UploadError], Any] | None = None
    on_live_preview: Callable[[LivePreview], Any] | None = None


EVENTS = frozenset(f.name for f in fields(UploadCallbacks))


class CallbackNotifier:
    """Fans events out to every registered subscriber.

    A subscriber that raises is logged and skipped; the pipeline and the other
    subscribers are unaffected.
    """

    def __init__(self, subscribers: list[UploadCallbacks] | None = None) -> None:
        self._subscribers: list[UploadCallbacks] = list(subscribers or [])

    def subscribe(self, callbacks: UploadCallbacks) -> None:
        self._subscribers.append(callbacks)

    def unsubscribe(self, callbacks: UploadCallbacks) -> None:
        self._subscribers.remove(callbacks)

    def notify(self, event: str, payload: object) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown event '{event}'")
        for subscriber in list(self._subscribers):
            handler = getattr(subscriber, event)
            if handler is None:
                continue
            try:
                handler(payload)
            except Exception as exc:
                Log.error(f"Subscriber failed on {event}: {exc}", error_type=type(exc).__name__)
