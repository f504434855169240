import asyncio
import time
from collections.abc import Mapping, Sequence

from resume_intake.config.settings import Settings
from resume_intake.exceptions import TransientError
from resume_intake.extraction.pipeline import ContentExtractionPipeline
from resume_intake.extraction.readers.factory import TextReaderFactory
from resume_intake.extraction.readers.image_adapter import BaseOcrEngine
from resume_intake.logging.logger import Log
from resume_intake.orchestrator.callbacks import CallbackNotifier, UploadCallbacks
from resume_intake.orchestrator.context import FileContext
from resume_intake.orchestrator.exceptions import StageTimeoutError, UploadCancelledError
from resume_intake.orchestrator.models import BatchReport, UploadProgress, UploadResult
from resume_intake.orchestrator.progress import ProgressTracker
from resume_intake.orchestrator.stages import AnalyzingStage, ProcessingStage, Stage, UploadStage
from resume_intake.preview.generator import LivePreviewGenerator
from resume_intake.scoring.scorer import QualityScorer
from resume_intake.suggestions.factory import SuggestionProviderFactory
from resume_intake.validation import errors
from resume_intake.validation.models import DEFAULT_FILE_FORMATS, FileFormatSpec, RawInput, UploadError
from resume_intake.validation.recovery import with_recovery
from resume_intake.validation.validator import validate_batch


class UploadOrchestrator:
    """Validates a batch, then drives each file through upload, processing and analysis.

    Files run one at a time in input order. A failing file is reported and the
    batch moves on; nothing is retried automatically.
    """

    def __init__(
        self,
        stages: Sequence[Stage],
        *,
        formats: Sequence[FileFormatSpec] = DEFAULT_FILE_FORMATS,
        max_file_size_bytes: int,
        enable_multiple_files: bool = True,
        stage_timeout_seconds: float | None = None,
        preview: LivePreviewGenerator | None = None,
        notifier: CallbackNotifier | None = None,
    ) -> None:
        self._stages = list(stages)
        self._formats = list(formats)
        self._max_file_size_bytes = max_file_size_bytes
        self._enable_multiple_files = enable_multiple_files
        self._stage_timeout = stage_timeout_seconds
        self._preview = preview
        self._notifier = notifier or CallbackNotifier()
        self._tracker = ProgressTracker([s.duration_ms for s in self._stages], self._notifier)
        self._cancelled: set[str] = set()

    @property
    def progress(self) -> Mapping[str, UploadProgress]:
        """Read-only view of the latest snapshot per file id."""
        return self._tracker.snapshots

    def subscribe(self, callbacks: UploadCallbacks) -> None:
        self._notifier.subscribe(callbacks)

    def cancel(self, file_id: str) -> bool:
        """Request cancellation; honoured at the next stage boundary."""
        if not self._tracker.is_active(file_id):
            return False
        self._cancelled.add(file_id)
        Log.info(f"Cancellation requested for {file_id}")
        return True

    def run_batch(self, files: Sequence[RawInput]) -> BatchReport:
        return asyncio.run(self.submit(files))

    async def retry(self, raw: RawInput) -> BatchReport:
        """Re-submit one input through the same pipeline."""
        Log.info(f"Retrying {raw.name}", file_id=raw.file_id)
        return await self.submit([raw])

    async def submit(self, files: Sequence[RawInput]) -> BatchReport:
        report = BatchReport()
        validation = validate_batch(
            files,
            self._formats,
            self._max_file_size_bytes,
            self._enable_multiple_files,
        )
        for error in validation.file_errors:
            report.validation_errors.append(self._report_error(error))
        if validation.batch_error is not None:
            report.batch_error = self._report_error(validation.batch_error)
            return report

        contexts = self._open(validation.accepted_files)
        Log.info(f"Processing batch of {len(contexts)} file(s)", rejected=len(validation.file_errors))
        for context in contexts:
            result = await self._process(context)
            if result is not None:
                report.completed.append(result)
            elif context.error is not None:
                report.failed.append(context.error)
        return report

    def _open(self, files: Sequence[RawInput]) -> list[FileContext]:
        """Give every accepted file its pending snapshot before any processing."""
        contexts: list[FileContext] = []
        seen: set[str] = set()
        for raw in files:
            if raw.file_id in seen or self._tracker.is_active(raw.file_id):
                Log.warning(f"Skipping {raw.name}: already in progress", file_id=raw.file_id)
                continue
            seen.add(raw.file_id)
            self._cancelled.discard(raw.file_id)
            contexts.append(FileContext(raw=raw, progress=self._tracker.pending(raw)))
        return contexts

    async def _process(self, context: FileContext) -> UploadResult | None:
        context.started_at = time.monotonic()
        preview_task = self._start_preview(context.raw)
        try:
            for index, stage in enumerate(self._stages):
                self._check_cancelled(context)
                await self._run_stage(context, index, stage)
            self._check_cancelled(context)
            if context.analysis is None:
                raise ValueError("FileContext.analysis must be set before completion")
            context.progress = self._tracker.complete(context.file_id)
        except UploadCancelledError:
            self._fail(context, errors.upload_cancelled(context.raw), "Upload cancelled")
            return None
        except Exception as exc:
            transient = isinstance(exc, TransientError)
            error = errors.upload_failed(context.raw, exc, transient=transient)
            self._fail(context, error, str(exc) or error.message)
            return None
        finally:
            if preview_task is not None:
                await preview_task

        result = UploadResult(
            file_id=context.file_id,
            analysis_id=context.analysis.id,
            initial_score=context.analysis.overall_score,
            processing_time_ms=int((time.monotonic() - context.started_at) * 1000),
        )
        self._notifier.notify("on_upload_complete", result)
        Log.info(f"Upload complete for {context.raw.name}", score=result.initial_score)
        return result

    async def _run_stage(self, context: FileContext, index: int, stage: Stage) -> None:
        file_id = context.file_id

        def report(intra: float) -> None:
            context.progress = self._tracker.stage(file_id, stage.status, index, intra)

        report(0)
        try:
            await asyncio.wait_for(stage.run(context, report), timeout=self._stage_timeout)
        except asyncio.TimeoutError as exc:
            # the worker thread cannot be interrupted; the next file waits for it
            await stage.drain()
            raise StageTimeoutError(
                f"{stage.status.value.capitalize()} stage timed out after {self._stage_timeout}s"
            ) from exc
        report(100)
        stage.publish(context, self._notifier)

    def _check_cancelled(self, context: FileContext) -> None:
        if context.file_id in self._cancelled:
            self._cancelled.discard(context.file_id)
            raise UploadCancelledError(f"Upload of {context.raw.name} was cancelled")

    def _fail(self, context: FileContext, error: UploadError, message: str) -> None:
        context.error = with_recovery(error)
        context.progress = self._tracker.fail(context.file_id, message)
        Log.error(
            f"Upload failed for {context.raw.name}: {message}",
            code=error.code,
            error_type=error.details.get("errorType", ""),
        )
        self._notifier.notify("on_error", context.error)

    def _report_error(self, error: UploadError) -> UploadError:
        error = with_recovery(error)
        Log.warning(f"Rejected upload: {error.message}", code=error.code)
        self._notifier.notify("on_error", error)
        return error

    def _start_preview(self, raw: RawInput) -> asyncio.Task[None] | None:
        if self._preview is None:
            return None
        return asyncio.create_task(self._emit_preview(raw))

    async def _emit_preview(self, raw: RawInput) -> None:
        preview = await asyncio.to_thread(self._preview.generate, raw)
        if preview.is_enabled:
            self._notifier.notify("on_live_preview", preview)


def build_orchestrator(
    settings: Settings,
    callbacks: UploadCallbacks | None = None,
    ocr: BaseOcrEngine | None = None,
) -> UploadOrchestrator:
    """Build an UploadOrchestrator with all required adapters."""
    reader = TextReaderFactory.create(settings, ocr=ocr)
    pipeline = ContentExtractionPipeline(reader, SuggestionProviderFactory.create(settings))
    tick = settings.stage_tick_interval_seconds
    stages = [
        UploadStage(settings.upload_stage_duration_ms, settings.upload_chunk_size_bytes, tick),
        ProcessingStage(settings.processing_stage_duration_ms, pipeline, tick),
        AnalyzingStage(settings.analyzing_stage_duration_ms, QualityScorer(), tick),
    ]
    preview = None
    if settings.preview_enabled:
        preview = LivePreviewGenerator(reader, max_chars=settings.preview_max_chars)
    return UploadOrchestrator(
        stages,
        max_file_size_bytes=settings.max_file_size_bytes,
        enable_multiple_files=settings.enable_multiple_files,
        stage_timeout_seconds=settings.stage_timeout_seconds,
        preview=preview,
        notifier=CallbackNotifier([callbacks] if callbacks else None),
    )
