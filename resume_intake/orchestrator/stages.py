import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar, TypeVar

from resume_intake.extraction.pipeline import ContentExtractionPipeline
from resume_intake.logging.logger import Log
from resume_intake.orchestrator.callbacks import CallbackNotifier
from resume_intake.orchestrator.context import FileContext
from resume_intake.orchestrator.exceptions import IncompleteUploadError
from resume_intake.orchestrator.legacy import build_content_analysis
from resume_intake.orchestrator.models import UploadStatus
from resume_intake.scoring.base import BaseScorer

ProgressReport = Callable[[float], None]
T = TypeVar("T")


class Stage(ABC):
    """One active phase of an upload; owns an equal slice of the progress bar."""

    status: ClassVar[UploadStatus]

    def __init__(self, duration_ms: int, tick_interval_seconds: float = 0.0) -> None:
        self.duration_ms = duration_ms
        self._tick_interval = tick_interval_seconds
        self._in_flight: asyncio.Future[Any] | None = None

    @abstractmethod
    async def run(self, context: FileContext, report: ProgressReport) -> None:
        """Do the stage's work, calling ``report`` with intra-stage percent."""
        raise NotImplementedError

    def publish(self, context: FileContext, notifier: CallbackNotifier) -> None:
        """Emit the stage's result events once it has finished."""

    async def tick(self) -> None:
        await asyncio.sleep(self._tick_interval)

    async def run_blocking(self, func: Callable[..., T], *args: Any) -> T:
        """Run ``func`` in a worker thread that outlives a cancelled caller."""
        self._in_flight = asyncio.ensure_future(asyncio.to_thread(func, *args))
        result = await asyncio.shield(self._in_flight)
        self._in_flight = None
        return result

    async def drain(self) -> None:
        """Wait for a worker thread left behind by a timed-out run."""
        pending, self._in_flight = self._in_flight, None
        if pending is not None:
            await asyncio.gather(pending, return_exceptions=True)


class UploadStage(Stage):
    """Receives the file content chunk by chunk."""

    status = UploadStatus.UPLOADING

    def __init__(
        self,
        duration_ms: int,
        chunk_size_bytes: int,
        tick_interval_seconds: float = 0.0,
    ) -> None:
        super().__init__(duration_ms, tick_interval_seconds)
        self._chunk_size = max(1, chunk_size_bytes)

    async def run(self, context: FileContext, report: ProgressReport) -> None:
        content = context.raw.content
        total = len(content)
        context.received_bytes = 0
        for offset in range(0, total, self._chunk_size):
            chunk = content[offset:offset + self._chunk_size]
            context.received_bytes += len(chunk)
            report(context.received_bytes / total * 100)
            await self.tick()
        if context.received_bytes != context.raw.size_bytes:
            raise IncompleteUploadError(
                f"Received {context.received_bytes} of {context.raw.size_bytes} bytes "
                f"for {context.raw.name}"
            )


class ProcessingStage(Stage):
    """Extracts structured content and builds the legacy summary."""

    status = UploadStatus.PROCESSING

    def __init__(
        self,
        duration_ms: int,
        pipeline: ContentExtractionPipeline,
        tick_interval_seconds: float = 0.0,
    ) -> None:
        super().__init__(duration_ms, tick_interval_seconds)
        self._pipeline = pipeline

    async def run(self, context: FileContext, report: ProgressReport) -> None:
        await self.tick()
        content = await self.run_blocking(self._pipeline.extract, context.raw)
        context.extracted_content = content
        report(80)
        context.content_analysis = build_content_analysis(content)
        Log.info(
            f"Extracted content for {context.raw.name}",
            sections=len(content.sections),
            missing=len(content.missing_content),
        )

    def publish(self, context: FileContext, notifier: CallbackNotifier) -> None:
        notifier.notify("on_content_extracted", context.extracted_content)
        notifier.notify("on_content_analysis", context.content_analysis)


class AnalyzingStage(Stage):
    """Scores the extracted content."""

    status = UploadStatus.ANALYZING

    def __init__(
        self,
        duration_ms: int,
        scorer: BaseScorer,
        tick_interval_seconds: float = 0.0,
    ) -> None:
        super().__init__(duration_ms, tick_interval_seconds)
        self._scorer = scorer

    async def run(self, context: FileContext, report: ProgressReport) -> None:
        if context.extracted_content is None:
            raise ValueError("FileContext.extracted_content must be set before analysis")
        await self.tick()
        context.analysis = await self.run_blocking(self._scorer.score, context.extracted_content)
        report(90)

    def publish(self, context: FileContext, notifier: CallbackNotifier) -> None:
        notifier.notify("on_analysis_ready", context.analysis)
