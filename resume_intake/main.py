import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from resume_intake.config.settings import MEGABYTE, Settings
from resume_intake.logging.logger import Log
from resume_intake.orchestrator.callbacks import UploadCallbacks
from resume_intake.orchestrator.models import UploadProgress
from resume_intake.orchestrator.orchestrator import build_orchestrator
from resume_intake.scoring.models import EnhancedAnalysisResult
from resume_intake.validation.models import RawInput, UploadError
from resume_intake.validation.recovery import advise_on


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="resume-intake",
        description="Validate, extract and score resume documents.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="Resume files to process")
    parser.add_argument(
        "--single",
        action="store_true",
        help="Reject batches with more than one valid file",
    )
    parser.add_argument(
        "--max-size-mb",
        type=float,
        default=None,
        help="Override the maximum accepted file size in MB",
    )
    parser.add_argument("--json", action="store_true", help="Print the batch report as JSON")
    return parser.parse_args(argv)


def _print_progress(progress: UploadProgress) -> None:
    eta = progress.estimated_time_remaining_ms
    suffix = f" (~{eta / 1000:.1f}s left)" if eta else ""
    print(f"[{progress.status.value:>10}] {progress.progress:6.2f}% {progress.file_name}{suffix}")


def _print_analysis(result: EnhancedAnalysisResult) -> None:
    print(f"  overall score: {result.overall_score}")
    for name, value in asdict(result.category_scores).items():
        print(f"    {name:<12} {value}")
    for suggestion in result.suggestions[:5]:
        print(f"  - [{suggestion.priority}] {suggestion.title}")


def _print_error(error: UploadError) -> None:
    print(f"error {error.code}: {error.message}", file=sys.stderr)
    for hint in error.details.get("recoverySuggestions") or advise_on(error):
        print(f"  * {hint}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Entry point: read files -> build orchestrator -> run one batch."""
    args = parse_args(argv)
    overrides: dict[str, object] = {}
    if args.single:
        overrides["enable_multiple_files"] = False
    if args.max_size_mb is not None:
        overrides["max_file_size_bytes"] = int(args.max_size_mb * MEGABYTE)
    settings = Settings(**overrides)
    Log.configure(settings.log_level)

    missing = [path for path in args.files if not path.is_file()]
    if missing:
        for path in missing:
            print(f"File not found: {path}", file=sys.stderr)
        return 2

    callbacks = None
    if not args.json:
        callbacks = UploadCallbacks(
            on_upload_progress=_print_progress,
            on_analysis_ready=_print_analysis,
            on_error=_print_error,
        )
    orchestrator = build_orchestrator(settings, callbacks=callbacks)
    report = orchestrator.run_batch([RawInput.from_path(path) for path in args.files])

    if args.json:
        print(json.dumps(asdict(report), indent=2, default=str))
    return 0 if not report.errors else 1


if __name__ == "__main__":
    sys.exit(main())
