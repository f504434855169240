from resume_intake.exceptions import TransientError


class OrchestratorError(Exception):
    """Base exception for all upload orchestration errors."""


class InvalidTransitionError(OrchestratorError):
    """Raised when an upload status change is not allowed by the state machine."""


class StageTimeoutError(OrchestratorError, TransientError):
    """Raised when a stage does not finish within the configured timeout."""


class UploadCancelledError(OrchestratorError):
    """Raised at a stage boundary when the caller cancelled the file."""


class IncompleteUploadError(OrchestratorError):
    """Raised when fewer bytes were received than the file declares."""
