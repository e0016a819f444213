class IngestionError(Exception):
    """Base exception for terminal ingestion failures.

    The message is the human-readable reason shown to the user.
    """

    default_reason = "An unexpected error occurred"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or self.default_reason)

    @property
    def reason(self) -> str:
        return str(self)

    @property
    def status(self) -> str:
        return f"Error: {self.reason}"


class NotAuthenticatedError(IngestionError):
    default_reason = "Please sign in to analyze resumes"


class FileTooLargeError(IngestionError):
    default_reason = "File size exceeds maximum limit"


class UploadFailedError(IngestionError):
    default_reason = "Failed to upload PDF"


class ThumbnailFailedError(IngestionError):
    default_reason = "Failed to create thumbnail"


class ThumbnailUploadFailedError(IngestionError):
    default_reason = "Failed to upload thumbnail"


class PersistFailedError(IngestionError):
    default_reason = "Failed to save resume data"


class AnalysisFailedError(IngestionError):
    default_reason = "Failed to analyze resume. AI service unavailable."


class ResultParseFailedError(IngestionError):
    default_reason = "Failed to read resume feedback"


class MalformedRecordError(Exception):
    """Raised when a stored record value cannot be decoded."""
