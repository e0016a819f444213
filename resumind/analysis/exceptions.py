class AnalysisError(Exception):
    """Raised when the analysis provider call fails."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class FeedbackValidationError(AnalysisError):
    """Raised when the parsed feedback fails domain validation."""
