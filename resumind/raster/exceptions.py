class RasterizationError(Exception):
    """Base exception for first-page rasterization failures.

    The message doubles as the human-readable reason shown to the user.
    """

    default_reason = "Failed to convert PDF to image"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or self.default_reason)

    @property
    def reason(self) -> str:
        return str(self)


class InvalidInputTypeError(RasterizationError):
    """Raised when the document is not of the accepted media type."""

    default_reason = "Invalid file type. Please upload a PDF file."


class EngineUnavailableError(RasterizationError):
    """Raised when the rendering engine cannot be initialized."""

    default_reason = "Failed to load PDF rendering engine"


class MalformedInputError(RasterizationError):
    """Raised when the document cannot be parsed or has no pages."""

    default_reason = "Failed to read PDF document"


class RenderSurfaceUnavailableError(RasterizationError):
    """Raised when the page cannot be rendered onto a drawable surface."""

    default_reason = "Failed to render PDF page. No drawable surface available."


class EncodeFailedError(RasterizationError):
    """Raised when the rendered surface cannot be encoded to an image."""

    default_reason = "Failed to create image from rendered page"
