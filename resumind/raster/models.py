import base64
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any

from resumind.raster.exceptions import RasterizationError


@dataclass(frozen=True)
class ImageFormat:
    """Output image format: Pillow writer name, canonical extension, MIME type."""

    pillow_format: str
    extension: str
    mime_type: str
    lossy: bool = False


IMAGE_FORMATS: dict[str, ImageFormat] = {
    "png": ImageFormat("PNG", ".png", "image/png"),
    "jpeg": ImageFormat("JPEG", ".jpg", "image/jpeg", lossy=True),
    "jpg": ImageFormat("JPEG", ".jpg", "image/jpeg", lossy=True),
    "webp": ImageFormat("WEBP", ".webp", "image/webp", lossy=True),
}


@dataclass(frozen=True)
class RasterConfig:
    """Conversion parameters shared by every rasterize call."""

    scale_factor: float = 4.0
    image_format: str = "png"
    image_quality: float = 1.0
    accepted_media_type: str = "application/pdf"

    def __post_init__(self) -> None:
        if self.scale_factor <= 0:
            raise ValueError(f"scale_factor must be positive, got {self.scale_factor}")
        if self.image_format.lower() not in IMAGE_FORMATS:
            raise ValueError(
                f"Unknown image format '{self.image_format}'. "
                f"Choose from: {sorted(IMAGE_FORMATS)}"
            )
        if not 0.0 <= self.image_quality <= 1.0:
            raise ValueError(
                f"image_quality must be within [0, 1], got {self.image_quality}"
            )

    @property
    def output_format(self) -> ImageFormat:
        return IMAGE_FORMATS[self.image_format.lower()]

    @classmethod
    def from_settings(cls, settings: Any) -> "RasterConfig":
        return cls(
            scale_factor=settings.raster_scale_factor,
            image_format=settings.raster_image_format,
            image_quality=settings.raster_image_quality,
            accepted_media_type=settings.accepted_media_type,
        )


def derive_raster_name(document_name: str, extension: str) -> str:
    """Swap the document's extension for the raster format's extension."""
    stem = PurePosixPath(document_name).stem or "document"
    return f"{stem}{extension}"


@dataclass(frozen=True)
class RasterArtifact:
    """Encoded first-page image ready to be uploaded."""

    data: bytes = field(repr=False)
    name: str
    image_format: ImageFormat
    width: int
    height: int

    @property
    def mime_type(self) -> str:
        return self.image_format.mime_type

    @property
    def data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a rasterize call: an artifact with its URL, or an error. Never both."""

    artifact: RasterArtifact | None = None
    url: str = ""
    error: RasterizationError | None = None

    def __post_init__(self) -> None:
        if (self.artifact is None) == (self.error is None):
            raise ValueError("ConversionResult requires exactly one of artifact or error")

    @property
    def ok(self) -> bool:
        return self.artifact is not None

    @property
    def reason(self) -> str:
        return self.error.reason if self.error is not None else ""

    @classmethod
    def success(cls, artifact: RasterArtifact) -> "ConversionResult":
        return cls(artifact=artifact, url=artifact.data_url)

    @classmethod
    def failure(cls, error: RasterizationError) -> "ConversionResult":
        return cls(error=error)
