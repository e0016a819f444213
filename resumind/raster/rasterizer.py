import asyncio
import io

from PIL import Image

from resumind.ingestion.models import Document
from resumind.logging.logger import Log
from resumind.raster.exceptions import (
    EncodeFailedError,
    InvalidInputTypeError,
    RasterizationError,
)
from resumind.raster.loader import RasterEngineLoader
from resumind.raster.models import (
    ConversionResult,
    RasterArtifact,
    RasterConfig,
    derive_raster_name,
)


class PageRasterizer:
    """Converts the first page of a PDF document into an encoded image."""

    def __init__(self, loader: RasterEngineLoader, config: RasterConfig) -> None:
        self._loader = loader
        self._config = config

    async def rasterize(self, document: Document) -> ConversionResult:
        """Render page 1 of ``document``.

        Never raises for conversion problems: failures come back as a
        ConversionResult carrying the RasterizationError subclass.
        """
        try:
            artifact = await self._convert(document)
        except RasterizationError as exc:
            Log.error(f"PDF conversion error for '{document.name}': {exc.reason}")
            return ConversionResult.failure(exc)

        Log.info(
            f"Rasterized '{document.name}' to '{artifact.name}' "
            f"({artifact.width}x{artifact.height}, {len(artifact.data)} bytes)"
        )
        return ConversionResult.success(artifact)

    async def _convert(self, document: Document) -> RasterArtifact:
        if document.media_type != self._config.accepted_media_type:
            raise InvalidInputTypeError()

        engine = await self._loader.acquire()
        image = await asyncio.to_thread(
            engine.render_first_page, document.data, self._config.scale_factor
        )
        data = await asyncio.to_thread(self._encode, image)

        output_format = self._config.output_format
        return RasterArtifact(
            data=data,
            name=derive_raster_name(document.name, output_format.extension),
            image_format=output_format,
            width=image.width,
            height=image.height,
        )

    def _encode(self, image: Image.Image) -> bytes:
        output_format = self._config.output_format
        options: dict[str, object] = {}
        if output_format.lossy:
            options["quality"] = round(self._config.image_quality * 100)

        buffer = io.BytesIO()
        try:
            image.save(buffer, format=output_format.pillow_format, **options)
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeFailedError(f"Failed to encode page image: {exc}") from exc

        data = buffer.getvalue()
        if not data:
            raise EncodeFailedError()
        return data
