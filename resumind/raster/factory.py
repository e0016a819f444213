from typing import ClassVar

from resumind.config.settings import Settings
from resumind.raster.base import BaseRasterEngine
from resumind.raster.loader import RasterEngineLoader
from resumind.raster.pdfplumber_adapter import PdfPlumberRasterEngine
from resumind.raster.pymupdf_adapter import PyMuPdfRasterEngine


class RasterEngineFactory:
    """Resolves the configured rendering engine to its process-wide loader."""

    ADAPTERS: ClassVar[dict[str, type[BaseRasterEngine]]] = {
        "pymupdf": PyMuPdfRasterEngine,
        "pdfplumber": PdfPlumberRasterEngine,
    }

    _loaders: ClassVar[dict[str, RasterEngineLoader]] = {}

    @classmethod
    def create_loader(cls, settings: Settings) -> RasterEngineLoader:
        """Return the loader for ``settings.raster_engine``, shared process-wide."""
        engine = settings.raster_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown raster engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        loader = cls._loaders.get(engine)
        if loader is None:
            loader = RasterEngineLoader(adapter_cls)
            cls._loaders[engine] = loader
        return loader

    @classmethod
    def clear(cls) -> None:
        cls._loaders.clear()
