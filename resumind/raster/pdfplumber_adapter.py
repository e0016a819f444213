import importlib
import io
from types import ModuleType

from PIL import Image

from resumind.raster.base import BaseRasterEngine
from resumind.raster.exceptions import (
    EngineUnavailableError,
    MalformedInputError,
    RenderSurfaceUnavailableError,
)

_NATIVE_DPI = 72


class PdfPlumberRasterEngine(BaseRasterEngine):
    """Renders PDF pages using pdfplumber (pdfium underneath)."""

    def __init__(self) -> None:
        self._pdfplumber: ModuleType | None = None

    def initialize(self) -> None:
        module = importlib.import_module("pdfplumber")
        # pdfplumber renders through pdfium; fail here rather than on first page.
        importlib.import_module("pypdfium2")
        self._pdfplumber = module

    def render_first_page(self, pdf_bytes: bytes, scale: float) -> Image.Image:
        pdfplumber = self._require_module()
        try:
            pdf = pdfplumber.open(io.BytesIO(pdf_bytes))
        except Exception as exc:
            raise MalformedInputError(f"Failed to read PDF document: {exc}") from exc

        with pdf:
            try:
                pages = pdf.pages
            except Exception as exc:
                raise MalformedInputError(f"Failed to read PDF pages: {exc}") from exc
            if not pages:
                raise MalformedInputError("PDF document has no pages")
            try:
                page_image = pages[0].to_image(
                    resolution=_NATIVE_DPI * scale,
                    antialias=True,
                )
                return page_image.original.convert("RGB")
            except Exception as exc:
                raise RenderSurfaceUnavailableError(
                    f"Failed to render PDF page: {exc}"
                ) from exc

    def _require_module(self) -> ModuleType:
        if self._pdfplumber is None:
            raise EngineUnavailableError("pdfplumber engine used before initialization")
        return self._pdfplumber
