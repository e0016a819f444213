import importlib
from types import ModuleType

from PIL import Image

from resumind.raster.base import BaseRasterEngine
from resumind.raster.exceptions import (
    EngineUnavailableError,
    MalformedInputError,
    RenderSurfaceUnavailableError,
)

# Highest anti-aliasing level MuPDF supports.
_AA_LEVEL = 8


class PyMuPdfRasterEngine(BaseRasterEngine):
    """Renders PDF pages using PyMuPDF."""

    def __init__(self) -> None:
        self._pymupdf: ModuleType | None = None

    def initialize(self) -> None:
        module = importlib.import_module("pymupdf")
        module.TOOLS.set_aa_level(_AA_LEVEL)
        self._pymupdf = module

    def render_first_page(self, pdf_bytes: bytes, scale: float) -> Image.Image:
        pymupdf = self._require_module()
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")
        except Exception as exc:
            raise MalformedInputError(f"Failed to read PDF document: {exc}") from exc

        with doc:
            if doc.page_count == 0:
                raise MalformedInputError("PDF document has no pages")
            try:
                page = doc.load_page(0)
            except Exception as exc:
                raise MalformedInputError(f"Failed to read first page: {exc}") from exc
            try:
                pixmap = page.get_pixmap(matrix=pymupdf.Matrix(scale, scale), alpha=False)
                return Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)
            except Exception as exc:
                raise RenderSurfaceUnavailableError(
                    f"Failed to render PDF page: {exc}"
                ) from exc

    def _require_module(self) -> ModuleType:
        if self._pymupdf is None:
            raise EngineUnavailableError("PyMuPDF engine used before initialization")
        return self._pymupdf
