from abc import ABC, abstractmethod

from PIL import Image


class BaseRasterEngine(ABC):
    """Contract for all page rendering adapters."""

    @abstractmethod
    def initialize(self) -> None:
        """Resolve and configure the engine runtime.

        Blocking. Called at most once per successful load by RasterEngineLoader.

        Raises:
            Exception: any failure; the loader reports it as EngineUnavailableError.
        """

    @abstractmethod
    def render_first_page(self, pdf_bytes: bytes, scale: float) -> Image.Image:
        """Render page index 0 at ``scale`` times its native size.

        Args:
            pdf_bytes: Raw PDF file content.
            scale: Linear scale factor applied to the page's native dimensions.

        Returns:
            RGB image of the rendered page.

        Raises:
            MalformedInputError: if the document cannot be parsed or has no pages.
            RenderSurfaceUnavailableError: if the page cannot be rendered.
        """
