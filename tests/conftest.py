import io
from collections.abc import Generator

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from resumind.raster.factory import RasterEngineFactory


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Jane Doe - Software Engineer")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def square_pdf_bytes() -> bytes:
    """Generate a single 100x100 pt page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=(100, 100))
    c.rect(10, 10, 80, 80, fill=1)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF whose pages differ in size."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=(100, 50))
    c.drawString(10, 20, "Page one")
    c.showPage()
    c.setPageSize((300, 300))
    c.drawString(10, 20, "Page two")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def feedback_payload() -> dict[str, object]:
    return {
        "overallScore": 81,
        "ATS": {"score": 90, "tips": [{"type": "good", "tip": "Clean layout"}]},
        "toneAndStyle": {
            "score": 75,
            "tips": [
                {
                    "type": "improve",
                    "tip": "Trim adjectives",
                    "explanation": "Prefer measurable results over descriptive words.",
                }
            ],
        },
        "content": {"score": 80, "tips": []},
        "structure": {"score": 85, "tips": []},
        "skills": {"score": 70, "tips": []},
    }


@pytest.fixture(autouse=True)
def _fresh_engine_loaders() -> Generator[None, None, None]:
    """Engine loaders are process-wide; isolate tests from each other."""
    RasterEngineFactory.clear()
    yield
    RasterEngineFactory.clear()
