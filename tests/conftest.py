import io

import pytest
from PIL import Image, ImageDraw
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

CAPTION = "Case No. 12-3456, filed 01-02-2020"


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, CAPTION)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def civil_complaint_pdf_bytes() -> bytes:
    """Generate a one-page civil complaint with every extractable field."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    lines = [
        "SUPERIOR COURT OF CALIFORNIA",
        "Plaintiff: Jane Doe v. Acme Corp.",
        "Defendant: Acme Corp.",
        "Case No: 12-345/67",
        "Filed: 03-04-2021",
        "Judge: Maria Lopez",
        "Civil complaint for damages in the amount of $1,200.00",
    ]
    for offset, line in enumerate(lines):
        c.drawString(72, 720 - offset * 18, line)
    c.save()
    return buf.getvalue()


def _png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def sample_png_bytes() -> bytes:
    """A small white page with a dark block, PNG-encoded."""
    image = Image.new("RGB", (120, 80), "white")
    ImageDraw.Draw(image).rectangle((20, 20, 60, 40), fill="black")
    return _png(image)


@pytest.fixture()
def large_png_bytes() -> bytes:
    """A 3000x1000 page that must be scaled down to fit the default bound."""
    return _png(Image.new("RGB", (3000, 1000), "white"))
