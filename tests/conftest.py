"""
Shared fixtures.

PDFs are generated on the fly with reportlab so the tests never depend on
files checked into the repository, and no test talks to the real
extraction service.
"""

import io

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from cvreflow import llm_client
from cvreflow.schema_resume import CvRecord


@pytest.fixture(autouse=True)
def reset_shared_client(monkeypatch):
    """Every test starts without a cached extraction client."""
    monkeypatch.setattr(llm_client, "_client", None)


@pytest.fixture
def make_pdf():
    def _make(pages: int = 1, sizes=None) -> bytes:
        """``sizes`` gives one (width, height) in points per page."""
        sizes = sizes or [A4] * pages
        buf = io.BytesIO()
        c = canvas.Canvas(buf, pagesize=sizes[0])
        for i, size in enumerate(sizes, start=1):
            c.setPageSize(size)
            c.setFont("Helvetica", 12)
            c.drawString(72, 72, f"Page {i}")
            c.showPage()
        c.save()
        return buf.getvalue()

    return _make


@pytest.fixture
def sample_record() -> CvRecord:
    return CvRecord.model_validate({
        "personalInfo": {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "+1 555 0100",
            "linkedin": "linkedin.com/in/janedoe",
            "location": "Berlin",
        },
        "summary": "Backend engineer with ten years of experience.",
        "experience": [
            {
                "company": "Acme",
                "position": "Senior Engineer",
                "startDate": "Jan 2020",
                "endDate": "Present",
                "responsibilities": "Built the billing platform.",
            },
            {
                "company": "Globex",
                "position": "Engineer",
                "startDate": "2016",
                "endDate": "2019",
                "responsibilities": "",
            },
        ],
        "education": [{"institution": "TU Berlin", "degree": "MSc Computer Science", "year": "2016", "gpa": "1.3"}],
        "skills": ["Python", "Go", "PostgreSQL"],
        "certifications": [{"name": "AWS Solutions Architect", "year": "2023"}],
        "languages": "English (C2), German (B2)",
    })
