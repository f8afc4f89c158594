import io

import pdfplumber
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from cvreflow.generator_pdf import FONTS, emit, measure_lines, save
from cvreflow.schema_resume import CvRecord, Experience


def _open(data: bytes):
    return pdfplumber.open(io.BytesIO(data))


def test_emit_produces_a_single_page_pdf(sample_record):
    data = emit(sample_record)

    assert data.startswith(b"%PDF")
    with _open(data) as pdf:
        assert len(pdf.pages) == 1
        text = pdf.pages[0].extract_text()
    assert "Jane Doe" in text
    assert "WORK EXPERIENCE" in text
    assert "TU Berlin | 2016 | GPA: 1.3" in text


def test_empty_record_renders_placeholder_name():
    with _open(emit(CvRecord())) as pdf:
        assert len(pdf.pages) == 1
        assert pdf.pages[0].extract_text().strip() == "Your Name"


def test_long_cv_spans_several_pages():
    record = CvRecord(experience=[
        Experience(position=f"Role {i}", company="Acme", responsibilities="Shipped things. " * 20)
        for i in range(12)
    ])

    with _open(emit(record)) as pdf:
        assert len(pdf.pages) >= 2
        first_page = pdf.pages[0].extract_text()
        last_page = pdf.pages[-1].extract_text()
    assert "Role 0" in first_page
    assert "Role 11" in last_page


def test_text_is_placed_inside_the_margins(sample_record):
    with _open(emit(sample_record)) as pdf:
        page = pdf.pages[0]
        chars = page.chars
        assert min(c["x0"] for c in chars) >= 20 * mm - 1
        assert max(c["x1"] for c in chars) <= page.width - 20 * mm + 1


def test_measure_lines_fits_the_width():
    text = "lorem ipsum dolor sit amet " * 30

    lines = measure_lines(text, 170, "normal", 10)

    assert len(lines) > 1
    assert all(stringWidth(line, FONTS["normal"], 10) <= 170 * mm for line in lines)
    assert " ".join(lines).split() == text.split()


def test_measure_lines_keeps_explicit_newlines():
    assert measure_lines("one\ntwo", 170) == ["one", "two"]


def test_save_writes_the_fixed_filename(sample_record, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    path = save(sample_record)

    assert path.name == "CV_Updated.pdf"
    assert (tmp_path / "CV_Updated.pdf").read_bytes().startswith(b"%PDF")


def test_emit_is_deterministic_in_layout(sample_record):
    with _open(emit(sample_record)) as a, _open(emit(sample_record)) as b:
        assert a.pages[0].extract_text() == b.pages[0].extract_text()


def test_embedded_line_breaks_do_not_leak_into_the_pdf():
    record = CvRecord(experience=[Experience(position="Dev\r\nLead", responsibilities="Line one\r\nLine two")])

    with _open(emit(record)) as pdf:
        text = pdf.pages[0].extract_text()

    assert "Dev Lead" in text
    assert "Line one" in text and "Line two" in text
    assert "\r" not in text
