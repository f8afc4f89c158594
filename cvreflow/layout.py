"""
CvRecord ➜ placement instructions.

The engine walks the record section by section and decides where every
line goes and where pages break. It does not draw anything: the output is
a flat list of ``TextPlacement`` / ``PageBreak`` items that a writer
replays in order. Coordinates are millimetres from the top-left corner of
an A4 page.

Page breaks only happen right before a section heading or right before
an entry's first line, so a paragraph is never split across pages.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Sequence, Union

from cvreflow.schema_resume import Certification, CvRecord, Education, Experience, PersonalInfo

PAGE_WIDTH = 210          # A4
MARGIN = 20
TOP = 20
LINE_HEIGHT = 7

HEADING_BREAK_AT = 250
ENTRY_BREAK_AT = 270
LANGUAGES_BREAK_AT = 260

# (text, width, font_style, font_size) -> fitted lines
TextWrapper = Callable[[str, float, str, float], List[str]]


@dataclass(frozen=True)
class TextPlacement:
    text: str
    x: float
    y: float
    font_size: float
    font_style: str = "normal"


@dataclass(frozen=True)
class PageBreak:
    new_page: bool = True


PlacementInstruction = Union[TextPlacement, PageBreak]


def _one_line(text: str) -> str:
    """Collapse line breaks and runs of whitespace for a single drawn line."""
    return " ".join(text.split())


@dataclass
class LayoutCursor:
    page: int = 1
    y: float = TOP


class LayoutEngine:
    def __init__(self, wrap: TextWrapper, page_width: float = PAGE_WIDTH):
        self.wrap = wrap
        self.content_width = page_width - 2 * MARGIN
        self.cursor = LayoutCursor()
        self._out: List[PlacementInstruction] = []

    def layout(self, record: CvRecord) -> List[PlacementInstruction]:
        self.cursor = LayoutCursor()
        self._out = []

        self._header(record.personal_info)
        self._summary(record.summary)
        self._experience(record.experience)
        self._education(record.education)
        self._skills(record.skills)
        self._certifications(record.certifications)
        self._languages(record.languages)
        return self._out

    # ── primitives ─────────────────────────────────────────────────────

    def _break_if_past(self, threshold: float) -> None:
        if self.cursor.y > threshold:
            self._out.append(PageBreak())
            self.cursor.page += 1
            self.cursor.y = TOP

    def _text(self, text: str, size: float, style: str = "normal") -> None:
        self._out.append(TextPlacement(_one_line(text), MARGIN, self.cursor.y, size, style))

    def _paragraph(self, text: str, size: float = 10) -> int:
        """Place wrapped lines from the cursor down; returns the line count.

        The cursor itself is not moved, callers add their own spacing.
        """
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        lines = self.wrap(text, self.content_width, "normal", size)
        for i, line in enumerate(lines):
            self._out.append(TextPlacement(line, MARGIN, self.cursor.y + i * LINE_HEIGHT, size, "normal"))
        return len(lines)

    def _heading(self, title: str, gap: float, threshold: float = HEADING_BREAK_AT) -> None:
        self._break_if_past(threshold)
        self._text(title, 14, "bold")
        self.cursor.y += gap

    # ── sections ───────────────────────────────────────────────────────

    def _header(self, info: PersonalInfo) -> None:
        self._text(info.name or "Your Name", 24, "bold")
        self.cursor.y += 10

        contact = " | ".join(v for v in (info.email, info.phone, info.linkedin, info.location) if v)
        if contact:
            self._text(contact, 10)
        self.cursor.y += 15

    def _summary(self, summary: str) -> None:
        if not summary:
            return
        self._heading("PROFESSIONAL SUMMARY", 7)
        n = self._paragraph(summary)
        self.cursor.y += n * LINE_HEIGHT + 5

    def _experience(self, entries: Sequence[Experience]) -> None:
        if not entries:
            return
        self._heading("WORK EXPERIENCE", 10)
        for exp in entries:
            self._break_if_past(ENTRY_BREAK_AT)
            self._text(exp.position or "Position", 11, "bold")
            self.cursor.y += 6

            self._text(
                f"{exp.company or 'Company'} | {exp.start_date or 'Start'} - {exp.end_date or 'End'}",
                10, "italic",
            )
            self.cursor.y += 6

            if exp.responsibilities:
                n = self._paragraph(exp.responsibilities)
                self.cursor.y += n * LINE_HEIGHT
            self.cursor.y += 5

    def _education(self, entries: Sequence[Education]) -> None:
        if not entries:
            return
        self._heading("EDUCATION", 10)
        for edu in entries:
            self._break_if_past(ENTRY_BREAK_AT)
            self._text(edu.degree or "Degree", 11, "bold")
            self.cursor.y += 6

            line = f"{edu.institution or 'Institution'} | {edu.year or 'Year'}"
            if edu.gpa:
                line += f" | GPA: {edu.gpa}"
            self._text(line, 10, "italic")
            self.cursor.y += 8

    def _skills(self, skills: Sequence[str]) -> None:
        if not skills:
            return
        self._heading("SKILLS", 8)
        n = self._paragraph(", ".join(skills))
        self.cursor.y += n * LINE_HEIGHT + 5

    def _certifications(self, entries: Sequence[Certification]) -> None:
        if not entries:
            return
        self._heading("CERTIFICATIONS", 10)
        for cert in entries:
            self._break_if_past(ENTRY_BREAK_AT)
            self._text(f"• {cert.name or 'Certification'} ({cert.year or 'Year'})", 10)
            self.cursor.y += 6
        self.cursor.y += 3

    def _languages(self, languages: str) -> None:
        if not languages:
            return
        self._heading("LANGUAGES", 8, LANGUAGES_BREAK_AT)
        n = self._paragraph(languages)
        self.cursor.y += n * LINE_HEIGHT
