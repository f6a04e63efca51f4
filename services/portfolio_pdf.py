from __future__ import annotations  # Styled PDF export of a portfolio record

import os
from typing import Any, List, Sequence, Tuple

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from portfolio.models import PortfolioRecord, description_lines
from prompt_compiler.skills import format_years, parse_skill_spec


DEJAVU_SANS = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"  # System font
DEJAVU_SANS_BOLD = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"  # System font

ACCENT = (45, 115, 245)  # Palette accent
TEXT = (34, 34, 34)  # Primary text color
MUTED = (100, 100, 100)  # Secondary text color
RULE = (230, 230, 230)  # Divider color


class PortfolioPDF(FPDF):  # A4 portfolio with banner header and paged footer
    def __init__(self, title: str, subtitle: str) -> None:
        super().__init__(orientation="P", unit="mm", format="A4")
        self.banner_title = title
        self.banner_subtitle = subtitle
        self._font_regular = "Helvetica"
        self._font_bold = "Helvetica"
        self._supports_unicode = False
        if os.path.exists(DEJAVU_SANS) and os.path.exists(DEJAVU_SANS_BOLD):
            self.add_font("DejaVu", "", DEJAVU_SANS)
            self.add_font("DejaVu", "B", DEJAVU_SANS_BOLD)
            self._font_regular = "DejaVu"
            self._font_bold = "DejaVu"
            self._supports_unicode = True

    def _prepare_text(self, text: Any) -> str:  # Sanitize text for the core latin-1 fonts
        value = "" if text is None else str(text)
        if self._supports_unicode:
            return value
        cleaned = value.replace("•", "-").replace("–", "-").replace("—", "-")
        return cleaned.encode("latin-1", "ignore").decode("latin-1")

    @property
    def usable_width(self) -> float:
        return float(self.w) - float(self.l_margin) - float(self.r_margin)

    def header(self) -> None:
        if self.page_no() != 1:
            return
        self.set_fill_color(*ACCENT)
        self.rect(0, 0, self.w, 32, style="F")
        self.set_text_color(255, 255, 255)
        self.set_xy(self.l_margin, 8)
        self.set_font(self._font_bold, "B", 18)
        self.cell(0, 9, self._prepare_text(self.banner_title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_font(self._font_regular, "", 11)
        self.cell(0, 7, self._prepare_text(self.banner_subtitle), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_text_color(*TEXT)
        self.set_y(38)

    def footer(self) -> None:
        self.set_y(-12)
        self.set_draw_color(*RULE)
        self.set_line_width(0.2)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.set_text_color(120, 120, 120)
        self.set_font(self._font_regular, "", 9)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="R")

    def section_title(self, title: str) -> None:
        self.ln(2)
        self.set_text_color(*TEXT)
        self.set_x(self.l_margin)
        self.set_font(self._font_bold, "B", 13)
        self.cell(0, 9, self._prepare_text(title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_draw_color(*RULE)
        self.set_line_width(0.2)
        y = self.get_y()
        self.line(self.l_margin, y, self.l_margin + self.usable_width, y)
        self.ln(2)

    def entry_heading(self, left: str, right: str) -> None:
        self.set_x(self.l_margin)
        self.set_font(self._font_bold, "B", 11)
        self.set_text_color(*TEXT)
        right_width = 50.0
        self.cell(self.usable_width - right_width, 6, self._prepare_text(left))
        self.set_font(self._font_regular, "", 10)
        self.set_text_color(*MUTED)
        self.cell(right_width, 6, self._prepare_text(right), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_text_color(*TEXT)

    def body_text(self, text: str, *, muted: bool = False, size: int = 10) -> None:
        if not text:
            return
        self.set_x(self.l_margin)
        self.set_font(self._font_regular, "", size)
        self.set_text_color(*(MUTED if muted else TEXT))
        self.multi_cell(self.usable_width, 5, self._prepare_text(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_text_color(*TEXT)

    def bullet_list(self, lines: Sequence[str]) -> None:
        marker = "•" if self._supports_unicode else "-"
        for line in lines:
            self.body_text(f"{marker} {line}")


def _contact_rows(record: PortfolioRecord) -> List[Tuple[str, str]]:
    personal = record.personal
    rows = [("Location", personal.location), ("Email", personal.email)]
    rows.extend((link.name, link.url) for link in record.social_links if link.url and not link.url.startswith("#"))
    return [(label, value) for label, value in rows if value]


def _skill_text(spec: str) -> str:
    parsed = parse_skill_spec(spec)
    parts = [spec.split(":", 1)[0].split("|", 1)[0].strip() or parsed.name]
    if parsed.proficiency is not None:
        parts.append(f"{parsed.proficiency}%")
    if parsed.years is not None:
        parts.append(f"{format_years(parsed.years)} yrs")
    return " ".join(parts)


def generate_portfolio_pdf(record: PortfolioRecord) -> bytes:
    """Render ``record`` as a one-column résumé-style PDF."""

    personal = record.personal
    pdf = PortfolioPDF(personal.name or "Portfolio", personal.title or "")
    pdf.alias_nb_pages()
    pdf.set_margins(15, 15, 15)
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    contacts = _contact_rows(record)
    if contacts:
        pdf.body_text("  |  ".join(f"{label}: {value}" for label, value in contacts), muted=True, size=9)
    if personal.bio:
        pdf.ln(2)
        pdf.body_text(personal.bio, size=11)

    if record.work_experience:
        pdf.section_title("Work Experience")
        for job in record.work_experience:
            pdf.entry_heading(f"{job.position} - {job.company}".strip(" -"), job.period)
            pdf.body_text(job.location, muted=True, size=9)
            pdf.bullet_list(description_lines(job.description))
            if job.tags:
                pdf.body_text("Technologies: " + ", ".join(job.tags), muted=True, size=9)
            pdf.ln(2)

    if record.education:
        pdf.section_title("Education")
        for edu in record.education:
            pdf.entry_heading(f"{edu.degree} - {edu.institution}".strip(" -"), edu.period)
            pdf.body_text(edu.location, muted=True, size=9)
            pdf.bullet_list(description_lines(edu.description))
            pdf.ln(2)

    if record.projects:
        pdf.section_title("Projects")
        for project in record.projects:
            pdf.entry_heading(project.title, "")
            pdf.body_text(project.description)
            if project.technologies:
                pdf.body_text("Technologies: " + ", ".join(project.technologies), muted=True, size=9)
            links = [url for url in (project.live_url, project.github_url) if url]
            if links:
                pdf.body_text("  ".join(links), muted=True, size=9)
            pdf.ln(2)

    categories = [(category, specs) for category, specs in record.skills.items() if specs]
    if categories:
        pdf.section_title("Skills")
        for category, specs in categories:
            pdf.body_text(f"{category.title()}: " + ", ".join(_skill_text(spec) for spec in specs))

    return bytes(pdf.output())


__all__ = ["PortfolioPDF", "generate_portfolio_pdf"]
