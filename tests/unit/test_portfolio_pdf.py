from portfolio.models import PortfolioRecord
from services import generate_portfolio_pdf
from services.portfolio_pdf import PortfolioPDF, _skill_text


def test_pdf_export_produces_document(sample_record) -> None:
    payload = generate_portfolio_pdf(sample_record)
    assert isinstance(payload, bytes)
    assert payload.startswith(b"%PDF")


def test_pdf_export_handles_empty_record() -> None:
    payload = generate_portfolio_pdf(PortfolioRecord())
    assert payload.startswith(b"%PDF")


def test_core_font_text_is_sanitized() -> None:
    pdf = PortfolioPDF("Jane", "Engineer")
    pdf._supports_unicode = False
    assert pdf._prepare_text("2019 – 2021 • Zürich 🚀") == "2019 - 2021 - Zürich "
    assert pdf._prepare_text(None) == ""


def test_skill_text_keeps_display_name() -> None:
    assert _skill_text("Python: 80% | 5yrs | led backend") == "Python 80% 5 yrs"
    assert _skill_text("Docker") == "Docker"
