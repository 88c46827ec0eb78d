import io

import pytest
from docx import Document

from legal_clarity.config import DOCX_MIME_TYPE, PDF_MIME_TYPE
from legal_clarity.core.exceptions import ExtractionError, UnsupportedFormatError
from legal_clarity.models import PromptName
from legal_clarity.services.document_processor import DocumentProcessor, ProcessingResult

from tests.fakes import FakeAIService


def _docx_bytes():
    document = Document()
    document.add_paragraph("This Lease Agreement is made between Landlord and Tenant.")
    document.add_paragraph("Rent is due on the first day of each month.")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Deposit"
    table.rows[0].cells[1].text = "$1,500"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def test_plain_text_is_decoded_and_normalized():
    processor = DocumentProcessor()

    document = processor.extract(b"  Line one\r\n\r\n\r\n\r\nLine two  \r\n", "notes.txt", "text/plain")

    assert document.text == "Line one\n\nLine two"
    assert document.file_name == "notes.txt"
    assert document.mime_type == "text/plain"
    assert document.extraction_method == "text"


def test_docx_paragraphs_and_tables_are_extracted():
    processor = DocumentProcessor()

    document = processor.extract(_docx_bytes(), "lease.docx", DOCX_MIME_TYPE)

    assert "This Lease Agreement is made between Landlord and Tenant." in document.text
    assert "Rent is due on the first day of each month." in document.text
    assert "Deposit\t$1,500" in document.text
    assert document.extraction_method == "python-docx"


def test_unsupported_type_names_the_declared_type():
    processor = DocumentProcessor(ocr_service=FakeAIService())

    with pytest.raises(UnsupportedFormatError) as exc_info:
        processor.extract(b"PK\x03\x04", "archive.zip", "application/zip")

    assert "application/zip" in str(exc_info.value)
    assert exc_info.value.status_code == 415


def test_image_goes_through_ocr_with_a_data_uri():
    ai = FakeAIService(ocr_text="Scanned employment contract text.")
    processor = DocumentProcessor(ocr_service=ai)

    document = processor.extract(b"\x89PNG\r\n\x1a\n", "scan.png", "image/png")

    assert document.text == "Scanned employment contract text."
    assert document.extraction_method == "ocr"
    assert len(ai.ocr_calls) == 1
    assert ai.ocr_calls[0].startswith("data:image/png;base64,")


def test_ocr_failure_becomes_extraction_error(model_error):
    ai = FakeAIService(failures={PromptName.OCR: model_error})
    processor = DocumentProcessor(ocr_service=ai)

    with pytest.raises(ExtractionError) as exc_info:
        processor.extract(b"\xff\xd8\xff", "scan.jpg", "image/jpeg")

    assert str(exc_info.value).startswith("Failed to read file")


def test_broken_docx_is_wrapped_as_extraction_error():
    processor = DocumentProcessor()

    with pytest.raises(ExtractionError) as exc_info:
        processor.extract(b"definitely not a zip file", "broken.docx", DOCX_MIME_TYPE)

    assert str(exc_info.value).startswith("Failed to read file:")


def test_generic_mime_type_is_guessed_from_the_extension():
    assert DocumentProcessor.resolve_mime_type("application/octet-stream", "contract.pdf") == PDF_MIME_TYPE
    assert DocumentProcessor.resolve_mime_type(None, "notes.txt") == "text/plain"
    assert DocumentProcessor.resolve_mime_type("text/plain; charset=utf-8", "x.bin") == "text/plain"
    # a declared type wins over the extension
    assert DocumentProcessor.resolve_mime_type("application/zip", "contract.pdf") == "application/zip"


def test_pdf_uses_first_strategy_with_enough_text():
    processor = DocumentProcessor(ocr_service=FakeAIService())
    text = "This agreement is governed by the laws of the State of New York."
    processor.pdf_strategies = [
        ("first", lambda content: ProcessingResult(content=text, page_count=2, method="first"), True),
        ("second", lambda content: pytest.fail("second strategy should not run"), True),
    ]

    document = processor.extract(b"%PDF-1.7", "contract.pdf", PDF_MIME_TYPE)

    assert document.text == text
    assert document.page_count == 2
    assert document.extraction_method == "first"


def test_pdf_without_text_layer_falls_back_to_ocr(monkeypatch):
    ai = FakeAIService()
    processor = DocumentProcessor(ocr_service=ai)
    processor.pdf_strategies = [
        ("empty", lambda content: ProcessingResult(content="  ", page_count=1, method="empty"), True),
    ]
    monkeypatch.setattr(
        processor, "_pdf_handler_ocr",
        lambda content: ProcessingResult(content="Page one from OCR of the scanned lease.", page_count=1, method="ocr"),
    )

    document = processor.extract(b"%PDF-1.7", "scanned.pdf", PDF_MIME_TYPE)

    assert document.extraction_method == "ocr"
    assert document.text == "Page one from OCR of the scanned lease."
    assert any("too little text" in warning for warning in document.warnings)


def test_pdf_without_ocr_returns_best_short_result():
    def broken(content):
        raise RuntimeError("bad xref")

    processor = DocumentProcessor()
    processor.pdf_strategies = [
        ("broken", broken, True),
        ("short", lambda content: ProcessingResult(content="tiny", page_count=1, method="short"), True),
    ]

    document = processor.extract(b"%PDF-1.7", "short.pdf", PDF_MIME_TYPE)

    assert document.text == "tiny"
    assert any("bad xref" in warning for warning in document.warnings)


def test_non_utf8_text_keeps_replacement_markers_and_warns():
    processor = DocumentProcessor()

    document = processor.extract("Café deposit £500 lease terms".encode("latin-1"), "lease.txt", "text/plain")

    assert document.text == "Caf\ufffd deposit \ufffd500 lease terms"
    assert any("not valid UTF-8" in warning for warning in document.warnings)


def test_utf8_text_has_no_decoding_warning():
    processor = DocumentProcessor()

    document = processor.extract("Café deposit £500 lease terms".encode("utf-8"), "lease.txt", "text/plain")

    assert document.text == "Café deposit £500 lease terms"
    assert document.warnings == []
