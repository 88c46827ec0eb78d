"""
Document text extraction using the Strategy design pattern.

One handler per declared MIME type. PDFs go through text-layer strategies
first and fall back to OCR page by page when the text layer is too thin;
images always go through OCR.
"""
import io
import logging
import mimetypes
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from pydantic import BaseModel, Field

from ..config import (
    FeatureFlags, MIN_DOCUMENT_CHARS, OCR_RENDER_DPI,
    TEXT_MIME_TYPE, PDF_MIME_TYPE, DOCX_MIME_TYPE, GENERIC_MIME_TYPES
)
from ..core.exceptions import DocumentProcessingError, ExtractionError, UnsupportedFormatError
from ..models import DocumentText
from ..utils.formatting import to_data_uri
from ..utils.text_processing import normalize_document_text

logger = logging.getLogger(__name__)


class OcrCapability(Protocol):
    def perform_ocr(self, image_data_uri: str) -> str:
        ...


class ProcessingResult(BaseModel):
    """Structured result of a single extraction strategy."""
    content: str
    page_count: int = Field(..., ge=0)
    method: str
    warnings: List[str] = Field(default_factory=list)


class DocumentProcessor:
    """
    Turns uploaded bytes into DocumentText.

    Usage:
        processor = DocumentProcessor(ocr_service=get_ai_service())
        try:
            document = processor.extract(file_content, "lease.pdf", "application/pdf")
        except DocumentProcessingError as e:
            print(f"Failed to process document: {e}")
    """

    def __init__(self, ocr_service: Optional[OcrCapability] = None,
                 min_text_layer_chars: int = MIN_DOCUMENT_CHARS):
        self.ocr_service = ocr_service
        self.min_text_layer_chars = min_text_layer_chars
        self.handlers: Dict[str, Callable[[bytes, str], ProcessingResult]] = {
            TEXT_MIME_TYPE: self._process_text,
            DOCX_MIME_TYPE: self._process_docx,
            PDF_MIME_TYPE: self._process_pdf,
        }
        # PDF text-layer strategies in order of preference
        self.pdf_strategies: List[Tuple[str, Callable[[bytes], ProcessingResult], bool]] = [
            ("pymupdf", self._pdf_handler_pymupdf, FeatureFlags.PYMUPDF_AVAILABLE),
            ("pdfplumber", self._pdf_handler_pdfplumber, FeatureFlags.PDFPLUMBER_AVAILABLE),
        ]

    @staticmethod
    def resolve_mime_type(declared: Optional[str], filename: str) -> str:
        """Use the declared type; guess from the extension only when it is missing or generic."""
        mime_type = (declared or "").split(";")[0].strip().lower()
        if mime_type in GENERIC_MIME_TYPES:
            guessed, _ = mimetypes.guess_type(filename or "")
            if guessed:
                logger.debug(f"Guessed MIME type {guessed} for '{filename}'")
                return guessed
        return mime_type

    def _select_handler(self, mime_type: str) -> Callable[[bytes, str], ProcessingResult]:
        if mime_type.startswith("image/"):
            return self._process_image
        handler = self.handlers.get(mime_type)
        if handler is None:
            raise UnsupportedFormatError(mime_type)
        return handler

    def extract(self, file_content: bytes, filename: str, mime_type: Optional[str]) -> DocumentText:
        """
        Extract plain text from an upload. This is the single public entry point.

        Raises:
            UnsupportedFormatError: no handler for the (resolved) MIME type.
            ExtractionError: the extraction library or OCR call failed.
        """
        resolved = self.resolve_mime_type(mime_type, filename)
        handler = self._select_handler(resolved)
        logger.info(f"Starting extraction for '{filename}' ({resolved}), size: {len(file_content)} bytes")

        try:
            result = handler(file_content, resolved)
        except DocumentProcessingError:
            raise
        except Exception as e:
            logger.error(f"Failed to extract '{filename}': {e}", exc_info=True)
            raise ExtractionError(f"Failed to read file: {e}") from e

        text = normalize_document_text(result.content)
        logger.info(f"Extracted '{filename}' with {result.method}: {len(text)} chars, "
                    f"{result.page_count} pages, {len(result.warnings)} warnings")
        return DocumentText(
            text=text,
            file_name=filename,
            mime_type=resolved,
            page_count=result.page_count,
            extraction_method=result.method,
            warnings=result.warnings,
        )

    # --- Handler Methods (Strategies) ---

    def _process_text(self, content_bytes: bytes, mime_type: str) -> ProcessingResult:
        warnings = []
        try:
            content = content_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            # undecodable bytes stay visible as U+FFFD
            content = content_bytes.decode("utf-8", errors="replace")
            logger.warning(f"Text file is not valid UTF-8: {e}")
            warnings.append("File is not valid UTF-8; undecodable characters were replaced with U+FFFD.")
        return ProcessingResult(content=content, page_count=self._estimate_pages_from_text(content),
                                method="text", warnings=warnings)

    def _process_docx(self, content_bytes: bytes, mime_type: str) -> ProcessingResult:
        from docx import Document

        doc = Document(io.BytesIO(content_bytes))
        text_content = [para.text for para in doc.paragraphs]
        for table in doc.tables:
            for row in table.rows:
                text_content.append("\t".join(cell.text for cell in row.cells))

        content = "\n".join(text_content)
        return ProcessingResult(content=content, page_count=self._estimate_pages_from_text(content), method="python-docx")

    def _process_image(self, content_bytes: bytes, mime_type: str) -> ProcessingResult:
        text = self._ocr(to_data_uri(content_bytes, mime_type))
        return ProcessingResult(content=text, page_count=1, method="ocr")

    def _process_pdf(self, content_bytes: bytes, mime_type: str) -> ProcessingResult:
        """Try text-layer strategies in order; OCR the rendered pages when they come up short."""
        warnings = []
        best: Optional[ProcessingResult] = None
        for name, method, is_available in self.pdf_strategies:
            if not is_available:
                logger.debug(f"Skipping PDF processing with '{name}' (not available)")
                continue
            try:
                result = method(content_bytes)
            except Exception as e:
                logger.warning(f"PDF processing with '{name}' failed: {e}")
                warnings.append(f"Method '{name}' failed: {e}")
                continue
            if len(result.content.strip()) >= self.min_text_layer_chars:
                result.warnings.extend(warnings)
                return result
            warnings.append(f"Method '{name}' produced too little text.")
            if best is None or len(result.content.strip()) > len(best.content.strip()):
                best = result

        if self.ocr_service is None:
            if best is not None:
                best.warnings.extend(warnings)
                return best
            raise ExtractionError("Failed to read file: no PDF text could be extracted and OCR is not configured.")

        logger.info("PDF text layer is empty or too short, falling back to OCR")
        result = self._pdf_handler_ocr(content_bytes)
        result.warnings.extend(warnings)
        return result

    # --- PDF Strategy Implementations ---

    def _pdf_handler_pymupdf(self, content_bytes: bytes) -> ProcessingResult:
        import fitz  # PyMuPDF
        with fitz.open(stream=content_bytes, filetype="pdf") as doc:
            content = "\n\n".join(page.get_text() for page in doc)
            page_count = doc.page_count
        return ProcessingResult(content=content, page_count=page_count, method="pymupdf")

    def _pdf_handler_pdfplumber(self, content_bytes: bytes) -> ProcessingResult:
        import pdfplumber
        with pdfplumber.open(io.BytesIO(content_bytes)) as pdf:
            all_text = [page.extract_text() or "" for page in pdf.pages]
            page_count = len(pdf.pages)
        return ProcessingResult(content="\n".join(all_text), page_count=page_count, method="pdfplumber")

    def _pdf_handler_ocr(self, content_bytes: bytes) -> ProcessingResult:
        if not FeatureFlags.PYMUPDF_AVAILABLE:
            # vision models that accept PDFs can read the whole file in one call
            text = self._ocr(to_data_uri(content_bytes, PDF_MIME_TYPE))
            return ProcessingResult(content=text, page_count=0, method="ocr")

        import fitz  # PyMuPDF
        pages = []
        with fitz.open(stream=content_bytes, filetype="pdf") as doc:
            for i, page in enumerate(doc):
                png = page.get_pixmap(dpi=OCR_RENDER_DPI).tobytes("png")
                text = self._ocr(to_data_uri(png, "image/png"))
                pages.append(f"--- Page {i + 1} (OCR) ---\n{text}")
        return ProcessingResult(content="\n\n".join(pages), page_count=len(pages), method="ocr")

    # --- Private Helper Methods ---

    def _ocr(self, data_uri: str) -> str:
        if self.ocr_service is None:
            raise ExtractionError("Failed to read file: OCR is not configured.")
        try:
            return self.ocr_service.perform_ocr(data_uri)
        except Exception as e:
            raise ExtractionError(f"Failed to read file: OCR failed: {e}") from e

    def _estimate_pages_from_text(self, text: str) -> int:
        """Estimates page count from raw text content."""
        if not text.strip():
            return 0
        # ~2500 characters per page
        return max(1, len(text) // 2500)
