"""
Document ingestion pipeline: extract -> quality gate -> analyze -> save.

The caller's resolved identity is passed in explicitly as ``owner``; nothing
here reads request state.
"""
import asyncio
import logging
from typing import Optional

from ..config import MIN_DOCUMENT_CHARS, PASTED_TEXT_FILENAME, TEXT_MIME_TYPE
from ..core.exceptions import AuthenticationError
from ..models import AnalysisMode, AnalysisRecord, AnalysisResponse, DocumentText
from ..storage.managers import AnalysisHistoryStore
from ..utils.text_processing import validate_document_text
from .analysis_service import LegalAnalysisOrchestrator
from .document_processor import DocumentProcessor

logger = logging.getLogger(__name__)

PASTED_TEXT_TOO_SHORT = f"Pasted text must be at least {MIN_DOCUMENT_CHARS} characters long."
EXTRACTED_TEXT_TOO_SHORT = (
    "Could not extract sufficient text from the document. It might be empty, "
    "password-protected, or an image-based PDF. Try pasting the text instead."
)


class AnalysisPipeline:

    def __init__(self, processor: DocumentProcessor, orchestrator: LegalAnalysisOrchestrator,
                 store: AnalysisHistoryStore):
        self.processor = processor
        self.orchestrator = orchestrator
        self.store = store

    async def analyze_text(self, owner: str, text: str, document_type: Optional[str] = None,
                           analysis_mode: AnalysisMode = AnalysisMode.COMPREHENSIVE) -> AnalysisResponse:
        """Analyze pasted text."""
        self._require_owner(owner)
        validate_document_text(text, message=PASTED_TEXT_TOO_SHORT)
        document = DocumentText(text=text, file_name=PASTED_TEXT_FILENAME, mime_type=TEXT_MIME_TYPE,
                                extraction_method="pasted")
        return await self._analyze(owner, document, document_type, analysis_mode)

    async def analyze_upload(self, owner: str, file_content: bytes, filename: str, mime_type: Optional[str],
                             document_type: Optional[str] = None,
                             analysis_mode: AnalysisMode = AnalysisMode.COMPREHENSIVE) -> AnalysisResponse:
        """Extract text from an uploaded file and analyze it."""
        self._require_owner(owner)
        document = await asyncio.to_thread(self.processor.extract, file_content, filename, mime_type)
        validate_document_text(document.text, message=EXTRACTED_TEXT_TOO_SHORT)
        return await self._analyze(owner, document, document_type, analysis_mode)

    async def _analyze(self, owner: str, document: DocumentText, document_type: Optional[str],
                       analysis_mode: AnalysisMode) -> AnalysisResponse:
        bundle = await self.orchestrator.analyze(document.text, document_type=document_type,
                                                 analysis_mode=analysis_mode)

        record = AnalysisRecord(
            owner=owner,
            file_name=document.file_name,
            document_text=document.text,
            **bundle.model_dump(),
        )
        # history is a convenience; the caller gets the analysis even if this fails
        record_id = await self.store.save(record)
        if record_id is None:
            logger.error(f"Analysis of '{document.file_name}' for {owner} was not saved to history")

        return AnalysisResponse(
            data=bundle,
            file_name=document.file_name,
            document_text=document.text,
            record_id=record_id,
        )

    @staticmethod
    def _require_owner(owner: str):
        if not owner:
            raise AuthenticationError("User not authenticated. Please sign in again.")
