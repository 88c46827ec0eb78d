"""
Secondary capability endpoints: Q&A, simplification, comparison,
amendment suggestions and audio summaries. Each is a single model call.
"""
import asyncio
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from ...core.dependencies import get_capabilities, get_document_processor
from ...core.exceptions import InvalidRequestError
from ...core.security import get_current_user
from ...models import (
    AmendmentRequest, AmendmentSuggestion, AudioSummaryRequest, AudioSummaryResponse,
    DocumentComparison, QuestionAnswer, QuestionRequest, SimplifyRequest, SimplifyResponse, User
)
from ...services.document_processor import DocumentProcessor
from ...services.legal_capabilities import LegalCapabilities
from ...utils.text_processing import validate_document_text
from ..uploads import read_upload

logger = logging.getLogger(__name__)

router = APIRouter()


async def _run_capability(failure_message: str, func, *args):
    """Run a blocking capability call; bad input -> 400, any other failure -> 502 with ``failure_message``."""
    try:
        return await asyncio.to_thread(func, *args)
    except InvalidRequestError:
        raise
    except Exception as e:
        logger.error(f"{func.__name__} failed: {e}")
        raise HTTPException(status_code=502, detail=failure_message)


@router.post("/qa", response_model=QuestionAnswer)
async def answer_document_question(
    request: QuestionRequest,
    current_user: User = Depends(get_current_user),
    capabilities: LegalCapabilities = Depends(get_capabilities),
):
    answer = await _run_capability(
        "Failed to get an answer.",
        capabilities.answer_question, request.document_text, request.question, request.history
    )
    return QuestionAnswer(answer=answer)


@router.post("/simplify", response_model=SimplifyResponse)
async def simplify_document(
    request: SimplifyRequest,
    current_user: User = Depends(get_current_user),
    capabilities: LegalCapabilities = Depends(get_capabilities),
):
    simplified = await _run_capability("Failed to simplify the document.", capabilities.simplify, request.text)
    return SimplifyResponse(simplified_text=simplified)


@router.post("/compare", response_model=DocumentComparison)
async def compare_documents(
    current_user: User = Depends(get_current_user),
    original_document_text: str = Form(..., alias="originalDocumentText"),
    file: UploadFile = File(...),
    processor: DocumentProcessor = Depends(get_document_processor),
    capabilities: LegalCapabilities = Depends(get_capabilities),
):
    """Compare the already-analyzed document with a second uploaded one"""
    validate_document_text(original_document_text, message="The original document text is too short to compare.")
    file_content = await read_upload(file)
    document = await asyncio.to_thread(processor.extract, file_content, file.filename or "document", file.content_type)
    validate_document_text(document.text, message="Could not extract sufficient text from the second document.")

    comparison = await _run_capability(
        "Failed to compare documents.", capabilities.compare, original_document_text, document.text
    )
    return DocumentComparison(comparison=comparison)


@router.post("/amend", response_model=AmendmentSuggestion)
async def suggest_clause_amendment(
    request: AmendmentRequest,
    current_user: User = Depends(get_current_user),
    capabilities: LegalCapabilities = Depends(get_capabilities),
):
    return await _run_capability(
        "Failed to generate an amendment.",
        capabilities.suggest_amendment, request.original_clause, request.risk_explanation
    )


@router.post("/speech", response_model=AudioSummaryResponse)
async def generate_audio_summary(
    request: AudioSummaryRequest,
    current_user: User = Depends(get_current_user),
    capabilities: LegalCapabilities = Depends(get_capabilities),
):
    audio_data_uri = await _run_capability(
        "Failed to generate an audio summary.", capabilities.generate_audio_summary, request.text
    )
    return AudioSummaryResponse(audio_data_uri=audio_data_uri)
