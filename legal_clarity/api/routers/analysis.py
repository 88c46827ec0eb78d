"""Analysis endpoints"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ...core.dependencies import get_analysis_pipeline
from ...core.security import get_current_user
from ...models import AnalysisMode, AnalysisResponse, User
from ...services.pipeline import AnalysisPipeline
from ..uploads import read_upload

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze/text", response_model=AnalysisResponse)
async def analyze_pasted_text(
    current_user: User = Depends(get_current_user),
    text: str = Form(""),
    document_type: Optional[str] = Form(None, alias="documentType"),
    analysis_mode: AnalysisMode = Form(AnalysisMode.COMPREHENSIVE, alias="analysisMode"),
    pipeline: AnalysisPipeline = Depends(get_analysis_pipeline),
):
    """Analyze pasted document text"""
    logger.info(f"Text analysis request: user={current_user.user_id}, chars={len(text)}")
    return await pipeline.analyze_text(
        current_user.user_id, text, document_type=document_type, analysis_mode=analysis_mode
    )


@router.post("/analyze/document", response_model=AnalysisResponse)
async def analyze_uploaded_document(
    current_user: User = Depends(get_current_user),
    file: UploadFile = File(...),
    document_type: Optional[str] = Form(None, alias="documentType"),
    analysis_mode: AnalysisMode = Form(AnalysisMode.COMPREHENSIVE, alias="analysisMode"),
    pipeline: AnalysisPipeline = Depends(get_analysis_pipeline),
):
    """Extract text from an uploaded PDF, DOCX, TXT or image and analyze it"""
    file_content = await read_upload(file)
    logger.info(f"📄 Document analysis request: user={current_user.user_id}, file={file.filename}, "
                f"type={file.content_type}, size={len(file_content)} bytes")
    return await pipeline.analyze_upload(
        current_user.user_id,
        file_content,
        file.filename or "document",
        file.content_type,
        document_type=document_type,
        analysis_mode=analysis_mode,
    )
