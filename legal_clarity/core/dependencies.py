"""Process-wide client cache and FastAPI dependency accessors"""
import logging
import threading
from typing import Dict, Tuple

from fastapi import Depends

from .. import config
from ..services.ai_service import OpenRouterService, SpeechService
from ..services.analysis_service import LegalAnalysisOrchestrator
from ..services.document_processor import DocumentProcessor
from ..services.legal_capabilities import LegalCapabilities
from ..services.pipeline import AnalysisPipeline
from ..storage.managers import AnalysisHistoryStore, get_history_store

logger = logging.getLogger(__name__)

# Global instances, keyed by the configuration they were built from
_ai_services: Dict[Tuple, OpenRouterService] = {}
_speech_services: Dict[Tuple, SpeechService] = {}
_lock = threading.Lock()


def get_ai_service() -> OpenRouterService:
    """Get or create the hosted model client for the current configuration"""
    key = (config.OPENROUTER_API_KEY, config.OPENAI_API_BASE, config.AI_MODEL, config.AI_VISION_MODEL)
    with _lock:
        service = _ai_services.get(key)
        if service is None:
            service = OpenRouterService(
                api_key=config.OPENROUTER_API_KEY,
                api_base=config.OPENAI_API_BASE,
                model=config.AI_MODEL,
                vision_model=config.AI_VISION_MODEL,
            )
            _ai_services[key] = service
            logger.info(f"✅ Created model client for {config.AI_MODEL}")
    return service


def get_speech_service() -> SpeechService:
    """Get or create the speech synthesis client for the current configuration"""
    key = (config.TTS_API_KEY, config.TTS_API_BASE, config.TTS_MODEL, config.TTS_VOICE)
    with _lock:
        service = _speech_services.get(key)
        if service is None:
            service = SpeechService(
                api_key=config.TTS_API_KEY,
                api_base=config.TTS_API_BASE,
                model=config.TTS_MODEL,
                voice=config.TTS_VOICE,
            )
            _speech_services[key] = service
    return service


def get_document_processor(ai_service: OpenRouterService = Depends(get_ai_service)) -> DocumentProcessor:
    """Processors are cheap; each one uses the cached model client for OCR"""
    return DocumentProcessor(ocr_service=ai_service)


def get_capabilities(
    ai_service: OpenRouterService = Depends(get_ai_service),
    speech_service: SpeechService = Depends(get_speech_service),
) -> LegalCapabilities:
    return LegalCapabilities(ai_service, speech_service)


def get_analysis_pipeline(
    ai_service: OpenRouterService = Depends(get_ai_service),
    store: AnalysisHistoryStore = Depends(get_history_store),
) -> AnalysisPipeline:
    return AnalysisPipeline(
        processor=get_document_processor(ai_service),
        orchestrator=LegalAnalysisOrchestrator(ai_service),
        store=store,
    )
