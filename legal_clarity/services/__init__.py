"""Services package"""
from .ai_service import OpenRouterService, SpeechService
from .document_processor import DocumentProcessor
from .analysis_service import LegalAnalysisOrchestrator
from .legal_capabilities import LegalCapabilities
from .pipeline import AnalysisPipeline

__all__ = [
    'OpenRouterService',
    'SpeechService',
    'DocumentProcessor',
    'LegalAnalysisOrchestrator',
    'LegalCapabilities',
    'AnalysisPipeline'
]
