"""Models package"""
from .api_models import (
    User, DocumentText, DetailedRisk, DocumentAnalysis, ClauseRiskAssessment,
    AnalysisBundle, AnalysisRecord, AnalysisHistoryItem, AnalysisResponse,
    ChatMessage, QuestionRequest, QuestionAnswer, SimplifyRequest, SimplifiedText,
    SimplifyResponse, DocumentComparison, AmendmentRequest, AmendmentSuggestion,
    AudioSummaryRequest, AudioSummaryResponse, OcrResult
)
from .enums import RiskLevel, AnalysisMode, ChatRole, PromptName

__all__ = [
    'User', 'DocumentText', 'DetailedRisk', 'DocumentAnalysis', 'ClauseRiskAssessment',
    'AnalysisBundle', 'AnalysisRecord', 'AnalysisHistoryItem', 'AnalysisResponse',
    'ChatMessage', 'QuestionRequest', 'QuestionAnswer', 'SimplifyRequest', 'SimplifiedText',
    'SimplifyResponse', 'DocumentComparison', 'AmendmentRequest', 'AmendmentSuggestion',
    'AudioSummaryRequest', 'AudioSummaryResponse', 'OcrResult',
    'RiskLevel', 'AnalysisMode', 'ChatRole', 'PromptName'
]
