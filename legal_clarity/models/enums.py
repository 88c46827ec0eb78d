"""Enumeration types for the legal clarity application"""
from enum import Enum


class RiskLevel(str, Enum):
    """Severity assigned to a single clause"""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class AnalysisMode(str, Enum):
    """How deep the full document analysis should go"""
    COMPREHENSIVE = "Comprehensive"
    QUICK = "Quick"


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class PromptName(str, Enum):
    """Named prompt templates sent to the hosted model"""
    FULL_DOCUMENT_ANALYSIS = "full_document_analysis"
    CLAUSE_RISK_ASSESSMENT = "clause_risk_assessment"
    QUESTION_ANSWERING = "question_answering"
    TEXT_SIMPLIFICATION = "text_simplification"
    DOCUMENT_COMPARISON = "document_comparison"
    CLAUSE_AMENDMENT = "clause_amendment"
    OCR = "ocr"
