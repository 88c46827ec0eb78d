"""Pydantic models for API requests, responses and model outputs"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import ChatRole, RiskLevel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire; accepts both on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(BaseModel):
    user_id: str


# --- Documents ---

class DocumentText(CamelModel):
    """Plain text extracted from one upload or paste."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    text: str
    file_name: str
    mime_type: str
    page_count: int = Field(default=0, ge=0)
    extraction_method: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


# --- Analysis ---

class DetailedRisk(CamelModel):
    """One clause risk entry"""
    clause: str
    risk_level: RiskLevel
    explanation: str
    compliance_issues: str = "None"

    @field_validator("risk_level", mode="before")
    @classmethod
    def _normalize_risk_level(cls, value):
        # models sometimes answer "HIGH" or "high"
        if isinstance(value, str):
            return value.strip().capitalize()
        return value

    @field_validator("compliance_issues", mode="before")
    @classmethod
    def _default_compliance(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return "None"
        return value


class DocumentAnalysis(CamelModel):
    """Output of the full document analysis prompt"""
    summary: str
    risk_assessment: str
    key_clauses: str
    compliance_analysis: str


class ClauseRiskAssessment(CamelModel):
    """Output of the clause risk assessment prompt"""
    risks: List[DetailedRisk] = Field(default_factory=list)


class AnalysisBundle(DocumentAnalysis):
    """Merged output of both analysis prompts"""
    detailed_risks: List[DetailedRisk] = Field(default_factory=list)


class AnalysisRecord(AnalysisBundle):
    """A persisted analysis; created once, never updated"""
    id: Optional[str] = None
    owner: str
    file_name: str
    document_text: str
    created_at: Optional[datetime] = None


class AnalysisHistoryItem(CamelModel):
    """Summary row for the history list"""
    id: str
    file_name: str
    summary: str
    created_at: datetime
    risk_count: int = 0


class AnalysisResponse(CamelModel):
    data: AnalysisBundle
    file_name: str
    document_text: str
    record_id: Optional[str] = None


# --- Secondary capabilities ---

class ChatMessage(CamelModel):
    """A chat turn held by the client; never persisted"""
    role: ChatRole
    content: str


class QuestionRequest(CamelModel):
    document_text: str
    question: str
    history: List[ChatMessage] = Field(default_factory=list)


class QuestionAnswer(CamelModel):
    answer: str


class SimplifyRequest(CamelModel):
    text: str


class SimplifiedText(CamelModel):
    plain_language_text: str


class SimplifyResponse(CamelModel):
    simplified_text: str


class DocumentComparison(CamelModel):
    comparison: str


class AmendmentRequest(CamelModel):
    original_clause: str
    risk_explanation: str


class AmendmentSuggestion(CamelModel):
    suggested_amendment: str
    explanation: str


class AudioSummaryRequest(CamelModel):
    text: str


class AudioSummaryResponse(CamelModel):
    audio_data_uri: str


class OcrResult(CamelModel):
    text: str

