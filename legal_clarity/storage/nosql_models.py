from datetime import datetime, timezone
from typing import List

import pymongo
from beanie import Document
from pydantic import Field
from pymongo import IndexModel

from ..config import ANALYSIS_COLLECTION
from ..models import AnalysisHistoryItem, AnalysisRecord, DetailedRisk


class AnalysisRecordDocument(Document):
    """One completed analysis in MongoDB"""
    owner: str
    file_name: str
    document_text: str
    summary: str
    risk_assessment: str
    key_clauses: str
    compliance_analysis: str
    detailed_risks: List[DetailedRisk] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = ANALYSIS_COLLECTION
        indexes = [
            IndexModel([("owner", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)]),
        ]

    @classmethod
    def from_record(cls, record: AnalysisRecord, created_at: datetime) -> "AnalysisRecordDocument":
        data = record.model_dump(exclude={"id", "created_at"})
        return cls(**data, created_at=created_at)

    def to_record(self) -> AnalysisRecord:
        return AnalysisRecord(
            id=str(self.id),
            owner=self.owner,
            file_name=self.file_name,
            document_text=self.document_text,
            summary=self.summary,
            risk_assessment=self.risk_assessment,
            key_clauses=self.key_clauses,
            compliance_analysis=self.compliance_analysis,
            detailed_risks=self.detailed_risks,
            created_at=self.created_at,
        )

    def to_history_item(self) -> AnalysisHistoryItem:
        return AnalysisHistoryItem(
            id=str(self.id),
            file_name=self.file_name,
            summary=self.summary,
            created_at=self.created_at,
            risk_count=len(self.detailed_risks),
        )
