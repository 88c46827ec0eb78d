"""
Analysis orchestration: the full document analysis and the clause risk
assessment run concurrently and are merged into one AnalysisBundle.
"""
import time
import asyncio
import logging
from typing import Optional, Protocol, Type, TypeVar

from pydantic import BaseModel

from ..core.exceptions import AnalysisError
from ..models import (
    AnalysisBundle, AnalysisMode, ClauseRiskAssessment, DocumentAnalysis, PromptName
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class StructuredModelCapability(Protocol):
    def generate_json(self, prompt_name: PromptName, output_model: Type[ModelT], **inputs) -> ModelT:
        ...


class LegalAnalysisOrchestrator:
    """Fan out to the two analysis prompts and join; fail fast, never return a partial bundle."""

    def __init__(self, ai_service: StructuredModelCapability):
        self.ai_service = ai_service

    async def _invoke(self, prompt_name: PromptName, output_model: Type[ModelT], **inputs) -> ModelT:
        # the model client is blocking; keep the event loop free
        return await asyncio.to_thread(self.ai_service.generate_json, prompt_name, output_model, **inputs)

    async def analyze(self, document_text: str, document_type: Optional[str] = None,
                      analysis_mode: AnalysisMode = AnalysisMode.COMPREHENSIVE) -> AnalysisBundle:
        """
        Run both analysis prompts against ``document_text`` and merge the results.

        Raises:
            AnalysisError: if either invocation fails. The message carries the upstream error.
        """
        start_time = time.time()
        try:
            analysis, risk_assessment = await asyncio.gather(
                self._invoke(
                    PromptName.FULL_DOCUMENT_ANALYSIS,
                    DocumentAnalysis,
                    document_text=document_text,
                    document_type=document_type or "Not specified",
                    analysis_mode=AnalysisMode(analysis_mode).value,
                ),
                self._invoke(
                    PromptName.CLAUSE_RISK_ASSESSMENT,
                    ClauseRiskAssessment,
                    document_text=document_text,
                ),
            )
        except Exception as e:
            logger.error(f"Document analysis failed: {e}")
            raise AnalysisError(f"Analysis failed: {e}") from e

        bundle = AnalysisBundle(
            **analysis.model_dump(),
            detailed_risks=risk_assessment.risks,
        )
        logger.info(f"Analysis completed in {time.time() - start_time:.2f}s "
                    f"with {len(bundle.detailed_risks)} clause risks")
        return bundle
