"""Secondary capabilities: question answering, simplification, comparison, amendments, speech"""
import logging
from typing import Optional, Protocol, Sequence

from ..config import AUDIO_CHANNELS, AUDIO_SAMPLE_RATE, AUDIO_SAMPLE_WIDTH
from ..core.exceptions import InvalidRequestError, ModelError
from ..models import (
    AmendmentSuggestion, ChatMessage, DocumentComparison, PromptName, QuestionAnswer, SimplifiedText
)
from ..utils.audio import pcm_to_wav
from ..utils.formatting import format_chat_history, to_data_uri
from .analysis_service import StructuredModelCapability

logger = logging.getLogger(__name__)


class SpeechCapability(Protocol):
    def synthesize(self, text: str) -> bytes:
        ...


class LegalCapabilities:
    """Each method is one stateless request/response call against the hosted model."""

    def __init__(self, ai_service: StructuredModelCapability, speech_service: Optional[SpeechCapability] = None):
        self.ai_service = ai_service
        self.speech_service = speech_service

    def answer_question(self, document_text: str, question: str,
                        history: Sequence[ChatMessage] = ()) -> str:
        if not question or not question.strip():
            raise InvalidRequestError("Question cannot be empty.")
        result = self.ai_service.generate_json(
            PromptName.QUESTION_ANSWERING,
            QuestionAnswer,
            document_text=document_text,
            question=question.strip(),
            conversation=format_chat_history(history),
        )
        return result.answer

    def simplify(self, text: str) -> str:
        if not text or not text.strip():
            raise InvalidRequestError("Text to simplify cannot be empty.")
        result = self.ai_service.generate_json(PromptName.TEXT_SIMPLIFICATION, SimplifiedText, legal_text=text)
        return result.plain_language_text

    def compare(self, document_1: str, document_2: str) -> str:
        result = self.ai_service.generate_json(
            PromptName.DOCUMENT_COMPARISON,
            DocumentComparison,
            document_1=document_1,
            document_2=document_2,
        )
        return result.comparison

    def suggest_amendment(self, original_clause: str, risk_explanation: str) -> AmendmentSuggestion:
        if not original_clause or not original_clause.strip():
            raise InvalidRequestError("Original clause cannot be empty.")
        return self.ai_service.generate_json(
            PromptName.CLAUSE_AMENDMENT,
            AmendmentSuggestion,
            original_clause=original_clause,
            risk_explanation=risk_explanation,
        )

    def generate_audio_summary(self, text: str) -> str:
        """Synthesize ``text`` and return it as a WAV data URI."""
        if not text or not text.strip():
            raise InvalidRequestError("Text for the audio summary cannot be empty.")
        if self.speech_service is None:
            raise ModelError("Speech synthesis is not configured.")

        pcm = self.speech_service.synthesize(text)
        wav = pcm_to_wav(pcm, channels=AUDIO_CHANNELS, sample_rate=AUDIO_SAMPLE_RATE,
                         sample_width=AUDIO_SAMPLE_WIDTH)
        logger.info(f"Generated {len(wav)} bytes of WAV audio")
        return to_data_uri(wav, "audio/wav")
