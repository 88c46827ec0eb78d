import base64
import struct

import pytest

from legal_clarity.core.exceptions import InvalidRequestError, ModelError
from legal_clarity.models import ChatMessage, ChatRole, PromptName
from legal_clarity.services.legal_capabilities import LegalCapabilities
from legal_clarity.utils.audio import pcm_to_wav
from legal_clarity.utils.formatting import format_chat_history

from tests.fakes import FakeAIService, FakeSpeechService


def test_answer_question_sends_recent_history():
    ai = FakeAIService()
    history = [ChatMessage(role=ChatRole.USER, content=f"question {i}") for i in range(6)]

    answer = LegalCapabilities(ai).answer_question("Lease text", "  How long is the term?  ", history)

    assert answer == "The lease runs for twelve months."
    prompt_name, inputs = ai.calls[0]
    assert prompt_name == PromptName.QUESTION_ANSWERING
    assert inputs["question"] == "How long is the term?"
    assert "question 5" in inputs["conversation"]
    assert "question 1" not in inputs["conversation"]


def test_empty_question_is_rejected_without_a_model_call():
    ai = FakeAIService()

    with pytest.raises(InvalidRequestError):
        LegalCapabilities(ai).answer_question("Lease text", "   ")

    assert ai.calls == []


def test_simplify_returns_plain_language_text():
    assert LegalCapabilities(FakeAIService()).simplify("Lessee shall remit...") == "You pay rent every month."


def test_compare_passes_both_documents():
    ai = FakeAIService()

    result = LegalCapabilities(ai).compare("first version", "second version")

    assert result == "The second version raises the deposit."
    assert ai.calls[0][1] == {"document_1": "first version", "document_2": "second version"}


def test_suggest_amendment_returns_both_fields():
    suggestion = LegalCapabilities(FakeAIService()).suggest_amendment("Landlord may terminate at will.", "One-sided")

    assert suggestion.suggested_amendment.startswith("Either party")
    assert suggestion.explanation == "Makes termination mutual."


def test_audio_summary_is_a_wav_data_uri():
    speech = FakeSpeechService(pcm=b"\x10\x00" * 2400)

    uri = LegalCapabilities(FakeAIService(), speech).generate_audio_summary("Summary of the lease.")

    assert uri.startswith("data:audio/wav;base64,")
    wav = base64.b64decode(uri.split(",", 1)[1])
    assert wav[:4] == b"RIFF"
    assert wav[8:12] == b"WAVE"
    assert len(wav) == 44 + 4800
    assert speech.calls == ["Summary of the lease."]


def test_audio_summary_propagates_speech_failures():
    speech = FakeSpeechService(error=ModelError("No audio media was returned from the model."))

    with pytest.raises(ModelError):
        LegalCapabilities(FakeAIService(), speech).generate_audio_summary("Summary")


def test_audio_summary_without_speech_service():
    with pytest.raises(ModelError):
        LegalCapabilities(FakeAIService()).generate_audio_summary("Summary")


def test_wav_header_describes_24khz_mono_16bit():
    wav = pcm_to_wav(b"\x00\x01" * 100 + b"\x07")

    assert len(wav) == 44 + 200
    channels, sample_rate, byte_rate, block_align, bits = struct.unpack("<HIIHH", wav[22:36])
    assert (channels, sample_rate, bits) == (1, 24000, 16)
    assert byte_rate == 48000
    assert block_align == 2
    assert wav[36:40] == b"data"
    assert struct.unpack("<I", wav[40:44])[0] == 200


def test_chat_history_is_truncated():
    messages = [ChatMessage(role=ChatRole.ASSISTANT, content="x" * 1000)]

    formatted = format_chat_history(messages)

    assert formatted.startswith("Previous conversation:\nASSISTANT: ")
    assert formatted.endswith("x" * 800 + "...")
    assert format_chat_history([]) == ""


def test_blank_amendment_clause_is_invalid_input():
    ai = FakeAIService()

    with pytest.raises(InvalidRequestError) as exc_info:
        LegalCapabilities(ai).suggest_amendment("  ", "One-sided")

    assert exc_info.value.status_code == 400
    assert ai.calls == []
