import pytest

from legal_clarity.core.exceptions import InsufficientTextError
from legal_clarity.utils.text_processing import normalize_document_text, validate_document_text


def test_text_at_threshold_passes_unchanged():
    text = "  " + "a" * 20 + "  "

    assert validate_document_text(text) == text


def test_text_below_threshold_is_rejected_after_trimming():
    with pytest.raises(InsufficientTextError):
        validate_document_text("   " + "a" * 19 + "\n\n   ")


@pytest.mark.parametrize("text", ["", None, "   \n\t  "])
def test_empty_text_is_rejected(text):
    with pytest.raises(InsufficientTextError):
        validate_document_text(text)


def test_custom_message_is_used():
    with pytest.raises(InsufficientTextError, match="second document"):
        validate_document_text("short", message="Could not extract sufficient text from the second document.")


def test_gate_is_idempotent():
    text = "The Tenant shall pay rent monthly."

    assert validate_document_text(validate_document_text(text)) == text


def test_normalize_collapses_blank_lines_and_strips_nuls():
    raw = "Clause 1\x00\r\n\r\n\r\n\r\nClause 2   \nClause 3\n"

    assert normalize_document_text(raw) == "Clause 1\n\nClause 2\nClause 3"
    assert normalize_document_text("") == ""
