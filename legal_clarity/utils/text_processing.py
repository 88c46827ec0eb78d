"""Text normalization and the minimum-length quality gate"""
import re
import logging
from typing import Optional

from ..config import MIN_DOCUMENT_CHARS
from ..core.exceptions import InsufficientTextError

logger = logging.getLogger(__name__)

_EXCESS_BLANK_LINES = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")
_TRAILING_SPACES = re.compile(r"[ \t]+\n")

DEFAULT_INSUFFICIENT_TEXT_MESSAGE = (
    f"Document text must be at least {MIN_DOCUMENT_CHARS} characters long."
)


def normalize_document_text(text: str) -> str:
    """Normalize extracted text: unix newlines, no NULs, at most one blank line in a row."""
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\x00", "")
    text = _TRAILING_SPACES.sub("\n", text)
    text = _EXCESS_BLANK_LINES.sub("\n\n", text)
    return text.strip()


def validate_document_text(text: Optional[str], min_chars: int = MIN_DOCUMENT_CHARS,
                           message: Optional[str] = None) -> str:
    """
    Quality gate. Returns ``text`` unchanged when its trimmed length reaches
    ``min_chars``; raises InsufficientTextError otherwise.
    """
    trimmed_length = len(text.strip()) if text else 0
    if trimmed_length < min_chars:
        logger.info(f"Rejected text with {trimmed_length} characters (minimum {min_chars})")
        raise InsufficientTextError(message or DEFAULT_INSUFFICIENT_TEXT_MESSAGE)
    return text
