"""Configuration and environment variables"""
import os
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)

APP_REFERER = os.environ.get("APP_REFERER", "http://localhost:3000")
APP_TITLE = os.environ.get("APP_TITLE", "Legal Clarity API")
APP_VERSION = "1.0.0"

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# API Configuration
OPENROUTER_API_KEY = os.environ.get("OPENROUTER_API_KEY") or os.environ.get("OPENAI_API_KEY")
OPENAI_API_BASE = os.environ.get("OPENAI_API_BASE", "https://openrouter.ai/api/v1")

# Model Names
AI_MODEL = os.environ.get("AI_MODEL", "google/gemini-2.0-flash-001")
AI_VISION_MODEL = os.environ.get("AI_VISION_MODEL", AI_MODEL)


def _optional_float(name: str) -> Optional[float]:
    value = os.environ.get(name)
    if not value:
        return None
    return float(value)


# Unset means the HTTP client default (no timeout)
AI_REQUEST_TIMEOUT = _optional_float("AI_REQUEST_TIMEOUT")

# Speech synthesis (OpenAI-compatible /audio/speech)
TTS_API_KEY = os.environ.get("TTS_API_KEY") or os.environ.get("OPENAI_API_KEY")
TTS_API_BASE = os.environ.get("TTS_API_BASE", "https://api.openai.com/v1")
TTS_MODEL = os.environ.get("TTS_MODEL", "gpt-4o-mini-tts")
TTS_VOICE = os.environ.get("TTS_VOICE", "alloy")

# PCM returned by the speech endpoint
AUDIO_CHANNELS = 1
AUDIO_SAMPLE_RATE = 24000
AUDIO_SAMPLE_WIDTH = 2  # bytes, 16-bit

# Security configuration
JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "your-secret-key-change-in-production")
JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
JWT_AUDIENCE = os.environ.get("JWT_AUDIENCE") or None
JWT_ISSUER = os.environ.get("JWT_ISSUER") or None
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# Database
MONGODB_URL = os.environ.get("MONGODB_URL", "mongodb://localhost:27017")
MONGODB_DATABASE = os.environ.get("MONGODB_DATABASE", "legal_clarity")
ANALYSIS_COLLECTION = "analysisHistory"

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.environ.get("CORS_ALLOWED_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
    if origin.strip()
]

# File Processing
MAX_FILE_SIZE = 50 * 1024 * 1024  # 50MB
MAX_REQUEST_SIZE = 100 * 1024 * 1024  # 100MB
MIN_DOCUMENT_CHARS = 20
PASTED_TEXT_FILENAME = "Pasted Text"
OCR_RENDER_DPI = 200

TEXT_MIME_TYPE = "text/plain"
PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
GENERIC_MIME_TYPES = {"", "application/octet-stream"}

# Conversation context sent with follow-up questions
MAX_CHAT_HISTORY_MESSAGES = 4
MAX_CHAT_MESSAGE_CHARS = 800


class FeatureFlags:
    AI_ENABLED: bool = bool(OPENROUTER_API_KEY)
    TTS_ENABLED: bool = bool(TTS_API_KEY)
    PYMUPDF_AVAILABLE: bool = False
    PDFPLUMBER_AVAILABLE: bool = False
    DOCX_AVAILABLE: bool = False


def initialize_feature_flags():
    """Initialize feature flags by checking for available dependencies"""
    try:
        import fitz  # PyMuPDF
        FeatureFlags.PYMUPDF_AVAILABLE = True
    except ImportError:
        FeatureFlags.PYMUPDF_AVAILABLE = False
        logger.warning("PyMuPDF not available - install PyMuPDF for PDF text and page rendering")

    try:
        import pdfplumber
        FeatureFlags.PDFPLUMBER_AVAILABLE = True
    except ImportError:
        FeatureFlags.PDFPLUMBER_AVAILABLE = False
        logger.warning("pdfplumber not available - install pdfplumber for PDF text extraction")

    try:
        import docx
        FeatureFlags.DOCX_AVAILABLE = True
    except ImportError:
        FeatureFlags.DOCX_AVAILABLE = False
        logger.warning("python-docx not available - .docx uploads will fail")

    FeatureFlags.AI_ENABLED = bool(OPENROUTER_API_KEY)
    FeatureFlags.TTS_ENABLED = bool(TTS_API_KEY)

    return {
        "ai_enabled": FeatureFlags.AI_ENABLED,
        "tts_enabled": FeatureFlags.TTS_ENABLED,
        "pymupdf_available": FeatureFlags.PYMUPDF_AVAILABLE,
        "pdfplumber_available": FeatureFlags.PDFPLUMBER_AVAILABLE,
        "docx_available": FeatureFlags.DOCX_AVAILABLE,
    }


# Initialize feature flags when module is imported
initialize_feature_flags()
