"""Health check endpoints"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ...config import APP_VERSION, FeatureFlags
from ...storage.managers import AnalysisHistoryStore, get_history_store

logger = logging.getLogger(__name__)

router = APIRouter()


def _features():
    return {
        "ai_enabled": FeatureFlags.AI_ENABLED,
        "tts_enabled": FeatureFlags.TTS_ENABLED,
        "pymupdf_available": FeatureFlags.PYMUPDF_AVAILABLE,
        "pdfplumber_available": FeatureFlags.PDFPLUMBER_AVAILABLE,
        "docx_available": FeatureFlags.DOCX_AVAILABLE
    }


@router.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return {"status": "healthy", "version": APP_VERSION, "features": _features()}


@router.get("/health/detailed")
async def detailed_health_check(store: AnalysisHistoryStore = Depends(get_history_store)):
    """Detailed health check with storage status"""
    try:
        storage = await store.get_system_stats()
    except Exception as e:
        logger.error(f"Storage stats failed: {e}")
        storage = {"error": str(e)}

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": APP_VERSION,
        "storage": storage,
        "features": _features()
    }
