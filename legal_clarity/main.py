"""Main FastAPI application entry point"""
import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import (
    AI_MODEL, APP_TITLE, APP_VERSION, CORS_ALLOWED_ORIGINS, LOG_LEVEL, MAX_REQUEST_SIZE, FeatureFlags
)
from .core.exceptions import LegalAssistantException
from .api.routers import analysis, capabilities, health, history

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """App lifespan manager: connect analysis history storage on startup, close it on shutdown"""
    logger.info("🚀 Legal Clarity API starting up...")

    from .storage.managers import close_history_store, get_history_store
    try:
        store = await get_history_store()
        if store.mongodb_available:
            logger.info("🎯 MongoDB connected: analysis history is persistent")
        else:
            logger.warning("⚠️ BASIC MODE: analysis history is kept in memory")
    except Exception as e:
        logger.error(f"❌ Storage initialization failed: {e}")

    yield  # App runs here

    logger.info("👋 Legal Clarity API shutting down...")
    try:
        await close_history_store()
        logger.info("🔌 Storage connections closed")
    except Exception as e:
        logger.error(f"Error during storage cleanup: {e}")


app = FastAPI(
    title=APP_TITLE,
    description="Legal document analysis: summaries, clause risks, compliance, Q&A and plain-language tools",
    version=APP_VERSION,
    lifespan=lifespan
)


# Request size limit middleware
@app.middleware("http")
async def limit_request_size(request: Request, call_next):
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(LegalAssistantException)
async def legal_assistant_exception_handler(request: Request, exc: LegalAssistantException):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}")
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(analysis.router, tags=["analysis"])
app.include_router(history.router, tags=["history"])
app.include_router(capabilities.router, tags=["capabilities"])


if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    logger.info(f"🚀 Starting {APP_TITLE} on port {port}")
    logger.info(f"AI Status: {'ENABLED' if FeatureFlags.AI_ENABLED else 'DISABLED - Set OPENROUTER_API_KEY to enable'} (model={AI_MODEL})")
    logger.info(f"Speech: {'ENABLED' if FeatureFlags.TTS_ENABLED else 'DISABLED - Set TTS_API_KEY to enable'}")
    logger.info(f"PDF processing: PyMuPDF={FeatureFlags.PYMUPDF_AVAILABLE}, pdfplumber={FeatureFlags.PDFPLUMBER_AVAILABLE}")
    logger.info(f"Version: {APP_VERSION}")
    uvicorn.run("legal_clarity.main:app", host="0.0.0.0", port=port, reload=True)
