"""Core functionality package"""
from .security import get_current_user, resolve_user_id, create_access_token, security
from .exceptions import (
    LegalAssistantException,
    DocumentProcessingError,
    UnsupportedFormatError,
    ExtractionError,
    InsufficientTextError,
    InvalidRequestError,
    ModelError,
    AnalysisError,
    PersistenceError,
    AuthenticationError,
    RecordNotFoundError,
    NotAuthorizedError
)

__all__ = [
    'get_current_user',
    'resolve_user_id',
    'create_access_token',
    'security',
    'LegalAssistantException',
    'DocumentProcessingError',
    'UnsupportedFormatError',
    'ExtractionError',
    'InsufficientTextError',
    'InvalidRequestError',
    'ModelError',
    'AnalysisError',
    'PersistenceError',
    'AuthenticationError',
    'RecordNotFoundError',
    'NotAuthorizedError'
]
