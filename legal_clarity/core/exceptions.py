"""Custom exceptions for the application"""


class LegalAssistantException(Exception):
    """Base exception for all custom exceptions"""
    status_code = 500


class DocumentProcessingError(LegalAssistantException):
    """Raised when document processing fails"""
    status_code = 422


class UnsupportedFormatError(DocumentProcessingError):
    """Raised when no extraction strategy exists for a MIME type"""
    status_code = 415

    def __init__(self, mime_type: str):
        self.mime_type = mime_type
        super().__init__(
            f"Unsupported file type: {mime_type or 'unknown'}. "
            "Please upload a PDF, DOCX, TXT, or image file."
        )


class ExtractionError(DocumentProcessingError):
    """Raised when a text extraction library or the OCR call fails"""
    status_code = 422


class InsufficientTextError(LegalAssistantException):
    """Raised when extracted or pasted text is too short to analyze"""
    status_code = 400


class InvalidRequestError(LegalAssistantException):
    """Raised when a capability is called with unusable input"""
    status_code = 400


class ModelError(LegalAssistantException):
    """Raised when a call to the hosted model fails or returns unusable output"""
    status_code = 502


class AnalysisError(ModelError):
    """Raised when analysis operations fail"""
    pass


class PersistenceError(LegalAssistantException):
    """Raised when the analysis history cannot be read"""
    pass


class AuthenticationError(LegalAssistantException):
    """Raised when authentication fails"""
    status_code = 401


class RecordNotFoundError(LegalAssistantException):
    status_code = 404


class NotAuthorizedError(LegalAssistantException):
    status_code = 403
