"""Utilities package"""
from .text_processing import normalize_document_text, validate_document_text
from .formatting import format_chat_history, to_data_uri
from .audio import pcm_to_wav

__all__ = [
    'normalize_document_text',
    'validate_document_text',
    'format_chat_history',
    'pcm_to_wav',
    'to_data_uri'
]
