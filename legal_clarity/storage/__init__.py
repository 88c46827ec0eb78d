"""Storage package"""
from .managers import AnalysisHistoryStore, get_history_store, close_history_store

__all__ = [
    'AnalysisHistoryStore',
    'get_history_store',
    'close_history_store'
]
