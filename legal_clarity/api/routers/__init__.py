"""API routers package"""
from . import analysis, capabilities, health, history

__all__ = ['analysis', 'capabilities', 'health', 'history']
