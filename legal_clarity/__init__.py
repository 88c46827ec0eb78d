"""Legal Clarity: legal document analysis API"""

__version__ = "1.0.0"
