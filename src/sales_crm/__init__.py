"""
Sales CRM core.

Visibility-scoped queries over the sales hierarchy and schema-validated
AI flows (lead scoring, spoke scoring, transcription, reverse geocoding).
"""

__version__ = "0.1.0"
