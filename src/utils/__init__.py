"""
Utility modules for the sales CRM core.
"""

from .llm import (
    ClaudeLLMProvider,
    GeminiLLMProvider,
    LLMClient,
    LLMProvider,
    LLMRequest,
    LLMResponse,
    MediaPart,
    create_llm_client,
)

__all__ = [
    'ClaudeLLMProvider',
    'GeminiLLMProvider',
    'LLMClient',
    'LLMProvider',
    'LLMRequest',
    'LLMResponse',
    'MediaPart',
    'create_llm_client',
]
