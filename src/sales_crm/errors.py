"""Error taxonomy shared by the visibility layer and the AI flows."""

from typing import Any, Dict, List, Optional


class CRMError(Exception):
    """Base exception for all CRM core errors."""
    pass


class InvalidInputError(CRMError):
    """Caller supplied data that failed validation. Raised before any external call."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(CRMError):
    """A referenced identity is absent from the directory."""
    pass


class LLMError(CRMError):
    """Base exception for failures on the generative-text provider side."""
    pass


class UpstreamUnavailableError(LLMError):
    """The provider could not be reached or returned a transport-level error."""
    pass


class RateLimitError(UpstreamUnavailableError):
    """The provider rejected the call because of rate limiting."""
    pass


class UpstreamValidationError(LLMError):
    """The provider replied but the payload does not match the contracted schema."""
    pass
