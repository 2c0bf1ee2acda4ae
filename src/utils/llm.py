"""LLM client utilities: single-shot async calls with structured output parsing."""

import asyncio
import json
import logging
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

import aiohttp
import google.genai as genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types
from pydantic import BaseModel, ValidationError as PydanticValidationError

from sales_crm.config import LLMConfig
from sales_crm.errors import (
    InvalidInputError,
    LLMError,
    RateLimitError,
    UpstreamUnavailableError,
    UpstreamValidationError,
)


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{.*\})\s*```", re.DOTALL)


@dataclass
class MediaPart:
    """Inline binary attachment (e.g. recorded audio) sent alongside the prompt."""
    mime_type: str
    data: bytes


@dataclass
class LLMRequest:
    """Represents a single LLM request."""
    prompt: str
    response_format: Optional[Type[BaseModel]] = None
    temperature: float = 0.2
    max_tokens: Optional[int] = None
    media: List[MediaPart] = field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class LLMResponse:
    """Represents a single LLM response."""
    content: str
    parsed_data: Optional[BaseModel] = None
    metadata: Optional[Dict[str, Any]] = None
    latency_ms: Optional[float] = None
    token_usage: Optional[Dict[str, int]] = None


def extract_json(content: str) -> Optional[str]:
    """Extract a JSON object from LLM response content."""
    match = _FENCED_JSON.search(content)
    if match:
        return match.group(1)

    start = content.find("{")
    end = content.rfind("}")
    if start != -1 and end > start:
        return content[start:end + 1]

    return None


def parse_structured(content: str, response_format: Type[T]) -> T:
    """Parse provider output into ``response_format`` or raise UpstreamValidationError."""
    json_str = extract_json(content or "")
    if json_str is None:
        raise UpstreamValidationError("LLM response contained no JSON object")
    try:
        return response_format.model_validate(json.loads(json_str))
    except (json.JSONDecodeError, PydanticValidationError) as e:
        raise UpstreamValidationError(f"Failed to parse LLM response: {e}") from e


def schema_instructions(response_format: Type[BaseModel]) -> str:
    """Prompt suffix describing the required JSON output."""
    schema = response_format.model_json_schema(by_alias=True)
    return (
        "\n\nRespond only with valid JSON that matches this schema:\n"
        f"```json\n{json.dumps(schema, indent=2)}\n```"
    )


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    name: str = "base"
    supports_media: bool = False

    @abstractmethod
    async def call_single(self, request: LLMRequest) -> LLMResponse:
        """Make a single LLM call."""
        pass


def _claude_text(response_data: Any) -> str:
    """Text of the first content block of a Messages API reply."""
    blocks = response_data.get("content") if isinstance(response_data, dict) else None
    if not isinstance(blocks, list) or not blocks:
        raise UpstreamValidationError("Claude reply has no content blocks")
    first = blocks[0]
    if not isinstance(first, dict) or not isinstance(first.get("text"), str):
        raise UpstreamValidationError("Claude reply does not start with a text block")
    return first["text"]


class ClaudeLLMProvider(LLMProvider):
    """Claude Messages API provider over aiohttp."""

    name = "claude"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-5-sonnet-20241022",
        base_url: str = "https://api.anthropic.com/v1/messages",
        timeout: float = 60.0
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout

    async def call_single(self, request: LLMRequest) -> LLMResponse:
        """Make a single Claude API call."""
        if request.media:
            raise InvalidInputError("Claude provider does not accept audio or other media parts")

        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01"
        }

        prompt = request.prompt
        if request.response_format:
            prompt += schema_instructions(request.response_format)

        payload = {
            "model": self.model,
            "max_tokens": request.max_tokens or 4096,
            "temperature": request.temperature,
            "messages": [
                {"role": "user", "content": prompt}
            ]
        }

        start_time = time.time()

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self.base_url,
                    headers=headers,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:

                    if response.status == 429:
                        raise RateLimitError("Claude rate limit exceeded")
                    elif response.status >= 400:
                        error_text = await response.text()
                        raise UpstreamUnavailableError(f"Claude API error {response.status}: {error_text}")

                    try:
                        response_data = await response.json()
                    except ValueError as e:
                        raise UpstreamValidationError(f"Claude returned a malformed body: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise UpstreamUnavailableError(f"Claude API call failed: {e}") from e

        content = _claude_text(response_data)
        latency_ms = (time.time() - start_time) * 1000

        parsed_data = None
        if request.response_format:
            parsed_data = parse_structured(content, request.response_format)

        return LLMResponse(
            content=content,
            parsed_data=parsed_data,
            latency_ms=latency_ms,
            token_usage=response_data.get("usage", {})
        )


class GeminiLLMProvider(LLMProvider):
    """Google Gemini API provider implementation."""

    name = "gemini"
    supports_media = True

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout: float = 60.0,
        client: Optional[genai.Client] = None
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.client = client or genai.Client(api_key=api_key)

    async def call_single(self, request: LLMRequest) -> LLMResponse:
        """Make a single Gemini API call."""
        start_time = time.time()

        generation_config: Dict[str, Any] = {
            "temperature": request.temperature,
        }
        if request.max_tokens:
            generation_config["max_output_tokens"] = request.max_tokens

        prompt = request.prompt
        if request.response_format:
            generation_config["response_mime_type"] = "application/json"
            prompt += schema_instructions(request.response_format)

        contents: List[Any] = [prompt]
        for part in request.media:
            contents.append(genai_types.Part.from_bytes(data=part.data, mime_type=part.mime_type))

        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.model,
                    contents=contents,
                    config=genai_types.GenerateContentConfig(**generation_config)
                ),
                timeout=self.timeout
            )
        except genai_errors.APIError as e:
            if e.code == 429:
                raise RateLimitError(f"Gemini rate limit exceeded: {e}") from e
            raise UpstreamUnavailableError(f"Gemini API error: {e}") from e
        except asyncio.TimeoutError as e:
            raise UpstreamUnavailableError(f"Gemini API call timed out after {self.timeout}s") from e
        except Exception as e:
            # Transport errors from the SDK's HTTP layer
            raise UpstreamUnavailableError(f"Gemini API call failed: {e}") from e

        content = response.text or ""
        latency_ms = (time.time() - start_time) * 1000

        parsed_data = None
        if request.response_format:
            parsed_data = parse_structured(content, request.response_format)

        token_usage = {}
        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            token_usage = {
                "input_tokens": usage.prompt_token_count or 0,
                "output_tokens": usage.candidates_token_count or 0,
                "total_tokens": usage.total_token_count or 0
            }

        return LLMResponse(
            content=content,
            parsed_data=parsed_data,
            latency_ms=latency_ms,
            token_usage=token_usage
        )


class LLMClient:
    """High-level client for single-shot LLM calls. Never retries."""

    def __init__(self, provider: LLMProvider, temperature: float = 0.2):
        self.provider = provider
        self.temperature = temperature

    async def call(
        self,
        prompt: str,
        response_format: Optional[Type[T]] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        media: Optional[List[MediaPart]] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Union[LLMResponse, T]:
        """
        Make one LLM call.

        Returns the parsed model when ``response_format`` is given, otherwise
        the raw LLMResponse.

        Raises:
            InvalidInputError: the provider cannot accept the request (no call made)
            UpstreamUnavailableError: transport or API failure
            UpstreamValidationError: the reply does not match ``response_format``
        """
        if media and not self.provider.supports_media:
            raise InvalidInputError(f"Provider '{self.provider.name}' does not accept media input")

        request = LLMRequest(
            prompt=prompt,
            response_format=response_format,
            temperature=self.temperature if temperature is None else temperature,
            max_tokens=max_tokens,
            media=media or [],
            metadata=metadata or {}
        )

        try:
            response = await self.provider.call_single(request)
        except LLMError as e:
            logger.error(
                f"LLM call failed: {e}",
                extra={
                    "provider": self.provider.name,
                    "error_type": type(e).__name__,
                    **(metadata or {})
                }
            )
            raise

        logger.info(
            "LLM call completed",
            extra={
                "provider": self.provider.name,
                "prompt_length": len(prompt),
                "response_length": len(response.content),
                "latency_ms": response.latency_ms,
                "tokens": response.token_usage,
                "has_structured_output": response.parsed_data is not None
            }
        )

        if response_format is not None:
            return response.parsed_data
        return response


def create_llm_client(
    provider_type: Optional[str] = None,
    api_key: Optional[str] = None,
    config: Optional[LLMConfig] = None,
) -> LLMClient:
    """Create an LLM client with the specified provider.

    If provider_type is None (and not set in config), the provider is chosen
    from the available keys:
    1. Gemini if GEMINI_API_KEY is set
    2. Claude if ANTHROPIC_API_KEY is set
    """
    config = config or LLMConfig()
    provider_type = provider_type or config.provider

    if provider_type is None:
        if config.gemini_api_key:
            provider_type = "gemini"
        elif config.anthropic_api_key:
            provider_type = "claude"
        else:
            raise ValueError(
                "No LLM API key found in environment. Please set one of:\n"
                "- GEMINI_API_KEY (recommended)\n"
                "- ANTHROPIC_API_KEY"
            )

    if provider_type == "gemini":
        api_key = api_key or config.gemini_api_key
        if not api_key:
            raise ValueError("API key required for Gemini provider")
        provider: LLMProvider = GeminiLLMProvider(
            api_key=api_key, model=config.gemini_model, timeout=config.request_timeout
        )
    elif provider_type == "claude":
        api_key = api_key or config.anthropic_api_key
        if not api_key:
            raise ValueError("API key required for Claude provider")
        provider = ClaudeLLMProvider(
            api_key=api_key, model=config.claude_model, timeout=config.request_timeout
        )
    else:
        raise ValueError(f"Unknown provider type: {provider_type}. Supported: gemini, claude")

    return LLMClient(provider=provider, temperature=config.temperature)
