"""Base class for schema-validated AI flows."""

import logging
import time
from abc import ABC
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError

from sales_crm.errors import CRMError, InvalidInputError
from utils.llm import LLMClient, MediaPart

from .templates import PromptTemplate


logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)


class FlowName(str, Enum):
    """The closed set of AI flows."""
    LEAD_SCORING = "lead_scoring"
    SPOKE_SCORING = "spoke_scoring"
    TRANSCRIPTION = "transcription"
    REVERSE_GEOCODE = "reverse_geocode"
    QUALIFY_LEAD = "qualify_lead"
    SUGGEST_NEXT_ACTION = "suggest_next_action"
    ONBOARDING_PLAN = "onboarding_plan"
    SALES_COACHING = "sales_coaching"
    HIGHLIGHTS = "highlights"


@dataclass
class FlowMetrics:
    """Counters for one flow instance."""
    total_calls: int = 0
    error_count: int = 0
    total_latency_ms: float = 0.0

    @property
    def avg_latency_ms(self) -> float:
        """Calculate average latency per successful call."""
        successful = self.total_calls - self.error_count
        if successful > 0:
            return self.total_latency_ms / successful
        return 0.0


class BaseFlow(ABC, Generic[InputT, OutputT]):
    """
    A single named AI operation with a fixed input/output schema pair.

    Subclasses declare ``name``, ``input_model``, ``output_model`` and
    ``template``. Running a flow:
    - validates the payload against ``input_model`` (InvalidInputError, no call made)
    - renders the prompt template from the validated fields
    - makes exactly one provider call with ``output_model`` as the response format
    - returns the validated output, or propagates the upstream error
    """

    name: ClassVar[FlowName]
    input_model: ClassVar[Type[BaseModel]]
    output_model: ClassVar[Type[BaseModel]]
    template: ClassVar[PromptTemplate]
    description: ClassVar[str] = ""

    def __init__(self, llm_client: LLMClient, temperature: Optional[float] = None):
        self.llm_client = llm_client
        self.temperature = temperature
        self.metrics = FlowMetrics()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def validate_input(self, payload: Union[Mapping, BaseModel]) -> InputT:
        """Validate a raw payload (camelCase or snake_case keys) into the input model."""
        if isinstance(payload, self.input_model):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(by_alias=True)
        if not isinstance(payload, Mapping):
            raise InvalidInputError(
                f"{self.name.value} expects a mapping, got {type(payload).__name__}"
            )
        try:
            return self.input_model.model_validate(dict(payload))
        except PydanticValidationError as e:
            raise InvalidInputError(
                f"Invalid input for {self.name.value}: {e}", errors=e.errors()
            ) from e

    def template_variables(self, data: InputT) -> Dict[str, Any]:
        """Variables for the prompt template; defaults to the model's fields."""
        return data.model_dump()

    def media_parts(self, data: InputT) -> List[MediaPart]:
        """Binary attachments sent alongside the prompt."""
        return []

    def render_prompt(self, data: InputT) -> str:
        return self.template.render(**self.template_variables(data))

    async def run(self, payload: Union[Mapping, BaseModel]) -> OutputT:
        """Validate, render, call the provider once and return the typed output."""
        data = self.validate_input(payload)
        prompt = self.render_prompt(data)
        media = self.media_parts(data)

        self.logger.info(f"Running {self.name.value} flow", extra={
            "flow_name": self.name.value,
            "prompt_length": len(prompt),
            "media_parts": len(media)
        })

        start_time = time.time()
        self.metrics.total_calls += 1
        try:
            result = await self.llm_client.call(
                prompt=prompt,
                response_format=self.output_model,
                temperature=self.temperature,
                media=media,
                metadata={"flow_name": self.name.value}
            )
        except CRMError as e:
            self.metrics.error_count += 1
            self.logger.error(f"{self.name.value} flow failed: {e}", extra={
                "flow_name": self.name.value,
                "error_type": type(e).__name__
            })
            raise

        latency_ms = (time.time() - start_time) * 1000
        self.metrics.total_latency_ms += latency_ms
        self.logger.info(f"{self.name.value} flow completed", extra={
            "flow_name": self.name.value,
            "latency_ms": latency_ms
        })
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name.value})"
