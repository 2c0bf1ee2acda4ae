"""Closed registry of AI flows and the ``invoke`` entry point."""

from collections.abc import Mapping
from typing import Dict, List, Optional, Type, Union

from pydantic import BaseModel

from sales_crm.errors import InvalidInputError
from utils.llm import LLMClient

from .base import BaseFlow, FlowName
from .highlights import HighlightsFlow
from .lead_scoring import LeadScoringFlow
from .next_action import SuggestNextActionFlow
from .onboarding_plan import OnboardingPlanFlow
from .qualify_lead import QualifyLeadFlow
from .reverse_geocode import ReverseGeocodeFlow
from .sales_coaching import SalesCoachingFlow
from .spoke_scoring import SpokeScoringFlow
from .transcription import TranscriptionFlow


FLOW_REGISTRY: Dict[FlowName, Type[BaseFlow]] = {
    FlowName.LEAD_SCORING: LeadScoringFlow,
    FlowName.SPOKE_SCORING: SpokeScoringFlow,
    FlowName.TRANSCRIPTION: TranscriptionFlow,
    FlowName.REVERSE_GEOCODE: ReverseGeocodeFlow,
    FlowName.QUALIFY_LEAD: QualifyLeadFlow,
    FlowName.SUGGEST_NEXT_ACTION: SuggestNextActionFlow,
    FlowName.ONBOARDING_PLAN: OnboardingPlanFlow,
    FlowName.SALES_COACHING: SalesCoachingFlow,
    FlowName.HIGHLIGHTS: HighlightsFlow,
}


def resolve_flow_name(flow_name: Union[FlowName, str]) -> FlowName:
    """Accept a FlowName or its value (hyphens allowed); unknown names are invalid input."""
    if isinstance(flow_name, FlowName):
        return flow_name
    try:
        return FlowName(str(flow_name).strip().lower().replace("-", "_"))
    except ValueError:
        known = ", ".join(name.value for name in FlowName)
        raise InvalidInputError(f"Unknown flow '{flow_name}'. Available flows: {known}") from None


def get_flow(
    flow_name: Union[FlowName, str],
    llm_client: LLMClient,
    temperature: Optional[float] = None,
) -> BaseFlow:
    """Instantiate the flow registered under ``flow_name``."""
    flow_cls = FLOW_REGISTRY[resolve_flow_name(flow_name)]
    return flow_cls(llm_client=llm_client, temperature=temperature)


def list_flows() -> List[Type[BaseFlow]]:
    return [FLOW_REGISTRY[name] for name in FlowName]


async def invoke(
    flow_name: Union[FlowName, str],
    payload: Union[Mapping, BaseModel],
    llm_client: LLMClient,
    temperature: Optional[float] = None,
) -> BaseModel:
    """
    Run one flow invocation.

    Raises:
        InvalidInputError: unknown flow or payload fails the input schema (no provider call)
        UpstreamUnavailableError: provider transport failure
        UpstreamValidationError: provider reply fails the output schema
    """
    flow = get_flow(flow_name, llm_client, temperature=temperature)
    return await flow.run(payload)
