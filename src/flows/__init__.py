"""Schema-validated AI flows."""

from .base import BaseFlow, FlowMetrics, FlowName
from .templates import PromptTemplate, PromptVariable
from .lead_scoring import LeadScoringFlow
from .spoke_scoring import SpokeScoringFlow
from .transcription import TranscriptionFlow
from .reverse_geocode import ReverseGeocodeFlow
from .qualify_lead import QualifyLeadFlow
from .next_action import SuggestNextActionFlow
from .onboarding_plan import OnboardingPlanFlow
from .sales_coaching import SalesCoachingFlow
from .highlights import HighlightsFlow
from .registry import FLOW_REGISTRY, get_flow, invoke, list_flows, resolve_flow_name

__all__ = [
    "BaseFlow",
    "FlowMetrics",
    "FlowName",
    "PromptTemplate",
    "PromptVariable",
    "LeadScoringFlow",
    "SpokeScoringFlow",
    "TranscriptionFlow",
    "ReverseGeocodeFlow",
    "QualifyLeadFlow",
    "SuggestNextActionFlow",
    "OnboardingPlanFlow",
    "SalesCoachingFlow",
    "HighlightsFlow",
    "FLOW_REGISTRY",
    "get_flow",
    "invoke",
    "list_flows",
    "resolve_flow_name",
]
