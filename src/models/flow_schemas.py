"""
Input and output schemas for the AI flows.

Every flow has one input model (validated before the provider is called) and
one output model (the provider's reply must validate against it). Models use
snake_case attributes and camelCase aliases, which is also what the provider
sees in the JSON schema.
"""

import base64
import binascii
import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .entities import NextBestActionType


PHONE_PATTERN = r"^\d{10}$"
DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>audio/[\w.+-]+);base64,(?P<data>[A-Za-z0-9+/=\s]+)$")


class FlowModel(BaseModel):
    """Base for flow schemas."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class FlowInput(FlowModel):
    """Inputs reject unknown fields so typos fail fast."""

    model_config = ConfigDict(extra="forbid")


class FlowOutput(FlowModel):
    """Outputs tolerate extra keys the provider may add."""

    model_config = ConfigDict(extra="ignore")


# Lead scoring

class LeadScoringInput(FlowInput):
    company_name: str = Field(min_length=1, description="The name of the company.")
    industry: str = Field(min_length=1, description="The industry of the company.")
    primary_contact_name: str = Field(min_length=1, description="The name of the primary contact.")
    email: str = Field(
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
        description="The email address of the primary contact.",
    )
    phone: str = Field(pattern=PHONE_PATTERN, description="10-digit phone number of the primary contact.")
    lead_source: str = Field(min_length=1, description="The source of the lead.")
    gstin: Optional[str] = Field(None, description="The GSTIN of the company.")
    location: Optional[str] = Field(None, description="The location of the company.")
    annual_turnover: Optional[float] = Field(
        None, ge=0, description="The annual turnover of the company in Indian Rupees."
    )


class LeadScoringOutput(FlowOutput):
    score: float = Field(ge=0, le=100, description="The score of the lead, from 0 to 100.")
    reason: str = Field(min_length=1, description="The reason for the score.")
    credit_rating: Optional[str] = Field(
        None, description='Most recent public credit rating of the company (e.g. "AAA", "AA+").'
    )
    rating_agency: Optional[str] = Field(None, description="The agency that issued the rating.")


# Spoke scoring

class SpokeScoringInput(FlowInput):
    name: str = Field(min_length=1, description="The name of the dealer or vendor company.")
    contact_number: str = Field(pattern=PHONE_PATTERN, description="10-digit contact number.")
    product: Optional[str] = Field(None, description="The financial product they are interested in.")
    location: Optional[str] = Field(None, description="The location of the company.")
    anchor_name: Optional[str] = Field(None, description="The name of the associated anchor company.")
    anchor_industry: Optional[str] = Field(None, description="The industry of the associated anchor.")


class SpokeScoringOutput(FlowOutput):
    score: float = Field(ge=0, le=100, description="The score of the lead, from 0 to 100.")
    reason: str = Field(min_length=1, description="The reason for the score, in a concise summary.")


# Transcription

class TranscriptionInput(FlowInput):
    audio_data_uri: str = Field(
        description="Audio as a data URI: data:audio/<type>;base64,<payload>."
    )
    language_hint: Optional[str] = Field(None, description="Expected spoken language, if known.")

    @field_validator("audio_data_uri")
    @classmethod
    def validate_data_uri(cls, v):
        match = DATA_URI_PATTERN.match(v)
        if not match:
            raise ValueError("audio_data_uri must be a base64 audio data URI")
        try:
            payload = base64.b64decode(match.group("data"), validate=False)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"audio payload is not valid base64: {e}")
        if not payload:
            raise ValueError("audio payload is empty")
        return v

    @property
    def mime_type(self) -> str:
        return DATA_URI_PATTERN.match(self.audio_data_uri).group("mime")

    def audio_bytes(self) -> bytes:
        return base64.b64decode(DATA_URI_PATTERN.match(self.audio_data_uri).group("data"))


class TranscriptionOutput(FlowOutput):
    transcript: str = Field(min_length=1, description="Verbatim transcript of the audio.")


# Reverse geocoding

class ReverseGeocodeInput(FlowInput):
    latitude: float = Field(ge=-90, le=90, description="The latitude of the location.")
    longitude: float = Field(ge=-180, le=180, description="The longitude of the location.")


class ReverseGeocodeOutput(FlowOutput):
    address: str = Field(min_length=1, description="The formatted street address for the coordinates.")


# Lead qualification

class QualifyLeadInput(FlowInput):
    company_name: str = Field(min_length=1)
    industry: str = Field(min_length=1)
    company_size: int = Field(ge=0, description="The number of employees in the company.")
    contact_name: str = Field(min_length=1)
    contact_role: str = Field(min_length=1, description="The contact's job title.")
    inquiry_source: str = Field(min_length=1, description="Where the inquiry came from (e.g. 'Web Form').")
    inquiry_text: str = Field(min_length=1, description="The message the lead sent.")


class QualifyLeadOutput(FlowOutput):
    score: int = Field(ge=1, le=10, description="Integer fit score from 1 (very poor) to 10 (perfect).")
    justification: str = Field(min_length=1, description="One-sentence justification for the score.")


# Next best action

class InteractionLogEntry(FlowInput):
    date: str = Field(min_length=1, description="Date of the interaction (e.g. '2023-10-01').")
    type: str = Field(min_length=1, description="Type of interaction (e.g. 'Email', 'Call').")
    summary: str = Field(min_length=1, description="A summary of the interaction.")


class SuggestNextActionInput(FlowInput):
    lead_status: str = Field(min_length=1, description="The lead's current CRM status.")
    interaction_log: List[InteractionLogEntry] = Field(default_factory=list)


class SuggestNextActionOutput(FlowOutput):
    recommended_action: NextBestActionType
    justification: str = Field(min_length=1)


# Onboarding plan

class CustomerType(str, Enum):
    ANCHOR = "Anchor"
    DEALER = "Dealer"
    VENDOR = "Vendor"


class OnboardingPlanInput(FlowInput):
    customer_name: str = Field(min_length=1, description="The new customer's name.")
    customer_type: CustomerType = Field(description="The type of the customer.")


class OnboardingTask(FlowOutput):
    task_name: str = Field(min_length=1, description="The name of the onboarding task.")
    is_completed: bool = Field(False, description="Whether the task is completed.")


class OnboardingPlanOutput(FlowOutput):
    tasks: List[OnboardingTask] = Field(min_length=1, description="The list of onboarding tasks.")


# Sales coaching

class LeadMetrics(FlowInput):
    total_leads: int = Field(ge=0)
    qualified_leads: int = Field(ge=0)
    pipeline_leads: int = Field(ge=0)
    converted_leads: int = Field(ge=0)
    conversion_rate: float = Field(ge=0, description="Lead conversion rate as a percentage.")


class ActivityMetrics(FlowInput):
    meetings_scheduled: int = Field(ge=0)
    meetings_completed: int = Field(ge=0)
    meeting_to_conversion_rate: float = Field(ge=0, description="As a percentage.")
    tasks_completed: int = Field(ge=0)
    total_tasks: int = Field(ge=0)
    avg_response_time: float = Field(ge=0, description="Average response time in hours.")


class PipelineAnalysis(FlowInput):
    prospecting_count: int = Field(ge=0)
    qualification_count: int = Field(ge=0)
    proposal_count: int = Field(ge=0)
    negotiation_count: int = Field(ge=0)
    avg_deal_size: float = Field(ge=0)
    pipeline_velocity: float = Field(ge=0, description="Average days from lead to close.")


class SalesCoachingInput(FlowInput):
    sales_rep_name: str = Field(min_length=1)
    territory: str = Field(min_length=1)
    time_period: str = Field(min_length=1, description="e.g. 'June 2024'.")
    target_amount: float = Field(ge=0, description="Target for the period in INR.")
    current_achievement: float = Field(ge=0, description="Achieved so far in INR.")
    achievement_percentage: float = Field(ge=0)
    days_left: int = Field(ge=0)
    lead_metrics: LeadMetrics
    activity_metrics: ActivityMetrics
    pipeline_analysis: PipelineAnalysis


class SalesCoachingOutput(FlowOutput):
    performance_assessment: str = Field(min_length=1, description="A summary of strengths and gaps.")
    root_cause_analysis: str = Field(min_length=1, description="Analysis of underperforming areas.")
    action_recommendations: List[str] = Field(
        min_length=1, description="Specific, actionable recommendations."
    )
    target_achievement_probability: str = Field(
        min_length=1, description="The probability of hitting the target and what is required."
    )
    priority_focus_areas: List[str] = Field(
        min_length=1, description="Priority focus areas for the next week."
    )


# Team highlights

class Performer(FlowInput):
    name: str = Field(min_length=1)
    value: float = Field(ge=0)


class HighlightsInput(FlowInput):
    period: str = Field(min_length=1, description="The reporting period, e.g. 'This Month'.")
    total_deal_value: float = Field(ge=0, description="Total value of deals won in the period.")
    total_leads: int = Field(ge=0, description="Number of new leads generated.")
    total_activities: int = Field(ge=0, description="Number of activities logged.")
    top_performers_by_deals: List[Performer] = Field(default_factory=list)
    top_performers_by_activities: List[Performer] = Field(default_factory=list)
    conversion_rate: float = Field(ge=0, description="Lead-to-won conversion rate as a percentage.")


class HighlightsOutput(FlowOutput):
    highlights: List[str] = Field(
        min_length=3, max_length=5, description="3 to 5 key highlights, each a concise sentence."
    )
