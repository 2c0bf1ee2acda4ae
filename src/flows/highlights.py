"""Team highlights for a reporting period."""

from typing import Any, Dict, List

from models.flow_schemas import HighlightsInput, HighlightsOutput, Performer

from .base import BaseFlow, FlowName
from .templates import PromptTemplate, PromptVariable


HIGHLIGHTS_TEMPLATE = PromptTemplate(
    name="highlights",
    description="Summarize a period's team performance in 3-5 highlights",
    template="""You are a sharp and insightful Sales Analyst. Your task is to review the following performance data for a sales team for the period of $period and generate 3 to 5 key, concise highlights. Focus on celebrating wins, identifying strong performance, and gently pointing out areas for attention without being negative.

# Performance Data for $period

- **Total Deal Value:** $total_deal_value
- **Total New Leads:** $total_leads
- **Total Activities Logged:** $total_activities
- **Lead to Won Conversion Rate:** $conversion_rate%

- **Top Performers (Deals Closed):**
$deal_performers

- **Top Performers (Activities Logged):**
$activity_performers

# Instructions
- Return a "highlights" list of 3 to 5 items.
- Each highlight should be a single, impactful sentence.
- Mix positive highlights with observational ones.
- If deal value is zero, focus on lead generation and activity.
- If conversion rate is low, you might suggest focusing on lead quality.
- Your tone should be encouraging and data-driven.""",
    variables=[
        PromptVariable("period", "Reporting period"),
        PromptVariable("total_deal_value", "Value of deals won"),
        PromptVariable("total_leads", "New leads"),
        PromptVariable("total_activities", "Activities logged"),
        PromptVariable("conversion_rate", "Lead-to-won conversion rate"),
        PromptVariable("deal_performers", "Bulleted top performers by deals"),
        PromptVariable("activity_performers", "Bulleted top performers by activities"),
    ],
)


def _performer_lines(performers: List[Performer], unit: str, empty: str) -> str:
    if not performers:
        return f"  - {empty}"
    return "\n".join(f"  - {p.name}: {p.value:g} {unit}" for p in performers)


class HighlightsFlow(BaseFlow[HighlightsInput, HighlightsOutput]):
    name = FlowName.HIGHLIGHTS
    input_model = HighlightsInput
    output_model = HighlightsOutput
    template = HIGHLIGHTS_TEMPLATE
    description = "Summarize a period's team performance in 3-5 highlights"

    def template_variables(self, data: HighlightsInput) -> Dict[str, Any]:
        return {
            "period": data.period,
            "total_deal_value": data.total_deal_value,
            "total_leads": data.total_leads,
            "total_activities": data.total_activities,
            "conversion_rate": data.conversion_rate,
            "deal_performers": _performer_lines(
                data.top_performers_by_deals, "deals", "No deals were closed this period."
            ),
            "activity_performers": _performer_lines(
                data.top_performers_by_activities, "activities", "No activities were logged this period."
            ),
        }
