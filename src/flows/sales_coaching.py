"""Coaching feedback for a sales rep from their period metrics."""

from typing import Any, Dict

from models.flow_schemas import SalesCoachingInput, SalesCoachingOutput

from .base import BaseFlow, FlowName
from .templates import PromptTemplate, PromptVariable


SALES_COACHING_TEMPLATE = PromptTemplate(
    name="sales_coaching",
    description="Assess a rep's performance and recommend focus areas",
    template="""You are an AI Sales Coach for an Indian downstream Supply Chain Finance (SCF) platform. Your role is to analyze sales performance data and provide actionable coaching insights to help sales representatives achieve their targets.

Analyze the following sales representative's performance data for $time_period:

**Sales Rep**: $sales_rep_name
**Territory**: $territory
**Monthly Target**: ₹$target_amount
**Current Achievement**: ₹$current_achievement ($achievement_percentage%)
**Days Remaining**: $days_left

**Lead Metrics**:
- Total Leads Allocated: $total_leads
- Qualified Leads: $qualified_leads
- Leads in Pipeline: $pipeline_leads
- Converted Leads: $converted_leads
- Lead Conversion Rate: $conversion_rate%

**Activity Metrics**:
- Meetings Scheduled: $meetings_scheduled
- Meetings Completed: $meetings_completed
- Meeting-to-Conversion Rate: $meeting_to_conversion_rate%
- Follow-up Tasks Completed: $tasks_completed/$total_tasks
- Average Response Time: $avg_response_time hours

**Pipeline Analysis**:
- Leads in Prospecting: $prospecting_count
- Leads in Qualification: $qualification_count
- Leads in Proposal: $proposal_count
- Leads in Negotiation: $negotiation_count
- Average Deal Size: ₹$avg_deal_size
- Pipeline Velocity: $pipeline_velocity days

Based on this data, provide:
1.  A detailed performance assessment, highlighting both strengths and gaps.
2.  A root cause analysis for any areas of underperformance.
3.  A list of specific, actionable recommendations to address the gaps.
4.  An honest assessment of the target achievement probability and what specific actions are required to meet the target.
5.  A list of priority focus areas for the next week.""",
    variables=[
        PromptVariable("time_period", "Period under review"),
        PromptVariable("sales_rep_name", "The rep's name"),
        PromptVariable("territory", "The rep's territory"),
        PromptVariable("target_amount", "Target in INR"),
        PromptVariable("current_achievement", "Achievement in INR"),
        PromptVariable("achievement_percentage", "Achievement as a percentage of target"),
        PromptVariable("days_left", "Days left in the period"),
        PromptVariable("total_leads", "Leads allocated"),
        PromptVariable("qualified_leads", "Qualified leads"),
        PromptVariable("pipeline_leads", "Leads in the pipeline"),
        PromptVariable("converted_leads", "Converted leads"),
        PromptVariable("conversion_rate", "Lead conversion rate"),
        PromptVariable("meetings_scheduled", "Meetings scheduled"),
        PromptVariable("meetings_completed", "Meetings completed"),
        PromptVariable("meeting_to_conversion_rate", "Meeting-to-conversion rate"),
        PromptVariable("tasks_completed", "Follow-up tasks completed"),
        PromptVariable("total_tasks", "Follow-up tasks in total"),
        PromptVariable("avg_response_time", "Average response time in hours"),
        PromptVariable("prospecting_count", "Leads in prospecting"),
        PromptVariable("qualification_count", "Leads in qualification"),
        PromptVariable("proposal_count", "Leads in proposal"),
        PromptVariable("negotiation_count", "Leads in negotiation"),
        PromptVariable("avg_deal_size", "Average deal size in INR"),
        PromptVariable("pipeline_velocity", "Pipeline velocity in days"),
    ],
)


class SalesCoachingFlow(BaseFlow[SalesCoachingInput, SalesCoachingOutput]):
    """Turns a rep's target, lead, activity and pipeline metrics into coaching."""

    name = FlowName.SALES_COACHING
    input_model = SalesCoachingInput
    output_model = SalesCoachingOutput
    template = SALES_COACHING_TEMPLATE
    description = "Coach a sales rep from their target, lead, activity and pipeline metrics"

    def template_variables(self, data: SalesCoachingInput) -> Dict[str, Any]:
        # Nested metric groups share one flat namespace in the prompt
        variables = data.model_dump(exclude={"lead_metrics", "activity_metrics", "pipeline_analysis"})
        variables.update(data.lead_metrics.model_dump())
        variables.update(data.activity_metrics.model_dump())
        variables.update(data.pipeline_analysis.model_dump())
        return variables
