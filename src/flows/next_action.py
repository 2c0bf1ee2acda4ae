"""Next-best-action recommendation from a lead's interaction history."""

from typing import Any, Dict

from models.entities import NextBestActionType
from models.flow_schemas import SuggestNextActionInput, SuggestNextActionOutput

from .base import BaseFlow, FlowName
from .templates import PromptTemplate, PromptVariable


SUGGEST_NEXT_ACTION_TEMPLATE = PromptTemplate(
    name="suggest_next_action",
    description="Recommend one next action from a fixed list",
    template="""You are a strategic sales coach with years of experience in B2B sales cycles. Your goal is to analyze a lead's complete interaction history and recommend the most impactful next action to move the deal forward.

You must choose from a predefined list of actions and provide a brief justification.

# Valid Actions List
$valid_actions

# Lead Data
Current Status: $lead_status
Interaction History:
$interaction_history

# Rules
- The recommended action MUST be one of the strings from the 'Valid Actions List'.
- The justification should explain WHY this action is appropriate now.
- Consider the time elapsed between interactions. A long silence might warrant a follow-up.""",
    variables=[
        PromptVariable("valid_actions", "Bulleted list of allowed actions"),
        PromptVariable("lead_status", "The lead's current CRM status"),
        PromptVariable("interaction_history", "Bulleted interaction log"),
    ],
)


class SuggestNextActionFlow(BaseFlow[SuggestNextActionInput, SuggestNextActionOutput]):
    name = FlowName.SUGGEST_NEXT_ACTION
    input_model = SuggestNextActionInput
    output_model = SuggestNextActionOutput
    template = SUGGEST_NEXT_ACTION_TEMPLATE
    description = "Recommend the next best action for a lead from its interaction history"

    def template_variables(self, data: SuggestNextActionInput) -> Dict[str, Any]:
        if data.interaction_log:
            history = "\n".join(
                f"- Date: {entry.date}, Type: {entry.type}, Summary: {entry.summary}"
                for entry in data.interaction_log
            )
        else:
            history = "- No interactions recorded yet."
        return {
            "valid_actions": "\n".join(f'- "{action.value}"' for action in NextBestActionType),
            "lead_status": data.lead_status,
            "interaction_history": history,
        }
