"""Onboarding checklist for a newly won anchor, dealer or vendor."""

from models.flow_schemas import OnboardingPlanInput, OnboardingPlanOutput

from .base import BaseFlow, FlowName
from .templates import PromptTemplate, PromptVariable


ONBOARDING_PLAN_TEMPLATE = PromptTemplate(
    name="onboarding_plan",
    description="Build the onboarding task list for a new customer",
    template="""You are a meticulous Onboarding Specialist. Your job is to create a comprehensive and customized onboarding plan for new customers based on their type.

# Task
Generate the list of onboarding tasks for the new customer. The list should include all standard tasks plus any tasks specific to the customer's type.

# Customer
- Name: $customer_name
- Type: $customer_type

# Standard Onboarding Tasks (for all customer types)
- Send Welcome Email
- Schedule Kickoff Call
- Grant Platform Access

# Customer-Type Specific Tasks
- If type is 'Anchor': Add a task for 'Technical Integration Scoping'.
- If type is 'Dealer': Add a task for 'Product Catalog Setup'.
- If type is 'Vendor': Add tasks for 'Collect KYC Documents' and 'Sign Vendor Agreement'.

# Rules
- Each task has a 'taskName' and 'isCompleted', which is always false for a new plan.
- The list must include all standard tasks AND the relevant type-specific tasks.""",
    variables=[
        PromptVariable("customer_name", "The new customer's name"),
        PromptVariable("customer_type", "Anchor, Dealer or Vendor"),
    ],
)


class OnboardingPlanFlow(BaseFlow[OnboardingPlanInput, OnboardingPlanOutput]):
    name = FlowName.ONBOARDING_PLAN
    input_model = OnboardingPlanInput
    output_model = OnboardingPlanOutput
    template = ONBOARDING_PLAN_TEMPLATE
    description = "Generate the onboarding task list for a new anchor, dealer or vendor"

    def template_variables(self, data: OnboardingPlanInput):
        return {"customer_name": data.customer_name, "customer_type": data.customer_type.value}
