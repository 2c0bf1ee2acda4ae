"""Lead scoring flow for anchor (company) leads, including a public credit-rating lookup."""

from models.flow_schemas import LeadScoringInput, LeadScoringOutput

from .base import BaseFlow, FlowName
from .templates import PromptTemplate, PromptVariable


LEAD_SCORING_TEMPLATE = PromptTemplate(
    name="lead_scoring",
    description="Score an anchor lead from 0 to 100 and look up its credit rating",
    template="""You are an expert sales consultant specializing in supply chain finance.

You will use this information to score the lead, provide a reason for the score, and find the company's most recent credit rating from public sources.

Score should be from 0 to 100, where 100 is the most likely to convert to an onboarded customer.

Consider the following factors for the score:
- Industry: Some industries are more likely to need supply chain finance than others.
- Lead Source: Some lead sources are more likely to be qualified than others.
- Company Size: Larger companies are more likely to need supply chain finance. A higher annual turnover is a strong positive signal.
- Contact Information: Leads with complete contact information are more likely to be qualified.

# Credit Rating Search
Based on the company's name, industry, and annual turnover, find its latest credit rating. Prioritize the rating agencies in this order:
1. CRISIL
2. ICRA
3. Any other major Indian rating agency (CARE, Acuite, Brickwork, India Ratings, INFOMERICS).

Set 'creditRating' (e.g. "AAA", "AA+", "BBB") and 'ratingAgency' in your response. If no public rating is found, leave these fields out.

# Lead Details
Company Name: $company_name
Industry: $industry
Annual Turnover (INR): $annual_turnover
Primary Contact Name: $primary_contact_name
Email: $email
Phone: $phone
Lead Source: $lead_source
GSTIN: $gstin
Location: $location

Now, provide the lead score, reason, and the retrieved credit rating.""",
    variables=[
        PromptVariable("company_name", "The name of the company"),
        PromptVariable("industry", "The industry of the company"),
        PromptVariable("annual_turnover", "Annual turnover in INR", required=False),
        PromptVariable("primary_contact_name", "The name of the primary contact"),
        PromptVariable("email", "Email of the primary contact"),
        PromptVariable("phone", "Phone of the primary contact"),
        PromptVariable("lead_source", "Where the lead came from"),
        PromptVariable("gstin", "GSTIN of the company", required=False),
        PromptVariable("location", "Location of the company", required=False),
    ],
)


class LeadScoringFlow(BaseFlow[LeadScoringInput, LeadScoringOutput]):
    """Scores an anchor lead and retrieves its credit rating."""

    name = FlowName.LEAD_SCORING
    input_model = LeadScoringInput
    output_model = LeadScoringOutput
    template = LEAD_SCORING_TEMPLATE
    description = "Score an anchor lead (0-100) with a reason and its latest credit rating"
