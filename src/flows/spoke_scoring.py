"""Spoke (dealer/vendor) lead scoring flow."""

from models.flow_schemas import SpokeScoringInput, SpokeScoringOutput

from .base import BaseFlow, FlowName
from .templates import PromptTemplate, PromptVariable


SPOKE_SCORING_TEMPLATE = PromptTemplate(
    name="spoke_scoring",
    description="Score a dealer or vendor lead from 0 to 100",
    template="""You are an expert sales consultant specializing in supply chain finance. You need to score a dealer or vendor lead.

Score should be from 0 to 100, where 100 is the most likely to convert.

Consider these factors:
- Association with a strong anchor is a very positive signal.
- Interest in core products like SCF (Supply Chain Finance) is better than ancillary ones.
- Location in a major industrial or business hub is a plus.
- A reachable contact number is required for follow-up.

Lead Name: $name
Contact Number: $contact_number
Interested Product: $product
Location: $location
Associated Anchor: $anchor_name
Anchor's Industry: $anchor_industry

Provide a score and a concise reason.""",
    variables=[
        PromptVariable("name", "Dealer or vendor company name"),
        PromptVariable("contact_number", "10-digit contact number"),
        PromptVariable("product", "Financial product of interest", required=False),
        PromptVariable("location", "Location of the company", required=False),
        PromptVariable("anchor_name", "Associated anchor company", required=False),
        PromptVariable("anchor_industry", "Industry of the associated anchor", required=False),
    ],
)


class SpokeScoringFlow(BaseFlow[SpokeScoringInput, SpokeScoringOutput]):
    """Scores a dealer or vendor lead."""

    name = FlowName.SPOKE_SCORING
    input_model = SpokeScoringInput
    output_model = SpokeScoringOutput
    template = SPOKE_SCORING_TEMPLATE
    description = "Score a dealer/vendor lead (0-100) with a concise reason"
