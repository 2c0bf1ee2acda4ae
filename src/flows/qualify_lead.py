"""Inbound lead qualification against the ideal customer profile."""

from models.flow_schemas import QualifyLeadInput, QualifyLeadOutput

from .base import BaseFlow, FlowName
from .templates import PromptTemplate, PromptVariable


QUALIFY_LEAD_TEMPLATE = PromptTemplate(
    name="qualify_lead",
    description="Score an inbound lead 1-10 against the ICP",
    template="""You are an expert Sales Development Representative. Your expertise is in rapidly qualifying inbound leads to determine if they are a good fit for the sales team.

Analyze the provided lead data against our Ideal Customer Profile (ICP). Provide a numerical quality score from 1 (very poor fit) to 10 (perfect fit) and a concise, one-sentence justification for that score.

# Ideal Customer Profile (ICP)
We provide supply chain finance to companies and their dealer/vendor networks. We are most successful with:
- Industries: Manufacturing, Automotive, FMCG, Retail, Pharmaceuticals.
- Company Size: 50 - 5000 employees.
- Role of Inquirer: CFO, Finance Head, Treasury, Procurement Head, Founder.
- Expressed Need: Working capital pressure, dealer or vendor financing, invoice discounting.

# Input Data
Company Name: $company_name
Industry: $industry
Company Size: $company_size
Contact Name: $contact_name
Contact Role: $contact_role
Inquiry Source: $inquiry_source
Inquiry Text: $inquiry_text

# Rules
- The score MUST be an integer between 1 and 10.
- The justification MUST be a single, clear sentence.
- Base your score primarily on how well the lead matches the ICP.""",
    variables=[
        PromptVariable("company_name", "The lead's company name"),
        PromptVariable("industry", "The lead's industry"),
        PromptVariable("company_size", "Number of employees"),
        PromptVariable("contact_name", "The contact's name"),
        PromptVariable("contact_role", "The contact's job title"),
        PromptVariable("inquiry_source", "Source of the inquiry"),
        PromptVariable("inquiry_text", "Message from the contact form"),
    ],
)


class QualifyLeadFlow(BaseFlow[QualifyLeadInput, QualifyLeadOutput]):
    name = FlowName.QUALIFY_LEAD
    input_model = QualifyLeadInput
    output_model = QualifyLeadOutput
    template = QUALIFY_LEAD_TEMPLATE
    description = "Qualify an inbound lead against the ICP (score 1-10)"
