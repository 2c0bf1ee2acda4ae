"""Reverse geocoding flow: GPS coordinates to a formatted street address."""

from models.flow_schemas import ReverseGeocodeInput, ReverseGeocodeOutput

from .base import BaseFlow, FlowName
from .templates import PromptTemplate, PromptVariable


REVERSE_GEOCODE_TEMPLATE = PromptTemplate(
    name="reverse_geocode",
    description="Convert latitude/longitude into a street address",
    template="""You are a reverse geocoding service. Based on the following latitude and longitude, provide the most likely and precise street address.

Latitude: $latitude
Longitude: $longitude

Your task is to return a single, formatted address string in the 'address' field. Do not provide any additional explanation.""",
    variables=[
        PromptVariable("latitude", "Latitude in decimal degrees"),
        PromptVariable("longitude", "Longitude in decimal degrees"),
    ],
)


class ReverseGeocodeFlow(BaseFlow[ReverseGeocodeInput, ReverseGeocodeOutput]):
    """Resolves coordinates captured with a field activity to an address."""

    name = FlowName.REVERSE_GEOCODE
    input_model = ReverseGeocodeInput
    output_model = ReverseGeocodeOutput
    template = REVERSE_GEOCODE_TEMPLATE
    description = "Convert latitude/longitude into a formatted street address"
