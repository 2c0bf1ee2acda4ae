"""Prompt templates with declared variables, rendered with string.Template."""

from dataclasses import dataclass, field
from string import Template
from typing import Any, Dict, List, Optional


MISSING_VALUE = "Not provided"


@dataclass
class PromptVariable:
    """Represents a variable in a prompt template."""
    name: str
    description: str
    required: bool = True
    default_value: Optional[Any] = None


@dataclass
class PromptTemplate:
    """Represents a prompt template with variables and metadata."""
    name: str
    template: str
    description: str = ""
    variables: List[PromptVariable] = field(default_factory=list)
    version: str = "1.0"

    def render(self, **kwargs) -> str:
        """
        Render the template with provided variables.

        Optional variables that are missing or None render as their default,
        or as "Not provided" when they have none. Rendering is deterministic:
        the same variables always produce the same prompt.
        """
        required_vars = {var.name for var in self.variables if var.required}
        missing_required = sorted(
            name for name in required_vars if kwargs.get(name) is None
        )
        if missing_required:
            raise ValueError(f"Missing required variables: {missing_required}")

        render_vars: Dict[str, Any] = {}
        for var in self.variables:
            value = kwargs.get(var.name)
            if value is None:
                value = var.default_value if var.default_value is not None else MISSING_VALUE
            render_vars[var.name] = value

        try:
            return Template(self.template).substitute(render_vars)
        except KeyError as e:
            raise ValueError(f"Template '{self.name}' uses undeclared variable {e}")

    def variable_names(self) -> List[str]:
        return [var.name for var in self.variables]
