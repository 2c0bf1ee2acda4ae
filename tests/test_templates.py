"""Tests for prompt template rendering."""

from string import Template

import pytest

from flows import FLOW_REGISTRY
from flows.templates import MISSING_VALUE, PromptTemplate, PromptVariable


@pytest.fixture
def template():
    return PromptTemplate(
        name="greeting",
        template="Hello $name from $city ($note)",
        variables=[
            PromptVariable("name", "Person name"),
            PromptVariable("city", "City", required=False),
            PromptVariable("note", "Note", required=False, default_value="none"),
        ],
    )


def test_render_all_values(template):
    assert template.render(name="Asha", city="Pune", note="VIP") == "Hello Asha from Pune (VIP)"


def test_optional_values_use_default_or_placeholder(template):
    assert template.render(name="Asha") == f"Hello Asha from {MISSING_VALUE} (none)"
    assert template.render(name="Asha", city=None) == f"Hello Asha from {MISSING_VALUE} (none)"


def test_missing_required_variable(template):
    with pytest.raises(ValueError, match="Missing required variables"):
        template.render(city="Pune")


def test_undeclared_variable():
    broken = PromptTemplate(name="broken", template="Hi $who", variables=[])
    with pytest.raises(ValueError, match="undeclared variable"):
        broken.render()


def test_render_is_deterministic(template):
    assert template.render(name="Asha", city="Pune") == template.render(name="Asha", city="Pune")


def test_variable_names(template):
    assert template.variable_names() == ["name", "city", "note"]


@pytest.mark.parametrize("flow_cls", list(FLOW_REGISTRY.values()), ids=lambda cls: cls.name.value)
def test_flow_templates_declare_their_variables(flow_cls):
    """Every $placeholder in a flow template is a declared variable."""
    placeholders = {
        match.group("named") or match.group("braced")
        for match in Template.pattern.finditer(flow_cls.template.template)
        if match.group("named") or match.group("braced")
    }
    assert placeholders == set(flow_cls.template.variable_names())
