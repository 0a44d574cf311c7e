"""Element-template properties bound to input parameters.

A template declares properties whose values live in input parameters of
the element. This module reads, writes and validates those values.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from .commands import add_and_remove_elements_from_list, update_business_object
from .errors import ModelError, UnknownBindingError
from .models import (
    Direction,
    Element,
    InputOutput,
    Parameter,
    ScriptDefinition,
    Update,
)

_logger = logging.getLogger(__name__)

INPUT_PARAMETER_BINDING = "camunda:inputParameter"
INPUT_OUTPUT_DEFAULT_TYPE = "IODefault"


@dataclass
class Binding:
    """Where a template property is stored on the element."""
    type: str
    name: str | None = None
    script_format: str | None = None


@dataclass
class Constraints:
    """Validation constraints of a template property."""
    not_empty: bool = False
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    pattern_message: str | None = None


@dataclass
class TemplateProperty:
    """A single template property."""
    binding: Binding
    label: str | None = None
    value: str | None = None
    type: str = "String"
    constraints: Constraints = field(default_factory=Constraints)


@dataclass
class ElementTemplate:
    """An element template and its properties."""
    id: str
    name: str | None = None
    properties: list[TemplateProperty] = field(default_factory=list)


def template_from_dict(data: dict[str, Any]) -> ElementTemplate:
    """Parse an element template in its JSON form."""
    if not isinstance(data, dict) or "id" not in data:
        raise ModelError("Element template requires an 'id'")

    properties = []
    for raw in data.get("properties") or []:
        binding_data = raw.get("binding") or {}
        if "type" not in binding_data:
            raise ModelError(f"Template property {raw.get('label')!r} has no binding type")
        constraints_data = raw.get("constraints") or {}
        pattern = constraints_data.get("pattern")
        pattern_message = None
        if isinstance(pattern, dict):
            pattern_message = pattern.get("message")
            pattern = pattern.get("value")
        if pattern is not None:
            try:
                re.compile(pattern)
            except (re.error, TypeError) as e:
                raise ModelError(f"Template property {raw.get('label')!r} has an invalid pattern: {e}") from e
        properties.append(TemplateProperty(
            binding=Binding(
                type=binding_data["type"],
                name=binding_data.get("name"),
                script_format=binding_data.get("scriptFormat"),
            ),
            label=raw.get("label"),
            value=raw.get("value"),
            type=raw.get("type", "String"),
            constraints=Constraints(
                not_empty=bool(constraints_data.get("notEmpty")),
                min_length=constraints_data.get("minLength"),
                max_length=constraints_data.get("maxLength"),
                pattern=pattern,
                pattern_message=pattern_message,
            ),
        ))

    return ElementTemplate(id=str(data["id"]), name=data.get("name"), properties=properties)


def input_parameter_properties(template: ElementTemplate) -> list[tuple[str, TemplateProperty]]:
    """Return `(entry_id, property)` for each default input parameter property."""
    return [
        (f"template-inputs-{template.id}-{idx}", prop)
        for idx, prop in enumerate(
            p for p in template.properties
            if p.binding.type == INPUT_PARAMETER_BINDING and p.type == INPUT_OUTPUT_DEFAULT_TYPE
        )
    ]


def find_input_parameter(input_output: InputOutput, binding: Binding) -> Parameter | None:
    """Return the input parameter named by the binding."""
    for parameter in input_output.input_parameters:
        if parameter.name == binding.name:
            return parameter
    return None


def create_input_parameter(binding: Binding, value: str | None) -> Parameter:
    """Create the input parameter node for a binding."""
    if binding.script_format:
        return Parameter(
            name=binding.name,
            direction=Direction.INPUT,
            definition=ScriptDefinition(script_format=binding.script_format, value=value),
        )
    return Parameter(name=binding.name, direction=Direction.INPUT, value=value)


def get_property_value(element: Element, prop: TemplateProperty) -> str:
    """Return the current value of a template property on an element.

    Raises:
        UnknownBindingError: If the binding type is not supported
    """
    binding = prop.binding
    if binding.type != INPUT_PARAMETER_BINDING:
        raise UnknownBindingError(binding.type)

    default = prop.value or ""

    input_output = element.input_output
    if input_output is None:
        return default

    parameter = find_input_parameter(input_output, binding)
    if parameter is not None:
        if binding.script_format:
            if isinstance(parameter.definition, ScriptDefinition):
                return parameter.definition.value or ""
        else:
            return parameter.value or ""

    return default


def set_property_value(element: Element, prop: TemplateProperty, value: str | None) -> list[Update]:
    """Return the updates that store `value` for a template property.

    Creates the input/output container when missing and replaces the
    bound parameter with a fresh one.

    Raises:
        UnknownBindingError: If the binding type is not supported
    """
    binding = prop.binding
    if binding.type != INPUT_PARAMETER_BINDING:
        raise UnknownBindingError(binding.type)

    updates: list[Update] = []

    input_output = element.input_output
    if input_output is None:
        input_output = InputOutput()
        updates.append(update_business_object(element, {"input_output": input_output}))

    existing = find_input_parameter(input_output, binding)
    replacement = create_input_parameter(binding, value)
    _logger.debug("Setting input parameter %r on %s", binding.name, element.id)

    updates.append(add_and_remove_elements_from_list(
        input_output,
        "input_parameters",
        [replacement],
        [existing] if existing is not None else [],
    ))
    return updates


def _is_empty(value: str | None) -> bool:
    return not value or value.strip() == ""


def validate_value(value: str | None, prop: TemplateProperty) -> str | None:
    """Check a value against the property's constraints.

    Returns:
        The error message, or None if the value is acceptable
    """
    constraints = prop.constraints

    if constraints.not_empty and _is_empty(value):
        return "Must not be empty"

    value = value or ""

    if constraints.max_length and len(value) > constraints.max_length:
        return f"Must have max length {constraints.max_length}"

    if constraints.min_length and len(value) < constraints.min_length:
        return f"Must have min length {constraints.min_length}"

    if constraints.pattern and not re.search(constraints.pattern, value):
        return constraints.pattern_message or f"Must match pattern {constraints.pattern}"

    return None
