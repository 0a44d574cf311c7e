"""Kind inference for parameter values.

The model stores only a string value or a structured definition, never an
explicit kind. The kind shown in the editor is reconstructed from the
stored shape, narrowest rule first:

1. a definition decides by its type (script, list, map)
2. an empty value is a variable, unless the user already picked a kind
3. a valid constant is a constant value
4. a valid `${name}` reference is a variable
5. anything else is an expression
"""

from dataclasses import dataclass

from .models import (
    Definition,
    ListItem,
    MapEntry,
    Parameter,
    ParameterKind,
    ScalarValue,
    is_definition,
    kind_label,
)
from .validators import validate_constant_value, validate_variable_expression

# Order of the type selector.
KIND_ORDER: tuple[ParameterKind, ...] = (
    ParameterKind.VARIABLE,
    ParameterKind.CONSTANT_VALUE,
    ParameterKind.EXPRESSION,
    ParameterKind.SCRIPT,
    ParameterKind.LIST,
    ParameterKind.MAP,
)


@dataclass(frozen=True)
class KindOption:
    """An entry of the type selector."""
    kind: ParameterKind
    label: str


def classify(
    value: str | None,
    definition: Definition | None,
    is_input: bool = True,
    current_type: ParameterKind | None = None,
    strict: bool = True,
) -> ParameterKind:
    """Infer the kind of a stored parameter value.

    Args:
        value: The stored scalar value
        definition: The stored structured definition, if any
        is_input: Whether the parameter is an input parameter
        current_type: Kind explicitly chosen in the editor; only consulted
            while the value is empty
        strict: Wrapping rule used for variable detection

    Returns:
        The inferred ParameterKind
    """
    if definition is not None:
        return definition.kind

    if not value:
        return current_type or ParameterKind.VARIABLE

    if validate_constant_value(value) is None:
        return ParameterKind.CONSTANT_VALUE

    if validate_variable_expression(value, strict=strict) is None:
        return ParameterKind.VARIABLE

    return ParameterKind.EXPRESSION


def classify_parameter(
    parameter: Parameter,
    current_type: ParameterKind | None = None,
    strict: bool = True,
) -> ParameterKind:
    """Infer the kind of a parameter node."""
    return classify(
        parameter.value,
        parameter.definition,
        is_input=parameter.is_input,
        current_type=current_type,
        strict=strict,
    )


def list_kind_options(is_input: bool = True) -> list[KindOption]:
    """Return the six kind options in selector order."""
    return [KindOption(kind=kind, label=kind_label(kind, is_input)) for kind in KIND_ORDER]


def is_editable_leaf(item: ListItem | MapEntry) -> bool:
    """Return True if a list item or map entry value can be edited inline.

    Nested definitions are shown read-only.
    """
    if isinstance(item, MapEntry):
        return item.definition is None
    return isinstance(item, ScalarValue)


def display_value(item: ListItem | MapEntry) -> str | None:
    """Text shown for a list item or map entry value."""
    nested = item.definition if isinstance(item, MapEntry) else item
    if is_definition(nested):
        return kind_label(nested.kind)
    return item.value
