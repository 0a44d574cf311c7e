"""Data models for input/output parameter mappings.

These mirror the shape of the extension elements stored on a diagram
element: a container of input and output parameters, each carrying either a
plain string value or a structured definition (script, list, map).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .errors import ModelError


class ParameterKind(str, Enum):
    """How a parameter's value or definition is interpreted."""
    VARIABLE = "variable"
    CONSTANT_VALUE = "constant-value"
    EXPRESSION = "expression"
    SCRIPT = "script"
    LIST = "list"
    MAP = "map"

    @property
    def is_structured(self) -> bool:
        """Whether the kind stores its content in a definition node."""
        return self in (ParameterKind.SCRIPT, ParameterKind.LIST, ParameterKind.MAP)


class Direction(str, Enum):
    """Direction of a parameter mapping."""
    INPUT = "input"
    OUTPUT = "output"


_KIND_LABELS: dict[ParameterKind, str] = {
    ParameterKind.CONSTANT_VALUE: "Constant Value",
    ParameterKind.EXPRESSION: "Expression",
    ParameterKind.SCRIPT: "Script",
    ParameterKind.LIST: "List",
    ParameterKind.MAP: "Map",
}


def kind_label(kind: ParameterKind, is_input: bool = True) -> str:
    """Display label of a kind. Only the variable label depends on direction."""
    if kind == ParameterKind.VARIABLE:
        return "Process Variable" if is_input else "Element Variable"
    return _KIND_LABELS[kind]


@dataclass
class ScalarValue:
    """A plain list item."""
    value: str | None = None


@dataclass
class ScriptDefinition:
    """Inline or external script producing the parameter value."""
    script_format: str | None = None
    value: str | None = None
    resource: str | None = None

    model_type = "camunda:Script"
    kind = ParameterKind.SCRIPT


@dataclass
class ListDefinition:
    """Ordered list of values or nested definitions."""
    items: list["ListItem"] = field(default_factory=list)

    model_type = "camunda:List"
    kind = ParameterKind.LIST


@dataclass
class MapEntry:
    """A single key of a map definition."""
    key: str | None = None
    value: str | None = None
    definition: "Definition | None" = None


@dataclass
class MapDefinition:
    """Ordered key/value entries."""
    entries: list[MapEntry] = field(default_factory=list)

    model_type = "camunda:Map"
    kind = ParameterKind.MAP


Definition = Union[ScriptDefinition, ListDefinition, MapDefinition]
ListItem = Union[ScalarValue, ScriptDefinition, ListDefinition, MapDefinition]

DEFINITION_TYPES: dict[str, type] = {
    ScriptDefinition.model_type: ScriptDefinition,
    ListDefinition.model_type: ListDefinition,
    MapDefinition.model_type: MapDefinition,
}


def is_definition(node: Any) -> bool:
    """Return True if a node is a structured definition."""
    return isinstance(node, (ScriptDefinition, ListDefinition, MapDefinition))


@dataclass(eq=False)
class Parameter:
    """An input or output parameter.

    Compared by identity: two parameters with equal fields are still
    different nodes of the model tree.
    """
    name: str | None = None
    direction: Direction = Direction.INPUT
    value: str | None = None
    definition: Definition | None = None

    @property
    def is_input(self) -> bool:
        return self.direction == Direction.INPUT


@dataclass
class InputOutput:
    """Container of parameter mappings."""
    input_parameters: list[Parameter] = field(default_factory=list)
    output_parameters: list[Parameter] = field(default_factory=list)


@dataclass
class Connector:
    """Connector extension of a service-task-like element."""
    connector_id: str | None = None
    input_output: InputOutput | None = None


@dataclass(eq=False)
class Element:
    """Business object of a diagram element.

    `element_type` is the model type (e.g. `bpmn:ServiceTask`) and
    `attributes` holds flags such as `triggeredByEvent`.
    """
    id: str
    element_type: str
    attributes: dict[str, Any] = field(default_factory=dict)
    input_output: InputOutput | None = None
    connector: Connector | None = None
    parent: "Element | None" = None


@dataclass
class UpdateProperties:
    """Set fields on a target node."""
    target: Any
    properties: dict[str, Any]


@dataclass
class ListChange:
    """Insert and remove nodes of a list-valued field."""
    target: Any
    property: str
    add: list[Any] = field(default_factory=list)
    remove: list[Any] = field(default_factory=list)


Update = Union[UpdateProperties, ListChange]


# ============================================================================
# JSON representation
# ============================================================================

def to_dict(obj: Any) -> Any:
    """Recursively convert model nodes to JSON-friendly values."""
    if is_definition(obj):
        data = {"$type": obj.model_type}
        data.update({k: to_dict(v) for k, v in obj.__dict__.items()})
        return data
    if isinstance(obj, Element):
        return {
            "id": obj.id,
            "type": obj.element_type,
            "attributes": dict(obj.attributes),
            "inputOutput": to_dict(obj.input_output),
            "connector": to_dict(obj.connector),
        }
    if isinstance(obj, Connector):
        return {"connector_id": obj.connector_id, "inputOutput": to_dict(obj.input_output)}
    if hasattr(obj, "__dataclass_fields__"):
        return {k: to_dict(v) for k, v in obj.__dict__.items()}
    elif isinstance(obj, Enum):
        return obj.value
    elif isinstance(obj, list):
        return [to_dict(item) for item in obj]
    elif isinstance(obj, dict):
        return {k: to_dict(v) for k, v in obj.items()}
    return obj


def definition_from_dict(data: dict[str, Any]) -> Definition:
    """Create a definition node from its `$type`-tagged dict."""
    if not isinstance(data, dict):
        raise ModelError(f"Definition must be an object, got {type(data).__name__}")
    model_type = data.get("$type")
    if model_type == ScriptDefinition.model_type:
        return ScriptDefinition(
            script_format=data.get("script_format"),
            value=data.get("value"),
            resource=data.get("resource"),
        )
    if model_type == ListDefinition.model_type:
        return ListDefinition(items=[_list_item_from_dict(i) for i in data.get("items") or []])
    if model_type == MapDefinition.model_type:
        return MapDefinition(entries=[_map_entry_from_dict(e) for e in data.get("entries") or []])
    raise ModelError(f"Unknown definition type: {model_type!r}")


def _list_item_from_dict(data: Any) -> ListItem:
    if isinstance(data, dict) and "$type" in data:
        return definition_from_dict(data)
    if isinstance(data, dict):
        return ScalarValue(value=data.get("value"))
    return ScalarValue(value=None if data is None else str(data))


def _map_entry_from_dict(data: Any) -> MapEntry:
    if not isinstance(data, dict):
        raise ModelError(f"Map entry must be an object, got {type(data).__name__}")
    definition = data.get("definition")
    return MapEntry(
        key=data.get("key"),
        value=data.get("value"),
        definition=definition_from_dict(definition) if definition is not None else None,
    )


def parameter_from_dict(data: dict[str, Any], direction: Direction) -> Parameter:
    """Create a parameter node from a dict."""
    if not isinstance(data, dict):
        raise ModelError(f"Parameter must be an object, got {type(data).__name__}")
    definition = data.get("definition")
    return Parameter(
        name=data.get("name"),
        direction=direction,
        value=data.get("value"),
        definition=definition_from_dict(definition) if definition is not None else None,
    )


def input_output_from_dict(data: dict[str, Any] | None) -> InputOutput | None:
    if data is None:
        return None
    return InputOutput(
        input_parameters=[
            parameter_from_dict(p, Direction.INPUT) for p in data.get("input_parameters") or []
        ],
        output_parameters=[
            parameter_from_dict(p, Direction.OUTPUT) for p in data.get("output_parameters") or []
        ],
    )


def element_from_dict(data: dict[str, Any], parent: Element | None = None) -> Element:
    """Create an element (and its optional parent chain) from a dict."""
    if not isinstance(data, dict):
        raise ModelError(f"Element must be an object, got {type(data).__name__}")
    if "id" not in data or "type" not in data:
        raise ModelError("Element requires 'id' and 'type'")

    if parent is None and data.get("parent") is not None:
        parent = element_from_dict(data["parent"])

    connector_data = data.get("connector")
    connector = None
    if connector_data is not None:
        connector = Connector(
            connector_id=connector_data.get("connector_id"),
            input_output=input_output_from_dict(connector_data.get("inputOutput")),
        )

    return Element(
        id=str(data["id"]),
        element_type=str(data["type"]),
        attributes=dict(data.get("attributes") or {}),
        input_output=input_output_from_dict(data.get("inputOutput")),
        connector=connector,
        parent=parent,
    )
