"""Lookups of input/output mappings on diagram elements."""

from __future__ import annotations

from .errors import UnsupportedElementError
from .models import Connector, Element, InputOutput, Parameter

FLOW_NODE_TYPES = frozenset({
    "bpmn:Task",
    "bpmn:ServiceTask",
    "bpmn:SendTask",
    "bpmn:ReceiveTask",
    "bpmn:UserTask",
    "bpmn:ManualTask",
    "bpmn:BusinessRuleTask",
    "bpmn:ScriptTask",
    "bpmn:CallActivity",
    "bpmn:SubProcess",
    "bpmn:AdHocSubProcess",
    "bpmn:Transaction",
    "bpmn:StartEvent",
    "bpmn:EndEvent",
    "bpmn:IntermediateThrowEvent",
    "bpmn:IntermediateCatchEvent",
    "bpmn:BoundaryEvent",
    "bpmn:ExclusiveGateway",
    "bpmn:InclusiveGateway",
    "bpmn:ParallelGateway",
    "bpmn:ComplexGateway",
    "bpmn:EventBasedGateway",
})

# Elements whose implementation may be delegated to a connector.
SERVICE_TASK_LIKE_TYPES = frozenset({
    "bpmn:ServiceTask",
    "bpmn:BusinessRuleTask",
    "bpmn:SendTask",
})

MESSAGE_THROW_EVENT_TYPES = frozenset({
    "bpmn:IntermediateThrowEvent",
    "bpmn:EndEvent",
})

SUB_PROCESS_TYPES = frozenset({
    "bpmn:SubProcess",
    "bpmn:AdHocSubProcess",
    "bpmn:Transaction",
})


def is_flow_node(element: Element) -> bool:
    return element.element_type in FLOW_NODE_TYPES


def get_connector(element: Element) -> Connector | None:
    """Return the connector of a service-task-like element."""
    is_message_event = (
        element.element_type in MESSAGE_THROW_EVENT_TYPES
        and bool(element.attributes.get("messageEventDefinition"))
    )
    if element.element_type not in SERVICE_TASK_LIKE_TYPES and not is_message_event:
        return None
    return element.connector


def get_input_output(element: Element, inside_connector: bool = False) -> InputOutput | None:
    """Return the input/output container of an element or its connector."""
    if not inside_connector:
        return element.input_output
    connector = get_connector(element)
    return connector.input_output if connector else None


def get_input_parameters(element: Element, inside_connector: bool = False) -> list[Parameter]:
    input_output = get_input_output(element, inside_connector)
    return list(input_output.input_parameters) if input_output else []


def get_output_parameters(element: Element, inside_connector: bool = False) -> list[Parameter]:
    input_output = get_input_output(element, inside_connector)
    return list(input_output.output_parameters) if input_output else []


def get_input_parameter(element: Element, inside_connector: bool, idx: int) -> Parameter | None:
    parameters = get_input_parameters(element, inside_connector)
    return parameters[idx] if 0 <= idx < len(parameters) else None


def get_output_parameter(element: Element, inside_connector: bool, idx: int) -> Parameter | None:
    parameters = get_output_parameters(element, inside_connector)
    return parameters[idx] if 0 <= idx < len(parameters) else None


def is_input_output_supported(element: Element, inside_connector: bool = False) -> bool:
    """Return True if the element can carry input/output mappings.

    Every flow node qualifies except start events, gateways, boundary
    events and event sub-processes. Connectors always do.
    """
    if inside_connector:
        return True

    element_type = element.element_type
    return is_flow_node(element) and not (
        element_type == "bpmn:StartEvent"
        or element_type.endswith("Gateway")
        or element_type == "bpmn:BoundaryEvent"
        or (element_type in SUB_PROCESS_TYPES and bool(element.attributes.get("triggeredByEvent")))
    )


def are_output_parameters_supported(element: Element, inside_connector: bool = False) -> bool:
    """Return True unless the element is an end event or a multi-instance activity."""
    if inside_connector:
        return True
    return (
        element.element_type != "bpmn:EndEvent"
        and element.attributes.get("loopCharacteristics") is None
    )


def ensure_input_output_supported(element: Element, inside_connector: bool = False) -> None:
    """Raise UnsupportedElementError if the element cannot carry mappings."""
    if not is_input_output_supported(element, inside_connector):
        raise UnsupportedElementError(element.id, element.element_type)
