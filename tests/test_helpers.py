"""Tests for input/output lookups on elements."""

import pytest

from ioparams.errors import UnsupportedElementError
from ioparams.helpers import (
    are_output_parameters_supported,
    ensure_input_output_supported,
    get_connector,
    get_input_output,
    get_input_parameter,
    get_input_parameters,
    get_output_parameter,
    get_output_parameters,
    is_input_output_supported,
)
from ioparams.models import Connector, Element, InputOutput, Parameter


class TestLookups:
    """Test parameter lookups."""

    def test_element_parameters(self, service_task, input_parameter, output_parameter):
        """Parameters come from the element's container."""
        assert get_input_parameters(service_task) == [input_parameter]
        assert get_output_parameters(service_task) == [output_parameter]
        assert get_input_parameter(service_task, False, 0) is input_parameter
        assert get_output_parameter(service_task, False, 0) is output_parameter
        assert get_input_parameter(service_task, False, 5) is None

    def test_missing_container(self):
        """No container means no parameters."""
        task = Element(id="t", element_type="bpmn:UserTask")
        assert get_input_output(task) is None
        assert get_input_parameters(task) == []
        assert get_output_parameters(task) == []

    def test_connector_parameters(self):
        """Connector mappings are separate from the element's."""
        inner = Parameter(name="url")
        task = Element(
            id="t",
            element_type="bpmn:ServiceTask",
            connector=Connector("http-connector", InputOutput(input_parameters=[inner])),
        )
        assert get_input_parameters(task) == []
        assert get_input_parameters(task, inside_connector=True) == [inner]

    def test_connector_only_on_service_task_like(self):
        """User tasks have no connector."""
        task = Element(id="t", element_type="bpmn:UserTask", connector=Connector("c"))
        assert get_connector(task) is None

    def test_message_end_event_connector(self):
        """Message throw events can use a connector."""
        event = Element(
            id="e",
            element_type="bpmn:EndEvent",
            attributes={"messageEventDefinition": True},
            connector=Connector("c"),
        )
        assert get_connector(event) is event.connector


class TestSupport:
    """Test which elements support mappings."""

    @pytest.mark.parametrize("element_type", [
        "bpmn:ServiceTask", "bpmn:UserTask", "bpmn:CallActivity",
        "bpmn:EndEvent", "bpmn:IntermediateThrowEvent", "bpmn:SubProcess",
        "bpmn:AdHocSubProcess", "bpmn:Transaction",
    ])
    def test_supported(self, element_type):
        """Activities and most events support mappings."""
        assert is_input_output_supported(Element(id="x", element_type=element_type)) is True

    @pytest.mark.parametrize("element_type", [
        "bpmn:StartEvent", "bpmn:ExclusiveGateway", "bpmn:ParallelGateway",
        "bpmn:BoundaryEvent", "bpmn:Process", "bpmn:SequenceFlow",
    ])
    def test_unsupported(self, element_type):
        """Start events, gateways, boundary events and non-flow-nodes do not."""
        assert is_input_output_supported(Element(id="x", element_type=element_type)) is False

    def test_event_sub_process(self):
        """Event sub-processes do not support mappings."""
        element = Element(id="x", element_type="bpmn:SubProcess", attributes={"triggeredByEvent": True})
        assert is_input_output_supported(element) is False

    @pytest.mark.parametrize("element_type", ["bpmn:SubProcess", "bpmn:AdHocSubProcess", "bpmn:Transaction"])
    def test_event_sub_process_variants(self, element_type):
        """Every sub-process type is excluded when triggered by an event."""
        assert is_input_output_supported(Element(id="x", element_type=element_type)) is True
        element = Element(id="x", element_type=element_type, attributes={"triggeredByEvent": True})
        assert is_input_output_supported(element) is False

    def test_connector_always_supported(self):
        """Connector mappings are always supported."""
        element = Element(id="x", element_type="bpmn:StartEvent")
        assert is_input_output_supported(element, inside_connector=True) is True

    def test_output_support(self):
        """End events and multi-instance activities have no outputs."""
        assert are_output_parameters_supported(Element(id="x", element_type="bpmn:EndEvent")) is False
        multi = Element(id="x", element_type="bpmn:Task", attributes={"loopCharacteristics": {}})
        assert are_output_parameters_supported(multi) is False
        multi.attributes["loopCharacteristics"] = {"isSequential": True}
        assert are_output_parameters_supported(multi) is False
        assert are_output_parameters_supported(Element(id="x", element_type="bpmn:Task")) is True
        end = Element(id="x", element_type="bpmn:EndEvent")
        assert are_output_parameters_supported(end, inside_connector=True) is True

    def test_ensure_raises(self):
        """Unsupported elements raise."""
        with pytest.raises(UnsupportedElementError, match="bpmn:StartEvent"):
            ensure_input_output_supported(Element(id="start", element_type="bpmn:StartEvent"))
