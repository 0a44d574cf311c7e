"""Shared pytest fixtures for ioparams tests."""

import json
from pathlib import Path

import pytest

from ioparams.models import (
    Direction,
    Element,
    InputOutput,
    ListDefinition,
    MapDefinition,
    MapEntry,
    Parameter,
    ScalarValue,
    ScriptDefinition,
)


@pytest.fixture
def input_parameter() -> Parameter:
    """An empty input parameter."""
    return Parameter(name="orderId", direction=Direction.INPUT)


@pytest.fixture
def output_parameter() -> Parameter:
    """An empty output parameter."""
    return Parameter(name="result", direction=Direction.OUTPUT)


@pytest.fixture
def list_parameter() -> Parameter:
    """Input parameter holding a list with one nested map."""
    return Parameter(
        name="items",
        definition=ListDefinition(items=[
            ScalarValue("first"),
            MapDefinition(entries=[MapEntry(key="k", value="v")]),
            ScalarValue("${second}"),
        ]),
    )


@pytest.fixture
def map_parameter() -> Parameter:
    """Input parameter holding a map with one nested script."""
    return Parameter(
        name="headers",
        definition=MapDefinition(entries=[
            MapEntry(key="accept", value="application/json"),
            MapEntry(key="token", definition=ScriptDefinition("groovy", "token()")),
        ]),
    )


@pytest.fixture
def service_task(input_parameter, output_parameter) -> Element:
    """A service task inside a process with one input and one output."""
    process = Element(id="Process_1", element_type="bpmn:Process")
    return Element(
        id="Task_1",
        element_type="bpmn:ServiceTask",
        input_output=InputOutput(
            input_parameters=[input_parameter],
            output_parameters=[output_parameter],
        ),
        parent=process,
    )


@pytest.fixture
def element_data() -> dict:
    """JSON form of a service task with mixed parameter kinds."""
    return {
        "id": "Task_1",
        "type": "bpmn:ServiceTask",
        "inputOutput": {
            "input_parameters": [
                {"name": "orderId", "value": "${orderId}"},
                {"name": "greeting", "value": "hello"},
                {"name": "total", "value": "${price * amount}"},
                {
                    "name": "recipients",
                    "definition": {
                        "$type": "camunda:List",
                        "items": ["a@example.com", {"$type": "camunda:Map", "entries": []}],
                    },
                },
            ],
            "output_parameters": [
                {"name": "status", "value": "${status}"},
                {
                    "name": "computed",
                    "definition": {
                        "$type": "camunda:Script",
                        "script_format": "javascript",
                        "value": "1 + 1",
                    },
                },
            ],
        },
    }


@pytest.fixture
def element_file(tmp_path: Path, element_data) -> Path:
    """Element JSON written to disk."""
    file_path = tmp_path / "element.json"
    file_path.write_text(json.dumps(element_data))
    return file_path


@pytest.fixture
def template_data() -> dict:
    """Element template with input parameter bindings."""
    return {
        "id": "com.example.mail",
        "name": "Mail Task",
        "properties": [
            {
                "label": "Recipient",
                "type": "IODefault",
                "value": "${customerMail}",
                "binding": {"type": "camunda:inputParameter", "name": "recipient"},
                "constraints": {"notEmpty": True},
            },
            {
                "label": "Body",
                "type": "IODefault",
                "binding": {
                    "type": "camunda:inputParameter",
                    "name": "body",
                    "scriptFormat": "freemarker",
                },
            },
            {
                "label": "Implementation",
                "type": "Hidden",
                "value": "mail",
                "binding": {"type": "property", "name": "camunda:class"},
            },
        ],
    }


@pytest.fixture
def template_file(tmp_path: Path, template_data) -> Path:
    """Template JSON written to disk."""
    file_path = tmp_path / "template.json"
    file_path.write_text(json.dumps(template_data))
    return file_path
