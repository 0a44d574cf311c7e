"""Tests for kind inference and kind options."""

import pytest

from ioparams.classifier import (
    KIND_ORDER,
    KindOption,
    classify,
    classify_parameter,
    display_value,
    is_editable_leaf,
    list_kind_options,
)
from ioparams.models import (
    Direction,
    ListDefinition,
    MapDefinition,
    MapEntry,
    Parameter,
    ParameterKind,
    ScalarValue,
    ScriptDefinition,
    kind_label,
)


class TestClassify:
    """Test the precedence of kind inference."""

    @pytest.mark.parametrize("definition, expected", [
        (ScriptDefinition("groovy", "x"), ParameterKind.SCRIPT),
        (ListDefinition(), ParameterKind.LIST),
        (MapDefinition(), ParameterKind.MAP),
    ])
    def test_definition_decides(self, definition, expected):
        """A definition wins over any value."""
        assert classify("${foo}", definition) == expected

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_value_is_variable(self, value):
        """Empty values default to variable."""
        assert classify(value, None) == ParameterKind.VARIABLE

    def test_empty_value_honors_current_type(self):
        """A chosen type wins while the value is empty."""
        assert classify("", None, current_type=ParameterKind.SCRIPT) == ParameterKind.SCRIPT
        assert classify(None, None, current_type=ParameterKind.EXPRESSION) == ParameterKind.EXPRESSION

    def test_current_type_ignored_with_value(self):
        """Stored values are classified by shape."""
        assert classify("plain", None, current_type=ParameterKind.VARIABLE) == ParameterKind.CONSTANT_VALUE

    def test_constant(self):
        """Text without clauses is a constant."""
        assert classify("plain text", None) == ParameterKind.CONSTANT_VALUE

    def test_variable(self):
        """A bare reference is a variable."""
        assert classify("${foo}", None) == ParameterKind.VARIABLE

    @pytest.mark.parametrize("value", ["${1 + 2}", "${foo()}", "${a + b}", "Hello ${name}", "${true}"])
    def test_expression(self, value):
        """Clauses that are not bare references are expressions."""
        assert classify(value, None) == ParameterKind.EXPRESSION

    def test_multiline_text_is_expression(self):
        """Multi-line text fails the constant rule and falls through."""
        assert classify("line1\nline2", None) == ParameterKind.EXPRESSION

    def test_classify_parameter(self):
        """Parameter nodes are classified by their fields."""
        parameter = Parameter(name="x", direction=Direction.OUTPUT, value="${x}")
        assert classify_parameter(parameter) == ParameterKind.VARIABLE


class TestKindOptions:
    """Test the type selector options."""

    def test_order_and_count(self):
        """Six options in selector order."""
        options = list_kind_options()
        assert [o.kind for o in options] == list(KIND_ORDER)
        assert [o.kind.value for o in options] == [
            "variable", "constant-value", "expression", "script", "list", "map"
        ]

    def test_input_labels(self):
        """Input parameters read variables from the process."""
        options = list_kind_options(is_input=True)
        assert options[0] == KindOption(ParameterKind.VARIABLE, "Process Variable")
        assert [o.label for o in options[1:]] == ["Constant Value", "Expression", "Script", "List", "Map"]

    def test_output_labels(self):
        """Output parameters read variables from the element."""
        options = list_kind_options(is_input=False)
        assert options[0].label == "Element Variable"
        assert kind_label(ParameterKind.MAP, is_input=False) == "Map"


class TestEditability:
    """Test the leaf editability predicate and display values."""

    def test_scalar_item_editable(self):
        """Scalar list items are editable."""
        assert is_editable_leaf(ScalarValue("a")) is True
        assert display_value(ScalarValue("a")) == "a"

    @pytest.mark.parametrize("nested, label", [
        (ListDefinition(), "List"),
        (MapDefinition(), "Map"),
        (ScriptDefinition(), "Script"),
    ])
    def test_nested_item_read_only(self, nested, label):
        """Nested definitions show their kind label."""
        assert is_editable_leaf(nested) is False
        assert display_value(nested) == label

    def test_map_entries(self):
        """Map entries are editable unless their value is nested."""
        plain = MapEntry(key="a", value="b")
        nested = MapEntry(key="a", definition=ListDefinition())
        assert is_editable_leaf(plain) is True
        assert display_value(plain) == "b"
        assert is_editable_leaf(nested) is False
        assert display_value(nested) == "List"
