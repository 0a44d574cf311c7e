"""Editing session for a single selected parameter.

Holds the transient state the editor needs between re-renders: the kind
the user picked in the type selector and a typed value that did not pass
validation yet. Neither is persisted. Selecting another parameter or
closing the session wipes both.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .classifier import classify_parameter
from .commands import (
    add_elements_to_list,
    remove_elements_from_list,
    update_business_object,
)
from .config import EditorConfig
from .errors import SessionError
from .models import (
    Definition,
    ListChange,
    ListDefinition,
    MapDefinition,
    MapEntry,
    Parameter,
    ParameterKind,
    ScalarValue,
    ScriptDefinition,
    UpdateProperties,
)
from .patterns import append_expression_clause, is_expression_clause, is_wrapped, strip_expression_clause
from .validators import (
    Diagnostic,
    validate_for_kind,
    validate_parameter_name,
    validate_script,
)

_logger = logging.getLogger(__name__)

_DEFINITION_FACTORIES = {
    ParameterKind.SCRIPT: ScriptDefinition,
    ParameterKind.LIST: ListDefinition,
    ParameterKind.MAP: MapDefinition,
}


class SessionState(str, Enum):
    """Lifecycle of an editing session."""
    IDLE = "idle"
    EDITING = "editing"


@dataclass
class EditResult:
    """Outcome of an edit: a diagnostic to show, or an update to apply."""
    diagnostic: Diagnostic | None = None
    update: UpdateProperties | None = None

    @property
    def valid(self) -> bool:
        return self.diagnostic is None


class ParameterEditSession:
    """Transient edit state for the parameter currently being edited."""

    def __init__(self, config: EditorConfig | None = None) -> None:
        self.config = config or EditorConfig()
        self._parameter: Parameter | None = None
        self._current_type: ParameterKind | None = None
        self._current_value: str | None = None

    @property
    def state(self) -> SessionState:
        return SessionState.IDLE if self._parameter is None else SessionState.EDITING

    @property
    def current_parameter(self) -> Parameter | None:
        return self._parameter

    @property
    def current_type(self) -> ParameterKind | None:
        return self._current_type

    @property
    def current_value(self) -> str | None:
        return self._current_value

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_parameter(self, parameter: Parameter | None) -> None:
        """Track `parameter`, resetting transient state if it changed."""
        if parameter is self._parameter:
            return
        _logger.debug(
            "Parameter selection changed (%s -> %s), clearing edit state",
            getattr(self._parameter, "name", None),
            getattr(parameter, "name", None),
        )
        self._current_type = None
        self._current_value = None
        self._parameter = parameter

    def close(self) -> None:
        """End the session."""
        self.select_parameter(None)

    def _require_parameter(self) -> Parameter:
        if self._parameter is None:
            raise SessionError("No parameter selected")
        return self._parameter

    # ------------------------------------------------------------------
    # Kind
    # ------------------------------------------------------------------

    def parameter_kind(self) -> ParameterKind | None:
        """Kind inferred from the stored value, honoring the type override."""
        if self._parameter is None:
            return None
        return classify_parameter(
            self._parameter,
            current_type=self._current_type,
            strict=self.config.strict_wrapping,
        )

    def active_kind(self) -> ParameterKind | None:
        """Kind whose editor is shown: the chosen type, else the inferred one."""
        return self._current_type or self.parameter_kind()

    def choose_type(self, kind: ParameterKind) -> UpdateProperties:
        """Switch the parameter to `kind`.

        Structured kinds move the scalar value aside and install a
        definition. Scalar kinds drop the definition and bring back the
        pending or previously stored value.
        """
        parameter = self._require_parameter()
        kind = ParameterKind(kind)

        if kind.is_structured:
            if self._current_value is None and parameter.value:
                self._current_value = parameter.value
            definition = parameter.definition
            if definition is None or definition.kind != kind:
                definition = _DEFINITION_FACTORIES[kind]()
            properties = {"value": None, "definition": definition}
        else:
            properties = {
                "value": self._current_value or parameter.value,
                "definition": None,
            }
            self._current_value = None

        _logger.debug("Switching parameter %r to %s", parameter.name, kind.value)
        self._current_type = kind
        return update_business_object(parameter, properties)

    # ------------------------------------------------------------------
    # Scalar values
    # ------------------------------------------------------------------

    def display_value(self) -> str | None:
        """Value shown in the editor of the active kind."""
        parameter = self._require_parameter()
        kind = self.active_kind()
        value = self._current_value if self._current_value is not None else parameter.value

        if kind == ParameterKind.VARIABLE:
            if value and is_wrapped(value):
                return strip_expression_clause(value)
            return value
        if kind == ParameterKind.EXPRESSION:
            return value or self.config.expression_placeholder
        if kind == ParameterKind.CONSTANT_VALUE:
            return value
        return None

    def type_value(self, raw: str | None, wrap_variable: bool = False) -> EditResult:
        """Validate a typed value against the active kind.

        Args:
            raw: The text entered by the user
            wrap_variable: Treat `raw` as a bare variable name and add the
                expression clause unless one was typed already

        Returns:
            EditResult carrying either the diagnostic or the value update
        """
        parameter = self._require_parameter()
        kind = self.active_kind()
        if kind.is_structured:
            raise SessionError(f"Parameter of kind {kind.value} has no scalar value")

        if not raw:
            self._current_value = None
            return EditResult(update=update_business_object(parameter, {"value": None}))

        if wrap_variable and kind == ParameterKind.VARIABLE and not is_expression_clause(raw):
            raw = append_expression_clause(raw)

        diagnostic = validate_for_kind(
            kind,
            raw,
            is_input=parameter.is_input,
            strict=self.config.strict_wrapping,
        )
        if diagnostic is not None:
            _logger.debug("Keeping rejected %s value for parameter %r", kind.value, parameter.name)
            self._current_value = raw
            return EditResult(diagnostic=diagnostic)

        self._current_value = None
        return EditResult(update=update_business_object(parameter, {"value": raw}))

    def rename(self, name: str | None) -> EditResult:
        """Validate and describe a parameter rename."""
        parameter = self._require_parameter()
        diagnostic = validate_parameter_name(name)
        if diagnostic is not None:
            return EditResult(diagnostic=diagnostic)
        return EditResult(update=update_business_object(parameter, {"name": name}))

    # ------------------------------------------------------------------
    # Structured values
    # ------------------------------------------------------------------

    def _definition(self, expected: type) -> Definition:
        definition = self._require_parameter().definition
        if not isinstance(definition, expected):
            raise SessionError(f"Parameter has no {expected.kind.value} definition")
        return definition

    def update_script(self, script_format: str | None, value: str | None) -> EditResult:
        """Validate and describe a change of the inline script."""
        definition = self._definition(ScriptDefinition)
        diagnostic = validate_script(script_format, value)
        if diagnostic is not None:
            return EditResult(diagnostic=diagnostic)
        return EditResult(update=update_business_object(
            definition, {"script_format": script_format, "value": value}
        ))

    def add_list_item(self) -> ListChange:
        definition = self._definition(ListDefinition)
        return add_elements_to_list(definition, "items", [ScalarValue()])

    def remove_list_item(self, idx: int) -> ListChange:
        definition = self._definition(ListDefinition)
        return remove_elements_from_list(definition, "items", [definition.items[idx]])

    def update_list_item(self, idx: int, value: str | None) -> UpdateProperties | None:
        """Describe a list item change; nested definitions are read-only."""
        item = self._definition(ListDefinition).items[idx]
        if not isinstance(item, ScalarValue):
            return None
        return update_business_object(item, {"value": value or None})

    def add_map_entry(self) -> ListChange:
        definition = self._definition(MapDefinition)
        return add_elements_to_list(definition, "entries", [MapEntry()])

    def remove_map_entry(self, idx: int) -> ListChange:
        definition = self._definition(MapDefinition)
        return remove_elements_from_list(definition, "entries", [definition.entries[idx]])

    def update_map_entry(self, idx: int, key: str | None, value: str | None = None) -> UpdateProperties:
        """Describe a map entry change; only the key of nested entries changes."""
        entry = self._definition(MapDefinition).entries[idx]
        properties = {"key": key}
        if entry.definition is None:
            properties["value"] = value
        return update_business_object(entry, properties)
