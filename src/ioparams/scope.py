"""Variable suggestions for the value editor.

Only decides what to offer and where; presenting suggestions is up to the
host.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .models import Element

SCOPE_TYPES = ("bpmn:Process", "bpmn:SubProcess", "bpmn:AdHocSubProcess", "bpmn:Transaction")


@dataclass
class ProcessVariable:
    """A variable and the ids of the elements that write it."""
    name: str
    origin: list[str] = field(default_factory=list)


class VariableScopeResolver(Protocol):
    """Resolves the variables visible in a scope."""

    def variables_for_scope(self, scope_id: str, root: Element) -> list[ProcessVariable]:
        ...


def get_scope(element: Element) -> str:
    """Return the id of the closest process or sub-process around `element`."""
    current = element
    while current.parent is not None and current.element_type not in SCOPE_TYPES:
        current = current.parent
    return current.id


def get_root_element(element: Element) -> Element:
    """Return the process containing `element`."""
    current = element
    while current.parent is not None and current.element_type != "bpmn:Process":
        current = current.parent
    return current


def suggest_variables(element: Element, resolver: VariableScopeResolver) -> list[str]:
    """Return variable names to offer while editing a value of `element`.

    Variables written only by the element itself are left out.
    """
    variables = resolver.variables_for_scope(get_scope(element), get_root_element(element))
    visible = [
        variable for variable in variables
        if any(origin != element.id for origin in variable.origin)
    ]
    return [variable.name for variable in sorted(visible, key=lambda v: v.name)]


def is_inside_expression(text: str, index: int) -> bool:
    """Return True if `index` lies inside the first `${...}` clause of `text`."""
    open_index = text.find("${")
    close_index = text.find("}")
    return (
        open_index > -1 and open_index <= index
        and close_index > -1 and index < close_index
    )


def is_inside_unclosed_expression(text: str, index: int) -> bool:
    """Return True if a `${` opened before `index` has not been closed yet."""
    close_index = text.rfind("}", 0, index + 1)
    open_index = text.find("${", close_index + 1)
    return open_index > -1 and open_index <= index


def can_suggest(text: str, index: int) -> bool:
    """Return True if variable names should be offered at `index`."""
    return is_inside_expression(text, index) or is_inside_unclosed_expression(text, index)


@dataclass
class StaticScopeResolver:
    """Resolver backed by a fixed mapping of scope id to variables."""
    scopes: dict[str, list[ProcessVariable]] = field(default_factory=dict)

    def variables_for_scope(self, scope_id: str, root: Element) -> list[ProcessVariable]:
        return list(self.scopes.get(scope_id, []))
