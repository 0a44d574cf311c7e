"""Update descriptions handed to the editor's command stack.

The engine never mutates model nodes while editing. It describes the change
and the host applies it (with undo/redo). `apply_update` is a minimal
in-memory sink for tools and tests.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .models import ListChange, Update, UpdateProperties

_logger = logging.getLogger(__name__)


def update_business_object(target: Any, properties: dict[str, Any]) -> UpdateProperties:
    """Describe setting fields on a node."""
    return UpdateProperties(target=target, properties=dict(properties))


def add_elements_to_list(target: Any, property: str, elements: Iterable[Any]) -> ListChange:
    """Describe appending nodes to a list-valued field."""
    return ListChange(target=target, property=property, add=list(elements))


def remove_elements_from_list(target: Any, property: str, elements: Iterable[Any]) -> ListChange:
    """Describe removing nodes from a list-valued field."""
    return ListChange(target=target, property=property, remove=list(elements))


def add_and_remove_elements_from_list(
    target: Any,
    property: str,
    add: Iterable[Any],
    remove: Iterable[Any],
) -> ListChange:
    """Describe replacing nodes of a list-valued field in one step."""
    return ListChange(target=target, property=property, add=list(add), remove=list(remove))


def apply_update(update: Update) -> None:
    """Apply a single update description to in-memory nodes."""
    if isinstance(update, UpdateProperties):
        for name, value in update.properties.items():
            setattr(update.target, name, value)
        return

    if isinstance(update, ListChange):
        items = getattr(update.target, update.property)
        for node in update.remove:
            # Removal is by identity; dataclass equality would match look-alikes.
            for idx, existing in enumerate(items):
                if existing is node:
                    del items[idx]
                    break
            else:
                _logger.debug("Node to remove not found in %s", update.property)
        items.extend(update.add)
        return

    raise TypeError(f"Unsupported update: {type(update).__name__}")


def apply_updates(updates: Iterable[Update]) -> None:
    """Apply update descriptions in order."""
    for update in updates:
        apply_update(update)
