"""Exceptions raised by ioparams.

User input problems are reported as `Diagnostic` values, not exceptions.
The classes here signal integration or configuration defects.
"""


class IoParamsError(Exception):
    """Base class for ioparams errors."""


class UnknownBindingError(IoParamsError):
    """A template property uses a binding type that is not implemented."""

    def __init__(self, binding_type: str) -> None:
        super().__init__(f"unknown binding: <{binding_type}>")
        self.binding_type = binding_type


class UnsupportedElementError(IoParamsError):
    """The element cannot carry input/output mappings."""

    def __init__(self, element_id: str, element_type: str) -> None:
        super().__init__(
            f"Element {element_id!r} of type {element_type} does not support input/output"
        )
        self.element_id = element_id
        self.element_type = element_type


class ModelError(IoParamsError):
    """A serialized model document is malformed."""


class SessionError(IoParamsError):
    """An edit operation was called in a state that does not allow it."""
