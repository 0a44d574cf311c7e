"""ioparams - classification and validation of input/output parameter values."""

__version__ = "0.1.0"

from .classifier import classify, classify_parameter, list_kind_options
from .models import ParameterKind
from .session import ParameterEditSession
from .validators import (
    validate_constant_value,
    validate_expression,
    validate_variable_expression,
)

__all__ = [
    "__version__",
    "classify",
    "classify_parameter",
    "list_kind_options",
    "ParameterKind",
    "ParameterEditSession",
    "validate_constant_value",
    "validate_expression",
    "validate_variable_expression",
]
