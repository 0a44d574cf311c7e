"""Validators for scalar parameter kinds.

Every validator returns `None` when the value is valid or a `Diagnostic`
naming the failing rule. Validators never raise for user input.
"""

from dataclasses import dataclass
from enum import Enum

from .models import ParameterKind, kind_label
from .patterns import (
    contains_space,
    has_function_call,
    has_newline,
    has_operator,
    has_whitespace_or_newline,
    is_expression_clause,
    is_literal_keyword,
    is_wrapped,
    starts_with_digit,
    strip_expression_clause,
    EXPRESSION_END,
    EXPRESSION_START,
)


class DiagnosticCode(str, Enum):
    """Identifies the rule a value failed."""
    EXPRESSION_CLAUSE_PRESENT = "expression-clause-present"
    CONTAINS_NEWLINE = "contains-newline"
    NOT_WRAPPED = "not-wrapped"
    EMPTY_BODY = "empty-body"
    CONTAINS_WHITESPACE_OR_NEWLINE = "contains-whitespace-or-newline"
    NESTED_EXPRESSION_CLAUSE = "nested-expression-clause"
    CONTAINS_FUNCTION_CALL = "contains-function-call"
    CONTAINS_OPERATOR = "contains-operator"
    IS_LITERAL_KEYWORD = "is-literal-keyword"
    STARTS_WITH_DIGIT = "starts-with-digit"
    IDENTIFIED_AS_CONSTANT = "identified-as-constant"
    IDENTIFIED_AS_VARIABLE = "identified-as-variable"
    NAME_MISSING = "name-missing"
    NAME_CONTAINS_SPACE = "name-contains-space"
    SCRIPT_FORMAT_MISSING = "script-format-missing"
    SCRIPT_MISSING = "script-missing"


@dataclass
class Diagnostic:
    """A failed validation rule."""
    code: DiagnosticCode
    message: str
    suggested_kind: ParameterKind | None = None


_MESSAGES: dict[DiagnosticCode, str] = {
    DiagnosticCode.EXPRESSION_CLAUSE_PRESENT: "Value must not contain expression clauses.",
    DiagnosticCode.CONTAINS_NEWLINE: "Value must not contain new lines.",
    DiagnosticCode.NOT_WRAPPED: "Value must contain single surrounding expression clauses.",
    DiagnosticCode.EMPTY_BODY: "Value must not be empty.",
    DiagnosticCode.CONTAINS_WHITESPACE_OR_NEWLINE: "Value must not contain spaces or new lines.",
    DiagnosticCode.NESTED_EXPRESSION_CLAUSE: "Value must not contain multiple expression clauses.",
    DiagnosticCode.CONTAINS_FUNCTION_CALL: "Value must not contain function calls.",
    DiagnosticCode.CONTAINS_OPERATOR: "Value must not contain operators.",
    DiagnosticCode.IS_LITERAL_KEYWORD: "Value must not contain literals.",
    DiagnosticCode.STARTS_WITH_DIGIT: "Value must not start with a number.",
    DiagnosticCode.IDENTIFIED_AS_CONSTANT: "Must contain expression clauses.",
    DiagnosticCode.IDENTIFIED_AS_VARIABLE: "Value is identified as variable.",
    DiagnosticCode.NAME_MISSING: "Parameter must have a name",
    DiagnosticCode.NAME_CONTAINS_SPACE: "Name must not contain spaces",
    DiagnosticCode.SCRIPT_FORMAT_MISSING: "Must provide a script format.",
    DiagnosticCode.SCRIPT_MISSING: "Must provide a script.",
}


def _diagnostic(code: DiagnosticCode, suggested_kind: ParameterKind | None = None) -> Diagnostic:
    return Diagnostic(code=code, message=_MESSAGES[code], suggested_kind=suggested_kind)


def validate_constant_value(value: str) -> Diagnostic | None:
    """Validate that a value is a plain constant."""
    if is_expression_clause(value):
        return _diagnostic(DiagnosticCode.EXPRESSION_CLAUSE_PRESENT)

    if has_newline(value):
        return _diagnostic(DiagnosticCode.CONTAINS_NEWLINE)

    return None


def _is_unwrapped(value: str, strict: bool) -> bool:
    if strict:
        return not is_wrapped(value)
    # Historical rule: only rejects values ending in `}` without a leading `${`.
    return not value.startswith(EXPRESSION_START) and value.endswith(EXPRESSION_END)


def validate_variable_expression(value: str, strict: bool = True) -> Diagnostic | None:
    """Validate that a value is a single `${name}` variable reference.

    Args:
        value: The raw value including the expression clause
        strict: Require both delimiters. ``False`` applies the historical
            wrapping rule instead.

    Returns:
        None if valid, otherwise the first failing rule
    """
    if _is_unwrapped(value, strict):
        return _diagnostic(DiagnosticCode.NOT_WRAPPED)

    body = strip_expression_clause(value)

    if not body:
        return _diagnostic(DiagnosticCode.EMPTY_BODY)

    if has_whitespace_or_newline(body):
        return _diagnostic(DiagnosticCode.CONTAINS_WHITESPACE_OR_NEWLINE)

    if is_expression_clause(body):
        return _diagnostic(DiagnosticCode.NESTED_EXPRESSION_CLAUSE)

    if has_function_call(body):
        return _diagnostic(DiagnosticCode.CONTAINS_FUNCTION_CALL)

    if has_operator(body):
        return _diagnostic(DiagnosticCode.CONTAINS_OPERATOR)

    if is_literal_keyword(body):
        return _diagnostic(DiagnosticCode.IS_LITERAL_KEYWORD)

    if starts_with_digit(body):
        return _diagnostic(DiagnosticCode.STARTS_WITH_DIGIT)

    return None


def validate_expression(value: str, strict: bool = True) -> Diagnostic | None:
    """Check that a value is a genuine expression.

    Returns a diagnostic whose `suggested_kind` names the narrower kind the
    value actually matches, or None for a real expression.
    """
    if validate_constant_value(value) is None:
        return _diagnostic(
            DiagnosticCode.IDENTIFIED_AS_CONSTANT, ParameterKind.CONSTANT_VALUE
        )

    if validate_variable_expression(value, strict=strict) is None:
        return _diagnostic(DiagnosticCode.IDENTIFIED_AS_VARIABLE, ParameterKind.VARIABLE)

    return None


def validate_parameter_name(name: str | None) -> Diagnostic | None:
    """Validate a parameter name."""
    if not name:
        return _diagnostic(DiagnosticCode.NAME_MISSING)
    if contains_space(name):
        return _diagnostic(DiagnosticCode.NAME_CONTAINS_SPACE)
    return None


def _consider(label: str) -> str:
    return f'Consider change to type "{label}".'


def validate_for_kind(
    kind: ParameterKind,
    value: str,
    is_input: bool = True,
    strict: bool = True,
) -> Diagnostic | None:
    """Run the validator of `kind` and attach a reclassification hint.

    The returned message ends with a `Consider change to type ...` hint and
    `suggested_kind` names the kind the value fits better. Structured
    kinds have no scalar validator and are always valid.
    """
    if kind == ParameterKind.VARIABLE:
        diagnostic = validate_variable_expression(value, strict=strict)
        if diagnostic is None:
            return None
        if validate_constant_value(value) is None:
            suggested = ParameterKind.CONSTANT_VALUE
        else:
            suggested = ParameterKind.EXPRESSION
        diagnostic.suggested_kind = suggested
        diagnostic.message = f"{diagnostic.message} {_consider(kind_label(suggested, is_input))}"
        return diagnostic

    if kind == ParameterKind.CONSTANT_VALUE:
        diagnostic = validate_constant_value(value)
        if diagnostic is None:
            return None
        if validate_variable_expression(value, strict=strict) is None:
            suggested = ParameterKind.VARIABLE
        else:
            suggested = ParameterKind.EXPRESSION
        diagnostic.suggested_kind = suggested
        diagnostic.message = f"{diagnostic.message} {_consider(kind_label(suggested, is_input))}"
        return diagnostic

    if kind == ParameterKind.EXPRESSION:
        diagnostic = validate_expression(value, strict=strict)
        if diagnostic is None:
            return None
        label = kind_label(diagnostic.suggested_kind, is_input)
        diagnostic.message = f"{diagnostic.message} {_consider(label)}"
        return diagnostic

    return None


def validate_script(script_format: str | None, value: str | None) -> Diagnostic | None:
    """Validate the fields of an inline script definition."""
    if not script_format:
        return _diagnostic(DiagnosticCode.SCRIPT_FORMAT_MISSING)
    if not value:
        return _diagnostic(DiagnosticCode.SCRIPT_MISSING)
    return None
