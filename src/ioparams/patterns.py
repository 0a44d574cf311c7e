"""Lexical predicates over parameter values.

All functions are pure and operate on strings. `${...}` marks an expression
clause in the host modeling language.
"""

import re

EXPRESSION_START = "${"
EXPRESSION_END = "}"

_EXPRESSION_CLAUSE_PATTERN = re.compile(r"[A-Za-z_]*\$\{.*\}[A-Za-z_]*")
_FUNCTION_CALL_PATTERN = re.compile(r"[A-Za-z_]*\(.*\)[A-Za-z_]*")
# Single characters cover the two-character comparisons (>=, <=).
_OPERATOR_PATTERN = re.compile(r"[+\-.*/=><&|%!^()]")
_NEWLINE_PATTERN = re.compile(r"[\n\r]+")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_LITERAL_PATTERN = re.compile(r"^(true|false|null)$")
_LEADING_DIGIT_PATTERN = re.compile(r"^[0-9]")


def is_expression_clause(value: str) -> bool:
    """Return True if `value` contains a `${...}` clause anywhere."""
    return _EXPRESSION_CLAUSE_PATTERN.search(value) is not None


def has_newline(value: str) -> bool:
    return _NEWLINE_PATTERN.search(value) is not None


def has_whitespace(value: str) -> bool:
    return _WHITESPACE_PATTERN.search(value) is not None


def has_whitespace_or_newline(value: str) -> bool:
    return has_whitespace(value) or has_newline(value)


def has_function_call(value: str) -> bool:
    """Return True if `value` contains `identifier(...)`-shaped text."""
    return _FUNCTION_CALL_PATTERN.search(value) is not None


def has_operator(value: str) -> bool:
    return _OPERATOR_PATTERN.search(value) is not None


def is_literal_keyword(value: str) -> bool:
    """Return True iff `value` is exactly `true`, `false` or `null`."""
    return _LITERAL_PATTERN.match(value) is not None


def starts_with_digit(value: str) -> bool:
    return _LEADING_DIGIT_PATTERN.match(value) is not None


def is_wrapped(value: str) -> bool:
    """Return True if `value` starts with `${` and ends with `}`."""
    return value.startswith(EXPRESSION_START) and value.endswith(EXPRESSION_END)


def strip_expression_clause(value: str) -> str:
    """Return the interior of a `${...}` clause.

    Callers must check the shape first; a string that is not wrapped is
    cut at the same positions regardless.
    """
    return value[2:len(value) - 1]


def append_expression_clause(value: str) -> str:
    """Wrap a bare value in `${` and `}`."""
    return f"{EXPRESSION_START}{value}{EXPRESSION_END}"


def contains_space(value: str) -> bool:
    """Return True if a name contains whitespace."""
    return has_whitespace(value)
