"""Vetter — declarative validation of string inputs with compact rule expressions.

Usage::

    from vetter import validate

    result = validate(form, {
        "name": "required|min_chars:3|alpha",
        "email": "required|email",
        "age": "integer|value_between:18,65",
    })
    if not result:
        # result.messages == {"age": "The age must be between 18 and 65."}
        ...

Rules can also live on dataclass fields::

    from vetter import rule_field, rules_from_schema

    @dataclass
    class Signup:
        email: str = rule_field("required|email", alias="email")

    result = validate(form, rules_from_schema(Signup))
"""

from vetter.config import ValidatorConfig
from vetter.errors import ConfigurationError, SchemaError, UnknownRuleError, VetterError
from vetter.messages import GENERIC_MESSAGE, MESSAGES, format_message
from vetter.parsing import RuleToken, parse_rule, split_expression
from vetter.result import ValidationResult
from vetter.rules import RULES, Arity, Rule, get_rule, rule_names
from vetter.schema import rule_field, rules_from_schema
from vetter.validator import (
    Validator,
    avalidate,
    check_rules,
    unknown_rules,
    validate,
)

__version__ = "0.1.0"
__all__ = [
    "GENERIC_MESSAGE",
    "MESSAGES",
    "RULES",
    "Arity",
    "ConfigurationError",
    "Rule",
    "RuleToken",
    "SchemaError",
    "UnknownRuleError",
    "ValidationResult",
    "Validator",
    "ValidatorConfig",
    "VetterError",
    "avalidate",
    "check_rules",
    "format_message",
    "get_rule",
    "parse_rule",
    "rule_field",
    "rule_names",
    "rules_from_schema",
    "split_expression",
    "unknown_rules",
    "validate",
]
