"""Rules maps from dataclass field metadata.

Rule expressions live next to the fields they check, in
``dataclasses.field(metadata=...)``. Two metadata keys are read:

- ``"alias"``: the public name of the field in the inputs mapping
  (the form field, JSON key, or CLI option name);
- ``"rules"``: the rule expression.

``rule_field()`` builds such a field::

    @dataclass(frozen=True, slots=True)
    class Signup:
        email: str = rule_field("required|email", alias="email")
        age: str = rule_field("integer|min_value:0", alias="age", default="")

    rules_from_schema(Signup)
    # {"email": "required|email", "age": "integer|min_value:0"}
"""

import dataclasses
from typing import Any

from vetter.errors import SchemaError

ALIAS_KEY = "alias"
RULES_KEY = "rules"


def rule_field(rules: str, *, alias: str, **kwargs: Any) -> Any:
    """Return a ``dataclasses.field()`` carrying *rules* and *alias* metadata.

    Other keyword arguments (``default``, ``default_factory``, ``repr``,
    ...) are passed through. A ``metadata`` mapping, if given, is merged.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[ALIAS_KEY] = alias
    metadata[RULES_KEY] = rules
    return dataclasses.field(metadata=metadata, **kwargs)


def rules_from_schema(record: Any) -> dict[str, str]:
    """Derive a rules map from a dataclass type or instance.

    Each public field whose metadata holds a non-empty ``"alias"`` and a
    non-empty ``"rules"`` string contributes ``alias -> rules``. Fields
    missing either are ignored, as are names starting with ``_``.

    Raises:
        SchemaError: If *record* is not a dataclass.
    """
    if not dataclasses.is_dataclass(record):
        msg = f"Expected a dataclass type or instance, got {type(record).__name__}"
        raise SchemaError(msg)

    rules: dict[str, str] = {}
    for f in dataclasses.fields(record):
        if f.name.startswith("_"):
            continue
        alias = f.metadata.get(ALIAS_KEY)
        expression = f.metadata.get(RULES_KEY)
        if _is_nonempty_str(alias) and _is_nonempty_str(expression):
            rules[alias] = expression
    return rules


def _is_nonempty_str(value: object) -> bool:
    return isinstance(value, str) and value != ""
