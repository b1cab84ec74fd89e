"""Vetter exception hierarchy.

Validation itself never raises for bad input data; failures become
messages on the ``ValidationResult``. These types cover misuse: invalid
configuration, unknown rule names under strict mode, and schemas that
cannot be inspected.
"""

from dataclasses import dataclass


class VetterError(Exception):
    """Base for all vetter-specific errors."""


class ConfigurationError(VetterError):
    """Raised when a ``ValidatorConfig`` is invalid.

    Checked once, in ``ValidatorConfig.__post_init__``.
    """


class SchemaError(VetterError):
    """Raised when a rules map cannot be derived from a record."""


@dataclass(frozen=True, slots=True, eq=False)
class UnknownRuleError(VetterError):
    """Rule expressions reference names missing from the catalog.

    Raised by ``check_rules()`` and by validators configured with
    ``strict=True``. ``unknown`` maps each field name to the unknown
    rule names found in its expression, in textual order.
    """

    unknown: dict[str, list[str]]

    def __str__(self) -> str:
        parts = [
            f"{field}: {', '.join(repr(name) for name in names)}"
            for field, names in sorted(self.unknown.items())
        ]
        return "Unknown rules: " + "; ".join(parts)
