"""Validator configuration.

ValidatorConfig is a frozen dataclass, immutable after creation, so a
single instance can be shared by concurrent validation calls.
"""

from dataclasses import dataclass, fields

from vetter.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ValidatorConfig:
    """Evaluation policy for a ``Validator``. Immutable after creation.

    The defaults match the module-level ``validate()``::

        config = ValidatorConfig(first_failure_wins=True, strict=True)
    """

    # Keep the first failing rule's message for a field and stop there.
    # Otherwise every rule runs and the last failure's message is kept.
    first_failure_wins: bool = False

    # Raise UnknownRuleError before evaluating when a rule name is not
    # in the catalog, instead of skipping it.
    strict: bool = False

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                msg = f"ValidatorConfig.{f.name} must be a bool, got {type(value).__name__}"
                raise ConfigurationError(msg)
