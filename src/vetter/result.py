"""Validation result — immutable container for per-field error messages."""

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating inputs against a rules map.

    ``is_valid`` is True when there are no messages.
    The result is falsy when invalid, so you can write::

        result = validate(form, rules)
        if not result:
            return render_form(errors=result.messages)

    ``messages`` maps each failing field to a single message::

        {"name": "The name field is required.",
         "email": "The email must be a valid email address."}

    The result also unpacks as a ``(valid, messages)`` pair::

        valid, messages = validate(form, rules)
    """

    messages: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no messages."""
        return not self.messages

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid

    def __iter__(self) -> Iterator[bool | dict[str, str]]:
        yield self.is_valid
        yield self.messages
