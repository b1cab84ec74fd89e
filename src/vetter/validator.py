"""Field evaluation — run rule expressions against string inputs.

For each field in the rules map the evaluator picks one of three paths:

- the expression contains ``required`` and the field is absent: the
  ``required`` message is recorded and nothing else runs;
- the expression contains ``required`` or ``always``, or the value is
  non-empty: every rule in the expression runs, in textual order;
- otherwise the field is optional and empty, and is skipped.

Unknown rule names are skipped (or rejected up front in strict mode).
Each failing field gets exactly one message: the last failure's by
default, the first one's with ``first_failure_wins``. A failing
``required`` always ends the field, so an empty required field reports
"is required" rather than whatever rule follows.
"""

import logging
from collections.abc import Mapping

import anyio.to_thread

from vetter.config import ValidatorConfig
from vetter.errors import UnknownRuleError
from vetter.messages import format_message
from vetter.parsing import RuleToken, split_expression
from vetter.result import ValidationResult
from vetter.rules import RULES

logger = logging.getLogger("vetter")

# Flag tokens consumed by the evaluator rather than the catalog
REQUIRED = "required"
ALWAYS = "always"


class Validator:
    """Evaluates rules maps under a fixed ``ValidatorConfig``.

    Holds no per-call state, so one instance can serve concurrent calls::

        strict = Validator(ValidatorConfig(strict=True))
        result = strict.validate(form, {"age": "integer|min_value:0"})
    """

    __slots__ = ("config",)

    def __init__(self, config: ValidatorConfig | None = None) -> None:
        self.config = config or ValidatorConfig()

    def __repr__(self) -> str:
        return f"Validator({self.config!r})"

    def validate(
        self,
        inputs: Mapping[str, str],
        rules: Mapping[str, str],
    ) -> ValidationResult:
        """Validate *inputs* against *rules*.

        Args:
            inputs: Field names to string values. A missing key and an
                empty string are distinct: only a missing key trips the
                ``required`` short-circuit.
            rules: Field names to rule expressions such as
                ``"required|min_chars:3|alpha"``.

        Returns:
            A ``ValidationResult`` with at most one message per field.

        Raises:
            UnknownRuleError: In strict mode, if any rule name is not in
                the catalog.
        """
        if self.config.strict:
            check_rules(rules)

        messages: dict[str, str] = {}
        for field_name, expression in rules.items():
            message = self._evaluate_field(field_name, expression, inputs)
            if message is not None:
                messages[field_name] = message

        return ValidationResult(messages=messages)

    async def avalidate(
        self,
        inputs: Mapping[str, str],
        rules: Mapping[str, str],
    ) -> ValidationResult:
        """Async ``validate()``. Runs in an anyio worker thread.

        Only ``active_url`` blocks (on DNS), but the whole evaluation is
        offloaded so the event loop never waits on the resolver. Wrap the
        call in ``anyio.fail_after()`` to bound it.
        """
        return await anyio.to_thread.run_sync(self.validate, inputs, rules, abandon_on_cancel=True)

    def _evaluate_field(
        self,
        field_name: str,
        expression: str,
        inputs: Mapping[str, str],
    ) -> str | None:
        """Return the message for a failing field, or None if it passes."""
        exists = field_name in inputs
        value = inputs[field_name] if exists else ""
        tokens = split_expression(expression)
        is_required = REQUIRED in tokens

        if is_required and not exists:
            return format_message(field_name, REQUIRED, [])

        if not (is_required or ALWAYS in tokens or value != ""):
            return None

        message: str | None = None
        for token in map(RuleToken.parse, tokens):
            rule = RULES.get(token.name)
            if rule is None:
                if token.name != ALWAYS:
                    logger.debug("Skipping unknown rule %r on field %r", token.name, field_name)
                continue
            if rule.evaluate(field_name, value, inputs, token.params):
                continue
            message = format_message(field_name, token.name, token.params)
            # No point reporting min_chars on an empty required field
            if self.config.first_failure_wins or token.name == REQUIRED:
                break
        return message


_default = Validator()


def validate(inputs: Mapping[str, str], rules: Mapping[str, str]) -> ValidationResult:
    """Validate *inputs* against *rules* with the default configuration.

    Example::

        result = validate({"name": "al"}, {"name": "required|min_chars:3"})
        # result.messages == {"name": "The name must have more than 3 characters."}
    """
    return _default.validate(inputs, rules)


async def avalidate(inputs: Mapping[str, str], rules: Mapping[str, str]) -> ValidationResult:
    """Async ``validate()`` with the default configuration."""
    return await _default.avalidate(inputs, rules)


def unknown_rules(rules: Mapping[str, str]) -> dict[str, list[str]]:
    """Return the rule names in *rules* that the catalog does not know.

    The ``always`` marker and empty tokens are not reported. Fields with
    no unknown names are left out.
    """
    unknown: dict[str, list[str]] = {}
    for field_name, expression in rules.items():
        names = [
            token.name
            for token in map(RuleToken.parse, split_expression(expression))
            if token.name and token.name != ALWAYS and token.name not in RULES
        ]
        if names:
            unknown[field_name] = names
    return unknown


def check_rules(rules: Mapping[str, str]) -> None:
    """Raise ``UnknownRuleError`` if *rules* names anything outside the catalog."""
    unknown = unknown_rules(rules)
    if unknown:
        raise UnknownRuleError(unknown)
