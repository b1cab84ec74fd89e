"""Rule expression parsing.

Grammar::

    expression = token ("|" token)*
    token      = name (":" params)?
    params     = param ("," param)*

Whitespace is significant and nothing is trimmed, quoted, or escaped.
A token holding more than one ``:`` is taken whole as a rule name, which
no catalog entry matches, so the evaluator skips it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RuleToken:
    """A parsed rule token: the rule name and its parameter list."""

    name: str
    params: tuple[str, ...] = ()

    @property
    def raw(self) -> str:
        """The token text this was parsed from."""
        if not self.params:
            return self.name
        return f"{self.name}:{','.join(self.params)}"

    @classmethod
    def parse(cls, token: str) -> RuleToken:
        name, params = parse_rule(token)
        return cls(name, tuple(params))


def split_expression(expression: str) -> list[str]:
    """Split a rule expression into its tokens, empty ones included."""
    return expression.split("|")


def parse_rule(token: str) -> tuple[str, list[str]]:
    """Split one token into ``(name, params)``.

    ``"min_chars:3"`` gives ``("min_chars", ["3"])``, ``"in:"`` gives
    ``("in", [""])`` and ``"alpha"`` gives ``("alpha", [])``.
    """
    parts = token.split(":")
    if len(parts) == 2:
        name, params = parts
        return name, params.split(",")
    return token, []
