"""Built-in validation rules.

Each rule is a predicate with the signature::

    def check(field_name: str, value: str, inputs: Mapping[str, str],
              params: Sequence[str]) -> bool

and is registered in ``RULES`` as a ``Rule`` that pairs the predicate with
its name and parameter arity; message templates live in
``vetter.messages``. ``Rule.evaluate()`` enforces the arity, so a
predicate only ever sees the parameter count it declares. Malformed
parameters (``min_chars:abc``) make the predicate return ``False``;
nothing here raises for bad input.

Character and digit counts are UTF-8 byte lengths. Numeric parameters
are read as doubles.

``active_url`` is the one rule with I/O: it resolves the host through
``socket.getaddrinfo`` and blocks for as long as the resolver does.
Use ``avalidate()`` from async code, or leave the rule out when network
access is unwanted.
"""

import ipaddress
import logging
import math
import re
import socket
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from types import MappingProxyType
from typing import TypeAlias

logger = logging.getLogger("vetter.rules")

# Type alias for a rule predicate
Check: TypeAlias = Callable[[str, str, Mapping[str, str], Sequence[str]], bool]


@dataclass(frozen=True, slots=True)
class Arity:
    """Accepted parameter count. ``maximum=None`` means no upper bound."""

    minimum: int = 0
    maximum: int | None = 0

    def accepts(self, count: int) -> bool:
        if count < self.minimum:
            return False
        return self.maximum is None or count <= self.maximum


@dataclass(frozen=True, slots=True)
class Rule:
    """A catalog entry: name, parameter arity, and predicate."""

    name: str
    arity: Arity
    check: Check

    def evaluate(
        self,
        field_name: str,
        value: str,
        inputs: Mapping[str, str],
        params: Sequence[str],
    ) -> bool:
        """Run the predicate; a wrong parameter count fails without running it."""
        if not self.arity.accepts(len(params)):
            return False
        return self.check(field_name, value, inputs, params)


# ---------------------------------------------------------------------------
# Literal parsing
# ---------------------------------------------------------------------------

_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_FLOAT_RE = re.compile(
    r"""^[+-]?(?:
        (?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?
        |inf(?:inity)?
        |nan
    )$""",
    re.IGNORECASE | re.VERBOSE,
)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _parse_int(text: str) -> int | None:
    """Parse a base-10 signed 64-bit integer literal, or return None."""
    if not _INT_RE.fullmatch(text):
        return None
    significant = text.lstrip("+-").lstrip("0") or "0"
    # More than 19 significant digits never fits in 64 bits
    if len(significant) > 19:
        return None
    number = -int(significant) if text.startswith("-") else int(significant)
    if not _INT64_MIN <= number <= _INT64_MAX:
        return None
    return number


def _parse_float(text: str) -> float | None:
    """Parse a decimal float literal, or return None.

    Rejects surrounding whitespace and digit-group underscores, which
    ``float()`` would otherwise accept, and finite literals that overflow.
    """
    if not _FLOAT_RE.fullmatch(text):
        return None
    number = float(text)
    if math.isinf(number) and "inf" not in text.lower():
        return None
    return number


def _byte_length(value: str) -> int:
    return len(value.encode("utf-8"))


# ---------------------------------------------------------------------------
# Presence and acceptance
# ---------------------------------------------------------------------------

_ACCEPTED = frozenset({"1", "true", "yes", "on"})
_BOOLEANS = frozenset({
    "1", "t", "T", "TRUE", "true", "True",
    "0", "f", "F", "FALSE", "false", "False",
})


def required(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Value must not be the empty string."""
    return value != ""


def accepted(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Value must be ``1``, ``true``, ``yes`` or ``on`` (case-sensitive)."""
    return value in _ACCEPTED


def boolean(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    return value in _BOOLEANS


# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------

_ALPHA_RE = re.compile(r"^[A-Za-z]+$")
_ALPHA_DASH_RE = re.compile(r"^[A-Za-z0-9_\-]+$")
_ALPHA_NUM_RE = re.compile(r"^[A-Za-z0-9]+$")
_DIGITS_RE = re.compile(r"^[0-9]+$")

# Structure only, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def alpha(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    return _ALPHA_RE.fullmatch(value) is not None


def alpha_dash(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    return _ALPHA_DASH_RE.fullmatch(value) is not None


def alpha_num(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    return _ALPHA_NUM_RE.fullmatch(value) is not None


def email(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Value must look like an email address (basic format check)."""
    return _EMAIL_RE.fullmatch(value) is not None


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def chars(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Byte length must equal ``params[0]``."""
    count = _parse_int(params[0])
    return count is not None and _byte_length(value) == count


def min_chars(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    count = _parse_int(params[0])
    return count is not None and _byte_length(value) >= count


def max_chars(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    count = _parse_int(params[0])
    return count is not None and _byte_length(value) <= count


def chars_between(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    return min_chars(field_name, value, inputs, params[:1]) and max_chars(
        field_name, value, inputs, params[1:]
    )


# ---------------------------------------------------------------------------
# Digits
# ---------------------------------------------------------------------------


def digits(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Value must be all digits, exactly ``params[0]`` of them."""
    if _DIGITS_RE.fullmatch(value) is None:
        return False
    count = _parse_int(params[0])
    return count is not None and _byte_length(value) == count


def min_digits(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    if _DIGITS_RE.fullmatch(value) is None:
        return False
    count = _parse_int(params[0])
    return count is not None and _byte_length(value) >= count


def max_digits(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    if _DIGITS_RE.fullmatch(value) is None:
        return False
    count = _parse_int(params[0])
    return count is not None and _byte_length(value) <= count


def digits_between(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    return min_digits(field_name, value, inputs, params[:1]) and max_digits(
        field_name, value, inputs, params[1:]
    )


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def integer(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Value must be a base-10 signed 64-bit integer."""
    return _parse_int(value) is not None


def numeric(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Value must be a valid number (int or float)."""
    return _parse_float(value) is not None


def equals_value(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Value must equal ``params[0]`` as a double."""
    actual = _parse_float(value)
    expected = _parse_float(params[0])
    return actual is not None and expected is not None and actual == expected


def min_value(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    actual = _parse_float(value)
    bound = _parse_float(params[0])
    return actual is not None and bound is not None and actual >= bound


def max_value(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    actual = _parse_float(value)
    bound = _parse_float(params[0])
    return actual is not None and bound is not None and actual <= bound


def value_between(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    return min_value(field_name, value, inputs, params[:1]) and max_value(
        field_name, value, inputs, params[1:]
    )


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def in_(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Value must be one of the parameters (case-sensitive)."""
    return value in params


def not_in(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    return value not in params


# ---------------------------------------------------------------------------
# Other fields
# ---------------------------------------------------------------------------


def same(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """The field named by ``params[0]`` must be present and equal to value."""
    other = params[0]
    return other in inputs and inputs[other] == value


def different(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    return not same(field_name, value, inputs, params)


def confirmed(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """``<field>_confirmation`` must be present and equal to value."""
    confirmation = f"{field_name}_confirmation"
    return confirmation in inputs and inputs[confirmation] == value


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(pattern)
    except (re.error, OverflowError, RecursionError):
        return None


def regex(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """``params[0]`` must compile and match somewhere in value (unanchored)."""
    compiled = _compile(params[0])
    return compiled is not None and compiled.search(value) is not None


def date(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Value must parse with the ``strptime`` layout in ``params[0]``."""
    try:
        datetime.strptime(value, params[0])
    except ValueError:
        return False
    return True


def ip(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Value must be an IPv4 or IPv6 literal."""
    # Scoped IPv6 addresses ("fe80::1%eth0") are not plain literals
    if "%" in value:
        return False
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


_SCHEMES = ("http://", "https://")


def url(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Value must start with ``http://`` or ``https://`` (any case).

    Only the scheme is checked.
    """
    return value.lower().startswith(_SCHEMES)


def _resolve_host(host: str) -> bool:
    """Return True if *host* resolves. Blocks on the system resolver."""
    try:
        socket.getaddrinfo(host, None)
    except (OSError, UnicodeError) as exc:
        logger.debug("DNS lookup failed for %r: %s", host, exc)
        return False
    return True


def active_url(field_name: str, value: str, inputs: Mapping[str, str], params: Sequence[str]) -> bool:
    """Value must be an http(s) URL whose host resolves.

    Everything after the scheme is looked up as-is, paths included.
    """
    lowered = value.lower()
    for scheme in _SCHEMES:
        if lowered.startswith(scheme):
            return _resolve_host(lowered.removeprefix(scheme))
    return False


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

_NONE = Arity(0, 0)
_ONE = Arity(1, 1)
_TWO = Arity(2, 2)
_ONE_OR_MORE = Arity(1, None)

RULES: Mapping[str, Rule] = MappingProxyType({
    rule.name: rule
    for rule in (
        Rule("accepted", _NONE, accepted),
        Rule("active_url", _NONE, active_url),
        Rule("alpha", _NONE, alpha),
        Rule("alpha_dash", _NONE, alpha_dash),
        Rule("alpha_num", _NONE, alpha_num),
        Rule("boolean", _NONE, boolean),
        Rule("chars", _ONE, chars),
        Rule("chars_between", _TWO, chars_between),
        Rule("confirmed", _NONE, confirmed),
        Rule("date", _ONE, date),
        Rule("different", _ONE, different),
        Rule("digits", _ONE, digits),
        Rule("digits_between", _TWO, digits_between),
        Rule("email", _NONE, email),
        Rule("in", _ONE_OR_MORE, in_),
        Rule("integer", _NONE, integer),
        Rule("ip", _NONE, ip),
        Rule("max_chars", _ONE, max_chars),
        Rule("max_digits", _ONE, max_digits),
        Rule("max_value", _ONE, max_value),
        Rule("min_chars", _ONE, min_chars),
        Rule("min_digits", _ONE, min_digits),
        Rule("min_value", _ONE, min_value),
        Rule("not_in", _ONE_OR_MORE, not_in),
        Rule("numeric", _NONE, numeric),
        Rule("regex", _ONE, regex),
        Rule("required", _NONE, required),
        Rule("same", _ONE, same),
        Rule("url", _NONE, url),
        Rule("value", _ONE, equals_value),
        Rule("value_between", _TWO, value_between),
    )
})


def get_rule(name: str) -> Rule | None:
    """Return the catalog entry for *name*, or None if there is none."""
    return RULES.get(name)


def rule_names() -> frozenset[str]:
    """Names of every rule in the catalog."""
    return frozenset(RULES)
