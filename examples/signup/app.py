"""Signup — registration form validated from dataclass field metadata.

Demonstrates vetter's rule expressions end to end: the rules live on a
dataclass, ``rules_from_schema()`` turns them into a rules map, and
``validate()`` checks the submitted strings before the dataclass is built.

Users are stored in memory. This is a demo, not production auth.

Demonstrates:
- ``rule_field()`` with ``required``, ``alpha_dash``, ``chars_between``, ``email``
- ``confirmed`` against a ``<field>_confirmation`` input
- ``accepted`` for a terms checkbox, ``always`` to check it even when blank
- ``check_rules()`` at import time to catch misspelled rule names

Run:
    python app.py username=ada email=ada@example.com password=s3cretpass \\
        password_confirmation=s3cretpass terms=on
"""

import sys
from collections.abc import Mapping
from dataclasses import dataclass

from vetter import ValidationResult, check_rules, rule_field, rules_from_schema, validate


@dataclass(frozen=True, slots=True)
class SignupForm:
    username: str = rule_field("required|alpha_dash|chars_between:3,20", alias="username")
    email: str = rule_field("required|email", alias="email")
    password: str = rule_field("required|min_chars:8|confirmed", alias="password")
    age: str = rule_field("integer|value_between:13,120", alias="age", default="")
    terms: str = rule_field("always|accepted", alias="terms", default="")


RULES = rules_from_schema(SignupForm)
check_rules(RULES)

# ---------------------------------------------------------------------------
# In-memory "database"
# ---------------------------------------------------------------------------

_users: list[SignupForm] = []


def register(form: Mapping[str, str]) -> SignupForm | ValidationResult:
    """Validate *form* and store the user, or return the failed result."""
    result = validate(form, RULES)
    if not result:
        return result

    if any(user.username == form["username"] for user in _users):
        return ValidationResult(messages={"username": "The username has already been taken."})

    user = SignupForm(**{name: form.get(name, "") for name in RULES})
    _users.append(user)
    return user


def main(argv: list[str]) -> int:
    form = dict(arg.partition("=")[::2] for arg in argv)
    outcome = register(form)
    if isinstance(outcome, ValidationResult):
        for field_name, message in sorted(outcome.messages.items()):
            print(f"{field_name}: {message}")
        return 1
    print(f"Registered {outcome.username} <{outcome.email}>")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
