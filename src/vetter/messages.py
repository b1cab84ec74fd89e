"""Message catalog and formatter.

Each template takes the field name in its first ``%s`` and the rule's
parameters, in order, in the rest. When a template is missing or its
placeholder count does not fit the parameters, the formatter falls back
to ``GENERIC_MESSAGE`` rather than raising or leaking ``%s`` into output.
"""

from collections.abc import Sequence
from types import MappingProxyType

GENERIC_MESSAGE = "The %s is invalid."

MESSAGES = MappingProxyType({
    "accepted": "The %s must be accepted.",
    "active_url": "The %s is not a valid URL.",
    "alpha": "The %s may only contain letters.",
    "alpha_dash": "The %s may only contain letters, numbers, and dashes.",
    "alpha_num": "The %s may only contain letters and numbers.",
    "boolean": "The %s field must be true or false.",
    "chars": "The %s field must have %s characters.",
    "chars_between": "The %s field must have between %s and %s characters.",
    "confirmed": "The %s confirmation does not match.",
    "date": "The %s is not a valid date.",
    "different": "The %s and %s must be different.",
    "digits": "The %s must have %s digits.",
    "digits_between": "The %s must have between %s and %s digits.",
    "email": "The %s must be a valid email address.",
    "in": "The selected %s is invalid.",
    "integer": "The %s must be an integer.",
    "ip": "The %s must be a valid IP address.",
    "max_chars": "The %s must have fewer than %s characters.",
    "max_digits": "The %s must have fewer than %s digits.",
    "max_value": "The %s must be less than %s.",
    "min_chars": "The %s must have more than %s characters.",
    "min_digits": "The %s must have more than %s digits.",
    "min_value": "The %s must be greater than %s.",
    "not_in": "The selected %s is invalid.",
    "numeric": "The %s must be a number.",
    "regex": "The %s format is invalid.",
    "required": "The %s field is required.",
    "same": "The %s and %s must match.",
    "url": "The %s format is invalid.",
    "value": "The %s must be %s.",
    "value_between": "The %s must be between %s and %s.",
})


def format_message(field_name: str, rule: str, params: Sequence[str] = ()) -> str:
    """Render the failure message for *rule* on *field_name*.

    Example::

        format_message("age", "min_value", ["18"])
        # "The age must be greater than 18."
        format_message("age", "min_value", [])
        # "The age is invalid."
    """
    template = MESSAGES.get(rule)
    if template is None or template.count("%s") != 1 + len(params):
        return GENERIC_MESSAGE % field_name
    return template % (field_name, *params)
