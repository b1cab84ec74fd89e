"""Tests for vetter.messages — message catalog and formatter."""

import pytest

from vetter.messages import GENERIC_MESSAGE, MESSAGES, format_message
from vetter.rules import RULES


class TestFormatMessage:
    def test_no_params(self) -> None:
        assert format_message("tos", "accepted", []) == "The tos must be accepted."

    def test_one_param(self) -> None:
        assert format_message("age", "min_value", ["18"]) == "The age must be greater than 18."

    def test_two_params(self) -> None:
        assert (
            format_message("age", "value_between", ["18", "65"])
            == "The age must be between 18 and 65."
        )

    def test_unknown_rule_is_generic(self) -> None:
        assert format_message("name", "no_such_rule", []) == "The name is invalid."

    def test_too_few_params_is_generic(self) -> None:
        assert format_message("age", "min_value", []) == "The age is invalid."

    def test_too_many_params_is_generic(self) -> None:
        assert format_message("color", "in", ["red", "green"]) == "The color is invalid."

    def test_percent_in_params_is_literal(self) -> None:
        assert format_message("rate", "max_value", ["100%"]) == "The rate must be less than 100%."

    def test_percent_in_field_name_is_literal(self) -> None:
        assert format_message("%s", "required", []) == "The %s field is required."

    def test_default_params(self) -> None:
        assert format_message("name", "required") == "The name field is required."


class TestCatalog:
    def test_generic_message(self) -> None:
        assert GENERIC_MESSAGE % "x" == "The x is invalid."

    def test_read_only(self) -> None:
        with pytest.raises(TypeError):
            MESSAGES["alpha"] = "changed"  # type: ignore[index]

    def test_every_rule_has_a_message(self) -> None:
        assert set(RULES) <= set(MESSAGES)

    @pytest.mark.parametrize("name", sorted(MESSAGES))
    def test_template_fits_fixed_arity(self, name: str) -> None:
        """Fixed-arity rules format without falling back to the generic text."""
        arity = RULES[name].arity
        if arity.maximum != arity.minimum:
            pytest.skip("variadic rule")
        params = ["p"] * arity.minimum
        assert MESSAGES[name].count("%s") == 1 + len(params)
        assert format_message("field", name, params) != "The field is invalid."

    @pytest.mark.parametrize("count", [0, 1, 2, 3])
    def test_generic_iff_placeholder_mismatch(self, count: int) -> None:
        params = ["p"] * count
        for name, template in MESSAGES.items():
            generic = format_message("f", name, params) == "The f is invalid."
            assert generic == (template.count("%s") != 1 + count)
