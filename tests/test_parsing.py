"""Tests for vetter.parsing — rule expression splitting and token parsing."""

from vetter.parsing import RuleToken, parse_rule, split_expression


class TestSplitExpression:
    def test_single_rule(self) -> None:
        assert split_expression("required") == ["required"]

    def test_multiple_rules(self) -> None:
        assert split_expression("required|min_chars:3|alpha") == [
            "required",
            "min_chars:3",
            "alpha",
        ]

    def test_empty_tokens_kept(self) -> None:
        assert split_expression("required||alpha") == ["required", "", "alpha"]

    def test_empty_expression(self) -> None:
        assert split_expression("") == [""]

    def test_whitespace_significant(self) -> None:
        assert split_expression("required | alpha") == ["required ", " alpha"]


class TestParseRule:
    def test_no_params(self) -> None:
        assert parse_rule("alpha") == ("alpha", [])

    def test_one_param(self) -> None:
        assert parse_rule("min_chars:3") == ("min_chars", ["3"])

    def test_several_params(self) -> None:
        assert parse_rule("in:red,green,blue") == ("in", ["red", "green", "blue"])

    def test_empty_right_side_is_one_empty_param(self) -> None:
        assert parse_rule("in:") == ("in", [""])

    def test_empty_params_between_commas(self) -> None:
        assert parse_rule("in:a,,b") == ("in", ["a", "", "b"])

    def test_more_than_one_colon_is_whole_name(self) -> None:
        assert parse_rule("date:%H:%M") == ("date:%H:%M", [])

    def test_no_trimming(self) -> None:
        assert parse_rule(" in: a ,b") == (" in", [" a ", "b"])

    def test_empty_token(self) -> None:
        assert parse_rule("") == ("", [])


class TestRuleToken:
    def test_parse(self) -> None:
        token = RuleToken.parse("value_between:18,65")
        assert token.name == "value_between"
        assert token.params == ("18", "65")

    def test_raw_round_trip(self) -> None:
        for text in ("alpha", "min_chars:3", "in:a,b", "in:"):
            assert RuleToken.parse(text).raw == text

    def test_hashable(self) -> None:
        assert len({RuleToken("alpha"), RuleToken("alpha")}) == 1
