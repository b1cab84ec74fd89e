"""Tests for the signup example — schema rules and registration flow."""

from types import ModuleType

import pytest

_VALID = {
    "username": "ada_l",
    "email": "ada@example.com",
    "password": "s3cretpass",
    "password_confirmation": "s3cretpass",
    "terms": "on",
}


class TestRules:
    def test_rules_from_form(self, example_module: ModuleType) -> None:
        assert example_module.RULES == {
            "username": "required|alpha_dash|chars_between:3,20",
            "email": "required|email",
            "password": "required|min_chars:8|confirmed",
            "age": "integer|value_between:13,120",
            "terms": "always|accepted",
        }


class TestRegister:
    def test_valid_signup(self, example_module: ModuleType) -> None:
        user = example_module.register(_VALID)
        assert isinstance(user, example_module.SignupForm)
        assert user.username == "ada_l"
        assert user.age == ""

    def test_missing_fields(self, example_module: ModuleType) -> None:
        result = example_module.register({})
        assert result.messages == {
            "username": "The username field is required.",
            "email": "The email field is required.",
            "password": "The password field is required.",
            "terms": "The terms must be accepted.",
        }

    def test_password_mismatch(self, example_module: ModuleType) -> None:
        form = {**_VALID, "password_confirmation": "different1"}
        result = example_module.register(form)
        assert result.messages == {"password": "The password confirmation does not match."}

    def test_optional_age_checked_when_given(self, example_module: ModuleType) -> None:
        result = example_module.register({**_VALID, "age": "9"})
        assert result.messages == {"age": "The age must be between 13 and 120."}

    def test_duplicate_username(self, example_module: ModuleType) -> None:
        example_module.register(_VALID)
        result = example_module.register(_VALID)
        assert result.messages == {"username": "The username has already been taken."}


class TestMain:
    def test_success(self, example_module: ModuleType, capsys: pytest.CaptureFixture[str]) -> None:
        argv = [f"{k}={v}" for k, v in _VALID.items()]
        assert example_module.main(argv) == 0
        assert capsys.readouterr().out == "Registered ada_l <ada@example.com>\n"

    def test_failure(self, example_module: ModuleType, capsys: pytest.CaptureFixture[str]) -> None:
        assert example_module.main(["username=x"]) == 1
        out = capsys.readouterr().out
        assert "username: The username field must have between 3 and 20 characters." in out
        assert "terms: The terms must be accepted." in out
