"""Tests for _casters.py — Choices, _cast_bool."""

import pytest

from ledger_intake.config._casters import Choices, _cast_bool


class TestCastBool:
    @pytest.mark.parametrize("value", ["1", "true", "True", "TRUE", "yes", "on", "t", "y", "Y"])
    def test_truthy_strings(self, value):
        assert _cast_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "False", "FALSE", "no", "off", "f", "n", ""])
    def test_falsy_strings(self, value):
        assert _cast_bool(value) is False

    @pytest.mark.parametrize("value", [True, 1, 1.0])
    def test_non_string_truthy(self, value):
        assert _cast_bool(value) is True

    def test_invalid_string_raises(self):
        with pytest.raises(ValueError, match="Cannot cast"):
            _cast_bool("maybe")

    def test_invalid_type_raises(self):
        with pytest.raises(ValueError, match="Cannot cast"):
            _cast_bool([1, 2])


class TestChoices:
    def test_valid_choice(self):
        assert Choices(["DEBUG", "INFO"])("INFO") == "INFO"

    def test_cast_applied_before_check(self):
        assert Choices(["DEBUG", "INFO"], cast=str.upper)("debug") == "DEBUG"

    def test_invalid_choice(self):
        with pytest.raises(ValueError, match="not a valid choice"):
            Choices(["DEBUG", "INFO"])("TRACE")
