"""
Tests for the Validation Framework.

Tests validators, composition, and convenience functions.
"""
import pytest

from petra_designer.shared.application.validation.validation_framework import (
    ValidationResult,
    RequiredValidator,
    RangeValidator,
    PatternValidator,
    LengthValidator,
    ChoicesValidator,
    TypeValidator,
    CustomValidator,
    All,
    validate,
    validate_field,
    first_failure,
)


# =============================================================================
# ValidationResult Tests
# =============================================================================

class TestValidationResult:
    """Tests for ValidationResult dataclass."""

    def test_default_is_valid(self):
        result = ValidationResult()
        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []
        assert result.error is None

    def test_add_error_with_field_name(self):
        """Field name is prefixed to the message."""
        result = ValidationResult(field_name="rack")
        result.add_error("must be between 0 and 7")
        assert result.valid is False
        assert result.error == "rack must be between 0 and 7"

    def test_add_warning_keeps_valid(self):
        result = ValidationResult()
        result.add_warning("this might be an issue")
        assert result.valid is True
        assert "this might be an issue" in result.warnings

    def test_merge(self):
        result1 = ValidationResult()
        result1.add_error("error 1")

        result2 = ValidationResult()
        result2.add_error("error 2")
        result2.add_warning("warning 1")

        result1.merge(result2)
        assert result1.valid is False
        assert result1.errors == ["error 1", "error 2"]
        assert "warning 1" in result1.warnings

    def test_bool_conversion(self):
        assert bool(ValidationResult()) is True
        assert bool(ValidationResult.failure("error")) is False

    def test_failure_factory(self):
        result = ValidationResult.failure("is required", "label")
        assert result.valid is False
        assert result.error == "label is required"

    def test_raise_if_invalid(self):
        result = ValidationResult.failure("is required", "label")
        with pytest.raises(ValueError, match="label is required"):
            result.raise_if_invalid(ValueError)

    def test_raise_if_invalid_on_valid(self):
        ValidationResult.success().raise_if_invalid(ValueError)


# =============================================================================
# Validator Tests
# =============================================================================

class TestRequiredValidator:

    def test_empty_values_are_invalid(self):
        validator = RequiredValidator()
        for value in (None, "", "   ", [], {}):
            assert not validator.validate(value, "field").valid

    def test_value_is_valid(self):
        validator = RequiredValidator()
        assert validator.validate("hello", "field").valid
        assert validator.validate(0, "field").valid
        assert validator.validate(False, "field").valid

    def test_message(self):
        result = RequiredValidator().validate(None, "label")
        assert result.error == "label is required"


class TestRangeValidator:

    def test_within_range(self):
        validator = RangeValidator(0, 100)
        assert validator.validate(0, "field").valid
        assert validator.validate(100, "field").valid
        assert validator.validate(50.5, "field").valid

    def test_between_message(self):
        result = RangeValidator(0, 7).validate(8, "rack")
        assert result.error == "rack must be between 0 and 7"

    def test_below_min(self):
        result = RangeValidator(min_value=1).validate(0, "db_number")
        assert "at least 1" in result.error

    def test_above_max(self):
        result = RangeValidator(max_value=100).validate(101, "field")
        assert "at most 100" in result.error

    def test_exclusive_min(self):
        validator = RangeValidator(0, exclusive_min=True)
        assert not validator.validate(0, "amplitude").valid
        assert "greater than 0" in validator.validate(0, "amplitude").error
        assert validator.validate(0.001, "amplitude").valid

    def test_integer_only(self):
        validator = RangeValidator(1, 65535, integer=True)
        assert validator.validate(1883, "broker_port").valid
        assert validator.validate(1883.0, "broker_port").valid
        assert "whole number" in validator.validate(1883.5, "broker_port").error

    def test_bool_is_not_a_number(self):
        assert not RangeValidator(0, 1).validate(True, "field").valid

    def test_none_and_non_numeric(self):
        validator = RangeValidator(0, 100)
        assert validator.validate(None, "field").valid
        assert not validator.validate("12", "field").valid


class TestPatternValidator:

    def test_full_match_required(self):
        validator = PatternValidator(r"\+[1-9]\d{1,14}")
        assert validator.validate("+15551234567", "to_number").valid
        assert not validator.validate("+15551234567x", "to_number").valid
        assert not validator.validate("15551234567", "to_number").valid

    def test_non_string(self):
        assert not PatternValidator(r"[a-z]+").validate(123, "field").valid


class TestLengthValidator:

    def test_bounds(self):
        validator = LengthValidator(min_length=1, max_length=5)
        assert validator.validate("abc", "field").valid
        assert "at most 5" in validator.validate("toolong", "field").error
        assert "at least 1" in validator.validate("", "field").error

    def test_unsized_value(self):
        assert not LengthValidator(max_length=3).validate(42, "field").valid


class TestChoicesValidator:

    def test_choices(self):
        validator = ChoicesValidator(["DB", "I", "Q", "M"])
        assert validator.validate("DB", "area").valid
        result = validator.validate("X", "area")
        assert result.error == "area must be one of: DB, I, Q, M"


class TestTypeValidator:

    def test_types(self):
        assert TypeValidator(bool).validate(True, "field").valid
        result = TypeValidator(bool).validate("yes", "strict")
        assert "must be bool" in result.error

    def test_multiple_types(self):
        validator = TypeValidator((int, float))
        assert validator.validate(3.14, "field").valid
        assert "int or float" in validator.validate("x", "field").error


class TestCustomValidator:

    def test_predicate(self):
        validator = CustomValidator(lambda v: "#" not in v, "must not contain '#'")
        assert validator.validate("petra/plc", "topic_prefix").valid
        assert validator.validate("petra/#", "topic_prefix").error == \
            "topic_prefix must not contain '#'"

    def test_predicate_error_is_a_failure(self):
        validator = CustomValidator(lambda v: "#" not in v, "must not contain '#'")
        result = validator.validate(5, "topic_prefix")
        assert not result.valid
        assert result.error == "topic_prefix must not contain '#'"


# =============================================================================
# Composition Tests
# =============================================================================

class TestComposition:

    def test_all_stops_at_first_error(self):
        validator = All(RequiredValidator(), RangeValidator(0, 7))
        result = validator.validate(None, "rack")
        assert result.errors == ["rack is required"]

    def test_all_collects_every_error(self):
        validator = All(
            LengthValidator(max_length=2),
            PatternValidator(r"[a-z]+", "must be lowercase"),
            stop_on_first_error=False,
        )
        result = validator.validate("ABC", "field")
        assert len(result.errors) == 2

    def test_validate_with_list(self):
        assert validate(5, [RequiredValidator(), RangeValidator(0, 10)]).valid
        assert not validate(11, [RequiredValidator(), RangeValidator(0, 10)]).valid

    def test_validate_field(self):
        result = validate_field("slot", 32, RangeValidator(0, 31))
        assert result.error == "slot must be between 0 and 31"

    def test_first_failure(self):
        ok = ValidationResult.success()
        first = ValidationResult.failure("first")
        second = ValidationResult.failure("second")
        assert first_failure(ok, first, second) is first
        assert first_failure(ok, ok).valid
