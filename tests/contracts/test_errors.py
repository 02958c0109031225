"""Tests for the error hierarchy."""

import pytest

from regexpomatic.contracts import (
    InvalidConfigError,
    InvalidPatternError,
    InvalidTemplateError,
    MissingParsePatternsError,
    NonTextPayloadError,
    ProcessorError,
    RecordError,
    TemplateRenderError,
    UnknownEmitPolicyError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            MissingParsePatternsError(),
            InvalidPatternError("(", "missing )", role="parse"),
            InvalidTemplateError("t", "unexpected end"),
            UnknownEmitPolicyError("sometimes", ["always"]),
        ],
    )
    def test_fatal_errors_are_config_errors(self, error: ProcessorError) -> None:
        assert isinstance(error, InvalidConfigError)
        assert not isinstance(error, RecordError)

    @pytest.mark.parametrize("error", [NonTextPayloadError(123), TemplateRenderError("t", "boom")])
    def test_recoverable_errors_are_record_errors(self, error: ProcessorError) -> None:
        assert isinstance(error, RecordError)
        assert not isinstance(error, InvalidConfigError)

    def test_unknown_policy_is_not_value_error(self) -> None:
        """Must not be a ValueError or pydantic would swallow it into a ValidationError."""
        assert not isinstance(UnknownEmitPolicyError("x", []), ValueError)


class TestMessages:
    def test_missing_parse_patterns(self) -> None:
        assert str(MissingParsePatternsError()) == "Must specify parse regexps at least"
        assert "'^gate'" in str(MissingParsePatternsError(gate="^gate"))

    def test_invalid_pattern_carries_details(self) -> None:
        error = InvalidPatternError("(", "missing ), unterminated subpattern", role="split")

        assert error.pattern == "("
        assert error.role == "split"
        assert "split pattern '('" in str(error)

    def test_unknown_policy_lists_valid_values(self) -> None:
        error = UnknownEmitPolicyError("sometimes", ["always", "any_success"])

        assert "'always', 'any_success'" in str(error)
        assert "'sometimes'" in str(error)

    def test_non_text_payload_names_type(self) -> None:
        error = NonTextPayloadError(123)

        assert error.payload_type == "int"
        assert "int" in str(error)
