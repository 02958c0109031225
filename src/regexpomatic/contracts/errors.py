"""Exception hierarchy and log-context schemas.

Two tiers:

- ``InvalidConfigError`` and its subclasses are FATAL: the whole
  ``process()`` call aborts and no records are returned.
- ``RecordError`` and its subclasses are RECOVERABLE: the offending record
  is logged and left out of the output, the rest of the batch proceeds.
"""

from typing import Any, NotRequired, TypedDict


class RecordSkipContext(TypedDict):
    """Structured fields logged when a record is skipped.

    Used as keyword arguments to the structlog warning call.
    """

    namespace: list[str]
    data: Any
    reason: str
    patterns: NotRequired[list[str]]
    gate: NotRequired[str]
    template: NotRequired[str]


class ProcessorError(Exception):
    """Base class for all errors raised by the processor."""


# =============================================================================
# Fatal: configuration
# =============================================================================


class InvalidConfigError(ProcessorError):
    """Configuration bundle is malformed or inconsistent."""


class MissingParsePatternsError(InvalidConfigError):
    """No parse patterns were configured for a rule."""

    def __init__(self, gate: str | None = None) -> None:
        self.gate = gate
        if gate is None:
            super().__init__("Must specify parse regexps at least")
        else:
            super().__init__(f"Must specify parse regexps at least (gate {gate!r})")


class InvalidPatternError(InvalidConfigError):
    """A regular expression could not be compiled or was rejected as unsafe.

    Attributes:
        pattern: The offending expression text
        reason: Underlying syntax or safety error
        role: What the pattern was for ("split", "parse" or "gate")
    """

    def __init__(self, pattern: str, reason: str, *, role: str) -> None:
        self.pattern = pattern
        self.reason = reason
        self.role = role
        super().__init__(f"Invalid {role} pattern {pattern!r}: {reason}")


class InvalidTemplateError(InvalidConfigError):
    """A tag template body could not be compiled."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid tag template {name!r}: {reason}")


class UnknownEmitPolicyError(InvalidConfigError):
    """``should_emit`` holds a value outside the known policies."""

    def __init__(self, value: Any, valid: list[str]) -> None:
        self.value = value
        self.valid = valid
        quoted = ", ".join(f"'{v}'" for v in valid)
        super().__init__(f"should_emit should be one of {quoted}, got {value!r}")


# =============================================================================
# Recoverable: per record
# =============================================================================


class RecordError(ProcessorError):
    """A single record could not be processed; the batch continues."""


class NonTextPayloadError(RecordError):
    """Record payload is not text, so no pattern can be applied to it."""

    def __init__(self, payload: Any) -> None:
        self.payload_type = type(payload).__name__
        super().__init__(f"unexpected data type {self.payload_type}, only strings are processed")


class TemplateRenderError(RecordError):
    """A tag template failed to render for one record."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Tag template {name!r} failed to render: {reason}")
