"""Shared contracts: the record type, enums and the error hierarchy."""

from regexpomatic.contracts.enums import EmitPolicy
from regexpomatic.contracts.errors import (
    InvalidConfigError,
    InvalidPatternError,
    InvalidTemplateError,
    MissingParsePatternsError,
    NonTextPayloadError,
    ProcessorError,
    RecordError,
    RecordSkipContext,
    TemplateRenderError,
    UnknownEmitPolicyError,
)
from regexpomatic.contracts.records import Record

__all__ = [
    "EmitPolicy",
    "InvalidConfigError",
    "InvalidPatternError",
    "InvalidTemplateError",
    "MissingParsePatternsError",
    "NonTextPayloadError",
    "ProcessorError",
    "Record",
    "RecordError",
    "RecordSkipContext",
    "TemplateRenderError",
    "UnknownEmitPolicyError",
]
