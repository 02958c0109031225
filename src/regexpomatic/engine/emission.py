"""Emission policy: decide whether a processed record is kept."""

from typing import Any

from regexpomatic.contracts.enums import EmitPolicy
from regexpomatic.contracts.errors import UnknownEmitPolicyError

DEFAULT_EMIT_POLICY = EmitPolicy.ALWAYS


def parse_emit_policy(value: Any) -> EmitPolicy:
    """Convert a raw ``should_emit`` value into an EmitPolicy.

    Raises:
        UnknownEmitPolicyError: If value is not one of the policy strings
    """
    if isinstance(value, EmitPolicy):
        return value
    if isinstance(value, str):
        try:
            return EmitPolicy(value)
        except ValueError:
            pass
    raise UnknownEmitPolicyError(value, [p.value for p in EmitPolicy])


def should_emit(policy: EmitPolicy, match_count: int, total: int) -> bool:
    """Whether a record with ``match_count`` of ``total`` parse matches survives.

    With zero parse patterns, ALL_SUCCESS emits (vacuously true) and
    ANY_SUCCESS never does.
    """
    if policy == EmitPolicy.ALWAYS:
        return True
    if policy == EmitPolicy.ALL_SUCCESS:
        return match_count == total
    if policy == EmitPolicy.ANY_SUCCESS:
        return match_count > 0
    if policy == EmitPolicy.NO_SUCCESS:
        return match_count == 0
    raise AssertionError(f"unhandled emit policy: {policy!r}")
