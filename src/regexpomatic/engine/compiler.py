# src/regexpomatic/engine/compiler.py
"""Pattern compiler: turn configuration strings into regexes and templates.

Everything is validated here, before any record is processed. The first
bad expression aborts compilation; nothing partially compiled is returned.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from regexpomatic.contracts.enums import EmitPolicy
from regexpomatic.contracts.errors import InvalidConfigError, InvalidPatternError
from regexpomatic.core.config import ProcessorConfig, RuleConfig, SingleRuleConfig
from regexpomatic.core.logging import get_logger
from regexpomatic.core.templates import extract_jinja2_fields
from regexpomatic.engine.emission import DEFAULT_EMIT_POLICY
from regexpomatic.engine.templater import TagTemplate, TagTemplateSet

logger = get_logger(__name__)

# ReDoS detection: patterns with nested quantifiers cause catastrophic backtracking
# on adversarial input. E.g., (a+)+ on "aaa...!" is O(2^n).
#
# Only unbounded repetition (+, *, {n,}) counts. A group repeated a fixed or
# bounded number of times, like (\d+\.){3}, is accepted.
#
# Known limitations:
#   - Cannot see past nested group boundaries: ((a+)b)+
#   - Does not detect alternation-based attacks: (a|a)+
# These gaps are bounded by _MAX_PATTERN_LENGTH and the fact that patterns
# come from operator-authored configuration, not from record payloads.
_UNBOUNDED = r"(?:[+*]|\{\d*,\})"

_NESTED_QUANTIFIER_RE = re.compile(
    _UNBOUNDED + r"\)" + _UNBOUNDED  # unbounded quantifier closing a group that is itself unbounded
    + r"|"
    + r"\([^)]*" + _UNBOUNDED + r"[^)]*\)" + _UNBOUNDED  # group containing one, repeated without bound
)

_MAX_PATTERN_LENGTH = 1000


@dataclass(frozen=True)
class CompiledRule:
    """A rule ready to run: patterns compiled, policy resolved."""

    split: tuple[re.Pattern[str], ...]
    parse: tuple[re.Pattern[str], ...]
    templates: TagTemplateSet
    policy: EmitPolicy

    @property
    def parse_expressions(self) -> list[str]:
        return [p.pattern for p in self.parse]


@dataclass(frozen=True)
class CompiledGate:
    """Gate membership pattern plus the rule it guards."""

    expression: str
    pattern: re.Pattern[str]
    rule: CompiledRule

    def matches(self, payload: str) -> bool:
        return self.pattern.search(payload) is not None


@dataclass(frozen=True)
class CompiledConfig:
    """Result of compiling a whole configuration bundle.

    Exactly one of ``rule`` (single-rule form) or ``gates`` (multi-rule
    form) is meaningful; ``gated`` says which.
    """

    rule: CompiledRule | None = None
    gates: tuple[CompiledGate, ...] = ()

    @property
    def gated(self) -> bool:
        return self.rule is None


def _validate_regex_safety(pattern: str, role: str) -> None:
    """Reject regex patterns with known ReDoS-prone constructs.

    Raises:
        InvalidPatternError: If pattern is too long or has nested quantifiers
    """
    if len(pattern) > _MAX_PATTERN_LENGTH:
        raise InvalidPatternError(pattern[:50] + "...", f"exceeds maximum length ({_MAX_PATTERN_LENGTH} chars)", role=role)
    if _NESTED_QUANTIFIER_RE.search(pattern):
        raise InvalidPatternError(pattern, "contains nested quantifiers (ReDoS risk)", role=role)


def compile_pattern(expression: str, *, role: str) -> re.Pattern[str]:
    """Compile a single expression.

    Raises:
        InvalidPatternError: If the expression is unsafe or not valid syntax
    """
    if not isinstance(expression, str):
        raise InvalidPatternError(repr(expression), f"expected a string, got {type(expression).__name__}", role=role)
    _validate_regex_safety(expression, role)
    try:
        return re.compile(expression)
    except re.error as e:
        raise InvalidPatternError(expression, str(e), role=role) from e


def compile_patterns(expressions: Sequence[str], *, role: str) -> tuple[re.Pattern[str], ...]:
    """Compile expressions in order, failing on the first bad one.

    Args:
        expressions: Regex source strings
        role: What the patterns are for ("split", "parse", "gate"), for errors

    Returns:
        Compiled patterns in the same order

    Raises:
        InvalidPatternError: On the first expression that cannot be used
    """
    return tuple(compile_pattern(expression, role=role) for expression in expressions)


def compile_templates(name_to_body: Mapping[str, str]) -> TagTemplateSet:
    """Compile tag templates in declaration order.

    The empty name is reserved and skipped without error.

    Raises:
        InvalidConfigError: If a name or body is not a string
        InvalidTemplateError: If a body is not valid Jinja2
    """
    templates: list[TagTemplate] = []
    for name, body in name_to_body.items():
        if not isinstance(name, str) or not isinstance(body, str):
            raise InvalidConfigError(f"Tag templates must map strings to strings, got {name!r}: {type(body).__name__}")
        if name == "":
            continue
        templates.append(TagTemplate(name, body))

    names = {t.name for t in templates}
    for template in templates:
        siblings = (extract_jinja2_fields(template.body) & names) - {template.name}
        if siblings:
            logger.debug(
                "tag template reads sibling template names; it sees their pre-template values",
                template=template.name,
                siblings=sorted(siblings),
            )
    return TagTemplateSet(tuple(templates))


def compile_rule(rule: RuleConfig, default_policy: EmitPolicy = DEFAULT_EMIT_POLICY) -> CompiledRule:
    """Compile one rule's patterns and templates."""
    return CompiledRule(
        split=compile_patterns(rule.split, role="split"),
        parse=compile_patterns(rule.parse, role="parse"),
        templates=compile_templates(rule.tags),
        policy=rule.policy(default_policy),
    )


def compile_config(config: ProcessorConfig) -> CompiledConfig:
    """Compile a parsed configuration bundle.

    Raises:
        InvalidConfigError: If any pattern or template fails to compile
    """
    if isinstance(config, SingleRuleConfig):
        return CompiledConfig(rule=compile_rule(config.rule))

    gates = tuple(
        CompiledGate(
            expression=gate.expression,
            pattern=compile_pattern(gate.expression, role="gate"),
            rule=compile_rule(gate.rule, config.default_policy),
        )
        for gate in config.gates
    )
    return CompiledConfig(gates=gates)
