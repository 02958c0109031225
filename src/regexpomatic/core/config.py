# src/regexpomatic/core/config.py
"""
Configuration schema and parsing for the regexp processor.

The host hands over a loosely-typed bundle. It is parsed once, at the
``process()`` boundary, into one of two variants:

Single-rule (flat keys):
    split_on: ["\\\\|"]
    regexps: ["^feature (?P<feature_name>[A-Za-z0-9]*)$"]
    should_emit: any_success
    tags:
      label: "yay: {{ tags.feature_name }}"

Multi-rule (gate pattern -> YAML sub-document):
    should_emit: always           # default for rules without their own
    "^feature ":
      |
        split: ["\\\\|"]
        parse: ["^feature (?P<feature_name>[A-Za-z0-9]*)$"]
        tags: {label: "{{ tags.feature_name }}"}

Settings are frozen (immutable) after construction. Any malformed shape
raises an InvalidConfigError subclass before a single record is touched.
"""

from collections.abc import Mapping
from typing import Any, Literal

import yaml
from pydantic import AliasChoices, Field, field_validator

from regexpomatic.contracts.enums import EmitPolicy
from regexpomatic.contracts.errors import MissingParsePatternsError
from regexpomatic.engine.emission import DEFAULT_EMIT_POLICY, parse_emit_policy
from regexpomatic.plugins.config_base import PluginConfig, PluginConfigError

CONFIG_SPLIT = "split_on"
CONFIG_PARSE = "regexps"
CONFIG_SHOULD_EMIT = "should_emit"
CONFIG_TAGS = "tags"

# Presence of any of these selects the single-rule form. should_emit is
# excluded: hosts default it at the top level in both forms.
_SINGLE_RULE_KEYS = frozenset({CONFIG_SPLIT, CONFIG_PARSE, CONFIG_TAGS})

_PARSE_KEYS = frozenset({"parse", CONFIG_PARSE})


class RuleConfig(PluginConfig):
    """Split/parse/template settings applied to a record.

    Accepts both the short sub-document keys (split, parse) and the flat
    single-rule keys (split_on, regexps).
    """

    split: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("split", CONFIG_SPLIT),
        description="Delimiter patterns, applied in order",
    )
    parse: list[str] = Field(
        ...,
        validation_alias=AliasChoices("parse", CONFIG_PARSE),
        description="Capture-group patterns, applied in order",
    )
    tags: dict[str, str] = Field(
        default_factory=dict,
        description="Tag name -> Jinja2 template body",
    )
    should_emit: EmitPolicy | None = Field(
        default=None,
        description="Emission policy; None inherits the bundle default",
    )

    @field_validator("should_emit", mode="before")
    @classmethod
    def _validate_should_emit(cls, v: Any) -> EmitPolicy | None:
        # UnknownEmitPolicyError is not a ValueError, so pydantic lets it through unwrapped
        if v is None:
            return None
        return parse_emit_policy(v)

    def policy(self, default: EmitPolicy = DEFAULT_EMIT_POLICY) -> EmitPolicy:
        """Effective emission policy for this rule."""
        return self.should_emit if self.should_emit is not None else default


class GateConfig(PluginConfig):
    """A gate expression and the rule it guards."""

    expression: str
    rule: RuleConfig


class SingleRuleConfig(PluginConfig):
    """One rule applied unconditionally to every record."""

    mode: Literal["single"] = "single"
    rule: RuleConfig


class MultiRuleConfig(PluginConfig):
    """Ordered gates, each guarding its own rule."""

    mode: Literal["multi"] = "multi"
    gates: tuple[GateConfig, ...]
    default_policy: EmitPolicy = DEFAULT_EMIT_POLICY


ProcessorConfig = SingleRuleConfig | MultiRuleConfig


def load_rule_document(expression: str, document: Any) -> dict[str, Any]:
    """Decode the rule sub-document attached to a gate.

    Args:
        expression: Gate pattern text (for error messages)
        document: YAML text, or an already-decoded mapping

    Returns:
        Rule settings as a plain dict

    Raises:
        PluginConfigError: If the document is not valid YAML or not a mapping
    """
    if isinstance(document, str):
        try:
            loaded = yaml.safe_load(document)
        except yaml.YAMLError as e:
            raise PluginConfigError(f"Malformed rule document for gate {expression!r}: {e}") from e
    else:
        loaded = document

    if not isinstance(loaded, Mapping):
        raise PluginConfigError(f"Rule document for gate {expression!r} must be a mapping, got {type(loaded).__name__}")
    return dict(loaded)


def parse_processor_config(bundle: Mapping[str, Any]) -> ProcessorConfig:
    """Parse a raw configuration bundle into its typed variant.

    Args:
        bundle: Configuration mapping handed over by the host

    Returns:
        SingleRuleConfig or MultiRuleConfig

    Raises:
        MissingParsePatternsError: If no rule declares parse patterns
        UnknownEmitPolicyError: If a should_emit value is not recognized
        PluginConfigError: If the bundle or a sub-document is malformed
    """
    if not isinstance(bundle, Mapping):
        raise PluginConfigError(f"Configuration must be a mapping, got {type(bundle).__name__}")

    if _SINGLE_RULE_KEYS & bundle.keys():
        if CONFIG_PARSE not in bundle:
            raise MissingParsePatternsError()
        return SingleRuleConfig(rule=RuleConfig.from_dict(bundle))

    default_policy = DEFAULT_EMIT_POLICY
    raw_default = bundle.get(CONFIG_SHOULD_EMIT)
    if raw_default is not None:
        default_policy = parse_emit_policy(raw_default)

    gates: list[GateConfig] = []
    for expression, document in bundle.items():
        if expression == CONFIG_SHOULD_EMIT:
            continue
        if not isinstance(expression, str):
            raise PluginConfigError(f"Gate expressions must be strings, got {type(expression).__name__}")
        rule_settings = load_rule_document(expression, document)
        if not _PARSE_KEYS & rule_settings.keys():
            raise MissingParsePatternsError(gate=expression)
        gates.append(GateConfig(expression=expression, rule=RuleConfig.from_dict(rule_settings)))

    if not gates:
        raise MissingParsePatternsError()
    return MultiRuleConfig(gates=tuple(gates), default_policy=default_policy)
