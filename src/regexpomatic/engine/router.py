# src/regexpomatic/engine/router.py
"""Rule application and gate routing.

apply_rule runs one rule's chain over a record:

    Splitter -> (per fragment) Extractor -> Emission Policy -> tag merge -> Templater

route tests every gate in configuration order and applies the guarded rule
once per gate that matches. A text record no gate recognizes passes through
unchanged.
"""

from __future__ import annotations

from collections.abc import Sequence

from regexpomatic.contracts.errors import NonTextPayloadError, RecordSkipContext, TemplateRenderError
from regexpomatic.contracts.records import Record
from regexpomatic.core.logging import get_logger
from regexpomatic.engine.compiler import CompiledGate, CompiledRule
from regexpomatic.engine.emission import should_emit
from regexpomatic.engine.extractor import extract
from regexpomatic.engine.splitter import split

logger = get_logger(__name__)


def _apply_to_fragment(fragment: Record, rule: CompiledRule) -> Record | None:
    """Extract, gate on policy, then template one fragment.

    Returns None when the fragment is dropped by the emission policy.

    Raises:
        NonTextPayloadError: If the fragment payload is not text
        TemplateRenderError: If any tag template fails for this fragment
    """
    extraction = extract(fragment.data, rule.parse)
    if not should_emit(rule.policy, extraction.match_count, len(rule.parse)):
        return None

    # Fan-out siblings share the original tag map; always build a fresh one
    tags = {**fragment.tags, **extraction.fields}
    if rule.templates:
        tags.update(rule.templates.render(fragment.with_tags(tags)))
    return fragment.with_tags(tags)


def apply_rule(record: Record, rule: CompiledRule, *, gate: str | None = None) -> list[Record]:
    """Run one rule over a record.

    Args:
        record: Input record
        rule: Compiled rule
        gate: Expression of the gate that selected this rule, for logging

    Returns:
        Emitted records in fragment order (possibly empty)

    Raises:
        NonTextPayloadError: If the payload is not text
    """
    fragments = split(record, rule.split) if rule.split else [record]

    emitted: list[Record] = []
    for fragment in fragments:
        try:
            result = _apply_to_fragment(fragment, rule)
        except TemplateRenderError as e:
            context: RecordSkipContext = {
                "namespace": list(fragment.namespace),
                "data": fragment.data,
                "reason": str(e),
                "template": e.name,
            }
            if gate is not None:
                context["gate"] = gate
            logger.warning("tag template failed, dropping record", **context)
            continue
        if result is not None:
            emitted.append(result)
    return emitted


def route(record: Record, gates: Sequence[CompiledGate]) -> list[Record]:
    """Apply the rule of every gate the record's payload matches.

    Args:
        record: Input record
        gates: Gates in configuration order

    Returns:
        Concatenated rule outputs in gate order, or ``[record]`` unchanged
        when no gate matched

    Raises:
        NonTextPayloadError: If the payload is not text
    """
    if not record.is_text:
        raise NonTextPayloadError(record.data)

    emitted: list[Record] = []
    matched = False
    for gate in gates:
        if not gate.matches(record.data):
            continue
        matched = True
        emitted.extend(apply_rule(record, gate.rule, gate=gate.expression))

    if not matched:
        return [record]
    return emitted
