# src/regexpomatic/engine/processor.py
"""Pipeline orchestrator: the process() entry point.

    process(records, config) -> list[Record]

1. Parse and compile the configuration bundle. Any InvalidConfigError
   aborts the call; no records are returned alongside an error.
2. Route each record through its gates (multi-rule) or apply the single
   rule directly.
3. Concatenate outputs in input order, and within a fan-out in fragment
   order.

Per-record failures (RecordError) are logged and the record is left out;
the rest of the batch is unaffected. An empty result is not an error.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from regexpomatic.contracts.errors import RecordError, RecordSkipContext
from regexpomatic.contracts.records import Record
from regexpomatic.core.logging import get_logger
from regexpomatic.engine.cache import CompiledConfigCache, compile_bundle
from regexpomatic.engine.compiler import CompiledConfig
from regexpomatic.engine.router import apply_rule, route

logger = get_logger(__name__)


def _patterns_in_play(compiled: CompiledConfig) -> list[str]:
    if compiled.rule is not None:
        return compiled.rule.parse_expressions
    return [gate.expression for gate in compiled.gates]


def process_record(record: Record, compiled: CompiledConfig) -> list[Record]:
    """Run one record through the compiled configuration.

    Raises:
        RecordError: If this record cannot be processed
    """
    if compiled.rule is not None:
        return apply_rule(record, compiled.rule)
    return route(record, compiled.gates)


def process(
    records: Iterable[Record],
    config: Mapping[str, Any],
    *,
    cache: CompiledConfigCache | None = None,
) -> list[Record]:
    """Transform a batch of records according to a configuration bundle.

    Args:
        records: Input batch
        config: Single-rule or multi-rule configuration bundle
        cache: Optional compiled-configuration cache

    Returns:
        Output batch (possibly empty)

    Raises:
        InvalidConfigError: If the configuration cannot be parsed or compiled
    """
    compiled = cache.get_or_compile(config) if cache is not None else compile_bundle(config)

    output: list[Record] = []
    for record in records:
        try:
            output.extend(process_record(record, compiled))
        except RecordError as e:
            context: RecordSkipContext = {
                "namespace": list(record.namespace),
                "data": record.data,
                "reason": str(e),
                "patterns": _patterns_in_play(compiled),
            }
            logger.warning("skipping record", **context)
    return output
