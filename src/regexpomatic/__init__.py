"""
regexp-o-matic: regex field extraction and tag templating for telemetry records.

Given a batch of records whose payload is free text, applies configured
gate/split/parse/template rules to derive tags, fans records out into
fragments, and decides which records are emitted.
"""

__version__ = "0.1.0"
