"""Telemetry record contract.

A Record is the unit of data exchanged with the host. Only ``data`` (the
payload) and ``tags`` are interpreted by the pipeline; every other field is
carried through untouched.

Records are frozen. Derived records are built with ``dataclasses.replace``
so the input batch is never modified in place.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Record:
    """One telemetry data point.

    Attributes:
        namespace: Namespace elements (e.g. ("intel", "logs", "message"))
        data: Payload; expected to be text for any rule to apply
        tags: Tag map (string -> string)
        timestamp: Collection time, if known
        unit: Unit of measure
        description: Human-readable description
        version: Metric version
        config: Opaque per-record host configuration
    """

    namespace: tuple[str, ...]
    data: Any
    tags: Mapping[str, str] = field(default_factory=dict)
    timestamp: datetime | None = None
    unit: str = ""
    description: str = ""
    version: int = 0
    config: Mapping[str, Any] | None = None

    @property
    def is_text(self) -> bool:
        """Whether the payload can be split, parsed and gated."""
        return isinstance(self.data, str)

    def with_data(self, data: str) -> Record:
        """Copy of this record carrying a different payload.

        The tag map reference is shared with the original.
        """
        return replace(self, data=data)

    def with_tags(self, tags: dict[str, str]) -> Record:
        """Copy of this record carrying a freshly allocated tag map."""
        return replace(self, tags=tags)
