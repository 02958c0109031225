"""Field extractor: run capture-group patterns against a payload."""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from regexpomatic.contracts.errors import NonTextPayloadError


@dataclass(frozen=True)
class Extraction:
    """Fields captured from one payload.

    Attributes:
        fields: Named capture group -> captured text
        match_count: Number of patterns that matched at all
    """

    fields: dict[str, str] = field(default_factory=dict)
    match_count: int = 0


def extract(payload: Any, patterns: Sequence[re.Pattern[str]]) -> Extraction:
    """Search payload with each pattern in order and collect named groups.

    A later pattern overwrites fields set by an earlier one with the same
    group name. A named group that did not take part in the match captures
    the empty string. Patterns without named groups still count as matches.

    Raises:
        NonTextPayloadError: If the payload is not text
    """
    if not isinstance(payload, str):
        raise NonTextPayloadError(payload)

    fields: dict[str, str] = {}
    match_count = 0
    for pattern in patterns:
        match = pattern.search(payload)
        if match is None:
            continue
        match_count += 1
        fields.update(match.groupdict(default=""))
    return Extraction(fields=fields, match_count=match_count)
