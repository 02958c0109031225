"""Splitter: fan one record out into one record per payload fragment."""

import re
from collections.abc import Sequence

from regexpomatic.contracts.errors import NonTextPayloadError
from regexpomatic.contracts.records import Record


def split_text(text: str, pattern: re.Pattern[str]) -> list[str]:
    """Split text on every non-overlapping match of pattern.

    Works from match spans, so capture groups in the delimiter never leak
    into the fragments. Empty fragments are kept. A zero-width match at the
    very start does not produce a leading empty fragment, and a zero-width
    match at the very end does not produce a trailing one. A zero-width
    match directly after another match is ignored, so ``x*`` splits
    ``"axb"`` into two fragments, not three.

    Examples:
        >>> split_text("a|b||c", re.compile(r"\\|"))
        ['a', 'b', '', 'c']
        >>> split_text("axb", re.compile("x*"))
        ['a', 'b']
        >>> split_text("", re.compile(r"\\|"))
        ['']
    """
    if not text:
        return [""]

    pieces: list[str] = []
    start = 0
    last_match_start = 0
    previous_end = -1
    for match in pattern.finditer(text):
        if match.start() == match.end() == previous_end:
            continue
        previous_end = match.end()
        if match.end() == 0:
            continue
        pieces.append(text[start : match.start()])
        start = match.end()
        last_match_start = match.start()
    if last_match_start != len(text):
        pieces.append(text[start:])
    return pieces


def split(record: Record, patterns: Sequence[re.Pattern[str]]) -> list[Record]:
    """Split a record's payload on each delimiter pattern in turn.

    Every fragment produced so far is re-split on the next pattern. Each
    output record copies every field of the original except the payload;
    the tag map reference is shared until tags are derived.

    Args:
        record: Record with a text payload
        patterns: Delimiter patterns, applied in order

    Returns:
        One record per final fragment, in payload order. With no patterns,
        exactly ``[record]``.

    Raises:
        NonTextPayloadError: If the payload is not text
    """
    if not record.is_text:
        raise NonTextPayloadError(record.data)
    if not patterns:
        return [record]

    workspace: list[str] = [record.data]
    for pattern in patterns:
        workspace = [piece for fragment in workspace for piece in split_text(fragment, pattern)]

    return [record.with_data(fragment) for fragment in workspace]
