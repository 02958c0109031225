# tests/property/test_tag_properties.py
"""Property-based tests for tag derivation.

- Isolation: mutating one emitted record's tags never shows up in a sibling
  or in the input record
- Overwrite: a later parse pattern's capture replaces an earlier one
- Extracted fields replace inherited tags of the same name
"""

from __future__ import annotations

import re

from hypothesis import given
from hypothesis import strategies as st

from regexpomatic.contracts import Record
from regexpomatic.engine.extractor import extract
from regexpomatic.engine.processor import process

word_st = st.text(alphabet="abcxyz", min_size=1, max_size=8)


class TestTagIsolation:
    @given(words=st.lists(word_st, min_size=2, max_size=6))
    def test_sibling_tags_independent(self, words: list[str]) -> None:
        record = Record(namespace=("ns",), data="|".join(words), tags={"origin": "host"})

        out = process([record], {"split_on": [r"\|"], "regexps": [r"(?P<word>\w+)"]})
        out[0].tags["origin"] = "mutated"  # type: ignore[index]

        assert [r.tags["word"] for r in out] == words
        assert all(r.tags["origin"] == "host" for r in out[1:])
        assert record.tags == {"origin": "host"}

    @given(words=st.lists(word_st, min_size=2, max_size=6))
    def test_siblings_without_matches_still_get_fresh_maps(self, words: list[str]) -> None:
        record = Record(namespace=("ns",), data="|".join(words), tags={"origin": "host"})

        out = process([record], {"split_on": [r"\|"], "regexps": [r"\d+"]})

        assert len({id(r.tags) for r in out}) == len(out)
        assert all(r.tags is not record.tags for r in out)


class TestExtractionOverwrite:
    @given(first=word_st, second=word_st)
    def test_later_pattern_wins(self, first: str, second: str) -> None:
        patterns = [re.compile(r"^(?P<v>\w+)"), re.compile(r"(?P<v>\w+)$")]

        extraction = extract(f"{first} {second}", patterns)

        assert extraction.fields == {"v": second}
        assert extraction.match_count == 2

    @given(inherited=word_st, captured=word_st)
    def test_extracted_field_replaces_inherited_tag(self, inherited: str, captured: str) -> None:
        record = Record(namespace=("ns",), data=captured, tags={"v": inherited})

        (out,) = process([record], {"regexps": [r"(?P<v>\w+)"]})

        assert out.tags["v"] == captured
