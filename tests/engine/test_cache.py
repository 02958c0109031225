"""Tests for CompiledConfigCache."""

import pytest

from regexpomatic.contracts import InvalidPatternError
from regexpomatic.engine.cache import CompiledConfigCache, compile_bundle


def bundle(parse: str) -> dict[str, object]:
    return {"regexps": [parse]}


class TestCompileBundle:
    def test_single_rule(self) -> None:
        compiled = compile_bundle(bundle(r"(?P<n>\d+)"))

        assert compiled.rule is not None
        assert not compiled.gated

    def test_multi_rule(self) -> None:
        compiled = compile_bundle({"^x": "parse: ['(?P<n>\\d+)']"})

        assert compiled.rule is None
        assert compiled.gated
        assert [g.expression for g in compiled.gates] == ["^x"]


class TestCompiledConfigCache:
    def test_miss_then_hit(self) -> None:
        cache = CompiledConfigCache()

        first = cache.get_or_compile(bundle("a"))
        second = cache.get_or_compile(bundle("a"))

        assert first is second
        assert cache.misses == 1
        assert cache.hits == 1
        assert len(cache) == 1

    def test_equal_bundles_share_entry(self) -> None:
        """Key order does not matter."""
        cache = CompiledConfigCache()

        cache.get_or_compile({"regexps": ["a"], "should_emit": "always"})
        cache.get_or_compile({"should_emit": "always", "regexps": ["a"]})

        assert cache.hits == 1
        assert len(cache) == 1

    def test_least_recently_used_evicted(self) -> None:
        cache = CompiledConfigCache(maxsize=2)

        a = cache.get_or_compile(bundle("a"))
        cache.get_or_compile(bundle("b"))
        cache.get_or_compile(bundle("a"))  # refresh a
        cache.get_or_compile(bundle("c"))  # evicts b

        assert len(cache) == 2
        assert cache.get_or_compile(bundle("a")) is a
        misses = cache.misses
        cache.get_or_compile(bundle("b"))
        assert cache.misses == misses + 1

    def test_failures_not_cached(self) -> None:
        cache = CompiledConfigCache()

        for _ in range(2):
            with pytest.raises(InvalidPatternError):
                cache.get_or_compile(bundle("("))

        assert len(cache) == 0
        assert cache.misses == 2

    def test_unhashable_bundle_compiled_without_caching(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def refuse(obj: object) -> str:
            raise TypeError("unsupported type")

        monkeypatch.setattr("regexpomatic.engine.cache.stable_hash", refuse)
        cache = CompiledConfigCache()

        compiled = cache.get_or_compile(bundle("a"))

        assert compiled.rule is not None
        assert len(cache) == 0
        assert cache.misses == 0
        assert cache.hits == 0

    def test_nested_mapping_documents_hash(self) -> None:
        cache = CompiledConfigCache()
        value = {"^x": {"parse": ["a"]}}

        cache.get_or_compile(value)
        cache.get_or_compile({"^x": {"parse": ["a"]}})

        assert cache.hits == 1

    def test_clear(self) -> None:
        cache = CompiledConfigCache()
        cache.get_or_compile(bundle("a"))

        cache.clear()

        assert len(cache) == 0

    @pytest.mark.parametrize("maxsize", [0, -1])
    def test_maxsize_must_be_positive(self, maxsize: int) -> None:
        with pytest.raises(ValueError, match="maxsize"):
            CompiledConfigCache(maxsize=maxsize)
