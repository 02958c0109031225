"""Optional cache of compiled configurations.

Compilation normally happens on every process() call. A host that calls
with the same bundle repeatedly can inject a CompiledConfigCache to skip
recompiling. Results never depend on the cache being present.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from collections.abc import Mapping
from typing import Any

from regexpomatic.core.canonical import stable_hash
from regexpomatic.core.config import parse_processor_config
from regexpomatic.core.logging import get_logger
from regexpomatic.engine.compiler import CompiledConfig, compile_config

logger = get_logger(__name__)


def compile_bundle(bundle: Mapping[str, Any]) -> CompiledConfig:
    """Parse and compile a raw configuration bundle.

    Raises:
        InvalidConfigError: If the bundle is malformed or fails to compile
    """
    return compile_config(parse_processor_config(bundle))


class CompiledConfigCache:
    """LRU cache of compiled configurations keyed by canonical bundle hash.

    Only successful compilations are stored; a bad bundle raises on every
    call. Bundles that cannot be canonicalized (unsupported value types)
    are compiled without caching.

    Example:
        cache = CompiledConfigCache(maxsize=8)
        compiled = cache.get_or_compile(bundle)
    """

    def __init__(self, maxsize: int = 32) -> None:
        if maxsize < 1:
            raise ValueError(f"maxsize must be at least 1, got {maxsize}")
        self._maxsize = maxsize
        self._entries: OrderedDict[str, CompiledConfig] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get_or_compile(self, bundle: Mapping[str, Any]) -> CompiledConfig:
        """Return the compiled form of bundle, compiling on a miss."""
        try:
            key = stable_hash(bundle)
        except (TypeError, ValueError) as e:
            logger.debug("configuration bundle is not hashable, compiling without cache", error=str(e))
            return compile_bundle(bundle)

        with self._lock:
            compiled = self._entries.get(key)
            if compiled is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return compiled
            self.misses += 1

        compiled = compile_bundle(bundle)

        with self._lock:
            self._entries[key] = compiled
            self._entries.move_to_end(key)
            while len(self._entries) > self._maxsize:
                self._entries.popitem(last=False)
        return compiled
