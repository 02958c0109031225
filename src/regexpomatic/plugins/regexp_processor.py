"""RegexpProcessor: the object a host plugin runtime calls into.

The host owns registration and the config-policy handshake; it only needs
a name, a version and ``process``.

Example:
    processor = RegexpProcessor()
    out = processor.process(
        records,
        {
            "split_on": [r"\\|"],
            "regexps": [r"^feature (?P<feature_name>\\w+)$"],
            "should_emit": "any_success",
            "tags": {"label": "feature {{ tags.feature_name }}"},
        },
    )
"""

from collections.abc import Iterable, Mapping
from typing import Any

from regexpomatic.contracts.records import Record
from regexpomatic.engine.cache import CompiledConfigCache
from regexpomatic.engine.processor import process


class RegexpProcessor:
    """Regex field extraction and tag templating processor.

    Stateless unless a cache is supplied; a single instance may be shared
    across concurrent calls with different configurations.
    """

    name = "regexp-o-matic"
    plugin_version = "1"

    def __init__(self, *, cache: CompiledConfigCache | None = None) -> None:
        self._cache = cache

    def process(self, records: Iterable[Record], config: Mapping[str, Any]) -> list[Record]:
        """Transform a batch of records.

        Raises:
            InvalidConfigError: If the configuration is unusable
        """
        return process(records, config, cache=self._cache)
