"""Host-facing plugin surface.

- config_base: strict pydantic base for plugin configuration
- regexp_processor: the RegexpProcessor object a host calls into

Import RegexpProcessor from regexpomatic.plugins.regexp_processor; it is
not re-exported here because the configuration schema depends on this
package's config_base.
"""

from regexpomatic.plugins.config_base import PluginConfig, PluginConfigError

__all__ = [
    "PluginConfig",
    "PluginConfigError",
]
