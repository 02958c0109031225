"""Status codes and modes shared across the processing pipeline."""

from enum import StrEnum


class EmitPolicy(StrEnum):
    """When a processed record is kept in the output batch.

    Values:
        ALWAYS: Emit no matter how many parse patterns matched
        ALL_SUCCESS: Emit only if every parse pattern matched
        ANY_SUCCESS: Emit only if at least one parse pattern matched
        NO_SUCCESS: Emit only if no parse pattern matched (grep -v mode)
    """

    ALWAYS = "always"
    ALL_SUCCESS = "all_success"
    ANY_SUCCESS = "any_success"
    NO_SUCCESS = "no_success"
