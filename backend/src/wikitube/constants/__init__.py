"""Configuration constants.

Re-exports all config for convenient importing:
    from wikitube.constants import ENTRY_COUNT, TICK_INTERVAL_SECONDS
"""

from wikitube.constants.generation import *  # noqa: F403
from wikitube.constants.llm import *  # noqa: F403
from wikitube.constants.pipeline import *  # noqa: F403
