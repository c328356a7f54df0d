from __future__ import annotations

import re

DEFAULT_ALIASES: tuple[tuple[str | re.Pattern[str], str], ...] = ()
"""Alias rules every new registry starts with. Aliases are opt-in."""

DEFAULT_DEFINITION_PATHS: tuple[str, ...] = (
    "factories",
    "test/factories",
    "tests/factories",
    "spec/factories",
)
"""Definition locations searched by ``find_definitions``, relative to the project root.

For each entry ``p`` the file ``p.py`` is loaded first, then every ``p/*.py``.
"""

DEFINITION_FILE_SUFFIX = ".py"
