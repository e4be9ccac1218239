"""Locate the site's ``postlint.toml``.

The file marks the site root: the nearest one at or above the starting
directory wins. ``POSTLINT_CONFIG`` names a file directly and turns the
search off, so a missing file there means "no config" rather than
"keep looking".
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "postlint.toml"
CONFIG_ENV_VAR = "POSTLINT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        named = Path(override).expanduser()
        return named if named.is_file() else None

    here = (start or Path.cwd()).resolve()
    candidates = (directory / CONFIG_FILENAME for directory in (here, *here.parents))
    return next((c for c in candidates if c.is_file()), None)
