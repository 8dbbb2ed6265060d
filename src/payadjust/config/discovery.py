"""Config file discovery.

Walk-up finder locates payadjust.toml, similar to how git finds .git/.
The PAYADJUST_CONFIG env var takes precedence over the walk-up.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "payadjust.toml"
CONFIG_ENV_VAR = "PAYADJUST_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for payadjust.toml.

    Returns the path to the config file, or None if not found. An env var
    pointing at a missing file also yields None rather than falling back
    to the walk-up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
