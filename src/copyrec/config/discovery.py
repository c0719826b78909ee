"""Locate and load ``copyrec.toml``.

The file is found by walking up from the working directory, the way git
finds ``.git/``. ``COPYREC_CONFIG`` names a file directly and disables the
walk; ``--config`` on the CLI bypasses discovery altogether.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from copyrec.config.models import CopyrecConfig

CONFIG_FILENAME = "copyrec.toml"
CONFIG_ENV_VAR = "COPYREC_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        candidate = Path(override)
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> CopyrecConfig:
    """Parse and validate *path* (or the file discovered from *cwd*).

    No file means an all-defaults configuration. Malformed TOML raises
    :class:`tomllib.TOMLDecodeError`; bad values raise pydantic's
    ``ValidationError``.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return CopyrecConfig()
    with path.open("rb") as fp:
        return CopyrecConfig.model_validate(tomllib.load(fp))
