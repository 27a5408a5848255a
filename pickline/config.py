"""User configuration for default selector options.

Defaults are read from a JSON file in the user's config directory (or the
file named by $PICKLINE_CONFIG). The file is only ever read; command line
flags are applied on top of it.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import SelectorConstants
from .model import OrderMode

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


@dataclass(frozen=True)
class SelectorConfig:
    """Options controlling which selector transitions are reachable."""
    multiline: bool = False
    preserve_order: bool = False
    hide_numbers: bool = False

    @property
    def order_mode(self) -> OrderMode:
        return OrderMode.PRESERVE if self.preserve_order else OrderMode.POSITIONAL

    def with_flags(self, **flags: bool) -> SelectorConfig:
        """Return a copy with every flag that is set turned on.

        Flags that are False leave the configured value alone, so a
        command line without ``-m`` does not undo ``multiline`` from the file.
        """
        enabled = {name: True for name, value in flags.items() if value}
        return replace(self, **enabled)


def config_path() -> Path:
    """Location of the config file, honoring $PICKLINE_CONFIG."""
    override = os.environ.get(SelectorConstants.CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return Path(platformdirs.user_config_dir("pickline")) / CONFIG_FILENAME


def _read_config_file(path: Path) -> Dict[str, Any]:
    """Load the raw JSON object from disk.

    Returns:
        The decoded object, or an empty dict if the file is missing or
        can't be used.
    """
    if not path.exists():
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not load config from {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Config file {path} has invalid format (not an object), ignoring")
        return {}
    return data


def load_config(path: Optional[Path] = None) -> SelectorConfig:
    """Build a SelectorConfig from the config file.

    Args:
        path: Config file to read. Defaults to ``config_path()``.

    Returns:
        The configured options. Keys with non-boolean values are skipped
        with a warning; unknown keys are ignored.
    """
    if path is None:
        path = config_path()
    data = _read_config_file(path)

    known = {f.name for f in fields(SelectorConfig)}
    values: Dict[str, bool] = {}
    for key, value in data.items():
        if key not in known:
            continue
        if not isinstance(value, bool):
            logger.warning(f"Config key {key!r} in {path} must be true or false, ignoring")
            continue
        values[key] = value
    return SelectorConfig(**values)
