"""User configuration for tuido.

Settings live in ``~/.config/tuido/init.py`` (``$XDG_CONFIG_HOME`` is
honoured). The script runs with a restricted set of builtins and sets
attributes on a ``config`` object::

    config.store_path = "~/notes/todos.json"
    config.history_size = 200
    config.max_search_distance = 1
"""

from __future__ import annotations

import logging
import os
import traceback
from pathlib import Path
from typing import Any, Optional

from tuido.core.history import DEFAULT_HISTORY_SIZE
from tuido.storage import default_store_path

logger = logging.getLogger(__name__)

# Builtins visible to init.py. Import, file and code-evaluation hooks are
# explicitly disabled.
_SANDBOX_BUILTINS: dict[str, Any] = {
    'True': True,
    'False': False,
    'None': None,
    'bool': bool,
    'int': int,
    'float': float,
    'str': str,
    'list': list,
    'tuple': tuple,
    'dict': dict,
    'len': len,
    'range': range,
    'min': min,
    'max': max,
    'print': print,
    '__import__': None,
    'open': None,
    'exec': None,
    'eval': None,
    'compile': None,
}


class TuidoConfig:
    """Settings with their defaults. ``init.py`` may override any of them."""

    def __init__(self):
        self.store_path: Optional[str] = None  # None means ~/.tuido.json
        self.history_size: int = DEFAULT_HISTORY_SIZE
        self.prefix_timeout: Optional[float] = 1.0  # seconds between the keys of gg / dd
        self.max_search_distance: Optional[int] = None  # None: 1 for short queries, else 2
        self.inline: bool = False
        self.show_notes: bool = True
        self._custom: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        """Store a setting that has no dedicated attribute."""
        self._custom[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._custom.get(key, default)

    def problems(self) -> list[str]:
        """Describe settings that cannot be used as given."""
        found = []
        if not isinstance(self.history_size, int) or self.history_size < 1:
            found.append(f"history_size must be a positive integer, got {self.history_size!r}")
        if self.prefix_timeout is not None and (
            not isinstance(self.prefix_timeout, (int, float)) or self.prefix_timeout <= 0
        ):
            found.append(f"prefix_timeout must be a positive number or None, got {self.prefix_timeout!r}")
        if self.max_search_distance is not None and (
            not isinstance(self.max_search_distance, int) or self.max_search_distance < 0
        ):
            found.append(
                f"max_search_distance must be a non-negative integer or None, "
                f"got {self.max_search_distance!r}"
            )
        return found


def get_config_path() -> Path:
    """Directory holding init.py."""
    config_home = os.environ.get('XDG_CONFIG_HOME')
    base = Path(config_home) if config_home else Path.home() / '.config'
    return base / 'tuido'


def get_init_script_path() -> Path:
    return get_config_path() / 'init.py'


def load_config() -> tuple[TuidoConfig, Optional[str]]:
    """Run init.py, if present, against a fresh config.

    Settings assigned before a failure are kept. Invalid values are reset to
    their defaults and reported.

    Returns:
        A tuple of (config, error_message). error_message is None on success.
    """
    config = TuidoConfig()
    init_path = get_init_script_path()
    if not init_path.exists():
        return config, None

    logger.info("Loading config from %s", init_path)
    try:
        code = init_path.read_text()
        exec(compile(code, str(init_path), 'exec'), {'__builtins__': dict(_SANDBOX_BUILTINS), 'config': config})
    except Exception:
        return config, f"Error loading config from {init_path}:\n{traceback.format_exc()}"

    problems = config.problems()
    if problems:
        defaults = TuidoConfig()
        for attr in ('history_size', 'prefix_timeout', 'max_search_distance'):
            if any(p.startswith(attr) for p in problems):
                setattr(config, attr, getattr(defaults, attr))
        return config, f"Error in {init_path}: " + "; ".join(problems)
    return config, None


def get_store_path(config: TuidoConfig) -> Path:
    """The configured store file, or ~/.tuido.json."""
    if config.store_path:
        return Path(config.store_path).expanduser()
    return default_store_path()
