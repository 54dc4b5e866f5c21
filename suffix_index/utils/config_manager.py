# config_manager.py - JSON config manager for the suffix index shell

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "check_invariants": False,  # full validation after every mutation
    "show_timings": True,
    "tree_limit": 200,          # max nodes drawn by /tree
    "log_path": os.path.join("logs", "suffix_index.log"),
    "log_color": True,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class Config:
    """
    Settings kept in a flat JSON object.
    path=None keeps everything in memory (nothing read or written).
    """

    def __init__(self, path: Optional[str] = "config.json"):
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        self._load()

    def _load(self):
        if self.path is None:
            return
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    loaded = json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("ignoring unreadable config %s: %s", self.path, e)
                return
            if not isinstance(loaded, dict):
                logger.warning("ignoring config %s: expected a JSON object", self.path)
                return
            for k, v in loaded.items():
                if k in self.data:
                    self.data[k] = v
                else:
                    logger.warning("ignoring unknown config key %r", k)
        else:
            self.save()

    def save(self):
        if self.path is None:
            return
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key: str) -> Any:
        return self.data[key]

    def show(self):
        for k, v in self.data.items():
            print(f"{k:18} = {v}")

    def set(self, key: str, val: Any) -> bool:
        """Set `key`, coercing `val` to the type of its default. False if key unknown or val unusable."""
        if key not in self.data:
            return False
        try:
            self.data[key] = _coerce(DEFAULTS[key], val)
        except ValueError:
            return False
        self.save()
        return True


def _coerce(default: Any, val: Any) -> Any:
    # bool("false") is True, so strings get parsed explicitly
    if isinstance(default, bool):
        if isinstance(val, bool):
            return val
        s = str(val).strip().lower()
        if s in _TRUE:
            return True
        if s in _FALSE:
            return False
        raise ValueError(f"not a boolean: {val!r}")
    return type(default)(val)
