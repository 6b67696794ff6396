# config_manager.py - JSON config manager

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

DEFAULTS: Dict[str, Any] = {
    "max_suggestions": 10,
    "ngram_order": 3,  # longest context tried before backing off
    "phrase_length": 3,  # longest phrase continuation recorded
    "preserve_case": False,
    "max_corpus_tokens": 0,  # 0 = unbounded
    "include_messages": True,
    "log_level": "INFO",
}

_RANGES = {
    "max_suggestions": (1, None),
    "ngram_order": (1, 3),
    "phrase_length": (2, 4),
}


class Config:
    """
    Engine settings with JSON persistence.

    With no path the config lives in memory only. With a path, existing values
    are loaded over the defaults and a missing file is created.
    """

    def __init__(self, path: Optional[str] = None, **overrides: Any) -> None:
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        if path:
            self._load()
        for k, v in overrides.items():
            self.set(k, v, persist=False)

    def _load(self) -> None:
        if not os.path.exists(self.path):
            self.save()
            return
        with open(self.path, "r", encoding="utf8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"config file {self.path} must hold a JSON object")
        for k, v in raw.items():
            if k in DEFAULTS:
                self.set(k, v, persist=False)

    def save(self) -> None:
        if not self.path:
            return
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def show(self) -> str:
        return "\n".join(f"{k:18} = {v}" for k, v in self.data.items())

    def get(self, key: str) -> Any:
        return self.data[key]

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.data)

    def set(self, key: str, val: Any, persist: bool = True) -> None:
        """Set an option, coercing to the default's type. Unknown keys raise KeyError."""
        if key not in DEFAULTS:
            raise KeyError(f"no such option: {key}")
        kind = type(DEFAULTS[key])
        if kind is bool and isinstance(val, str):
            val = val.strip().lower() in ("1", "true", "yes", "on")
        else:
            val = kind(val)
        if kind is int:
            lo, hi = _RANGES.get(key, (0, None))
            if val < lo or (hi is not None and val > hi):
                raise ValueError(f"{key} must be in [{lo}, {hi if hi is not None else 'inf'}], got {val}")
        self.data[key] = val
        if persist:
            self.save()
