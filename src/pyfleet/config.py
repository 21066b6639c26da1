"""Runtime configuration for pyfleet."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pyfleet._constants import DEFAULT_PAGE_SIZE, MAX_COMMENT_LENGTH, MIN_YEAR, STORAGE_KEY
from pyfleet.exceptions import FleetConfigError
from pyfleet.storage import FileStorage, KeyValueStorage, MemoryStorage


def _env_positive_int(name: str, value: str) -> int:
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise FleetConfigError(f"{name} must be an integer, got {value!r}") from exc
    if parsed <= 0:
        raise FleetConfigError(f"{name} must be positive, got {parsed}")
    return parsed


@dataclasses.dataclass(frozen=True)
class FleetConfig:
    """Record manager configuration.

    Parameters
    ----------
    page_size : int
        Number of records per page in the vehicle list.
    max_comment_length : int
        Longest accepted comment, in characters.
    min_year : int
        Oldest accepted model year. The upper bound is always the
        current year plus one.
    storage_key : str
        Key under which the record collection is persisted.
    storage_dir : Path or None
        Directory for file-backed persistence. ``None`` keeps the
        collection in memory only.
    """

    page_size: int = DEFAULT_PAGE_SIZE
    max_comment_length: int = MAX_COMMENT_LENGTH
    min_year: int = MIN_YEAR
    storage_key: str = STORAGE_KEY
    storage_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise FleetConfigError(f"page_size must be positive, got {self.page_size}")
        if self.max_comment_length <= 0:
            raise FleetConfigError(f"max_comment_length must be positive, got {self.max_comment_length}")
        if not self.storage_key:
            raise FleetConfigError("storage_key must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> FleetConfig:
        """Create configuration from ``FLEET_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_INT_MAP = {
            "FLEET_PAGE_SIZE": "page_size",
            "FLEET_MAX_COMMENT_LENGTH": "max_comment_length",
            "FLEET_MIN_YEAR": "min_year",
        }
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_positive_int(env_key, val)

        key_env = env.get("FLEET_STORAGE_KEY")
        if key_env is not None:
            config_kwargs["storage_key"] = key_env.strip()

        dir_env = env.get("FLEET_STORAGE_DIR")
        if dir_env:
            config_kwargs["storage_dir"] = Path(dir_env).expanduser()

        config_kwargs.update(overrides)
        return cls(**config_kwargs)

    def open_storage(self) -> KeyValueStorage:
        """Return the persistence collaborator this configuration describes."""
        if self.storage_dir is None:
            return MemoryStorage()
        return FileStorage(self.storage_dir)
