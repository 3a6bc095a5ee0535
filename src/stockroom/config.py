"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

_TRUE = {"1", "true", "yes", "on"}


def _flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE


@dataclass(frozen=True)
class Settings:
    # Where stock.json, basket.json, users.json and session.json live
    data_dir: Path = Path("data")
    # Keep every store in memory; nothing survives the process
    in_memory: bool = False
    # Serialize transfers per product id instead of last-write-wins
    serialize_transfers: bool = False
    # Insert sample stock and accounts into empty stores
    seed: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            data_dir=Path(os.environ.get("STOCKROOM_DATA_DIR", "data")),
            in_memory=_flag("STOCKROOM_IN_MEMORY", False),
            serialize_transfers=_flag("STOCKROOM_SERIALIZE_TRANSFERS", False),
            seed=_flag("STOCKROOM_SEED", True),
            log_level=os.environ.get("STOCKROOM_LOG_LEVEL", "WARNING").upper(),
        )

    def with_overrides(self, **changes) -> Settings:
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes)
