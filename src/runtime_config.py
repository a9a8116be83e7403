"""
Runtime Configuration Module

Manages placement settings that may be tuned while the editor runs.
Loads default values from config.py and allows runtime modifications.
"""
from dataclasses import dataclass, asdict
from typing import Optional

# Import defaults from config.py
from config import (
    MIN_ITEM_DURATION_MS,
    SNAP_DISTANCE_MS,
    SNAP_PROXIMITY_MS,
    DEFAULT_TOTAL_DURATION_MS,
    DEFAULT_ITEM_DURATIONS_MS,
    DEFAULT_MAX_DURATIONS_MS,
)


@dataclass
class RuntimeConfig:
    """
    Runtime configuration read by the edit session.

    Snapping can be switched off entirely; the distances stay untouched
    so that turning it back on restores the previous behavior.
    """
    # Placement
    min_item_duration_ms: float = MIN_ITEM_DURATION_MS
    snap_enabled: bool = True
    snap_distance_ms: float = SNAP_DISTANCE_MS
    snap_proximity_ms: float = SNAP_PROXIMITY_MS

    # Timeline
    total_duration_ms: float = DEFAULT_TOTAL_DURATION_MS

    def default_duration(self, item_type: str) -> float:
        """Duration of a freshly inserted placeholder of *item_type*."""
        return DEFAULT_ITEM_DURATIONS_MS.get(item_type, DEFAULT_ITEM_DURATIONS_MS['video'])

    def default_max_duration(self, item_type: str) -> Optional[float]:
        return DEFAULT_MAX_DURATIONS_MS.get(item_type)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "RuntimeConfig":
        """Create from dictionary."""
        # Filter only known fields to avoid errors with old/new config versions
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}
        return cls(**filtered_data)

    def reset_to_defaults(self):
        """Reset all settings to default values from config.py."""
        self.min_item_duration_ms = MIN_ITEM_DURATION_MS
        self.snap_enabled = True
        self.snap_distance_ms = SNAP_DISTANCE_MS
        self.snap_proximity_ms = SNAP_PROXIMITY_MS
        self.total_duration_ms = DEFAULT_TOTAL_DURATION_MS


# Global singleton instance
_runtime_config: Optional[RuntimeConfig] = None


def get_config() -> RuntimeConfig:
    """Get the global runtime configuration instance."""
    global _runtime_config
    if _runtime_config is None:
        _runtime_config = RuntimeConfig()
    return _runtime_config


def set_config(config: RuntimeConfig):
    """Set the global runtime configuration instance."""
    global _runtime_config
    _runtime_config = config
