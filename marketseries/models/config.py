"""
Configuration models.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from hashlib import sha256
import json


@dataclass
class ConfigHash:
    """Configuration hash for reproducibility."""
    hash_value: str
    timestamp: str

    @staticmethod
    def compute(config_dict: Dict[str, Any]) -> str:
        """Compute SHA256 hash of config."""
        json_str = json.dumps(config_dict, sort_keys=True, default=str)
        return sha256(json_str.encode()).hexdigest()


@dataclass
class Config:
    """Analysis configuration."""
    pattern_configs: Dict[str, Any] = field(default_factory=dict)
    profile_configs: Dict[str, Any] = field(default_factory=dict)
    calendar_configs: Dict[str, Any] = field(default_factory=dict)
    symbol_configs: Dict[str, Any] = field(default_factory=dict)
    config_hash: Optional[ConfigHash] = None

    def __post_init__(self):
        if self.config_hash is None:
            combined = {
                'patterns': self.pattern_configs,
                'profile': self.profile_configs,
                'calendar': self.calendar_configs,
                'symbols': self.symbol_configs
            }
            self.config_hash = ConfigHash(
                hash_value=ConfigHash.compute(combined),
                timestamp=datetime.now(timezone.utc).isoformat()
            )

    @classmethod
    def from_loader(cls, loader) -> "Config":
        """Build from a ConfigLoader's loaded files."""
        all_configs = loader.get_all_configs()
        return cls(
            pattern_configs=all_configs.get('patterns', {}),
            profile_configs=all_configs.get('profile', {}),
            calendar_configs=all_configs.get('calendar', {}),
            symbol_configs=all_configs.get('symbols', {}).get('symbols', {})
        )
