"""
Export Settings - Prefab generation options, loadable from YAML

Example settings file:

    name: torch
    description: Animated wall torch
    pixels_per_unit: 16
    lifetime: 10
    horizontal_alignment: center
    vertical_alignment: bottom
    looped: true
    seed: 42
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Union
from dataclasses import dataclass, asdict

from .keyframes import HorizontalAlignment, SlotPolicy, VerticalAlignment


@dataclass
class ExportSettings:
    """Everything the prefab synthesizer needs besides the image"""

    name: str = "prefab"
    description: str = ""
    prefab_type: int = 0

    # Placement
    pixels_per_unit: float = 1.0
    horizontal_alignment: HorizontalAlignment = HorizontalAlignment.LEFT
    vertical_alignment: VerticalAlignment = VerticalAlignment.TOP

    # Objects
    lifetime: float = 5.0
    depth: int = 20
    use_hit_objects: bool = False

    # Playback
    speed: float = 1.0
    looped: bool = False

    # Identity
    seed: int = 0
    slot_policy: SlotPolicy = SlotPolicy.PAD

    def __post_init__(self):
        self.horizontal_alignment = HorizontalAlignment(self.horizontal_alignment)
        self.vertical_alignment = VerticalAlignment(self.vertical_alignment)
        self.slot_policy = SlotPolicy(self.slot_policy)

        if self.pixels_per_unit <= 0:
            raise ValueError(f"pixels_per_unit must be positive, got {self.pixels_per_unit}")
        if self.speed <= 0:
            raise ValueError(f"speed must be positive, got {self.speed}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain values for YAML serialization"""
        data = asdict(self)
        data['horizontal_alignment'] = self.horizontal_alignment.value
        data['vertical_alignment'] = self.vertical_alignment.value
        data['slot_policy'] = self.slot_policy.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExportSettings':
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    def replace(self, **overrides) -> 'ExportSettings':
        """Copy with the given non-None fields replaced"""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ExportSettings.from_dict(data)


def load_settings(path: Union[str, Path]) -> ExportSettings:
    """Load settings from a YAML file"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {path}")

    return ExportSettings.from_dict(data)


def save_settings(settings: ExportSettings, path: Union[str, Path]) -> Path:
    """Write settings to a YAML file"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(settings.to_dict(), f, default_flow_style=False, sort_keys=False)

    return path
