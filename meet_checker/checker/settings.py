from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"


def _load_yaml_mapping(yaml_path: Path) -> Dict[str, Any]:
    if not yaml_path or not yaml_path.exists():
        raise FileNotFoundError(f"Settings file not found: {yaml_path}")
    try:
        with open(yaml_path, 'r', encoding='utf-8') as f:
            settings_dict = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing {yaml_path}: {e}")
    if not isinstance(settings_dict, dict):
        raise ValueError(f"Settings file {yaml_path} must contain a mapping")
    return settings_dict


@dataclass
class CheckerSettings:
    """
    Settings for discovering and checking meet data.

    Defaults come from settings.yaml next to this module; from_yaml() and
    from_dict() override only the keys they are given.
    """
    config_filename: str = "CONFIG.yaml"
    meet_marker_files: List[str] = field(default_factory=lambda: ["entries.csv", "meet.csv"])
    max_workers: int = 0
    min_birthyear: int = 1900
    min_plausible_age: int = 5
    max_plausible_age: int = 98
    fuzzy_match_threshold: int = 80

    @classmethod
    def default(cls) -> CheckerSettings:
        """Load the packaged settings.yaml."""
        return cls.from_dict({})

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> CheckerSettings:
        """
        Load settings from a specific YAML file.

        Args:
            yaml_path: Path to YAML settings file.

        Returns:
            CheckerSettings: Settings with the file's values over the defaults.
        """
        return cls.from_dict(_load_yaml_mapping(Path(yaml_path)))

    @classmethod
    def from_dict(cls, settings_dict: Dict[str, Any]) -> CheckerSettings:
        """
        Create settings from a dictionary, falling back to settings.yaml.

        Raises:
            ValueError: If the dictionary holds a key that is not a setting.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(settings_dict) - known)
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(unknown)}")

        merged: Dict[str, Any] = {}
        if DEFAULT_SETTINGS_PATH.exists():
            merged.update({k: v for k, v in _load_yaml_mapping(DEFAULT_SETTINGS_PATH).items() if k in known})
        merged.update(settings_dict)
        return cls(**merged)

    def workers(self) -> Optional[int]:
        """Worker count for the executor, or None to use its default."""
        return self.max_workers if self.max_workers and self.max_workers > 0 else None
