"""
federation_config.py - Per-federation CONFIG.yaml parsing.

A federation's CONFIG.yaml declares the divisions its meets may use, each with
inclusive age bounds, and options controlling which equipment categories are
ranked together. Problems with individual values become Report messages; a
file that cannot be read as a YAML mapping at all raises ConfigReadError.

Example CONFIG.yaml:

    options:
      combine_raw_and_wraps: true
    divisions:
      - name: Open
        min: 0
        max: 999
      - name: Juniors
        min: 0
        max: 17.5
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from meet_checker.age import Age
from meet_checker.report import Report

from .suggest import did_you_mean

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = ("options", "divisions")
KNOWN_OPTIONS = ("combine_raw_and_wraps", "combine_single_and_multi")
KNOWN_DIVISION_KEYS = ("name", "min", "max", "sex")
KNOWN_SEXES = ("M", "F", "Mx")


class ConfigReadError(Exception):
    """A configuration file could not be read or is not a YAML mapping."""


@dataclass(frozen=True)
class Division:
    """
    A division declared by a federation.

    Attributes:
        name (str): Division name as used in entries.csv.
        min_age (Age): Inclusive lower age bound, possibly unknown.
        max_age (Age): Inclusive upper age bound, possibly unknown.
        sex (Optional[str]): Restricts the division to one sex, if set.
    """
    name: str
    min_age: Age = Age.UNKNOWN
    max_age: Age = Age.UNKNOWN
    sex: Optional[str] = None


@dataclass
class FederationConfig:
    """
    Rules for the meets of a single federation.

    Attributes:
        divisions (Dict[str, Division]): Declared divisions by name.
        combine_raw_and_wraps (bool): Rank Raw and Wraps entries together.
        combine_single_and_multi (bool): Rank Single-ply and Multi-ply entries together.
    """
    divisions: Dict[str, Division] = field(default_factory=dict)
    combine_raw_and_wraps: bool = False
    combine_single_and_multi: bool = False

    def get_division(self, name: str) -> Optional[Division]:
        return self.divisions.get(name)

    def equipment_group(self, equipment: str) -> str:
        """Equipment category used when grouping entries for placing."""
        if self.combine_raw_and_wraps and equipment == "Wraps":
            return "Raw"
        if self.combine_single_and_multi and equipment == "Multi-ply":
            return "Single-ply"
        return equipment


@dataclass
class ConfigResult:
    report: Report
    config: Optional[FederationConfig] = None


def _parse_age_bound(value: Any) -> Age:
    if value is None:
        return Age.UNKNOWN
    if isinstance(value, bool):
        raise ValueError(f"Invalid age '{value}'")
    return Age.parse(str(value))


def _check_options(options: Any, report: Report, config: FederationConfig) -> None:
    if not isinstance(options, dict):
        report.error("Section 'options' must be a mapping")
        return
    for key, value in options.items():
        if key not in KNOWN_OPTIONS:
            report.error(f"Unknown option '{key}'{did_you_mean(str(key), KNOWN_OPTIONS)}")
            continue
        if not isinstance(value, bool):
            report.error(f"Option '{key}' must be true or false, got '{value}'")
            continue
        setattr(config, key, value)


def _check_divisions(divisions: Any, report: Report, config: FederationConfig) -> None:
    if not isinstance(divisions, list):
        report.error("Section 'divisions' must be a list")
        return
    for num, item in enumerate(divisions, start=1):
        if not isinstance(item, dict):
            report.error(f"Division {num} must be a mapping")
            continue
        for key in item:
            if key not in KNOWN_DIVISION_KEYS:
                report.error(f"Division {num} has unknown key '{key}'{did_you_mean(str(key), KNOWN_DIVISION_KEYS)}")

        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            report.error(f"Division {num} is missing a name")
            continue
        name = name.strip()
        if name in config.divisions:
            report.error(f"Division '{name}' is declared more than once")
            continue

        try:
            min_age = _parse_age_bound(item.get("min"))
            max_age = _parse_age_bound(item.get("max"))
        except ValueError as e:
            report.error(f"Division '{name}': {e}")
            continue
        if not min_age.is_unknown() and not max_age.is_unknown() and min_age.years > max_age.years:
            report.error(f"Division '{name}' has min age {min_age} above max age {max_age}")
            continue
        if min_age.is_unknown() and max_age.is_unknown():
            report.warning(f"Division '{name}' declares no age bounds")

        sex = item.get("sex")
        if sex is not None and sex not in KNOWN_SEXES:
            report.error(f"Division '{name}' has invalid sex '{sex}'")
            continue

        config.divisions[name] = Division(name=name, min_age=min_age, max_age=max_age, sex=sex)


def check_config(config_path: Path) -> ConfigResult:
    """
    Parse and check a federation's CONFIG.yaml.

    Args:
        config_path: Path to the configuration file.

    Returns:
        ConfigResult: The report, and the config if the report has no errors.

    Raises:
        ConfigReadError: If the file cannot be read or is not a YAML mapping.
    """
    config_path = Path(config_path)
    report = Report(config_path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(f"Failed to read {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigReadError(f"Error parsing {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigReadError(f"{config_path} must contain a YAML mapping")

    config = FederationConfig()
    for section in data:
        if section not in KNOWN_SECTIONS:
            report.error(f"Unknown section '{section}'{did_you_mean(str(section), KNOWN_SECTIONS)}")
    if "options" in data:
        _check_options(data["options"], report, config)
    if "divisions" in data:
        _check_divisions(data["divisions"], report, config)

    if report.has_errors():
        logger.debug(f"Rejected configuration {config_path}")
        return ConfigResult(report=report)
    return ConfigResult(report=report, config=config)
