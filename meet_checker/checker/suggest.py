"""
suggest.py - Fuzzy "did you mean" suggestions and country lookups for checker messages.

Uses rapidfuzz to find the closest known value for a misspelled column name,
division or country, and pycountry as the reference list of countries.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterable, Optional, Tuple

import pycountry
from rapidfuzz import fuzz, process

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 80


def suggest(value: str, choices: Iterable[str], threshold: int = DEFAULT_THRESHOLD) -> Optional[str]:
    """
    Return the closest choice to value, or None if nothing scores at least threshold.

    Args:
        value: The unrecognized value.
        choices: Known values.
        threshold: Minimum rapidfuzz score (0-100).
    """
    choices = list(choices)
    if not value or not choices:
        return None
    match = process.extractOne(value, choices, scorer=fuzz.ratio, score_cutoff=threshold)
    if match is None:
        return None
    best, score, _ = match
    logger.debug(f"Suggesting '{best}' for '{value}' (score {score:.0f})")
    return best


def did_you_mean(value: str, choices: Iterable[str], threshold: int = DEFAULT_THRESHOLD) -> str:
    """Return ", did you mean 'X'?" for a close match, else an empty string."""
    best = suggest(value, choices, threshold)
    return f", did you mean '{best}'?" if best else ""


@lru_cache(maxsize=1)
def country_names() -> Tuple[str, ...]:
    """Names of every country known to pycountry, including common names."""
    names = set()
    for country in pycountry.countries:
        names.add(country.name)
        common_name = getattr(country, "common_name", None)
        if common_name:
            names.add(common_name)
    return tuple(sorted(names))


def is_known_country(name: str) -> bool:
    """Check a country name (or ISO code) against pycountry."""
    if not name:
        return False
    try:
        pycountry.countries.lookup(name)
    except LookupError:
        return False
    return True
