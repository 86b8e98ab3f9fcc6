"""Interpolation module: cross-meet inference of lifter ages.

Combines every age-related fact recorded for a lifter across their meets into
a single range of possible birth dates, then uses that range to fill in
missing or approximate Age, BirthYear and AgeClass values.

Core classes:
    - BirthDateRange: Closed interval of possible birth dates, narrowed fact by fact
    - NarrowResult: Outcome of one narrowing step (INTEGRATED or CONFLICT)
    - AgeRange: Division age bounds
    - AgeTrace / StreamAgeTrace: Optional observers narrating interpolation

Entry points:
    - interpolate_age: Interpolate every lifter with at least two entries
    - interpolate_age_debug_for: Interpolate and narrate a single lifter

Example:
    >>> from meet_checker.interpolation import interpolate_age
    >>> lifter_map = store.create_lifter_map()
    >>> interpolate_age(store, lifter_map)
"""

from .birthdate_range import AgeRange
from .birthdate_range import BirthDateRange
from .birthdate_range import NarrowResult
from .birthdate_range import BDR_DEFAULT_MIN
from .birthdate_range import BDR_DEFAULT_MAX
from .trace import AgeTrace
from .trace import StreamAgeTrace
from .age_interpolation import get_birthdate_range
from .age_interpolation import infer_from_range
from .age_interpolation import interpolate_age
from .age_interpolation import interpolate_age_debug_for
from .age_interpolation import interpolate_age_single_lifter

__all__ = [
    'AgeRange',
    'BirthDateRange',
    'NarrowResult',
    'BDR_DEFAULT_MIN',
    'BDR_DEFAULT_MAX',
    'AgeTrace',
    'StreamAgeTrace',
    'get_birthdate_range',
    'infer_from_range',
    'interpolate_age',
    'interpolate_age_debug_for',
    'interpolate_age_single_lifter',
]
