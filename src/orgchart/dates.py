"""Calendar arithmetic for tenure computation.

Tenure is counted in whole calendar years: a year is complete on the
anniversary of the base date, never before. An anniversary of Feb 29 falls
on Mar 1 in non-leap years, so 2020-02-29 → 2021-02-28 is still zero years.
"""

from __future__ import annotations

from datetime import date


def years_between(base: date, other: date) -> int:
    """Whole calendar years elapsed from ``base`` to ``other``.

    Positive when ``other`` is after ``base``, negative when it is before.
    The result is symmetric: ``years_between(a, b) == -years_between(b, a)``.
    """
    years = other.year - base.year
    anniversary = (base.month, base.day)
    if years > 0 and (other.month, other.day) < anniversary:
        years -= 1
    elif years < 0 and (other.month, other.day) > anniversary:
        years += 1
    return years
