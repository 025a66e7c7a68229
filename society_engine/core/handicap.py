"""World Handicap System (WHS) course and playing handicap calculator.

Formulas:
    Course Handicap  = HI x (Slope / 113) + (Course Rating - Par)
    Playing Handicap = Course Handicap x Allowance

Both round half up (toward +infinity) to the nearest whole stroke. A
missing handicap index or missing tee data yields None, never 0: "no
handicap on file" and "scratch" are different players.

Standard allowances:
    Individual stroke play / stableford: 95%
    Fourball better ball:                85%
    Scramble:                            75%
    Foursomes (combined):                50%
"""

import math
from decimal import Decimal

from .models import HandicapResult, TeeBlock


STANDARD_SLOPE = 113
DEFAULT_ALLOWANCE = 0.95


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (-2.5 -> -2)."""
    return math.floor(Decimal(repr(value)) + Decimal('0.5'))


def has_tee_settings(tee: TeeBlock | None) -> bool:
    """True when a tee block carries par, course rating and slope."""
    if tee is None:
        return False
    return (tee.par is not None and tee.course_rating is not None
            and tee.slope_rating is not None)


def course_handicap(handicap_index: float | None, tee: TeeBlock | None) -> int | None:
    """Course handicap for an index on a tee, or None if either is missing."""
    if handicap_index is None or not has_tee_settings(tee):
        return None
    raw = (handicap_index * (tee.slope_rating / STANDARD_SLOPE)
           + (tee.course_rating - tee.par))
    return round_half_up(raw)


def playing_handicap(course_hcp: int | None,
                     allowance: float | None = DEFAULT_ALLOWANCE) -> int | None:
    """Apply the format allowance (a fraction, e.g. 0.95) to a course handicap."""
    if course_hcp is None:
        return None
    if allowance is None:
        allowance = DEFAULT_ALLOWANCE
    return round_half_up(course_hcp * allowance)


def select_tee(gender: str | None, mens_tee: TeeBlock | None,
               ladies_tee: TeeBlock | None) -> TeeBlock | None:
    """Pick the tee block for a player's gender.

    Falls back to whichever block is present when the matching one is
    missing (or the gender is unknown); None when neither is configured.
    """
    if gender == 'female':
        return ladies_tee if ladies_tee is not None else mens_tee
    return mens_tee if mens_tee is not None else ladies_tee


def calculate_handicaps(handicap_index: float | None, tee: TeeBlock | None,
                        allowance: float | None = DEFAULT_ALLOWANCE) -> HandicapResult:
    ch = course_handicap(handicap_index, tee)
    return HandicapResult(
        handicap_index=handicap_index,
        course_handicap=ch,
        playing_handicap=playing_handicap(ch, allowance),
    )


def event_allowance(allowance_pct: float | None = None,
                    allowance: float | None = None) -> float:
    """Resolve an event's allowance: percentage first, then fraction, then 95%."""
    if allowance_pct:
        return allowance_pct / 100
    if allowance is not None:
        return allowance
    return DEFAULT_ALLOWANCE


def recommended_allowance(fmt: str | None) -> float:
    """Recommended allowance for a competition format name."""
    if not fmt:
        return DEFAULT_ALLOWANCE
    normalized = fmt.lower()
    if 'fourball' in normalized or 'better_ball' in normalized or 'better ball' in normalized:
        return 0.85
    if 'foursomes' in normalized:
        return 0.50
    if 'scramble' in normalized:
        return 0.75
    return DEFAULT_ALLOWANCE
