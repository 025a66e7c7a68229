"""Tee sheet builder: group players and hand out tee times.

Two grouping modes:
  - Pre-grouped: players already carry a group number; buckets are kept
    as-is and emitted in ascending group order.
  - Auto: highest handicap index tees off first (players without an
    index go last), chunked into four-balls; the final group holds
    whatever is left (1-4 players).

Tee times step from the start time by a fixed interval and wrap past
midnight. A bad start time falls back to 08:00 and a bad interval to 8
minutes, so a tee sheet can always be printed.
"""

import math
import re

from .handicap import DEFAULT_ALLOWANCE, calculate_handicaps, select_tee
from .models import TeeBlock, TeeGroup, TeePlayer


GROUP_SIZE = 4
DEFAULT_START_TIME = '08:00'
DEFAULT_INTERVAL = 10
FALLBACK_INTERVAL = 8
MINUTES_PER_DAY = 24 * 60


def _to_number(raw):
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _time_part(raw):
    # A blank part ("09:") counts as zero
    if raw.strip() == '':
        return 0.0
    return _to_number(raw)


def parse_start_time(start_time: str | None) -> int:
    """Convert "HH:MM" to minutes after midnight (08:00 if unreadable)."""
    if start_time:
        parts = str(start_time).split(':')
        hours = _time_part(parts[0])
        minutes = _time_part(parts[1]) if len(parts) > 1 else None
        if hours is not None and minutes is not None:
            return int(hours * 60 + minutes) % MINUTES_PER_DAY
    return parse_start_time(DEFAULT_START_TIME)


def normalize_interval(interval) -> int:
    """Minutes between groups: 10 when unset, 8 when not a positive number."""
    if interval is None:
        return DEFAULT_INTERVAL
    value = _to_number(interval)
    if value is None or value < 1:
        return FALLBACK_INTERVAL
    return int(value)


def format_tee_time(minute_of_day: int) -> str:
    minute_of_day %= MINUTES_PER_DAY
    return f'{minute_of_day // 60:02d}:{minute_of_day % 60:02d}'


def sort_players_by_handicap(players: list[TeePlayer]) -> list[TeePlayer]:
    """Handicap index descending, players without one last (stable)."""
    with_hcp = [p for p in players if p.handicap_index is not None]
    without = [p for p in players if p.handicap_index is None]
    return sorted(with_hcp, key=lambda p: -p.handicap_index) + without


def group_players(players: list[TeePlayer],
                  pre_grouped: bool = False) -> list[TeeGroup]:
    """Partition players into groups (tee times are left blank)."""
    if not players:
        return []

    if pre_grouped:
        buckets = {}
        for p in players:
            group_num = p.group if p.group is not None else 1
            buckets.setdefault(group_num, []).append(p)
        return [TeeGroup(group_number=num, tee_time='', players=buckets[num])
                for num in sorted(buckets)]

    ordered = sort_players_by_handicap(players)
    return [
        TeeGroup(group_number=i // GROUP_SIZE + 1, tee_time='',
                 players=ordered[i:i + GROUP_SIZE])
        for i in range(0, len(ordered), GROUP_SIZE)
    ]


def assign_tee_times(groups: list[TeeGroup], start_time: str | None = DEFAULT_START_TIME,
                     interval=DEFAULT_INTERVAL) -> list[TeeGroup]:
    """Return new groups with tee times set from the start time and interval."""
    start = parse_start_time(start_time)
    step = normalize_interval(interval)
    return [
        TeeGroup(group_number=g.group_number,
                 tee_time=format_tee_time(start + i * step),
                 players=list(g.players))
        for i, g in enumerate(groups)
    ]


def with_handicaps(players: list[TeePlayer], mens_tee: TeeBlock | None,
                   ladies_tee: TeeBlock | None,
                   allowance: float | None = DEFAULT_ALLOWANCE) -> list[TeePlayer]:
    """Copy players with course / playing handicaps for their gender's tee."""
    out = []
    for p in players:
        tee = select_tee(p.gender, mens_tee, ladies_tee)
        hcp = calculate_handicaps(p.handicap_index, tee, allowance)
        out.append(TeePlayer(
            id=p.id, name=p.name, handicap_index=p.handicap_index,
            course_handicap=hcp.course_handicap,
            playing_handicap=hcp.playing_handicap,
            gender=p.gender, group=p.group,
        ))
    return out


def build_tee_sheet(players: list[TeePlayer], mens_tee: TeeBlock | None = None,
                    ladies_tee: TeeBlock | None = None,
                    allowance: float | None = DEFAULT_ALLOWANCE,
                    start_time: str | None = DEFAULT_START_TIME,
                    interval=DEFAULT_INTERVAL,
                    pre_grouped: bool = False) -> list[TeeGroup]:
    """Compute handicaps, group the field and assign tee times."""
    players = with_handicaps(players or [], mens_tee, ladies_tee, allowance)
    groups = group_players(players, pre_grouped=pre_grouped)
    return assign_tee_times(groups, start_time, interval)


# --- Nearest-the-pin / longest-drive holes ---

def parse_hole_numbers(text: str | None) -> list[int]:
    """Parse "3, 7 14" into sorted, de-duplicated holes 1-18."""
    if not text or not str(text).strip():
        return []
    holes = set()
    for token in re.split(r'[,\s]+', str(text).strip()):
        try:
            n = int(token)
        except ValueError:
            continue
        if 1 <= n <= 18:
            holes.add(n)
    return sorted(holes)


def format_hole_numbers(holes) -> str:
    if not holes:
        return '-'
    return ', '.join(str(h) for h in sorted(holes))
