"""Season aggregator: fold published events into per-member OOM totals.

Eligibility filters run in order:
  1. Published results only (draft events never count)
  2. Season year, derived from the event date (unparsable dates are skipped)
  3. Order of Merit classification, when oom_only is requested

Each eligible event is resolved into finishing positions and every
position is converted to points. Members who end the season on zero
points are left off the standings.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime

from .leaderboard import calculate_event_leaderboard
from .models import Event, Member, MemberTotals
from .points import points_for_position


UNKNOWN_MEMBER = 'Unknown'


@dataclass
class SeasonReport:
    totals: dict = field(default_factory=dict)          # member_id -> MemberTotals
    names: dict = field(default_factory=dict)           # member_id -> display name
    events_counted: list = field(default_factory=list)  # [event id]
    skipped_events: list = field(default_factory=list)  # [(event id, reason)]


def event_year(event_date) -> int | None:
    """Extract the year from an event date, or None if it can't be read.

    Accepts ISO dates and datetimes ("2025-06-14", "2025-06-14T09:00:00Z");
    otherwise falls back to a leading 4-digit year.
    """
    if isinstance(event_date, (date, datetime)):
        return event_date.year
    if not event_date or not str(event_date).strip():
        return None

    raw = str(event_date).strip()
    try:
        return datetime.fromisoformat(raw.replace('Z', '+00:00')).year
    except ValueError:
        pass

    match = re.match(r'^(\d{4})', raw)
    if match:
        year = int(match.group(1))
        if 1900 < year < 2100:
            return year
    return None


def eligible_events(events: list[Event], season_year: int | None = None,
                    oom_only: bool = False,
                    skipped: list | None = None) -> list[Event]:
    """Filter events down to those that count toward the standings.

    Events dropped because their date can't be read are appended to
    ``skipped`` as (event_id, reason) so callers can report them.
    """
    kept = [e for e in events if e is not None and e.is_published]

    if season_year is not None:
        by_season = []
        for e in kept:
            year = event_year(e.date)
            if year is None:
                if skipped is not None:
                    skipped.append((e.id, f'unparsable date {e.date!r}'))
                continue
            if year == season_year:
                by_season.append(e)
        kept = by_season

    if oom_only:
        kept = [e for e in kept if e.is_oom]

    return kept


def aggregate_season(events: list[Event], members: list[Member],
                     season_year: int | None = None,
                     oom_only: bool = False) -> SeasonReport:
    """Accumulate points, events played and wins per member."""
    report = SeasonReport()
    events = events or []
    members = members or []

    totals = {}
    for event in eligible_events(events, season_year, oom_only,
                                 report.skipped_events):
        report.events_counted.append(event.id)
        for entry in calculate_event_leaderboard(event):
            stats = totals.setdefault(entry.member_id, MemberTotals())
            stats.points += points_for_position(entry.position)
            stats.played += 1
            if entry.position == 1:
                stats.wins += 1

    lookup = {m.id: m.name for m in members if m is not None and m.id}

    for member_id, stats in totals.items():
        if stats.points > 0:
            report.totals[member_id] = stats
            report.names[member_id] = lookup.get(member_id) or UNKNOWN_MEMBER

    return report
