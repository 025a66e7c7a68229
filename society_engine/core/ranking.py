"""Ranking engine: turn season totals into ranked Order of Merit standings.

Sort order:
    1. Total points      (higher first)
    2. Wins              (more first)
    3. Events played     (more first; rewards turning up)
    4. Member name       (alphabetical, keeps output deterministic)

Only equal points share a rank. Wins and events played order the table
but never split or merge a rank:

    points [40, 40, 35, 30, 30] -> ranks [1, 1, 3, 4, 4]
"""

from .models import StandingsEntry


def _sort_key(entry: StandingsEntry):
    return (-entry.points, -entry.wins, -entry.played, entry.member_name.lower())


def assign_ranks(entries: list[StandingsEntry]) -> list[StandingsEntry]:
    """Set ``rank`` on an already-sorted list (shared on equal points)."""
    for i, entry in enumerate(entries):
        if i > 0 and entry.points == entries[i - 1].points:
            entry.rank = entries[i - 1].rank
        else:
            entry.rank = i + 1
    return entries


def rank_standings(totals: dict, names: dict | None = None) -> list[StandingsEntry]:
    """Build a fresh, ranked standings list from member_id -> MemberTotals."""
    names = names or {}
    entries = [
        StandingsEntry(
            member_id=member_id,
            member_name=names.get(member_id, 'Unknown'),
            points=stats.points,
            played=stats.played,
            wins=stats.wins,
        )
        for member_id, stats in totals.items()
    ]
    entries.sort(key=_sort_key)
    return assign_ranks(entries)
