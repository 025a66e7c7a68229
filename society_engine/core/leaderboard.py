"""Resolve one event's raw results into a strict finishing order.

Stableford-style events rank the highest points first; strokeplay and
medal events rank the lowest gross score first. Equal scores do NOT share
a position: the entry listed first in the results keeps the lower position
(no countback is applied).
"""

from .models import Event, LeaderboardEntry


STABLEFORD_FORMATS = {'stableford', 'both'}


def is_stableford_format(fmt: str | None) -> bool:
    return (fmt or '').strip().lower() in STABLEFORD_FORMATS


def _score_for(result, stableford_format: bool):
    """Pick the (score, score_type) used to rank one result, or None."""
    if stableford_format and result.stableford is not None:
        return result.stableford, 'stableford'
    if result.gross_score is not None:
        return result.gross_score, 'strokeplay'
    if result.net_score is not None:
        return result.net_score, 'strokeplay'
    return None


def calculate_event_leaderboard(event: Event) -> list[LeaderboardEntry]:
    """Return leaderboard entries with positions 1..N, best first."""
    if event is None or not event.results:
        return []

    stableford_format = is_stableford_format(event.format)
    scored = []
    for member_id, result in event.results.items():
        if not member_id or result is None:
            continue
        picked = _score_for(result, stableford_format)
        if picked is not None:
            scored.append((member_id, picked[0], picked[1]))

    if not scored:
        return []

    # Direction follows the first usable entry, as results are entered per format
    descending = scored[0][2] == 'stableford'
    # sorted() is stable, so tied scores keep their input order
    if descending:
        scored = sorted(scored, key=lambda s: -s[1])
    else:
        scored = sorted(scored, key=lambda s: s[1])

    return [
        LeaderboardEntry(member_id=member_id, position=i + 1,
                         score=score, score_type=score_type)
        for i, (member_id, score, score_type) in enumerate(scored)
    ]
