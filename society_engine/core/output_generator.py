"""Output generator for standings and tee sheets.

Generates plain outputs from engine results:
  - Order of Merit standings CSV
  - Single-event leaderboard CSV
  - Tee sheet text (one block per group)
  - Console season report (events counted / skipped)
"""

import csv

from .leaderboard import calculate_event_leaderboard
from .points import points_for_position


NO_HANDICAP = '-'


def _fmt_handicap(value, decimals: int = 0) -> str:
    """Render a handicap, keeping "none on file" distinct from 0."""
    if value is None:
        return NO_HANDICAP
    if decimals:
        return f'{value:.{decimals}f}'
    return str(value)


def generate_standings_csv(entries: list, output_path: str):
    """Write ranked standings: Pos, Member, Points, Wins, Played."""
    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['Pos', 'Member', 'Points', 'Wins', 'Played'])
        for e in entries:
            writer.writerow([e.rank, e.member_name, e.points, e.wins, e.played])


def generate_event_leaderboard_csv(event, names: dict, output_path: str):
    """Write one event's finishing order with the OOM points each place earns."""
    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['Pos', 'Member', 'Score', 'Points'])
        for entry in calculate_event_leaderboard(event):
            score = entry.score
            if isinstance(score, float) and score.is_integer():
                score = int(score)
            writer.writerow([entry.position,
                             names.get(entry.member_id, 'Unknown'),
                             score,
                             points_for_position(entry.position)])


def generate_tee_sheet_txt(groups: list, output_path: str, title: str | None = None,
                           nearest_pin: str | None = None,
                           longest_drive: str | None = None):
    """Write a tee sheet: one block per group with HI / CH / PH columns."""
    lines = []
    if title:
        lines.append(title)
        lines.append('=' * len(title))
        lines.append('')

    for g in groups:
        lines.append(f'Group {g.group_number}  {g.tee_time}')
        for p in g.players:
            lines.append(f'  {p.name:<28} HI {_fmt_handicap(p.handicap_index, 1):>5}'
                         f'  CH {_fmt_handicap(p.course_handicap):>3}'
                         f'  PH {_fmt_handicap(p.playing_handicap):>3}')
        lines.append('')

    if nearest_pin:
        lines.append(f'Nearest the pin: {nearest_pin}')
    if longest_drive:
        lines.append(f'Longest drive: {longest_drive}')

    with open(output_path, 'w') as f:
        f.write('\n'.join(lines).rstrip('\n') + '\n')


def print_season_report(report, warnings: list | None = None) -> None:
    """Print a human-readable aggregation report to stdout."""
    print(f"\nSeason aggregation: {len(report.events_counted)} events counted, "
          f"{len(report.totals)} members on points, "
          f"{len(report.skipped_events)} events skipped")

    for event_id, reason in report.skipped_events:
        print(f"Warning: skipped event {event_id}: {reason}")

    for w in warnings or []:
        print(f"Warning: {w}")
