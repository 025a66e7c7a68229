#!/usr/bin/env python3
"""CLI entry point for a golf society season.

Usage:
    python process_season.py --data society_export.json --season 2025 \\
        --oom-only --output ./output/

    python process_season.py --data society_export.json --event evt-7 \\
        --start-time 08:30 --interval 9 --output ./output/
"""

import argparse
import datetime
import os
import sys

# Add parent directory to path for imports (skip when frozen by PyInstaller)
if not getattr(sys, 'frozen', False):
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from society_engine.core.models import SeasonConfig, TeePlayer
from society_engine.core.handicap import recommended_allowance
from society_engine.core.season import aggregate_season
from society_engine.core.ranking import rank_standings
from society_engine.core.tee_sheet import build_tee_sheet, format_hole_numbers
from society_engine.core.output_generator import (
    generate_event_leaderboard_csv, generate_standings_csv,
    generate_tee_sheet_txt, print_season_report
)
from society_engine.adapters.json_adapter import JsonAdapter
from society_engine.adapters.roster_adapter import RosterAdapter


def merge_members(members: list, roster: list) -> list:
    """Roster rows replace export members with the same id; new ids are added."""
    merged = {m.id: m for m in members}
    for m in roster:
        merged[m.id] = m
    return list(merged.values())


def tee_players_for(event, members: list) -> tuple[list, list]:
    """Build TeePlayers for an event's field. Returns (players, warnings)."""
    lookup = {m.id: m for m in members}
    player_ids = event.player_ids or list(event.player_groups) or list(event.results)

    players = []
    warnings = []
    for member_id in player_ids:
        member = lookup.get(member_id)
        if member is None:
            warnings.append(f'Player {member_id} on event {event.id} is not on the roster')
            continue
        players.append(TeePlayer(
            id=member.id,
            name=member.name,
            handicap_index=member.handicap_index,
            gender=member.gender,
            group=event.player_groups.get(member.id),
        ))
    return players, warnings


def main():
    parser = argparse.ArgumentParser(description='Compute golf society standings and tee sheets')
    parser.add_argument('--data', nargs='+', required=True,
                        help='Society export JSON file(s) or directories')
    parser.add_argument('--output', required=True, help='Output directory for generated files')
    parser.add_argument('--season', type=int, default=datetime.datetime.now().year,
                        help='Season year (default: current year)')
    parser.add_argument('--all-seasons', action='store_true',
                        help='Ignore event dates and count every published event')
    parser.add_argument('--oom-only', action='store_true',
                        help='Only count events classified as Order of Merit')
    parser.add_argument('--society', default='', help='Society name for titles')
    parser.add_argument('--roster', default=None,
                        help='TSV roster (name, id, gender, handicap) overriding export members')
    parser.add_argument('--event', default=None,
                        help='Event id to build a tee sheet and leaderboard for')
    parser.add_argument('--start-time', default='08:00', help='First tee time HH:MM (default 08:00)')
    parser.add_argument('--interval', type=float, default=None,
                        help='Minutes between tee times (default 10)')
    parser.add_argument('--allowance', type=float, default=None,
                        help='Playing handicap allowance, e.g. 0.95 '
                             '(default: event setting, else the format recommendation)')
    parser.add_argument('--regroup', action='store_true',
                        help='Ignore saved tee sheet groups and auto-group by handicap')

    args = parser.parse_args()

    config = SeasonConfig(
        society_name=args.society,
        season_year=None if args.all_seasons else args.season,
        oom_only=args.oom_only,
        allowance=args.allowance,
        start_time=args.start_time,
        interval=args.interval,
    )

    # Parse data (supports multiple files via nargs='+')
    adapter = JsonAdapter()
    members, events, warnings = [], [], []
    for data_path in args.data:
        print(f"Parsing {data_path}...")
        batch = adapter.parse(data_path)
        print(f"  -> {len(batch.members)} members, {len(batch.events)} events")
        members.extend(batch.members)
        events.extend(batch.events)
        warnings.extend(batch.warnings)

    if args.roster:
        try:
            roster = RosterAdapter().parse(args.roster).members
            members = merge_members(members, roster)
            print(f"Roster applied: {len(roster)} members from {args.roster}")
        except FileNotFoundError:
            print(f"Warning: Roster file not found: {args.roster}")

    os.makedirs(args.output, exist_ok=True)

    # Standings
    report = aggregate_season(events, members, config.season_year, config.oom_only)
    print_season_report(report, warnings)
    standings = rank_standings(report.totals, report.names)

    label = config.season_year if config.season_year is not None else 'all'
    standings_path = os.path.join(args.output, f'order_of_merit_{label}.csv')
    generate_standings_csv(standings, standings_path)
    print(f"Generated {standings_path} ({len(standings)} members)")

    if not args.event:
        print("\nDone!")
        return

    # Tee sheet + leaderboard for one event
    event = next((e for e in events if e.id == args.event), None)
    if event is None:
        print(f"Unknown event id: {args.event}")
        sys.exit(1)

    players, player_warnings = tee_players_for(event, members)
    for w in player_warnings:
        print(f"Warning: {w}")

    allowance = config.allowance
    if allowance is None:
        allowance = event.handicap_allowance
    if allowance is None:
        allowance = recommended_allowance(event.format)
    pre_grouped = bool(event.player_groups) and not args.regroup
    groups = build_tee_sheet(players, event.mens_tee, event.ladies_tee,
                             allowance=allowance,
                             start_time=config.start_time,
                             interval=config.interval,
                             pre_grouped=pre_grouped)
    if event.mens_tee is None and event.ladies_tee is None:
        print(f"Warning: event {event.id} has no tee ratings; handicaps shown as '-'")

    title = ' - '.join(t for t in [config.society_name, event.name or event.id, event.date] if t)
    nearest_pin = format_hole_numbers(event.nearest_pin_holes) if event.nearest_pin_holes else None
    longest_drive = (format_hole_numbers(event.longest_drive_holes)
                     if event.longest_drive_holes else None)
    tee_sheet_path = os.path.join(args.output, f'tee_sheet_{event.id}.txt')
    generate_tee_sheet_txt(groups, tee_sheet_path, title=title,
                           nearest_pin=nearest_pin, longest_drive=longest_drive)
    print(f"Generated {tee_sheet_path} ({len(groups)} groups)")

    names = {m.id: m.name for m in members}
    leaderboard_path = os.path.join(args.output, f'leaderboard_{event.id}.csv')
    generate_event_leaderboard_csv(event, names, leaderboard_path)
    print(f"Generated {leaderboard_path}")

    print("\nDone!")


if __name__ == '__main__':
    main()
