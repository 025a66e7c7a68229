"""Tests for points, event leaderboards, season aggregation and ranking."""

import os
import sys
import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from society_engine.core.models import Event, EventResult, Member, MemberTotals
from society_engine.core.points import POINTS_TABLE, points_for_position
from society_engine.core.leaderboard import calculate_event_leaderboard
from society_engine.core.season import aggregate_season, event_year, eligible_events
from society_engine.core.ranking import assign_ranks, rank_standings
from society_engine.adapters.json_adapter import JsonAdapter

REFERENCE_DIR = os.path.join(PROJECT_ROOT, 'tests', 'reference_data')


def order_of_merit(events, members, season_year=None, oom_only=False):
    report = aggregate_season(events, members, season_year, oom_only)
    return rank_standings(report.totals, report.names)


def stableford_event(event_id, scores, date='2025-05-01', status='published',
                     is_oom=True, fmt='stableford'):
    """Build an event from {member_id: stableford points} in input order."""
    return Event(
        id=event_id, date=date, format=fmt, status=status, is_oom=is_oom,
        results={m: EventResult(member_id=m, stableford=s) for m, s in scores.items()},
    )


def medal_event(event_id, scores, date='2025-05-01'):
    return Event(
        id=event_id, date=date, format='strokeplay', status='published', is_oom=True,
        results={m: EventResult(member_id=m, gross_score=s) for m, s in scores.items()},
    )


@pytest.fixture(scope='module')
def society():
    data = JsonAdapter().parse(os.path.join(REFERENCE_DIR, 'society_export.json'))
    return data.members, data.events


# ─── Points table ───────────────────────────────────────────────────

class TestPointsTable:
    def test_top_ten(self):
        assert [points_for_position(p) for p in range(1, 11)] == \
            [25, 18, 15, 12, 10, 8, 6, 4, 2, 1]

    def test_monotonic(self):
        for p1 in range(1, 11):
            for p2 in range(p1 + 1, 11):
                assert points_for_position(p1) >= points_for_position(p2)

    def test_outside_top_ten_scores_nothing(self):
        for p in (11, 12, 50, 0, -1, None):
            assert points_for_position(p) == 0, f"Position {p!r} should score 0"

    def test_table_size(self):
        assert len(POINTS_TABLE) == 10


# ─── Event leaderboard ──────────────────────────────────────────────

class TestEventLeaderboard:
    def test_stableford_ties_keep_input_order(self):
        event = stableford_event('e', {'A': 40, 'B': 38, 'C': 40})
        board = calculate_event_leaderboard(event)
        assert [(e.member_id, e.position) for e in board] == [('A', 1), ('C', 2), ('B', 3)]

    def test_strokeplay_lowest_gross_wins(self):
        board = calculate_event_leaderboard(medal_event('e', {'A': 88, 'B': 79, 'C': 85}))
        assert [e.member_id for e in board] == ['B', 'C', 'A']
        assert all(e.score_type == 'strokeplay' for e in board)

    def test_positions_have_no_gaps(self):
        board = calculate_event_leaderboard(medal_event('e', {'A': 80, 'B': 80, 'C': 80, 'D': 90}))
        assert [e.position for e in board] == [1, 2, 3, 4]

    def test_empty_results(self):
        assert calculate_event_leaderboard(Event(id='e')) == []

    def test_none_event(self):
        assert calculate_event_leaderboard(None) == []

    def test_results_without_score_are_dropped(self):
        event = stableford_event('e', {'A': 30})
        event.results['B'] = EventResult(member_id='B')
        board = calculate_event_leaderboard(event)
        assert [e.member_id for e in board] == ['A']

    def test_stableford_format_falls_back_to_gross(self):
        event = Event(id='e', format='stableford', results={
            'A': EventResult(member_id='A', gross_score=90),
            'B': EventResult(member_id='B', gross_score=82),
        })
        board = calculate_event_leaderboard(event)
        assert [e.member_id for e in board] == ['B', 'A']

    def test_net_score_used_without_gross(self):
        event = Event(id='e', format='medal', results={
            'A': EventResult(member_id='A', net_score=70),
            'B': EventResult(member_id='B', net_score=66),
        })
        assert [e.member_id for e in calculate_event_leaderboard(event)] == ['B', 'A']

    def test_both_format_uses_stableford(self):
        event = Event(id='e', format='Both', results={
            'A': EventResult(member_id='A', gross_score=80, stableford=34),
            'B': EventResult(member_id='B', gross_score=90, stableford=37),
        })
        assert [e.member_id for e in calculate_event_leaderboard(event)] == ['B', 'A']


# ─── Season aggregation ─────────────────────────────────────────────

class TestEventYear:
    def test_iso_date(self):
        assert event_year('2025-04-12') == 2025

    def test_iso_datetime_with_zone(self):
        assert event_year('2025-06-14T09:00:00Z') == 2025

    def test_leading_year(self):
        assert event_year('2024/13/45 tbc') == 2024

    def test_unparsable(self):
        for raw in ('', '   ', None, 'sometime in summer', '0999-01-01x'):
            assert event_year(raw) is None, f"{raw!r} should not parse"


class TestSeasonAggregation:
    def test_alice_scenario(self):
        events = [
            stableford_event('e1', {'alice': 40, 'bob': 30}),
            stableford_event('e2', {'alice': 38, 'bob': 37}),
            stableford_event('e3', {'bob': 41, 'carl': 39, 'alice': 35}),
        ]
        report = aggregate_season(events, [Member(id='alice', name='Alice')], 2025)
        alice = report.totals['alice']
        assert (alice.points, alice.wins, alice.played) == (65, 2, 3)
        assert report.names['alice'] == 'Alice'

    def test_draft_never_counts(self):
        events = [stableford_event('d', {'A': 45, 'B': 40}, status='draft')]
        report = aggregate_season(events, [], 2025)
        assert report.totals == {}
        assert report.events_counted == []

    def test_other_season_excluded(self):
        events = [stableford_event('old', {'A': 40}, date='2024-09-01'),
                  stableford_event('new', {'B': 40}, date='2025-03-01')]
        report = aggregate_season(events, [], 2025)
        assert list(report.totals) == ['B']

    def test_unparsable_date_skipped_and_reported(self):
        events = [stableford_event('bad', {'A': 40}, date='not a date'),
                  stableford_event('good', {'B': 40})]
        report = aggregate_season(events, [], 2025)
        assert list(report.totals) == ['B']
        assert [e for e, _ in report.skipped_events] == ['bad']

    def test_no_season_filter_counts_every_published_event(self):
        events = [stableford_event('bad', {'A': 40}, date='not a date'),
                  stableford_event('old', {'A': 40}, date='2019-01-01')]
        report = aggregate_season(events, [])
        assert report.totals['A'].played == 2
        assert report.skipped_events == []

    def test_oom_only(self):
        events = [stableford_event('oom', {'A': 40}),
                  stableford_event('friendly', {'B': 40}, is_oom=False)]
        assert list(aggregate_season(events, [], 2025, oom_only=True).totals) == ['A']
        assert set(aggregate_season(events, [], 2025, oom_only=False).totals) == {'A', 'B'}

    def test_zero_point_members_excluded(self):
        scores = {f'p{i}': 50 - i for i in range(1, 13)}
        report = aggregate_season([stableford_event('big', scores)], [], 2025)
        assert len(report.totals) == 10
        assert 'p11' not in report.totals and 'p12' not in report.totals

    def test_unknown_member_named(self):
        report = aggregate_season([stableford_event('e', {'guest-1': 40})], [], 2025)
        assert report.names['guest-1'] == 'Unknown'

    def test_empty_inputs(self):
        report = aggregate_season([], [], 2025)
        assert report.totals == {} and report.names == {}
        assert aggregate_season(None, None).totals == {}

    def test_idempotent_and_inputs_untouched(self, society):
        members, events = society
        first = aggregate_season(events, members, 2025)
        second = aggregate_season(events, members, 2025)
        assert first == second
        assert events[0].results['m1'].stableford == 40

    def test_eligible_events_filters(self, society):
        _, events = society
        skipped = []
        kept = eligible_events(events, 2025, oom_only=True, skipped=skipped)
        assert [e.id for e in kept] == ['e1', 'e2', 'e3']
        assert [e for e, _ in skipped] == ['e5']


# ─── Ranking ────────────────────────────────────────────────────────

def totals_from(points_list):
    return {f'm{i}': MemberTotals(points=p, played=1, wins=0)
            for i, p in enumerate(points_list)}


class TestRanking:
    def test_shared_ranks_skip_places(self):
        entries = rank_standings(totals_from([50, 50, 40]))
        assert [e.rank for e in entries] == [1, 1, 3]

    def test_longer_tie_pattern(self):
        entries = rank_standings(totals_from([30, 40, 35, 40, 30]))
        assert [e.points for e in entries] == [40, 40, 35, 30, 30]
        assert [e.rank for e in entries] == [1, 1, 3, 4, 4]

    def test_wins_break_ties_but_share_rank(self):
        totals = {
            'a': MemberTotals(points=40, played=3, wins=0),
            'b': MemberTotals(points=40, played=3, wins=1),
        }
        entries = rank_standings(totals, {'a': 'Amy', 'b': 'Ben'})
        assert [e.member_id for e in entries] == ['b', 'a']
        assert [e.rank for e in entries] == [1, 1]

    def test_more_events_played_ranks_higher(self):
        totals = {
            'few': MemberTotals(points=30, played=2, wins=1),
            'many': MemberTotals(points=30, played=4, wins=1),
        }
        entries = rank_standings(totals, {'few': 'Fay', 'many': 'Max'})
        assert [e.member_id for e in entries] == ['many', 'few']

    def test_name_is_final_key(self):
        totals = {
            'z': MemberTotals(points=10, played=1, wins=0),
            'y': MemberTotals(points=10, played=1, wins=0),
        }
        entries = rank_standings(totals, {'z': 'Adam', 'y': 'Zoe'})
        assert [e.member_name for e in entries] == ['Adam', 'Zoe']

    def test_assign_ranks_empty(self):
        assert assign_ranks([]) == []

    def test_empty_totals(self):
        assert rank_standings({}) == []


class TestOrderOfMeritFromExport:
    def test_oom_only_2025(self, society):
        members, events = society
        table = order_of_merit(events, members, 2025, oom_only=True)
        rows = [(e.rank, e.member_name, e.points, e.wins, e.played) for e in table]
        assert rows == [
            (1, 'Alice Smith', 65, 2, 3),
            (2, 'Dave Brown', 40, 1, 2),
            (3, 'Bob Jones', 36, 0, 2),
            (4, 'Carol White', 18, 0, 1),
            (5, 'Eve Green', 15, 0, 1),
        ]

    def test_all_events_2025(self, society):
        members, events = society
        table = order_of_merit(events, members, 2025, oom_only=False)
        rows = [(e.rank, e.member_name, e.points) for e in table]
        assert rows == [
            (1, 'Alice Smith', 65),
            (2, 'Bob Jones', 54),
            (3, 'Dave Brown', 40),
            (3, 'Eve Green', 40),
            (5, 'Carol White', 18),
        ]

    def test_fresh_list_each_run(self, society):
        members, events = society
        first = order_of_merit(events, members, 2025)
        second = order_of_merit(events, members, 2025)
        assert first == second
        assert first is not second and first[0] is not second[0]
