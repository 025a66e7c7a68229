"""Adapter for society JSON exports (members, events, tee sets).

Accepts exports from either backend the app has used, so field names come
in camelCase (Firestore: resultsStatus, isOOM, maleTeeSetId) or snake_case
(Supabase: results_status, is_oom, male_tee_set_id). Every spelling is
resolved here; the core only ever sees the dataclasses in core.models.

data_path can be:
  - A single file holding {"members": [...], "events": [...], "teeSets": [...]}
  - A directory (all .json files inside are loaded and merged in name order)
"""

import glob
import json
import os

from ..core.handicap import event_allowance
from ..core.models import Event, EventResult, Member, SeasonData, TeeBlock
from ..core.tee_sheet import parse_hole_numbers
from .base import BaseAdapter


OOM_CLASSIFICATIONS = {'oom', 'order_of_merit', 'order of merit', 'major'}


class JsonAdapter(BaseAdapter):
    """Parse society members, events and results from JSON."""

    def parse(self, data_path: str) -> SeasonData:
        if os.path.isdir(data_path):
            data = SeasonData()
            for fpath in sorted(glob.glob(os.path.join(data_path, '*.json'))):
                batch = self._parse_single_file(fpath)
                data.members.extend(batch.members)
                data.events.extend(batch.events)
                data.warnings.extend(batch.warnings)
            return data
        return self._parse_single_file(data_path)

    def _parse_single_file(self, data_path: str) -> SeasonData:
        with open(data_path, 'r', encoding='utf-8') as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                return SeasonData(warnings=[f'Invalid JSON in {data_path}: {e}'])

        # Unwrap double-encoded JSON (exports saved via JSON.stringify)
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError:
                return SeasonData(warnings=[f'Unreadable export: {data_path}'])

        return self.parse_export(raw)

    def parse_export(self, raw) -> SeasonData:
        """Normalize an already-loaded export object."""
        if isinstance(raw, list):
            # Bare list of events
            raw = {'events': raw}
        if not isinstance(raw, dict):
            return SeasonData(warnings=['Export is not a JSON object'])

        data = SeasonData()

        raw_members = self._get_field(raw, 'members', 'roster', default=[])
        for row in raw_members if isinstance(raw_members, list) else []:
            if isinstance(row, dict):
                member = self._extract_member(row)
                if member is not None:
                    data.members.append(member)

        raw_tees = self._get_field(raw, 'teeSets', 'tee_sets', 'tees', default=[])
        tees_by_id = {}
        for row in raw_tees if isinstance(raw_tees, list) else []:
            if not isinstance(row, dict):
                continue
            tee_id = self._get_field(row, 'id', 'teeSetId', 'tee_set_id')
            tee = self._extract_tee(row)
            if tee_id is not None and tee is not None:
                tees_by_id[str(tee_id)] = tee

        raw_events = self._get_field(raw, 'events', default=[])
        for row in raw_events if isinstance(raw_events, list) else []:
            if not isinstance(row, dict):
                continue
            event = self._extract_event(row, tees_by_id)
            if event is None:
                data.warnings.append(f'Skipped event without id: {row.get("name", "?")}')
                continue
            data.events.append(event)

        return data

    def _extract_member(self, row: dict) -> Member | None:
        member_id = self._get_field(row, 'id', 'memberId', 'member_id', 'uid')
        if member_id is None or str(member_id).strip() == '':
            return None
        name = self._get_field(row, 'name', 'displayName', 'display_name',
                               'fullName', 'full_name', default='')
        return Member(
            id=str(member_id),
            name=str(name).strip() or 'Member',
            gender=self._parse_gender(self._get_field(row, 'gender', 'sex')),
            handicap_index=self._parse_number(self._get_field(
                row, 'handicapIndex', 'handicap_index', 'handicap', 'whsIndex', 'hi')),
        )

    def _extract_tee(self, row: dict, prefix: str = '') -> TeeBlock | None:
        """Build a TeeBlock; None unless par, rating and slope all parse.

        ``prefix`` reads inline event tee fields, e.g. "ladies" for
        ladiesPar / ladies_course_rating.
        """
        if prefix:
            par = self._get_field(row, f'{prefix}Par', f'{prefix}_par')
            rating = self._get_field(row, f'{prefix}CourseRating', f'{prefix}_course_rating')
            slope = self._get_field(row, f'{prefix}SlopeRating', f'{prefix}_slope_rating')
        else:
            par = self._get_field(row, 'par')
            rating = self._get_field(row, 'courseRating', 'course_rating', 'rating')
            slope = self._get_field(row, 'slopeRating', 'slope_rating', 'slope')

        par, rating, slope = (self._parse_number(v) for v in (par, rating, slope))
        if par is None or rating is None or slope is None:
            return None

        if prefix:
            name = self._get_field(row, f'{prefix}TeeName', f'{prefix}_tee_name', default='')
            gender = 'female'
        else:
            name = self._get_field(row, 'teeColor', 'tee_color', 'teeName', 'tee_name',
                                   'name', default='')
            gender = self._parse_gender(self._get_field(row, 'appliesTo', 'applies_to',
                                                        'gender'))
        return TeeBlock(par=par, course_rating=rating, slope_rating=slope,
                        name=str(name), gender=gender)

    def _extract_event(self, row: dict, tees_by_id: dict) -> Event | None:
        event_id = self._get_field(row, 'id', 'eventId', 'event_id')
        if event_id is None or str(event_id).strip() == '':
            return None

        status = str(self._get_field(row, 'resultsStatus', 'results_status',
                                     'status', default='draft')).strip().lower()

        classification = self._get_field(row, 'isOOM', 'is_oom', 'oom')
        if classification is None:
            label = self._get_field(row, 'classification', 'eventType', 'event_type',
                                    default='')
            is_oom = str(label).strip().lower() in OOM_CLASSIFICATIONS
        else:
            is_oom = self._parse_bool(classification)

        mens_tee = self._linked_tee(row, tees_by_id, 'maleTeeSetId', 'male_tee_set_id')
        if mens_tee is None:
            mens_tee = self._extract_tee(row)
        ladies_tee = self._linked_tee(row, tees_by_id, 'femaleTeeSetId', 'female_tee_set_id')
        if ladies_tee is None:
            ladies_tee = self._extract_tee(row, prefix='ladies')

        pct = self._parse_number(self._get_field(row, 'handicapAllowancePct',
                                                 'handicap_allowance_pct'))
        fraction = self._parse_number(self._get_field(row, 'handicapAllowance',
                                                      'handicap_allowance'))
        allowance = event_allowance(pct, fraction) if (pct or fraction is not None) else None

        raw_players = self._get_field(row, 'playerIds', 'player_ids', default=[])

        return Event(
            id=str(event_id),
            name=str(self._get_field(row, 'name', 'title', default='')),
            date=str(self._get_field(row, 'date', 'eventDate', 'event_date', default='')),
            format=str(self._get_field(row, 'format', 'scoringFormat', 'scoring_format',
                                       default='stableford')).strip().lower(),
            is_oom=is_oom,
            status=status,
            results=self._extract_results(self._get_field(row, 'results', default={})),
            mens_tee=mens_tee,
            ladies_tee=ladies_tee,
            handicap_allowance=allowance,
            player_ids=[str(p) for p in raw_players] if isinstance(raw_players, list) else [],
            player_groups=self._extract_player_groups(
                self._get_field(row, 'teeSheet', 'tee_sheet')),
            nearest_pin_holes=self._parse_holes(self._get_field(
                row, 'nearestPinHoles', 'nearestToPinHoles', 'nearest_pin_holes')),
            longest_drive_holes=self._parse_holes(self._get_field(
                row, 'longestDriveHoles', 'longest_drive_holes')),
        )

    def _linked_tee(self, row: dict, tees_by_id: dict, *keys) -> TeeBlock | None:
        tee_id = self._get_field(row, *keys)
        if tee_id is None:
            return None
        return tees_by_id.get(str(tee_id))

    def _extract_results(self, raw) -> dict:
        """Results keyed by member id, either from an object or a row list."""
        if isinstance(raw, dict):
            rows = [(member_id, value) for member_id, value in raw.items()]
        elif isinstance(raw, list):
            rows = [(self._get_field(r, 'memberId', 'member_id', 'id'), r)
                    for r in raw if isinstance(r, dict)]
        else:
            return {}

        results = {}
        for member_id, value in rows:
            if member_id is None or str(member_id).strip() == '':
                continue
            member_id = str(member_id)
            if isinstance(value, dict):
                result = EventResult(
                    member_id=member_id,
                    gross_score=self._parse_number(self._get_field(
                        value, 'grossScore', 'gross_score', 'gross', 'strokeplay')),
                    net_score=self._parse_number(self._get_field(
                        value, 'netScore', 'net_score', 'net')),
                    stableford=self._parse_number(self._get_field(
                        value, 'stableford', 'stablefordPoints', 'stableford_points')),
                )
            else:
                # Bare number: treated as the format's headline score
                score = self._parse_number(value)
                result = EventResult(member_id=member_id, gross_score=score,
                                     stableford=score)
            results[member_id] = result
        return results

    @staticmethod
    def _extract_player_groups(tee_sheet) -> dict:
        """Saved tee sheet groups -> {member_id: group number (1-based)}."""
        if not isinstance(tee_sheet, dict):
            return {}
        groups = tee_sheet.get('groups')
        if not isinstance(groups, list):
            return {}
        player_groups = {}
        for i, group in enumerate(groups):
            players = group.get('players') if isinstance(group, dict) else None
            for member_id in players or []:
                player_groups.setdefault(str(member_id), i + 1)
        return player_groups

    def _parse_holes(self, raw) -> list[int]:
        if raw is None:
            return []
        if isinstance(raw, list):
            return parse_hole_numbers(','.join(str(h) for h in raw))
        return parse_hole_numbers(str(raw))
