"""Adapter for tab-separated member rosters (e.g. a handicap secretary's sheet).

Header row required; columns are matched by name (case-insensitive):
    name, id, gender, handicap

Rows without a name are skipped. A missing id falls back to the name so
results keyed by name still line up.
"""

from ..core.models import Member, SeasonData
from .base import BaseAdapter


# Map common column name variations to our canonical names
COLUMN_ALIASES = {
    'name': 'name',
    'member': 'name',
    'player': 'name',
    'fullname': 'name',
    'id': 'id',
    'memberid': 'id',
    'uid': 'id',
    'gender': 'gender',
    'sex': 'gender',
    'handicap': 'handicap',
    'handicapindex': 'handicap',
    'hi': 'handicap',
    'index': 'handicap',
    'whs': 'handicap',
    'whsindex': 'handicap',
}


class RosterAdapter(BaseAdapter):
    """Parse a TSV member roster."""

    def parse(self, data_path: str) -> SeasonData:
        with open(data_path, 'r', encoding='utf-8') as f:
            content = f.read().strip()
        return SeasonData(members=self.parse_members(content))

    def parse_members(self, content: str) -> list[Member]:
        lines = content.split('\n')
        if len(lines) < 2:
            return []

        header = lines[0].strip().split('\t')
        col_map = {}
        for i, col in enumerate(header):
            canonical = COLUMN_ALIASES.get(col.lower().strip().replace(' ', '').replace('_', ''))
            if canonical and canonical not in col_map:
                col_map[canonical] = i

        members = []
        for line in lines[1:]:
            if not line.strip():
                continue
            parts = line.rstrip('\r\n').split('\t')

            def get_col(name: str, default=''):
                idx = col_map.get(name)
                if idx is not None and idx < len(parts):
                    return parts[idx].strip()
                return default

            name = get_col('name')
            if not name:
                continue

            members.append(Member(
                id=get_col('id') or name,
                name=name,
                gender=self._parse_gender(get_col('gender')),
                handicap_index=self._parse_number(get_col('handicap')),
            ))

        return members
