"""Abstract base adapter for reading society exports into engine records."""

from abc import ABC, abstractmethod

from ..core.models import SeasonData


GENDER_ALIASES = {
    'male': 'male', 'm': 'male', 'man': 'male', 'men': 'male', 'mens': 'male',
    'gents': 'male',
    'female': 'female', 'f': 'female', 'woman': 'female', 'women': 'female',
    'ladies': 'female', 'lady': 'female', 'l': 'female', 'w': 'female',
}


class BaseAdapter(ABC):
    @abstractmethod
    def parse(self, data_path: str) -> SeasonData:
        """Parse a data file and return a SeasonData.

        Members carry: id, name, gender, handicap_index.
        Events carry: id, name, date, format, is_oom, status, results
        (member_id -> EventResult) and optional tee blocks.
        """
        pass

    @staticmethod
    def _get_field(obj: dict, *keys, default=None):
        """Try multiple possible field names, return the first one found."""
        for key in keys:
            if key in obj and obj[key] is not None:
                return obj[key]
        return default

    @staticmethod
    def _parse_number(val):
        """Parse a numeric value. Returns None for empty, junk or non-finite."""
        if val is None or isinstance(val, bool):
            return None
        if isinstance(val, (int, float)):
            v = float(val)
        else:
            s = str(val).strip()
            if not s or s.lower() in ('nan', 'null', 'none', '-', 'n/a'):
                return None
            try:
                v = float(s)
            except ValueError:
                return None
        if v != v or v in (float('inf'), float('-inf')):
            return None
        return v

    @staticmethod
    def _parse_gender(val) -> str | None:
        if val is None:
            return None
        return GENDER_ALIASES.get(str(val).strip().lower())

    @staticmethod
    def _parse_bool(val) -> bool:
        if isinstance(val, bool):
            return val
        if val is None:
            return False
        return str(val).strip().lower() in ('1', 'true', 'yes', 'y', 'oom')
