"""Data models for the golf society standings and handicap engine."""

from dataclasses import dataclass, field


@dataclass
class SeasonConfig:
    """Configuration for one standings / tee sheet run."""
    society_name: str = ''        # "Fairway Friends GS"
    season_year: int | None = None  # 2025; None = every season
    oom_only: bool = False        # Only count events flagged as Order of Merit
    allowance: float | None = None  # Playing handicap allowance, e.g. 0.95
    start_time: str = '08:00'     # First tee time "HH:MM"
    interval: int | None = 10     # Minutes between groups


@dataclass
class Member:
    id: str
    name: str
    gender: str | None = None             # "male", "female" or None
    handicap_index: float | None = None   # WHS index; None = nothing on file


@dataclass
class TeeBlock:
    """Rating data for one set of tees, scoped to a gender."""
    par: float
    course_rating: float
    slope_rating: float
    name: str = ''                 # Tee colour, e.g. "Yellow"
    gender: str | None = None


@dataclass
class EventResult:
    member_id: str
    gross_score: float | None = None
    net_score: float | None = None
    stableford: float | None = None


@dataclass
class Event:
    id: str
    name: str = ''
    date: str = ''
    format: str = 'stableford'     # "stableford", "strokeplay", "medal", "both"
    is_oom: bool = False
    status: str = 'draft'          # "draft" or "published"
    results: dict = field(default_factory=dict)  # member_id -> EventResult
    mens_tee: TeeBlock | None = None
    ladies_tee: TeeBlock | None = None
    handicap_allowance: float | None = None
    player_ids: list = field(default_factory=list)
    player_groups: dict = field(default_factory=dict)  # member_id -> saved group number
    nearest_pin_holes: list = field(default_factory=list)
    longest_drive_holes: list = field(default_factory=list)

    @property
    def is_published(self) -> bool:
        return self.status == 'published'


@dataclass
class SeasonData:
    """Everything an adapter extracts from a society export."""
    members: list = field(default_factory=list)   # [Member]
    events: list = field(default_factory=list)    # [Event]
    warnings: list = field(default_factory=list)  # [str]


@dataclass
class LeaderboardEntry:
    member_id: str
    position: int
    score: float
    score_type: str               # "stableford" or "strokeplay"


@dataclass
class MemberTotals:
    points: int = 0
    played: int = 0
    wins: int = 0


@dataclass
class StandingsEntry:
    member_id: str
    member_name: str
    points: int
    played: int
    wins: int
    rank: int = 0


@dataclass
class HandicapResult:
    handicap_index: float | None
    course_handicap: int | None
    playing_handicap: int | None


@dataclass
class TeePlayer:
    id: str
    name: str
    handicap_index: float | None = None
    course_handicap: int | None = None
    playing_handicap: int | None = None
    gender: str | None = None
    group: int | None = None      # Pre-assigned group number, if any


@dataclass
class TeeGroup:
    group_number: int
    tee_time: str
    players: list = field(default_factory=list)  # [TeePlayer]
