"""Order of Merit points table (F1-style, top ten score)."""


POINTS_TABLE = {
    1: 25,
    2: 18,
    3: 15,
    4: 12,
    5: 10,
    6: 8,
    7: 6,
    8: 4,
    9: 2,
    10: 1,
}


def points_for_position(position) -> int:
    """Return OOM points for a finishing position; 0 outside the top ten."""
    return POINTS_TABLE.get(position, 0)
