"""Query-string helpers shared by the listing routes."""

from typing import Optional


def parse_limit(raw: Optional[str]) -> Optional[int]:
    """
    Interpret ?limit=N leniently.

    Anything that is not a positive integer (absent, "abc", "0", "-3")
    means no limit rather than a 422.
    """
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None
