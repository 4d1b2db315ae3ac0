"""
Best-effort player-name lookup for free-text queries.

The pattern looks for two or more capitalised words ("Jalon Moore", "Shai
O'neal"). It is lossy: "De'Andre Smith" comes back as "Andre Smith", and
hyphenated surnames are cut at the hyphen. Lowercase input, single names and
"McDonald"-style capitals are not recognised at all, in which case callers
fall back to a team-wide listing.
"""

import re
from typing import Optional

FULL_NAME_RE = re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z']+)+)\b")


def extractPlayerName(query: Optional[str]) -> Optional[str]:
    """Return the first full-name-looking substring of `query`, or None."""
    if not query:
        return None
    m = FULL_NAME_RE.search(query)
    return m.group(1).strip() if m else None


def nameMatches(wanted: str, candidate: Optional[str]) -> bool:
    """
    Case-insensitive containment in either direction, so "Jalon Moore" matches
    "Jalon Moore Jr." and a record listed only as "Moore" still matches.
    """
    if not wanted or not candidate:
        return False
    a, b = wanted.lower(), candidate.lower()
    return a in b or b in a
