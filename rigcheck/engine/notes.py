"""Parsing helpers for free-text compatibility notes.

Content authors embed PSU advice in prose ("requires minimum 750W PSU for
stable operation"). Only that convention is recognised here.
"""

from __future__ import annotations

import re
from typing import Optional

PSU_RECOMMENDATION_PATTERN = re.compile(r"(\d+)\s*W\s*PSU", re.IGNORECASE)


def parse_psu_recommendation(note: Optional[str]) -> Optional[int]:
    """Return the PSU wattage recommended by a note, or None.

    Only the first match counts.
    """
    if not note:
        return None
    match = PSU_RECOMMENDATION_PATTERN.search(note)
    if match is None:
        return None
    return int(match.group(1))
