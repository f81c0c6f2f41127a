"""Shot time resolution: real capture times vs. indices parsed from shot ids.

OpenSfM only fills ``capture_time`` from EXIF. When no shot in the
reconstruction has one, the number embedded in each shot's file name
(``frame_00042.jpg`` -> 42) stands in as its time.
"""

from __future__ import annotations

import re
from typing import Mapping

from photorap.core.contracts import ShotSchema
from photorap.core.errors import ShotIndexError

_DIGITS = re.compile(r"[0-9]+")


def shots_have_timestamp(shots: Mapping[str, ShotSchema]) -> bool:
    """True if any shot carries a nonzero capture time.

    One real timestamp means the whole reconstruction is treated as timed;
    shots with ``capture_time == 0`` then keep 0 as their time.
    """
    return any(shot.capture_time != 0 for shot in shots.values())


def extract_shot_index(shot_id: str) -> int:
    """Parse the first run of digits in ``shot_id``."""
    match = _DIGITS.search(shot_id)
    if match is None:
        raise ShotIndexError(shot_id)
    return int(match.group())


def resolve_shot_time(shot_id: str, shot: ShotSchema, infer_timestamps: bool) -> float:
    # Parsed for every shot: an id without digits fails even when real
    # capture times are present.
    index = extract_shot_index(shot_id)
    if infer_timestamps:
        return float(index)
    return shot.capture_time
