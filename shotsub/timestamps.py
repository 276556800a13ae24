"""Parsing and formatting of the time ranges encoded in screenshot filenames.

Screenshots are named after the span of video they were taken from, for
example ``0_00_12_468__0_00_14_101.png``: two groups of hours, minutes,
seconds and milliseconds separated by a double underscore. Anything after the
second group is ignored.
"""

import re
from typing import Optional, Tuple

TIMESTAMP_PATTERN = re.compile(r'^(\d+_\d+_\d+_\d+)__(\d+_\d+_\d+_\d+)')

ZERO_TIMESTAMP = "00:00:00,000"


def match_timestamps(stem: str) -> Optional[Tuple[str, str]]:
    """
    Extracts the start and end timestamp groups from a filename stem.

    Args:
        stem: The filename without directory or extension.

    Returns:
        A (start, end) tuple of raw groups such as ('0_00_12_468', '0_00_14_101'),
        or None if the stem does not follow the pattern.
    """
    match = TIMESTAMP_PATTERN.match(stem)
    if match is None:
        return None
    return match.group(1), match.group(2)


def _to_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def format_timestamp(timestamp: str) -> str:
    """
    Formats a raw group into SRT time format HH:MM:SS,mmm.

    Empty fields are dropped. A group that does not then have four fields
    formats as 00:00:00,000, and a field that is not a number counts as zero.
    """
    components = [c for c in timestamp.split('_') if c]
    if len(components) != 4:
        return ZERO_TIMESTAMP
    hours, minutes, seconds, milliseconds = (_to_int(c) for c in components)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}"


def parse_timestamp(timestamp: str) -> Optional[float]:
    """Converts a raw group to seconds, or None if any field is not a number."""
    components = [c for c in timestamp.split('_') if c]
    if len(components) != 4:
        return None
    try:
        hours, minutes, seconds, milliseconds = (int(c) for c in components)
    except ValueError:
        return None
    return hours * 3600 + minutes * 60 + seconds + milliseconds / 1000.0
