
"""Parsing utilities for command line values"""
import re
from typing import List, Optional
from datetime import timedelta


def parse_duration(duration: str) -> Optional[timedelta]:
    """
    Parse duration string to timedelta

    Examples:
        >>> parse_duration("5m")
        timedelta(minutes=5)
        >>> parse_duration("2h30m")
        timedelta(hours=2, minutes=30)
    """
    if not duration:
        return None

    if not re.fullmatch(r'(\d+[smhd])+', duration.lower()):
        return None

    units = {
        's': 'seconds',
        'm': 'minutes',
        'h': 'hours',
        'd': 'days'
    }

    kwargs = {}
    for value, unit in re.findall(r'(\d+)([smhd])', duration.lower()):
        kwargs[units[unit]] = kwargs.get(units[unit], 0) + int(value)

    return timedelta(**kwargs)


def parse_csv(value: Optional[str]) -> List[str]:
    """
    Split a comma-separated option, dropping blanks

    Examples:
        >>> parse_csv("dev, prod,,")
        ['dev', 'prod']
    """
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def parse_color_indices(value: Optional[str]) -> List[int]:
    """
    Parse a comma-separated list of color indices

    Examples:
        >>> parse_color_indices("7,8")
        [7, 8]
    """
    return [int(item) for item in parse_csv(value)]


def parse_bool(value) -> bool:
    """Parse 'true'/'false' style flags from config and environment"""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")
