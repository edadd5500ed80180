
"""Input validation utilities"""
import re
from typing import Optional
from .parsers import parse_duration


def validate_namespace(namespace: str) -> tuple[bool, Optional[str]]:
    """
    Validate Kubernetes namespace name

    Rules:
    - Lowercase alphanumeric or '-'
    - Start and end with alphanumeric
    - Max 63 characters

    Returns: (is_valid, error_message)
    """
    if not namespace:
        return False, "Namespace cannot be empty"

    if len(namespace) > 63:
        return False, "Namespace name too long (max 63 characters)"

    if not re.match(r'^[a-z0-9]([a-z0-9-]*[a-z0-9])?$', namespace):
        return False, f"Invalid namespace '{namespace}'"

    return True, None


def validate_since(since: str) -> tuple[bool, Optional[str]]:
    """
    Validate the recency window passed to kubectl logs --since

    Examples:
        >>> validate_since("10s")
        (True, None)
        >>> validate_since("ten")
        (False, "Invalid duration 'ten'...")
    """
    if parse_duration(since) is None:
        return False, f"Invalid duration '{since}' (expected e.g. 10s, 5m, 1h)"
    return True, None


def validate_tail(tail: int) -> tuple[bool, Optional[str]]:
    """Tail must be -1 (all lines) or a non-negative line count"""
    if tail < -1:
        return False, f"Invalid tail '{tail}' (use -1 for all lines)"
    return True, None


def validate_color_indices(indices: list[int], palette_size: int) -> tuple[bool, Optional[str]]:
    """
    Validate color indices to skip

    Examples:
        >>> validate_color_indices([7, 8], 256)
        (True, None)
        >>> validate_color_indices([300], 256)
        (False, 'Color index 300 out of range (1-255)')
    """
    for index in indices:
        if not (1 <= index < palette_size):
            return False, f"Color index {index} out of range (1-{palette_size - 1})"
    return True, None
