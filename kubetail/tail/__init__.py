"""Resolve, color, launch and merge pod log streams"""

from .models import ColorAssignment, ContainerRef, StreamHandle, Target

__all__ = [
    'Target',
    'ContainerRef',
    'ColorAssignment',
    'StreamHandle',
]
