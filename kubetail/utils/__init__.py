"""Utility functions and helpers"""

from .parsers import *
from .validators import *

__all__ = [
    'parse_duration',
    'parse_csv',
    'parse_color_indices',
    'parse_bool',
    'validate_namespace',
    'validate_since',
    'validate_tail',
    'validate_color_indices',
]
