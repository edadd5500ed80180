"""Import all command modules to register them"""

from . import tail

__all__ = [
    'tail',
]
