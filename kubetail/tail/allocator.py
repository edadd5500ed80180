"""Color assignment for log sources"""
from typing import Iterable, List, Sequence

from ..core.errors import OptionError
from .models import ColorAssignment, ContainerRef


class ColorAllocator:
    """Hand out palette indices in order, skipping excluded ones

    Index 0 (black) is never used; after palette_size - 1 the cursor wraps
    back to 1, so colors repeat once the palette is exhausted.
    """

    def __init__(self, excluded: Iterable[int] = (), palette_size: int = 256, cursor: int = 0):
        self.excluded = set(excluded)
        self.palette_size = palette_size
        self.cursor = cursor

        if palette_size < 2:
            raise OptionError(f"Palette size must be at least 2, got {palette_size}")
        if all(index in self.excluded for index in range(1, palette_size)):
            raise OptionError("Every color of the palette is skipped")

    def next(self) -> int:
        self.cursor = self.cursor % (self.palette_size - 1) + 1
        while self.cursor in self.excluded:
            self.cursor = self.cursor % (self.palette_size - 1) + 1
        return self.cursor

    def assign(self, refs: Sequence[ContainerRef], enabled: bool = True) -> List[ColorAssignment]:
        """Color every source, or none when there is only one or coloring is off"""
        if len(refs) == 1 or not enabled:
            return [ColorAssignment(ref, None) for ref in refs]
        return [ColorAssignment(ref, self.next()) for ref in refs]
