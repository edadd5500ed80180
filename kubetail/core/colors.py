"""Color definitions for terminal output"""
from typing import Optional

from blessed import Terminal


class Colors:
    RED = '\033[91m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    MAGENTA = '\033[95m'
    CYAN = '\033[96m'
    RESET = '\033[0m'

    @classmethod
    def disable(cls):
        """Disable all colors"""
        cls.RED = cls.YELLOW = cls.BLUE = ''
        cls.MAGENTA = cls.CYAN = cls.RESET = ''


class Palette:
    """Indexed terminal colors for log sources (what `tput setaf N` prints)"""

    def __init__(self, term: Optional[Terminal] = None):
        self.term = term or Terminal(force_styling=True)

    def start(self, index: Optional[int]) -> str:
        if index is None:
            return ""
        return str(self.term.color(index))

    def end(self, index: Optional[int]) -> str:
        if index is None:
            return ""
        return str(self.term.normal)

    def paint(self, text: str, index: Optional[int]) -> str:
        return f"{self.start(index)}{text}{self.end(index)}"
