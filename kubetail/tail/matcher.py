"""Resolve a query into pods across contexts"""
import re
from typing import List, Optional, Sequence

from ..core.errors import OptionError, ResolutionError
from ..core.kubectl import KubeCommand
from ..core.logger import Logger
from ..utils.parsers import parse_csv
from .models import Target

SUBSTRING = "substring"
PATTERN = "pattern"
MATCH_MODES = (SUBSTRING, PATTERN)


def build_pattern(query: str, mode: str) -> tuple[str, str]:
    """
    Turn a comma-separated list of names into an alternation

    Examples:
        >>> build_pattern("a,b", "substring")
        ('(a|b)', 'pattern')
        >>> build_pattern("app", "substring")
        ('app', 'substring')
    """
    names = parse_csv(query)
    if mode != PATTERN and len(names) > 1:
        return "(" + "|".join(re.escape(name) for name in names) + ")", PATTERN
    return query, mode


class TargetMatcher:
    """Find pods matching a query in one or more contexts"""

    def __init__(self, kube: KubeCommand, contexts: Optional[Sequence[str]] = None):
        self.kube = kube
        self.contexts = list(contexts) if contexts else [kube.context or ""]

    def match(self, query: Optional[str], mode: str = SUBSTRING,
              selector: Optional[str] = None) -> List[Target]:
        if mode not in MATCH_MODES:
            raise OptionError(f"Invalid match mode '{mode}' (use {' or '.join(MATCH_MODES)})")

        matches = self.accept_all if selector else self.build_matcher(query or "", mode)

        targets: List[Target] = []
        for context in self.contexts:
            kube = self.kube.with_context(context)
            pods = kube.get_pods(selector)
            found = [Target(context, kube.namespace, pod) for pod in pods if matches(pod)]

            if not found:
                Logger.verbose_log(f"No pods matched in context '{context or 'current'}'")
            for target in found:
                if target not in targets:
                    targets.append(target)

        if not targets:
            raise ResolutionError(f"no pods matched {selector or query}")

        Logger.verbose_log(f"Matched {len(targets)} pod(s)")
        return targets

    @staticmethod
    def accept_all(pod: str) -> bool:
        return True

    @staticmethod
    def build_matcher(query: str, mode: str):
        pattern, mode = build_pattern(query, mode)
        if mode == SUBSTRING:
            return lambda pod: pattern in pod

        try:
            regex = re.compile(pattern)
        except re.error as e:
            raise OptionError(f"Invalid pattern '{pattern}': {e}") from e
        return lambda pod: regex.search(pod) is not None
