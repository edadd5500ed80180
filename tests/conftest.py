import sys

import pytest

from kubetail.core.colors import Palette
from kubetail.core.config import DEFAULTS
from kubetail.core.decorators import Command
from kubetail.core.kubectl import KubeCommand
import kubetail.commands  # noqa: F401  registers the tail command

ECHO_SCRIPT = (
    "import sys, time\n"
    "for line in sys.argv[3:]:\n"
    "    print(line, flush=True)\n"
    "time.sleep(float(sys.argv[2]))\n"
    "sys.exit(int(sys.argv[1]))\n"
)


class FakeKube(KubeCommand):
    """kubectl stand-in: pods per context, containers per pod, canned log lines

    sleep keeps each fake log stream open after its lines, like --follow.
    """

    def __init__(self, pods=None, containers=None, logs=None, exit_codes=None,
                 namespace="default", context=None, sleep=0):
        super().__init__(namespace=namespace, context=context)
        self.sleep = sleep
        self.pods = pods or {}
        self.containers = containers or {}
        self.logs = logs or {}
        self.exit_codes = exit_codes or {}
        self.calls = []

    def get_pods(self, selector=None):
        self.calls.append(("get_pods", self.context or "", selector))
        pods = self.pods.get(self.context or "", [])
        if isinstance(pods, dict):
            return list(pods.get(selector, []))
        return list(pods)

    def get_containers(self, pod):
        self.calls.append(("get_containers", self.context or "", pod))
        return list(self.containers.get(pod, []))

    def logs_args(self, pod, container, **kwargs):
        self.calls.append(("logs", self.context or "", pod, container, kwargs))
        lines = self.logs.get((pod, container), [])
        code = self.exit_codes.get((pod, container), 0)
        return [sys.executable, "-c", ECHO_SCRIPT, str(code), str(self.sleep), *lines]


class TagPalette(Palette):
    """Readable stand-in for terminal escape codes"""

    def __init__(self):
        self.term = None

    def start(self, index):
        return "" if index is None else f"<{index}>"

    def end(self, index):
        return "" if index is None else "</>"


@pytest.fixture
def palette():
    return TagPalette()


@pytest.fixture
def parse():
    """Parse a command line on top of the built-in defaults"""
    def _parse(*argv):
        return Command.parse_args(list(argv), defaults=dict(DEFAULTS))
    return _parse
