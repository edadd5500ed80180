"""Targets, containers and running streams"""
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional

# How long the stages feeding a finished reader get to exit on their own
UPSTREAM_GRACE_SECONDS = 1


@dataclass(frozen=True)
class Target:
    """A pod in a namespace of a context ('' means the current context)"""
    context: str
    namespace: str
    pod_name: str


@dataclass(frozen=True)
class ContainerRef:
    target: Target
    container_name: str

    def display_name(self, with_context: bool = False) -> str:
        name = f"{self.target.pod_name} {self.container_name}"
        if with_context and self.target.context:
            name = f"{self.target.context}:{name}"
        return name


@dataclass(frozen=True)
class ColorAssignment:
    """color_index is None when the source is printed without color"""
    container_ref: ContainerRef
    color_index: Optional[int]


@dataclass
class StreamHandle:
    container_ref: ContainerRef
    process: subprocess.Popen
    color_assignment: ColorAssignment
    label: str
    prefix: str = ""
    suffix: str = ""
    # Extra children of the pipeline (jq), stdout of the last one is read
    pipeline: List[subprocess.Popen] = field(default_factory=list)

    @property
    def output(self):
        return (self.pipeline[-1] if self.pipeline else self.process).stdout

    @property
    def processes(self) -> List[subprocess.Popen]:
        return [self.process] + self.pipeline

    def format_line(self, line: str) -> str:
        line = line.rstrip("\r\n")
        return f"{self.prefix}{line}{self.suffix}"

    def wait(self, grace: float = UPSTREAM_GRACE_SECONDS) -> int:
        """Wait for every process of the pipeline, return the first failure

        Called once the last stage hit EOF. An upstream stage that outlives it
        (kubectl behind a jq that exited) would only die on its next write, so
        it is terminated after the grace period and the last stage's exit
        code is reported.
        """
        code = self.processes[-1].wait()
        upstream_code = 0
        for proc in self.processes[:-1]:
            try:
                upstream_code = upstream_code or proc.wait(timeout=grace)
            except subprocess.TimeoutExpired:
                proc.terminate()
                proc.wait()
        return code or upstream_code
