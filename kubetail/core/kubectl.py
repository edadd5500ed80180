"""Kubectl command wrapper"""
import copy
import subprocess
from typing import List, Optional
from .errors import KubectlError
from .logger import Logger


class KubeCommand:
    """Execute kubectl commands"""

    def __init__(self, namespace: str = "default", context: Optional[str] = None,
                 verbose: bool = False, binary: str = "kubectl"):
        self.namespace = namespace
        self.context = context
        self.verbose = verbose
        self.binary = binary
        Logger.verbose = verbose

    def with_context(self, context: Optional[str]) -> "KubeCommand":
        """Same settings, bound to another context"""
        other = copy.copy(self)
        other.context = context or None
        return other

    def build(self, cmd: List[str]) -> List[str]:
        full_cmd = [self.binary] + cmd

        if self.context:
            full_cmd.extend(["--context", self.context])

        return full_cmd

    def run(self, cmd: List[str]) -> subprocess.CompletedProcess:
        """Run kubectl command and capture its output"""
        full_cmd = self.build(cmd)

        Logger.verbose_log(f"Running: {' '.join(full_cmd)}")

        try:
            return subprocess.run(
                full_cmd, capture_output=True, text=True, check=True)
        except FileNotFoundError as e:
            raise KubectlError(f"{self.binary} not found in PATH") from e
        except subprocess.CalledProcessError as e:
            message = f"Command failed: {' '.join(full_cmd)}"
            if e.stderr:
                message += f"\n{e.stderr.strip()}"
            raise KubectlError(message) from e

    def get_pods(self, selector: Optional[str] = None) -> List[str]:
        """Get pod names, optionally filtered by label selector"""
        cmd = ["get", "pods", "-n", self.namespace]
        if selector:
            cmd.extend(["-l", selector])
        cmd.extend(["-o", "jsonpath={.items[*].metadata.name}"])

        result = self.run(cmd)
        return result.stdout.split()

    def get_containers(self, pod: str) -> List[str]:
        """Get container names of a pod in declaration order"""
        result = self.run([
            "get", "pod", pod, "-n", self.namespace,
            "-o", "jsonpath={.spec.containers[*].name}"
        ])
        return result.stdout.split()

    def logs_args(self, pod: str, container: str, since: str = "10s", tail: int = -1,
                  timestamps: bool = False, follow: bool = True,
                  previous: bool = False) -> List[str]:
        """Build the argv of a continuous log stream"""
        cmd = [
            "logs", pod, "-n", self.namespace, "-c", container,
            f"--follow={str(follow).lower()}",
            f"--since={since}",
            f"--tail={tail}",
        ]
        if timestamps:
            cmd.append("--timestamps")
        if previous:
            cmd.append("--previous")

        return self.build(cmd)
